"""Tests for the environment stats cache."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from orbrisk.data.stats import DEFAULT_BASELINE, SpaceStatsCache

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


class CountingFetcher:
    """Fetcher stub that records how often it is called."""

    def __init__(self, result: int | None = 9):
        self.result = result
        self.calls = 0

    def __call__(self) -> int | None:
        self.calls += 1
        return self.result


def _failing_fetcher() -> int:
    raise ConnectionError("conjunction feed unreachable")


class TestRefresh:
    """Test refresh scheduling and baseline updates."""

    def test_fetches_at_most_once_per_interval(self):
        """Reads inside the refresh interval reuse the cached count."""
        fetcher = CountingFetcher()
        cache = SpaceStatsCache(fetcher=fetcher, seed=1)

        cache.get_current_stats(NOW)
        cache.get_current_stats(NOW + timedelta(seconds=100))
        cache.get_current_stats(NOW + timedelta(seconds=300))
        assert fetcher.calls == 1

        cache.get_current_stats(NOW + timedelta(seconds=301))
        assert fetcher.calls == 2

    def test_baseline_floor(self):
        """Fetched counts below 5 raise the baseline to 5."""
        cache = SpaceStatsCache(fetcher=CountingFetcher(2), seed=1)
        cache.refresh(NOW)
        assert cache.cached_result == 2
        assert cache.baseline.collision_alerts == 5
        assert cache.last_fetch_time == NOW

    def test_fetch_failure_keeps_baseline(self, caplog):
        """A failing fetcher is logged and does not raise."""
        cache = SpaceStatsCache(fetcher=_failing_fetcher, seed=1)
        with caplog.at_level("WARNING"):
            stats = cache.get_current_stats(NOW)

        assert cache.baseline.collision_alerts == DEFAULT_BASELINE.collision_alerts
        assert cache.cached_result is None
        assert cache.last_fetch_time == NOW
        assert "conjunction feed unreachable" in caplog.text
        assert stats.collision_alerts >= 3

    def test_unavailable_result(self):
        """A fetcher returning None leaves the baseline alone."""
        cache = SpaceStatsCache(fetcher=CountingFetcher(None), seed=1)
        cache.refresh(NOW)
        assert cache.baseline.collision_alerts == 12
        assert cache.cached_result is None

    def test_default_baseline_not_shared(self):
        """Updating one cache's baseline leaves the module default intact."""
        cache = SpaceStatsCache(fetcher=CountingFetcher(40), seed=1)
        cache.refresh(NOW)
        assert cache.baseline.collision_alerts == 40
        assert DEFAULT_BASELINE.collision_alerts == 12
        assert SpaceStatsCache().baseline.collision_alerts == 12


class TestCurrentStats:
    """Test the values handed to readers."""

    def test_clamped_ranges(self):
        """Every read stays inside the plausible ranges."""
        for result in (None, 0, 3, 12, 60, 500):
            cache = SpaceStatsCache(fetcher=CountingFetcher(result), seed=42)
            for minutes in range(0, 600, 7):
                stats = cache.get_current_stats(NOW + timedelta(minutes=minutes))
                assert stats.collision_alerts >= 3
                assert stats.predicted_events >= 30
                assert 25 <= stats.risk_score <= 65

    def test_alerts_follow_fetched_count(self):
        """Alerts stay within the variation band around the fetched count."""
        cache = SpaceStatsCache(fetcher=CountingFetcher(20), seed=3)
        for seconds in range(0, 3000, 13):
            stats = cache.get_current_stats(NOW + timedelta(seconds=seconds))
            assert 15 <= stats.collision_alerts <= 25

    def test_seeded_reads_are_reproducible(self):
        """Two caches with the same seed agree read for read."""
        first = SpaceStatsCache(fetcher=CountingFetcher(9), seed=7)
        second = SpaceStatsCache(fetcher=CountingFetcher(9), seed=7)
        for minutes in (0, 1, 2, 10):
            when = NOW + timedelta(minutes=minutes)
            assert first.get_current_stats(when) == second.get_current_stats(when)

    def test_last_update_is_read_time(self):
        """Stats carry the read time, naive times treated as UTC."""
        cache = SpaceStatsCache(seed=1)
        stats = cache.get_current_stats(datetime(2024, 6, 1, 12, 0, 0))
        assert stats.last_update == NOW

    def test_without_fetcher(self):
        """A cache with no fetcher serves the baseline with variation."""
        cache = SpaceStatsCache(seed=1)
        stats = cache.get_current_stats(NOW)
        assert cache.last_fetch_time == NOW
        assert stats.collision_alerts == pytest.approx(12, abs=4)
