"""Periodically refreshed "current stats" for the orbital environment.

The cache is owned by a single caller (typically a polling loop) and is not
safe for concurrent use. Fetching conjunction data is delegated to an
injected callable so the cache itself performs no I/O.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Callable

import numpy as np

from orbrisk.utils.rounding import round_half_up

logger = logging.getLogger(__name__)

HighRiskFetcher = Callable[[], "int | None"]
"""Returns the current count of high-risk conjunctions, or None if unavailable."""


@dataclass
class SpaceStats:
    """Headline statistics for the orbital environment.

    Attributes:
        collision_alerts: Conjunctions currently requiring monitoring.
        predicted_events: Launches, reentries and maneuvers expected.
        risk_score: Environment risk score (0-100).
        last_update: When these stats were produced.
    """

    collision_alerts: int
    predicted_events: int
    risk_score: int
    last_update: datetime


DEFAULT_BASELINE = SpaceStats(
    collision_alerts=12,
    predicted_events=47,
    risk_score=38,
    last_update=datetime(1970, 1, 1, tzinfo=timezone.utc),
)


@dataclass
class SpaceStatsCache:
    """Single-owner cache of environment stats with refresh-on-read.

    Attributes:
        fetcher: Callable returning the high-risk conjunction count. When
            None, the baseline is used as is.
        baseline: Baseline stats that fetched data adjusts.
        refresh_interval_s: Minimum time between fetches.
        seed: Seed for the jitter applied on each read.

    Example::

        cache = SpaceStatsCache(fetcher=lambda: 9)
        stats = cache.get_current_stats()
    """

    fetcher: HighRiskFetcher | None = None
    baseline: SpaceStats = field(default_factory=lambda: replace(DEFAULT_BASELINE))
    refresh_interval_s: float = 300.0
    seed: int | None = None
    cached_result: int | None = field(default=None, init=False)
    last_fetch_time: datetime | None = field(default=None, init=False)
    _rng: np.random.Generator = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._rng = np.random.default_rng(self.seed)

    def needs_refresh(self, now: datetime) -> bool:
        if self.last_fetch_time is None:
            return True
        return (now - self.last_fetch_time).total_seconds() > self.refresh_interval_s

    def refresh(self, now: datetime) -> None:
        """Fetch the high-risk count and fold it into the baseline.

        A failed fetch is logged and leaves the baseline unchanged; the
        fetch time is still recorded so the next attempt waits a full
        interval.
        """
        if self.fetcher is not None:
            try:
                high_risk = self.fetcher()
            except Exception as e:
                logger.warning("Stats fetch failed, keeping baseline: %s", e)
                high_risk = None

            if high_risk is not None:
                self.cached_result = high_risk
                self.baseline.collision_alerts = max(high_risk, 5)
                logger.info("Stats baseline updated: %d high-risk conjunctions", high_risk)

        self.last_fetch_time = now

    def get_current_stats(self, now: datetime | None = None) -> SpaceStats:
        """Current stats, refreshing first if the interval has elapsed.

        A ±20 % sinusoidal variation and ±5 % jitter are applied to the
        baseline, then results are clamped to plausible ranges (alerts ≥ 3,
        events ≥ 30, risk score 25–65).

        Args:
            now: Read time (UTC). Defaults to the current time.
        """
        if now is None:
            now = datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        if self.needs_refresh(now):
            self.refresh(now)

        base_alerts = self.baseline.collision_alerts
        if self.cached_result is not None:
            base_alerts = max(self.cached_result, 5)

        time_variation = math.sin(now.timestamp() * 1000 / 10000) * 0.2
        jitter = (float(self._rng.random()) - 0.5) * 0.1

        alerts = int(round_half_up(base_alerts * (1 + time_variation + jitter)))
        events = int(round_half_up(self.baseline.predicted_events * (1 + time_variation * 0.5 + jitter)))

        density = min(alerts / 20, 1.0)
        score = int(round_half_up(self.baseline.risk_score + density * 15 + jitter * 5))

        return SpaceStats(
            collision_alerts=max(alerts, 3),
            predicted_events=max(events, 30),
            risk_score=min(max(score, 25), 65),
            last_update=now,
        )
