"""Tests for half-up rounding."""

from __future__ import annotations

import pytest

from orbrisk.utils.rounding import round_half_up


class TestRoundHalfUp:
    """Test rounding of exact halves and ordinary values."""

    @pytest.mark.parametrize("value, expected", [
        (0.5, 1.0),
        (1.5, 2.0),
        (2.5, 3.0),
        (4.5, 5.0),
        (4.49, 4.0),
        (-4.5, -4.0),
        (-4.51, -5.0),
        (0.0, 0.0),
    ])
    def test_integers(self, value: float, expected: float):
        """Halves go towards positive infinity."""
        assert round_half_up(value) == expected

    @pytest.mark.parametrize("value, ndigits, expected", [
        (1.875, 2, 1.88),
        (0.125, 2, 0.13),
        (0.0625, 3, 0.063),
        (1.234, 2, 1.23),
        (12.3456, 3, 12.346),
    ])
    def test_decimals(self, value: float, ndigits: int, expected: float):
        """Decimal places follow the same rule."""
        assert round_half_up(value, ndigits) == pytest.approx(expected)
