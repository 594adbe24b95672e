"""Rounding helpers shared by the scoring and planning code."""

from __future__ import annotations

import math


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round to ``ndigits`` decimals with halves going up.

    Built-in :func:`round` sends exact halves to the even neighbour
    (``round(4.5) == 4``); scores and planned quantities here round
    ``4.5`` to ``5`` and ``-4.5`` to ``-4``.

    Args:
        value: Number to round.
        ndigits: Decimal places to keep.

    Returns:
        The rounded value as a float.
    """
    scale = 10 ** ndigits
    return math.floor(value * scale + 0.5) / scale
