"""
Support/resistance detection from local price extremes.

A pivot low is a low strictly below the two bars on each side; a pivot high is
a high strictly above the two bars on each side.
"""

from collections.abc import Sequence

from ..data.models import LevelKind, PriceLevel, SupportResistance

PIVOT_MARGIN = 2
MAX_LEVELS = 3


def find_pivot_lows(lows: Sequence[float]) -> list[tuple[int, float]]:
    """Return (index, low) for every strict 5-bar local minimum."""
    pivots = []
    for i in range(PIVOT_MARGIN, len(lows) - PIVOT_MARGIN):
        neighbors = (lows[i - 2], lows[i - 1], lows[i + 1], lows[i + 2])
        if all(lows[i] < n for n in neighbors):
            pivots.append((i, lows[i]))
    return pivots


def find_pivot_highs(highs: Sequence[float]) -> list[tuple[int, float]]:
    """Return (index, high) for every strict 5-bar local maximum."""
    pivots = []
    for i in range(PIVOT_MARGIN, len(highs) - PIVOT_MARGIN):
        neighbors = (highs[i - 2], highs[i - 1], highs[i + 1], highs[i + 2])
        if all(highs[i] > n for n in neighbors):
            pivots.append((i, highs[i]))
    return pivots


def find_support_resistance(
    highs: Sequence[float],
    lows: Sequence[float],
    max_levels: int = MAX_LEVELS,
) -> SupportResistance:
    """
    Find the most recent support and resistance levels.

    Args:
        highs: Bar highs, oldest first
        lows: Bar lows, oldest first
        max_levels: Number of most recent pivots kept per side

    Returns:
        SupportResistance with supports sorted descending and resistances
        ascending. When no pivot exists on a side, the latest low (or high)
        is used instead.
    """
    support_pivots = find_pivot_lows(lows)[-max_levels:]
    resistance_pivots = find_pivot_highs(highs)[-max_levels:]

    supports = [
        PriceLevel(price=price, kind=LevelKind.SUPPORT, index=i)
        for i, price in sorted(support_pivots, key=lambda p: p[1], reverse=True)
    ]
    resistances = [
        PriceLevel(price=price, kind=LevelKind.RESISTANCE, index=i)
        for i, price in sorted(resistance_pivots, key=lambda p: p[1])
    ]

    if not supports and len(lows) > 0:
        supports = [PriceLevel(price=lows[-1], kind=LevelKind.SUPPORT)]
    if not resistances and len(highs) > 0:
        resistances = [PriceLevel(price=highs[-1], kind=LevelKind.RESISTANCE)]

    return SupportResistance.from_levels(supports + resistances)
