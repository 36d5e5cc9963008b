"""
Windowed statistics shared by the indicator engines.

Windows always end at (and include) the index being computed. An index with
fewer than `period` values available yields None / NaN, never zero.
"""

from collections.abc import Sequence
from typing import Optional

import numpy as np
import pandas as pd

from ..data.models import PriceSeries


def series_to_dataframe(series: PriceSeries) -> pd.DataFrame:
    """
    Convert PriceSeries to pandas DataFrame for indicator calculations.

    Args:
        series: PriceSeries with OHLCV bars

    Returns:
        DataFrame with columns: open, high, low, close, volume
        Index is the epoch-second timestamp, in bar order (oldest first)
    """
    if series.is_empty:
        return pd.DataFrame(columns=["open", "high", "low", "close", "volume"])

    df = pd.DataFrame(
        {
            "timestamp": series.timestamps,
            "open": [b.open for b in series.bars],
            "high": series.highs,
            "low": series.lows,
            "close": series.closes,
            "volume": series.volumes,
        }
    )
    df.set_index("timestamp", inplace=True)
    return df


def _check_period(period: int) -> None:
    if period < 1:
        raise ValueError(f"period must be >= 1, got {period}")


def windowed_mean(values: Sequence[float], period: int, index: int) -> Optional[float]:
    """Mean of the `period` values ending at `index`, or None if the window is short."""
    _check_period(period)
    if index < period - 1 or index >= len(values):
        return None
    window = np.asarray(values[index - period + 1 : index + 1], dtype=float)
    return float(np.mean(window))


def windowed_std(
    values: Sequence[float],
    mean: float,
    period: int,
    index: int,
) -> Optional[float]:
    """Population standard deviation (divide by `period`) of the window ending at `index`."""
    _check_period(period)
    if index < period - 1 or index >= len(values):
        return None
    window = np.asarray(values[index - period + 1 : index + 1], dtype=float)
    return float(np.sqrt(np.sum((window - mean) ** 2) / period))


def rolling_mean(values: Sequence[float], period: int) -> np.ndarray:
    """Aligned array of `windowed_mean` at every index; NaN before the first full window."""
    _check_period(period)
    arr = np.asarray(values, dtype=float)
    result = np.full(len(arr), np.nan)

    for i in range(period - 1, len(arr)):
        result[i] = windowed_mean(arr, period, i)
    return result


def rolling_std(
    values: Sequence[float],
    period: int,
    means: Optional[np.ndarray] = None,
) -> np.ndarray:
    """Aligned array of `windowed_std` at every index, centered on `means`."""
    _check_period(period)
    arr = np.asarray(values, dtype=float)
    result = np.full(len(arr), np.nan)

    if means is None:
        means = rolling_mean(arr, period)

    for i in range(period - 1, len(arr)):
        result[i] = windowed_std(arr, float(means[i]), period, i)
    return result
