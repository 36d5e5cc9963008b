"""
Simple and exponential moving averages.

All functions are pure and stateless - they take price data and return
indicator values aligned with the input index.
"""

from collections.abc import Sequence
from typing import Optional

import numpy as np
import pandas as pd

from .series import rolling_mean


def compute_sma(close: pd.Series, period: int = 20) -> pd.Series:
    """
    Compute SMA (Simple Moving Average).

    Args:
        close: Close prices, oldest first
        period: Lookback period

    Returns:
        Series aligned with `close`; NaN until `period` values are available
    """
    return pd.Series(
        rolling_mean(close.to_numpy(dtype=float), period),
        index=close.index,
        name=f"SMA_{period}",
    )


def ema_values(values: Sequence[float], period: int) -> np.ndarray:
    """
    Exponential moving average over a dense array.

    Seeded once at index `period - 1` with the SMA of the first `period`
    values, then advanced left to right. Each value depends on the previous
    one, so this cannot be windowed.
    """
    if period < 1:
        raise ValueError(f"period must be >= 1, got {period}")

    arr = np.asarray(values, dtype=float)
    result = np.full(len(arr), np.nan)
    if len(arr) < period:
        return result

    multiplier = 2 / (period + 1)
    result[period - 1] = np.mean(arr[:period])

    for i in range(period, len(arr)):
        result[i] = (arr[i] - result[i - 1]) * multiplier + result[i - 1]

    return result


def compute_ema(close: pd.Series, period: int = 20) -> pd.Series:
    """
    Compute EMA (Exponential Moving Average).

    Args:
        close: Close prices, oldest first
        period: Lookback period

    Returns:
        Series aligned with `close`; NaN before the seed index
    """
    return pd.Series(
        ema_values(close.to_numpy(dtype=float), period),
        index=close.index,
        name=f"EMA_{period}",
    )


def get_current_sma(df: pd.DataFrame, period: int = 20) -> Optional[float]:
    """Get most recent SMA value."""
    if df.empty:
        return None

    latest = compute_sma(df["close"], period).iloc[-1]
    if pd.isna(latest):
        return None

    return float(latest)
