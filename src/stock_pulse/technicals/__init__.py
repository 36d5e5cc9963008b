"""
Technical analysis module.

Provides indicator calculations over a single aligned price series.
"""

from .levels import find_pivot_highs, find_pivot_lows, find_support_resistance
from .moving_averages import compute_ema, compute_sma, ema_values, get_current_sma
from .oscillators import compute_rsi
from .series import (
    rolling_mean,
    rolling_std,
    series_to_dataframe,
    windowed_mean,
    windowed_std,
)
from .trend import compute_macd
from .volatility import compute_bollinger

__all__ = [
    # Series utilities
    "rolling_mean",
    "rolling_std",
    "series_to_dataframe",
    "windowed_mean",
    "windowed_std",
    # Indicators
    "compute_bollinger",
    "compute_ema",
    "compute_macd",
    "compute_rsi",
    "compute_sma",
    "ema_values",
    "get_current_sma",
    # Levels
    "find_pivot_highs",
    "find_pivot_lows",
    "find_support_resistance",
]
