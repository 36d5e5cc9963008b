"""MACD - Moving Average Convergence Divergence."""

import numpy as np
import pandas as pd

from .moving_averages import ema_values


def compute_macd(
    close: pd.Series,
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> pd.DataFrame:
    """
    Compute MACD indicator.

    The signal line is an EMA over the defined MACD values only, so its
    warm-up starts at the first defined MACD value rather than at bar 0.

    Args:
        close: Close prices, oldest first
        fast: Fast EMA period (default 12)
        slow: Slow EMA period (default 26)
        signal: Signal line period (default 9)

    Returns:
        DataFrame indexed like `close` with macd, signal, histogram columns
    """
    closes = close.to_numpy(dtype=float)
    macd_line = ema_values(closes, fast) - ema_values(closes, slow)

    signal_line = np.full(len(closes), np.nan)
    defined = ~np.isnan(macd_line)
    if defined.any():
        signal_line[defined] = ema_values(macd_line[defined], signal)

    histogram = macd_line - signal_line

    return pd.DataFrame(
        {"macd": macd_line, "signal": signal_line, "histogram": histogram},
        index=close.index,
    )
