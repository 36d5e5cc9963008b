"""RSI - Relative Strength Index."""

import numpy as np
import pandas as pd


def compute_rsi(close: pd.Series, period: int = 14) -> pd.Series:
    """
    Compute basic (unsmoothed) RSI.

    At each index i >= period the average gain and average loss are the plain
    means of the `period` close-to-close changes ending at i, recomputed from
    scratch. This is not Wilder's smoothed RSI.

    Args:
        close: Close prices, oldest first
        period: RSI period (default 14)

    Returns:
        Series aligned with `close`, values in [0, 100]; NaN for i < period
    """
    if period < 1:
        raise ValueError(f"period must be >= 1, got {period}")

    closes = close.to_numpy(dtype=float)
    result = np.full(len(closes), np.nan)

    if len(closes) > period:
        deltas = np.diff(closes)
        gains = np.where(deltas > 0, deltas, 0.0)
        losses = np.where(deltas < 0, -deltas, 0.0)

        # deltas[j - 1] is the change into bar j
        for i in range(period, len(closes)):
            avg_gain = gains[i - period : i].sum() / period
            avg_loss = losses[i - period : i].sum() / period

            if avg_loss == 0:
                result[i] = 100.0
            else:
                rs = avg_gain / avg_loss
                result[i] = 100 - (100 / (1 + rs))

    return pd.Series(result, index=close.index, name=f"RSI_{period}")
