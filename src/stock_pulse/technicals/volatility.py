"""Bollinger Bands."""

import pandas as pd

from .series import rolling_mean, rolling_std


def compute_bollinger(
    close: pd.Series,
    period: int = 20,
    k: float = 2.0,
) -> pd.DataFrame:
    """
    Compute Bollinger Bands.

    Args:
        close: Close prices, oldest first
        period: SMA period (default 20)
        k: Standard deviation multiplier (default 2.0)

    Returns:
        DataFrame indexed like `close` with upper, middle, lower columns.
        Uses the population standard deviation.
    """
    closes = close.to_numpy(dtype=float)
    middle = rolling_mean(closes, period)
    std = rolling_std(closes, period, means=middle)

    return pd.DataFrame(
        {
            "upper": middle + k * std,
            "middle": middle,
            "lower": middle - k * std,
        },
        index=close.index,
    )
