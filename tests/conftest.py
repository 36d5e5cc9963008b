"""Pytest configuration and fixtures."""

from collections.abc import Sequence
from typing import Optional

import numpy as np
import pandas as pd
import pytest

from stock_pulse.config import IndicatorConfig
from stock_pulse.data.models import PriceSeries

START_TS = 1_735_000_000  # epoch seconds
BAR_SECONDS = 15 * 60


def _make_series(
    closes: Sequence[float],
    symbol: str = "TEST.NS",
    highs: Optional[Sequence[float]] = None,
    lows: Optional[Sequence[float]] = None,
    volume: int = 1_000,
) -> PriceSeries:
    """Build a 15-minute PriceSeries around a list of closes."""
    n = len(closes)
    highs = list(highs) if highs is not None else [c + 0.5 for c in closes]
    lows = list(lows) if lows is not None else [c - 0.5 for c in closes]
    return PriceSeries.from_arrays(
        symbol,
        [START_TS + i * BAR_SECONDS for i in range(n)],
        list(closes),
        highs,
        lows,
        list(closes),
        [volume + i for i in range(n)],
    )


def _as_close(values: Sequence[float]) -> pd.Series:
    """Close prices indexed by bar timestamp."""
    return pd.Series(
        [float(v) for v in values],
        index=[START_TS + i * BAR_SECONDS for i in range(len(values))],
        name="close",
    )


@pytest.fixture
def make_series():
    """Factory for PriceSeries built from closes."""
    return _make_series


@pytest.fixture
def as_close():
    """Factory for timestamp-indexed close Series."""
    return _as_close


@pytest.fixture
def indicator_config() -> IndicatorConfig:
    """Default indicator periods."""
    return IndicatorConfig()


@pytest.fixture
def random_walk_closes() -> list[float]:
    """250 bars of a positive random walk."""
    rng = np.random.default_rng(42)
    steps = rng.normal(0, 1.0, 250)
    return list(np.maximum(100 + np.cumsum(steps), 1.0))


@pytest.fixture
def rising_closes() -> list[float]:
    """30 strictly rising closes."""
    return [float(v) for v in range(100, 130)]


@pytest.fixture
def flat_tail_closes() -> list[float]:
    """A short ramp followed by 20 equal closes."""
    return [10.0, 11.0, 12.0, 13.0] + [14.0] * 20
