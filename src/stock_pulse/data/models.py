"""
Data models for price series input and analysis output.

Input models describe a dense, pre-cleaned OHLCV series. Output models are
ephemeral values produced by a single analysis call.
"""

import math
from collections.abc import Sequence
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import MalformedInputError


# -----------------------------------------------------------------------------
# Input
# -----------------------------------------------------------------------------


class PriceBar(BaseModel):
    """Single OHLCV bar keyed by epoch-second timestamp; prices must be finite."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: int = Field(ge=0)


class PriceSeries(BaseModel):
    """Time series of OHLCV bars for one symbol, oldest first."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    interval: str = "15m"
    bars: list[PriceBar]

    @classmethod
    def from_arrays(
        cls,
        symbol: str,
        timestamps: Sequence[int],
        opens: Sequence[float],
        highs: Sequence[float],
        lows: Sequence[float],
        closes: Sequence[float],
        volumes: Sequence[int],
        interval: str = "15m",
    ) -> "PriceSeries":
        """
        Build a series from parallel column arrays.

        Raises:
            MalformedInputError: if the arrays differ in length or a bar holds
                a non-numeric, non-finite or negative-volume value
        """
        lengths = {
            "timestamp": len(timestamps),
            "open": len(opens),
            "high": len(highs),
            "low": len(lows),
            "close": len(closes),
            "volume": len(volumes),
        }
        if len(set(lengths.values())) > 1:
            detail = ", ".join(f"{k}={v}" for k, v in lengths.items())
            raise MalformedInputError(
                f"Mismatched array lengths for {symbol}: {detail}"
            )

        bars = []
        rows = zip(timestamps, opens, highs, lows, closes, volumes)
        for i, (ts, o, h, lo, c, v) in enumerate(rows):
            try:
                bars.append(
                    PriceBar(
                        timestamp=int(ts),
                        open=float(o),
                        high=float(h),
                        low=float(lo),
                        close=float(c),
                        volume=int(v),
                    )
                )
            except (ValidationError, TypeError, ValueError) as e:
                raise MalformedInputError(f"Invalid bar {i} for {symbol}: {e}") from e

        return cls(symbol=symbol, interval=interval, bars=bars)

    @property
    def is_empty(self) -> bool:
        return len(self.bars) == 0

    def latest(self) -> Optional[PriceBar]:
        """Return most recent bar or None if empty."""
        return self.bars[-1] if self.bars else None

    @property
    def timestamps(self) -> list[int]:
        return [b.timestamp for b in self.bars]

    @property
    def closes(self) -> list[float]:
        return [b.close for b in self.bars]

    @property
    def highs(self) -> list[float]:
        return [b.high for b in self.bars]

    @property
    def lows(self) -> list[float]:
        return [b.low for b in self.bars]

    @property
    def volumes(self) -> list[int]:
        return [b.volume for b in self.bars]


class QuoteMeta(BaseModel):
    """Descriptive metadata returned alongside a price series."""

    name: Optional[str] = None
    currency: str = "INR"
    fifty_two_week_high: Optional[float] = None
    fifty_two_week_low: Optional[float] = None


# -----------------------------------------------------------------------------
# Indicator output
# -----------------------------------------------------------------------------


class IndicatorPoint(BaseModel):
    """One aligned indicator value; None means insufficient history."""

    timestamp: int
    value: Optional[float] = None


class IndicatorSeries(BaseModel):
    """Indicator values aligned one-to-one with the input bars."""

    name: str
    points: list[IndicatorPoint] = Field(default_factory=list)

    @classmethod
    def from_series(cls, name: str, series: pd.Series) -> "IndicatorSeries":
        """Convert an engine output series (NaN = absent) to a model."""
        return cls(
            name=name,
            points=[
                IndicatorPoint(timestamp=int(ts), value=_clean(value))
                for ts, value in series.items()
            ],
        )

    @property
    def values(self) -> list[Optional[float]]:
        return [p.value for p in self.points]

    @property
    def latest(self) -> Optional[float]:
        return self.points[-1].value if self.points else None

    def defined(self) -> list[IndicatorPoint]:
        """Points that carry a value, for chart rendering."""
        return [p for p in self.points if p.value is not None]

    def __len__(self) -> int:
        return len(self.points)


class IndicatorSnapshot(BaseModel):
    """Latest value of every indicator."""

    ma20: Optional[float] = None
    ma50: Optional[float] = None
    ma200: Optional[float] = None
    rsi: Optional[float] = None
    macd: Optional[float] = None
    macd_signal: Optional[float] = None
    macd_histogram: Optional[float] = None
    bollinger_upper: Optional[float] = None
    bollinger_middle: Optional[float] = None
    bollinger_lower: Optional[float] = None


class ChartData(BaseModel):
    """Full aligned indicator series for charting."""

    ma20: IndicatorSeries
    ma50: IndicatorSeries
    ma200: IndicatorSeries
    rsi: IndicatorSeries
    macd: IndicatorSeries
    macd_signal: IndicatorSeries
    macd_histogram: IndicatorSeries
    bollinger_upper: IndicatorSeries
    bollinger_middle: IndicatorSeries
    bollinger_lower: IndicatorSeries


# -----------------------------------------------------------------------------
# Levels
# -----------------------------------------------------------------------------


class LevelKind(str, Enum):
    """Side of price a level sits on."""

    SUPPORT = "support"
    RESISTANCE = "resistance"


class PriceLevel(BaseModel):
    """A support or resistance price."""

    price: float
    kind: LevelKind
    index: Optional[int] = Field(
        default=None, description="Bar index of the pivot; None for fallback levels"
    )


class SupportResistance(BaseModel):
    """Ranked support/resistance levels, closest to price first."""

    support: list[float] = Field(default_factory=list)
    resistance: list[float] = Field(default_factory=list)
    levels: list[PriceLevel] = Field(default_factory=list)

    @classmethod
    def from_levels(cls, levels: list[PriceLevel]) -> "SupportResistance":
        return cls(
            support=[lv.price for lv in levels if lv.kind == LevelKind.SUPPORT],
            resistance=[lv.price for lv in levels if lv.kind == LevelKind.RESISTANCE],
            levels=levels,
        )


# -----------------------------------------------------------------------------
# Signal and sentiment
# -----------------------------------------------------------------------------


class Signal(str, Enum):
    """Overall directional call."""

    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class Verdict(str, Enum):
    """Per-indicator call."""

    BUY = "BUY"
    SELL = "SELL"
    NEUTRAL = "NEUTRAL"


class IndicatorSignal(BaseModel):
    """One indicator's verdict and the reason for it."""

    verdict: Verdict = Verdict.NEUTRAL
    reason: str = ""


class SignalBreakdown(BaseModel):
    """Per-indicator verdicts behind the overall signal."""

    ma_crossover: IndicatorSignal = Field(default_factory=IndicatorSignal)
    rsi: IndicatorSignal = Field(default_factory=IndicatorSignal)
    macd: IndicatorSignal = Field(default_factory=IndicatorSignal)
    bollinger: IndicatorSignal = Field(default_factory=IndicatorSignal)


class SignalVerdict(BaseModel):
    """Weighted BUY/SELL/HOLD call with confidence."""

    signal: Signal
    confidence: int = Field(ge=0, le=100)
    signals: SignalBreakdown


class SentimentLabel(str, Enum):
    """Market mood buckets."""

    VERY_BEARISH = "Very Bearish"
    BEARISH = "Bearish"
    NEUTRAL = "Neutral"
    BULLISH = "Bullish"
    VERY_BULLISH = "Very Bullish"


class SentimentScore(BaseModel):
    """Market mood score on a 0-100 scale."""

    label: SentimentLabel
    score: float = Field(ge=0, le=100)


# -----------------------------------------------------------------------------
# Result bundle
# -----------------------------------------------------------------------------


class AnalysisResult(BaseModel):
    """Everything derived from one price series."""

    symbol: str
    name: str
    currency: str = "INR"
    interval: str = "15m"

    # Quote
    current_price: float
    previous_close: float
    change: float
    change_percent: float
    day_high: float
    day_low: float
    volume: int
    fifty_two_week_high: float
    fifty_two_week_low: float

    # Analysis
    indicators: IndicatorSnapshot
    support_resistance: SupportResistance
    signal: SignalVerdict
    sentiment: SentimentScore
    chart: ChartData

    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def summary(self) -> str:
        """Compact one-line description."""
        return (
            f"{self.symbol} {self.current_price:.2f} ({self.change_percent:+.2f}%) | "
            f"{self.signal.signal.value} {self.signal.confidence}% | "
            f"{self.sentiment.label.value} {self.sentiment.score:.1f}"
        )


def _clean(value) -> Optional[float]:
    """Map NaN/None to None, everything else to float."""
    if value is None:
        return None
    value = float(value)
    if math.isnan(value):
        return None
    return value
