"""Input/output data models and the quote provider client."""

from .models import (
    AnalysisResult,
    ChartData,
    IndicatorPoint,
    IndicatorSeries,
    IndicatorSignal,
    IndicatorSnapshot,
    LevelKind,
    PriceBar,
    PriceLevel,
    PriceSeries,
    QuoteMeta,
    SentimentLabel,
    SentimentScore,
    Signal,
    SignalBreakdown,
    SignalVerdict,
    SupportResistance,
    Verdict,
)

__all__ = [
    # Input
    "PriceBar",
    "PriceSeries",
    "QuoteMeta",
    # Indicators
    "ChartData",
    "IndicatorPoint",
    "IndicatorSeries",
    "IndicatorSnapshot",
    # Levels
    "LevelKind",
    "PriceLevel",
    "SupportResistance",
    # Signal / sentiment
    "IndicatorSignal",
    "SentimentLabel",
    "SentimentScore",
    "Signal",
    "SignalBreakdown",
    "SignalVerdict",
    "Verdict",
    # Result
    "AnalysisResult",
]
