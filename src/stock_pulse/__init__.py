"""Stock Pulse - technical indicators and BUY/SELL/HOLD signals for intraday price series."""

from .analyzer import analyze_series
from .config import Config, IndicatorConfig, get_config, get_indicator_config
from .data.models import (
    AnalysisResult,
    PriceBar,
    PriceSeries,
    QuoteMeta,
    SentimentScore,
    Signal,
    SignalVerdict,
)
from .errors import MalformedInputError, StockPulseError, UpstreamFetchError

__version__ = "0.1.0"

__all__ = [
    "analyze_series",
    "Config",
    "IndicatorConfig",
    "get_config",
    "get_indicator_config",
    "AnalysisResult",
    "PriceBar",
    "PriceSeries",
    "QuoteMeta",
    "SentimentScore",
    "Signal",
    "SignalVerdict",
    "MalformedInputError",
    "StockPulseError",
    "UpstreamFetchError",
]
