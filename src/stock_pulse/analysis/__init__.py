"""Signal synthesis and sentiment scoring."""

from .sentiment import determine_sentiment, price_vs_ma, sentiment_label
from .signal import SignalInputs, calculate_signal, signal_from_confidence

__all__ = [
    "SignalInputs",
    "calculate_signal",
    "determine_sentiment",
    "price_vs_ma",
    "sentiment_label",
    "signal_from_confidence",
]
