"""Market sentiment score from RSI, MACD and price distance from MA20."""

import logging
from typing import Optional

from ..data.models import SentimentLabel, SentimentScore

logger = logging.getLogger(__name__)

BASE_SCORE = 50.0
MACD_MAX_ADJUSTMENT = 15.0
MACD_SCALE = 10.0


def price_vs_ma(price: float, ma: Optional[float]) -> float:
    """Percent distance of price from a moving average; 0 when the MA is absent."""
    if not ma:
        return 0.0
    return (price - ma) / ma * 100


def rsi_adjustment(rsi: float) -> float:
    """RSI contribution, checked in order so <30 excludes the <40 branch."""
    if rsi < 30:
        return -15.0
    elif rsi < 40:
        return -10.0
    elif rsi > 70:
        return 15.0
    elif rsi > 60:
        return 10.0
    return 0.0


def macd_adjustment(macd: float) -> float:
    """MACD contribution, capped at +/-15."""
    magnitude = min(MACD_MAX_ADJUSTMENT, abs(macd) * MACD_SCALE)
    return magnitude if macd > 0 else -magnitude


def sentiment_label(score: float) -> SentimentLabel:
    """Bucket a 0-100 score."""
    if score >= 80:
        return SentimentLabel.VERY_BULLISH
    elif score >= 60:
        return SentimentLabel.BULLISH
    elif score >= 40:
        return SentimentLabel.NEUTRAL
    elif score >= 20:
        return SentimentLabel.BEARISH
    return SentimentLabel.VERY_BEARISH


def determine_sentiment(rsi: float, macd: float, price_vs_ma20: float) -> SentimentScore:
    """
    Score market mood on a 0-100 scale.

    Args:
        rsi: Latest RSI (use 50 when absent)
        macd: Latest MACD line value (use 0 when absent)
        price_vs_ma20: Percent distance of price from MA20. Added as is; large
            deviations saturate at the final clamp.

    Returns:
        SentimentScore with label and clamped score
    """
    score = BASE_SCORE
    score += rsi_adjustment(rsi)
    score += macd_adjustment(macd)
    score += price_vs_ma20

    score = max(0.0, min(100.0, score))

    logger.debug(
        f"Sentiment: rsi={rsi:.2f}, macd={macd:.4f}, "
        f"price_vs_ma20={price_vs_ma20:.2f}%, score={score:.2f}"
    )

    return SentimentScore(label=sentiment_label(score), score=score)
