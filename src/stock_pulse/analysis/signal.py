"""
Weighted BUY/SELL/HOLD signal from the latest indicator values.

Four sub-signals each add up to 25 points to a 0-100 buy score:
- MA crossover: 25 when MA20 > MA50, else 0
- RSI: 25 when oversold, 0 when overbought, 12.5 in between
- MACD: 25 when MACD > signal line, else 0
- Bollinger: 25 below the lower band, 0 above the upper band, 12.5 inside
"""

import logging
import math
from typing import Optional

from pydantic import BaseModel

from ..data.models import (
    IndicatorSignal,
    Signal,
    SignalBreakdown,
    SignalVerdict,
    Verdict,
)

logger = logging.getLogger(__name__)

FULL_WEIGHT = 25.0
HALF_WEIGHT = 12.5

RSI_OVERSOLD = 30
RSI_OVERBOUGHT = 70
RSI_NEUTRAL = 50.0

NEUTRAL_CONFIDENCE = 50


class SignalInputs(BaseModel):
    """Latest scalar indicator values; None means insufficient history."""

    price: float
    ma20: Optional[float] = None
    ma50: Optional[float] = None
    rsi: Optional[float] = None
    macd: Optional[float] = None
    macd_signal: Optional[float] = None
    bollinger_upper: Optional[float] = None
    bollinger_lower: Optional[float] = None

    def with_defaults(self) -> "SignalInputs":
        """
        Replace absent values with neutral stand-ins.

        Price-scale indicators fall back to the current price, RSI to 50 and
        MACD values to 0. During warm-up this leans the signal toward HOLD.
        """
        price = self.price
        return SignalInputs(
            price=price,
            ma20=price if self.ma20 is None else self.ma20,
            ma50=price if self.ma50 is None else self.ma50,
            rsi=RSI_NEUTRAL if self.rsi is None else self.rsi,
            macd=0.0 if self.macd is None else self.macd,
            macd_signal=0.0 if self.macd_signal is None else self.macd_signal,
            bollinger_upper=price if self.bollinger_upper is None else self.bollinger_upper,
            bollinger_lower=price if self.bollinger_lower is None else self.bollinger_lower,
        )


def score_ma_crossover(ma20: float, ma50: float) -> tuple[float, IndicatorSignal]:
    """MA20 above MA50 is an uptrend."""
    if ma20 > ma50:
        return FULL_WEIGHT, IndicatorSignal(
            verdict=Verdict.BUY, reason="MA20 is above MA50, indicating uptrend"
        )
    return 0.0, IndicatorSignal(
        verdict=Verdict.SELL, reason="MA20 is below MA50, indicating downtrend"
    )


def score_rsi(rsi: float) -> tuple[float, IndicatorSignal]:
    """Oversold RSI is a buy, overbought a sell."""
    if rsi < RSI_OVERSOLD:
        return FULL_WEIGHT, IndicatorSignal(
            verdict=Verdict.BUY, reason="RSI is oversold (<30), potential bounce"
        )
    elif rsi > RSI_OVERBOUGHT:
        return 0.0, IndicatorSignal(
            verdict=Verdict.SELL, reason="RSI is overbought (>70), potential pullback"
        )
    else:
        return HALF_WEIGHT, IndicatorSignal(
            verdict=Verdict.NEUTRAL, reason=f"RSI is in neutral zone ({rsi:.1f})"
        )


def score_macd(macd: float, macd_signal: float) -> tuple[float, IndicatorSignal]:
    """MACD above its signal line is bullish momentum."""
    if macd > macd_signal:
        return FULL_WEIGHT, IndicatorSignal(
            verdict=Verdict.BUY, reason="MACD is above signal line, bullish momentum"
        )
    return 0.0, IndicatorSignal(
        verdict=Verdict.SELL, reason="MACD is below signal line, bearish momentum"
    )


def score_bollinger(price: float, upper: float, lower: float) -> tuple[float, IndicatorSignal]:
    """Price outside the bands is expected to revert."""
    if price < lower:
        return FULL_WEIGHT, IndicatorSignal(
            verdict=Verdict.BUY, reason="Price below lower band, potential reversal up"
        )
    elif price > upper:
        return 0.0, IndicatorSignal(
            verdict=Verdict.SELL, reason="Price above upper band, potential reversal down"
        )
    else:
        return HALF_WEIGHT, IndicatorSignal(
            verdict=Verdict.NEUTRAL, reason="Price is within Bollinger Bands"
        )


def round_half_up(value: float) -> int:
    """Round with .5 going up (12.5 -> 13), unlike round()'s banker's rounding."""
    return int(math.floor(value + 0.5))


def signal_from_confidence(confidence: int) -> Signal:
    """Map a 0-100 buy score to BUY/SELL/HOLD around 50."""
    if confidence > NEUTRAL_CONFIDENCE:
        return Signal.BUY
    elif confidence < NEUTRAL_CONFIDENCE:
        return Signal.SELL
    return Signal.HOLD


def calculate_signal(inputs: SignalInputs) -> SignalVerdict:
    """
    Combine the four sub-signals into one verdict.

    Args:
        inputs: Latest indicator values; absent values are substituted with
            neutral defaults before scoring

    Returns:
        SignalVerdict with overall signal, integer confidence and breakdown
    """
    data = inputs.with_defaults()

    ma_points, ma_signal = score_ma_crossover(data.ma20, data.ma50)
    rsi_points, rsi_signal = score_rsi(data.rsi)
    macd_points, macd_signal = score_macd(data.macd, data.macd_signal)
    bb_points, bb_signal = score_bollinger(
        data.price, data.bollinger_upper, data.bollinger_lower
    )

    buy_score = ma_points + rsi_points + macd_points + bb_points
    confidence = round_half_up(buy_score)

    logger.debug(
        f"Signal points: ma={ma_points}, rsi={rsi_points}, "
        f"macd={macd_points}, bollinger={bb_points}, total={buy_score}"
    )

    return SignalVerdict(
        signal=signal_from_confidence(confidence),
        confidence=confidence,
        signals=SignalBreakdown(
            ma_crossover=ma_signal,
            rsi=rsi_signal,
            macd=macd_signal,
            bollinger=bb_signal,
        ),
    )
