"""
Analysis entry point: price series in, indicator/signal bundle out.

The pipeline is a single synchronous pass:
1. Validate and frame the series
2. Compute every indicator over the full history
3. Read the latest values into a snapshot
4. Synthesize the weighted signal and the sentiment score
5. Attach quote statistics and the aligned chart series
"""

import logging
from typing import Optional

import pandas as pd

from .analysis.sentiment import determine_sentiment, price_vs_ma
from .analysis.signal import RSI_NEUTRAL, SignalInputs, calculate_signal
from .config import IndicatorConfig, get_indicator_config
from .data.models import (
    AnalysisResult,
    ChartData,
    IndicatorSeries,
    IndicatorSnapshot,
    PriceSeries,
    QuoteMeta,
)
from .errors import MalformedInputError
from .technicals.levels import find_support_resistance
from .technicals.moving_averages import compute_sma
from .technicals.oscillators import compute_rsi
from .technicals.series import series_to_dataframe
from .technicals.trend import compute_macd
from .technicals.volatility import compute_bollinger

logger = logging.getLogger(__name__)


def validate_series(series: PriceSeries) -> None:
    """
    Check that a series can be analyzed.

    Raises:
        MalformedInputError: if the series is empty or timestamps are not
            strictly increasing
    """
    if series.is_empty:
        raise MalformedInputError(f"No price bars to analyze for {series.symbol}")

    timestamps = series.timestamps
    for i in range(1, len(timestamps)):
        if timestamps[i] <= timestamps[i - 1]:
            raise MalformedInputError(
                f"Timestamps for {series.symbol} must be strictly increasing: "
                f"bar {i} ({timestamps[i]}) follows {timestamps[i - 1]}"
            )


def compute_indicators(df: pd.DataFrame, config: IndicatorConfig) -> ChartData:
    """Compute every indicator series, aligned with the DataFrame index."""
    close = df["close"].astype(float)

    macd = compute_macd(
        close, config.macd_fast, config.macd_slow, config.macd_signal_period
    )
    bollinger = compute_bollinger(close, config.bollinger_period, config.bollinger_k)

    return ChartData(
        ma20=IndicatorSeries.from_series("ma20", compute_sma(close, config.sma_short_period)),
        ma50=IndicatorSeries.from_series("ma50", compute_sma(close, config.sma_long_period)),
        ma200=IndicatorSeries.from_series(
            "ma200", compute_sma(close, config.sma_very_long_period)
        ),
        rsi=IndicatorSeries.from_series("rsi", compute_rsi(close, config.rsi_period)),
        macd=IndicatorSeries.from_series("macd", macd["macd"]),
        macd_signal=IndicatorSeries.from_series("macd_signal", macd["signal"]),
        macd_histogram=IndicatorSeries.from_series("macd_histogram", macd["histogram"]),
        bollinger_upper=IndicatorSeries.from_series("bollinger_upper", bollinger["upper"]),
        bollinger_middle=IndicatorSeries.from_series("bollinger_middle", bollinger["middle"]),
        bollinger_lower=IndicatorSeries.from_series("bollinger_lower", bollinger["lower"]),
    )


def latest_snapshot(chart: ChartData) -> IndicatorSnapshot:
    """Read the last value of every indicator series."""
    return IndicatorSnapshot(
        ma20=chart.ma20.latest,
        ma50=chart.ma50.latest,
        ma200=chart.ma200.latest,
        rsi=chart.rsi.latest,
        macd=chart.macd.latest,
        macd_signal=chart.macd_signal.latest,
        macd_histogram=chart.macd_histogram.latest,
        bollinger_upper=chart.bollinger_upper.latest,
        bollinger_middle=chart.bollinger_middle.latest,
        bollinger_lower=chart.bollinger_lower.latest,
    )


def display_name(symbol: str) -> str:
    """Default display name: the symbol without its NSE suffix."""
    return symbol.replace(".NS", "")


def analyze_series(
    series: PriceSeries,
    config: Optional[IndicatorConfig] = None,
    meta: Optional[QuoteMeta] = None,
) -> AnalysisResult:
    """
    Run the full indicator and signal pipeline on one price series.

    Args:
        series: Dense OHLCV series, oldest first
        config: Indicator periods (defaults from environment)
        meta: Quote metadata from the data source, if any

    Returns:
        AnalysisResult for the latest bar

    Raises:
        MalformedInputError: if the series cannot be analyzed
    """
    config = config or get_indicator_config()
    meta = meta or QuoteMeta()
    validate_series(series)

    if len(series.bars) < config.max_lookback:
        logger.debug(
            f"{series.symbol}: {len(series.bars)} bars is shorter than the longest "
            f"lookback ({config.max_lookback}); some indicators will be absent"
        )

    df = series_to_dataframe(series)
    chart = compute_indicators(df, config)
    snapshot = latest_snapshot(chart)
    levels = find_support_resistance(series.highs, series.lows)

    # Quote statistics
    bars = series.bars
    latest = series.latest()
    current_price = latest.close
    previous_close = bars[-2].close if len(bars) > 1 else current_price
    change = current_price - previous_close
    change_percent = (change / previous_close) * 100 if previous_close > 0 else 0.0

    session = bars[-config.day_bars :]
    day_high = max(b.high for b in session)
    day_low = min(b.low for b in session)

    signal = calculate_signal(
        SignalInputs(
            price=current_price,
            ma20=snapshot.ma20,
            ma50=snapshot.ma50,
            rsi=snapshot.rsi,
            macd=snapshot.macd,
            macd_signal=snapshot.macd_signal,
            bollinger_upper=snapshot.bollinger_upper,
            bollinger_lower=snapshot.bollinger_lower,
        )
    )

    sentiment = determine_sentiment(
        RSI_NEUTRAL if snapshot.rsi is None else snapshot.rsi,
        0.0 if snapshot.macd is None else snapshot.macd,
        price_vs_ma(current_price, snapshot.ma20),
    )

    logger.info(
        f"Analyzed {series.symbol}: {len(bars)} bars, "
        f"signal={signal.signal.value} ({signal.confidence}), "
        f"sentiment={sentiment.label.value} ({sentiment.score:.1f})"
    )

    return AnalysisResult(
        symbol=series.symbol,
        name=meta.name or display_name(series.symbol),
        currency=meta.currency,
        interval=series.interval,
        current_price=current_price,
        previous_close=previous_close,
        change=change,
        change_percent=change_percent,
        day_high=day_high,
        day_low=day_low,
        volume=latest.volume,
        fifty_two_week_high=meta.fifty_two_week_high or max(series.highs),
        fifty_two_week_low=meta.fifty_two_week_low or min(series.lows),
        indicators=snapshot,
        support_resistance=levels,
        signal=signal,
        sentiment=sentiment,
        chart=chart,
    )
