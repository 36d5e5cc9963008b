"""Tests for the end-to-end analysis pipeline."""

import pytest

from stock_pulse.analyzer import analyze_series, display_name, validate_series
from stock_pulse.config import IndicatorConfig
from stock_pulse.data.models import (
    PriceSeries,
    QuoteMeta,
    SentimentLabel,
    Signal,
    Verdict,
)
from stock_pulse.errors import MalformedInputError


class TestValidation:
    """Input checks before any indicator runs."""

    def test_empty_series_rejected(self):
        with pytest.raises(MalformedInputError):
            analyze_series(PriceSeries(symbol="EMPTY.NS", bars=[]))

    def test_repeated_timestamp_rejected(self):
        series = PriceSeries.from_arrays(
            "DUP.NS", [1, 1, 2], [1, 1, 1], [1, 1, 1], [1, 1, 1], [1, 1, 1], [1, 1, 1]
        )
        with pytest.raises(MalformedInputError, match="strictly increasing"):
            validate_series(series)

    def test_out_of_order_rejected(self, make_series):
        bars = list(make_series([1.0, 2.0, 3.0]).bars)
        series = PriceSeries(symbol="X", bars=[bars[1], bars[0], bars[2]])
        with pytest.raises(MalformedInputError):
            validate_series(series)


class TestRisingSeries:
    """A steady uptrend with enough history for everything but MA200."""

    @pytest.fixture
    def result(self, make_series, indicator_config):
        closes = [100 * 1.01**i for i in range(60)]
        return analyze_series(make_series(closes), config=indicator_config)

    def test_indicator_availability(self, result):
        ind = result.indicators

        assert ind.ma20 is not None and ind.ma50 is not None
        assert ind.ma200 is None
        assert ind.rsi == 100.0
        assert ind.macd is not None and ind.macd > 0
        assert ind.macd_signal is not None
        assert ind.bollinger_upper > ind.bollinger_middle > ind.bollinger_lower

    def test_chart_alignment(self, result):
        chart = result.chart

        for series in (chart.ma20, chart.ma200, chart.rsi, chart.macd_signal):
            assert len(series) == 60
        assert chart.ma20.values[:19] == [None] * 19
        assert chart.ma20.values[19] is not None
        assert chart.ma200.defined() == []
        assert chart.macd_signal.values[32] is None
        assert chart.macd_signal.values[33] is not None

    def test_signal(self, result):
        signals = result.signal.signals

        assert signals.ma_crossover.verdict == Verdict.BUY
        assert signals.rsi.verdict == Verdict.SELL
        assert signals.macd.verdict == Verdict.BUY
        assert signals.bollinger.verdict == Verdict.NEUTRAL
        assert result.signal.confidence == 63
        assert result.signal.signal == Signal.BUY

    def test_sentiment(self, result):
        """Overbought RSI and a capped MACD term, plus the MA20 deviation."""
        ma20 = result.indicators.ma20
        deviation = (result.current_price - ma20) / ma20 * 100

        assert result.sentiment.score == pytest.approx(50 + 15 + 15 + deviation)
        assert result.sentiment.label == SentimentLabel.VERY_BULLISH

    def test_quote_stats(self, result):
        assert result.current_price == pytest.approx(100 * 1.01**59)
        assert result.previous_close == pytest.approx(100 * 1.01**58)
        assert result.change == pytest.approx(result.current_price - result.previous_close)
        assert result.change_percent == pytest.approx(1.0)
        assert result.volume == 1_059


class TestShortSeries:
    """Warm-up period: indicators absent, defaults drive the verdict."""

    def test_ten_bars(self, make_series, indicator_config):
        result = analyze_series(
            make_series([float(v) for v in range(10, 20)]), config=indicator_config
        )

        assert result.indicators.ma20 is None
        assert result.indicators.rsi is None
        assert result.indicators.macd is None
        assert result.indicators.bollinger_upper is None
        assert result.signal.confidence == 25
        assert result.signal.signal == Signal.SELL
        assert result.sentiment.score == 50.0
        assert result.sentiment.label == SentimentLabel.NEUTRAL

    def test_single_bar(self, make_series, indicator_config):
        result = analyze_series(make_series([50.0]), config=indicator_config)

        assert result.previous_close == 50.0
        assert result.change == 0.0
        assert result.change_percent == 0.0
        assert result.day_high == 50.5
        assert result.day_low == 49.5
        assert result.support_resistance.support == [49.5]
        assert result.support_resistance.resistance == [50.5]
        assert len(result.chart.rsi) == 1


class TestQuoteStats:
    """Session range, 52-week values and naming."""

    def test_day_range_uses_last_session(self, make_series):
        config = IndicatorConfig(day_bars=2)
        closes = [10.0, 30.0, 12.0, 11.0]
        result = analyze_series(make_series(closes), config=config)

        assert result.day_high == 12.5
        assert result.day_low == 10.5

    def test_fifty_two_week_from_series(self, make_series, indicator_config):
        result = analyze_series(make_series([10.0, 30.0, 12.0]), config=indicator_config)

        assert result.fifty_two_week_high == 30.5
        assert result.fifty_two_week_low == 9.5

    def test_meta_overrides(self, make_series, indicator_config):
        meta = QuoteMeta(
            name="Infosys Limited",
            currency="USD",
            fifty_two_week_high=2000.0,
            fifty_two_week_low=1200.0,
        )
        result = analyze_series(
            make_series([1500.0, 1510.0], symbol="INFY.NS"), config=indicator_config, meta=meta
        )

        assert result.name == "Infosys Limited"
        assert result.currency == "USD"
        assert result.fifty_two_week_high == 2000.0
        assert result.fifty_two_week_low == 1200.0

    def test_default_name_and_currency(self, make_series, indicator_config):
        result = analyze_series(make_series([1.0, 2.0], symbol="TCS.NS"), config=indicator_config)

        assert result.name == "TCS"
        assert result.currency == "INR"

    def test_display_name(self):
        assert display_name("RELIANCE.NS") == "RELIANCE"
        assert display_name("AAPL") == "AAPL"


class TestCustomConfig:
    """Indicator periods come from the supplied config."""

    def test_short_periods(self, make_series):
        config = IndicatorConfig(
            sma_short_period=3,
            sma_long_period=5,
            sma_very_long_period=8,
            rsi_period=3,
            macd_fast=2,
            macd_slow=3,
            macd_signal_period=2,
            bollinger_period=3,
        )
        closes = [10.0, 11.0, 12.0, 13.0, 12.0, 11.0, 12.0, 13.0, 14.0, 15.0]
        result = analyze_series(make_series(closes), config=config)
        ind = result.indicators

        assert ind.ma20 == pytest.approx(14.0)
        assert ind.ma50 == pytest.approx(13.0)
        assert ind.ma200 == pytest.approx(sum(closes[-8:]) / 8)
        assert ind.rsi == 100.0
        assert ind.macd is not None and ind.macd_signal is not None
        assert ind.bollinger_middle == pytest.approx(14.0)

    def test_summary(self, make_series, indicator_config):
        result = analyze_series(make_series([10.0, 11.0]), config=indicator_config)
        summary = result.summary()

        assert summary.startswith("TEST.NS 11.00 (+10.00%)")
        assert "SELL 25%" in summary
        assert "Neutral" in summary
