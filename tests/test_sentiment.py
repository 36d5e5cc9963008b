"""Tests for market sentiment scoring."""

import pytest

from stock_pulse.analysis.sentiment import (
    determine_sentiment,
    macd_adjustment,
    price_vs_ma,
    rsi_adjustment,
    sentiment_label,
)
from stock_pulse.data.models import SentimentLabel


class TestRSIAdjustment:
    """RSI branch is an else-if chain."""

    @pytest.mark.parametrize(
        "rsi,expected",
        [
            (10.0, -15.0),
            (29.9, -15.0),
            (30.0, -10.0),
            (39.9, -10.0),
            (40.0, 0.0),
            (60.0, 0.0),
            (60.1, 10.0),
            (70.0, 10.0),
            (70.1, 15.0),
            (100.0, 15.0),
        ],
    )
    def test_buckets(self, rsi, expected):
        assert rsi_adjustment(rsi) == expected


class TestMACDAdjustment:
    """MACD contribution scales by 10 and caps at 15."""

    def test_positive(self):
        assert macd_adjustment(0.5) == pytest.approx(5.0)

    def test_negative(self):
        assert macd_adjustment(-0.8) == pytest.approx(-8.0)

    def test_capped(self):
        assert macd_adjustment(1000.0) == 15.0
        assert macd_adjustment(-1000.0) == -15.0

    def test_zero(self):
        assert macd_adjustment(0.0) == 0.0


class TestPriceVsMA:
    """Percent distance from the moving average."""

    def test_above(self):
        assert price_vs_ma(110.0, 100.0) == pytest.approx(10.0)

    def test_below(self):
        assert price_vs_ma(95.0, 100.0) == pytest.approx(-5.0)

    def test_absent_ma(self):
        assert price_vs_ma(110.0, None) == 0.0
        assert price_vs_ma(110.0, 0.0) == 0.0


class TestDetermineSentiment:
    """Tests for the combined score and label."""

    def test_neutral_start(self):
        result = determine_sentiment(50.0, 0.0, 0.0)
        assert result.score == 50.0
        assert result.label == SentimentLabel.NEUTRAL

    def test_oversold_bearish(self):
        result = determine_sentiment(25.0, -0.5, -2.0)
        # 50 - 15 - 5 - 2
        assert result.score == pytest.approx(28.0)
        assert result.label == SentimentLabel.BEARISH

    def test_overbought_bullish(self):
        result = determine_sentiment(75.0, 0.3, 2.0)
        # 50 + 15 + 3 + 2
        assert result.score == pytest.approx(70.0)
        assert result.label == SentimentLabel.BULLISH

    def test_deviation_not_capped_before_clamp(self):
        """A 30% deviation moves the score by 30, not 15."""
        result = determine_sentiment(50.0, 0.0, 30.0)
        assert result.score == pytest.approx(80.0)
        assert result.label == SentimentLabel.VERY_BULLISH

    def test_extreme_inputs_clamped_high(self):
        result = determine_sentiment(90.0, 1000.0, 500.0)
        assert result.score == 100.0
        assert result.label == SentimentLabel.VERY_BULLISH

    def test_extreme_inputs_clamped_low(self):
        result = determine_sentiment(5.0, -1000.0, -500.0)
        assert result.score == 0.0
        assert result.label == SentimentLabel.VERY_BEARISH


class TestSentimentLabel:
    """Label thresholds."""

    @pytest.mark.parametrize(
        "score,label",
        [
            (100.0, SentimentLabel.VERY_BULLISH),
            (80.0, SentimentLabel.VERY_BULLISH),
            (79.9, SentimentLabel.BULLISH),
            (60.0, SentimentLabel.BULLISH),
            (59.9, SentimentLabel.NEUTRAL),
            (40.0, SentimentLabel.NEUTRAL),
            (39.9, SentimentLabel.BEARISH),
            (20.0, SentimentLabel.BEARISH),
            (19.9, SentimentLabel.VERY_BEARISH),
            (0.0, SentimentLabel.VERY_BEARISH),
        ],
    )
    def test_thresholds(self, score, label):
        assert sentiment_label(score) == label
