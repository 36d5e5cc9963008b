"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from stock_pulse.config import Config, IndicatorConfig, get_indicator_config


class TestIndicatorConfig:
    """Tests for indicator periods."""

    def test_defaults(self):
        config = IndicatorConfig()

        assert config.sma_short_period == 20
        assert config.sma_long_period == 50
        assert config.sma_very_long_period == 200
        assert config.rsi_period == 14
        assert (config.macd_fast, config.macd_slow, config.macd_signal_period) == (12, 26, 9)
        assert config.bollinger_period == 20
        assert config.bollinger_k == 2.0
        assert config.day_bars == 96

    def test_max_lookback(self):
        assert IndicatorConfig().max_lookback == 200
        config = IndicatorConfig(sma_long_period=10, sma_very_long_period=10)
        # MACD signal needs slow + signal - 1 bars
        assert config.max_lookback == 34

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("INDICATOR_RSI_PERIOD", "7")
        monkeypatch.setenv("INDICATOR_BOLLINGER_K", "2.5")
        config = IndicatorConfig()

        assert config.rsi_period == 7
        assert config.bollinger_k == 2.5

    def test_macd_fast_must_be_faster(self):
        with pytest.raises(ValidationError, match="macd_fast"):
            IndicatorConfig(macd_fast=26, macd_slow=12)

    def test_period_must_be_positive(self):
        with pytest.raises(ValidationError):
            IndicatorConfig(rsi_period=0)

    def test_cached(self):
        get_indicator_config.cache_clear()
        assert get_indicator_config() is get_indicator_config()
        get_indicator_config.cache_clear()


class TestConfig:
    """Tests for application settings."""

    def test_defaults(self):
        config = Config()

        assert config.default_interval == "15m"
        assert config.default_range == "5d"
        assert config.yahoo_base_url.endswith("/v8/finance/chart")
        assert config.log_level == "WARNING"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_INTERVAL", "5m")
        monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "5")
        config = Config()

        assert config.default_interval == "5m"
        assert config.request_timeout_seconds == 5.0
