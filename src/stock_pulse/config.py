"""Configuration management for stock-pulse."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Quote provider
    yahoo_base_url: str = Field(
        default="https://query1.finance.yahoo.com/v8/finance/chart",
        description="Base URL of the chart endpoint; the symbol is appended",
    )
    default_interval: str = Field(default="15m", description="Bar interval")
    default_range: str = Field(default="5d", description="History range")
    request_timeout_seconds: float = Field(default=30.0)
    user_agent: str = Field(
        default="Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    )

    # Logging
    log_level: str = Field(default="WARNING")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


class IndicatorConfig(BaseSettings):
    """Lookback periods and band width for the indicator engines."""

    model_config = SettingsConfigDict(env_prefix="INDICATOR_", extra="ignore")

    # Moving averages
    sma_short_period: int = Field(default=20, ge=1)
    sma_long_period: int = Field(default=50, ge=1)
    sma_very_long_period: int = Field(default=200, ge=1)

    # RSI
    rsi_period: int = Field(default=14, ge=1)

    # MACD
    macd_fast: int = Field(default=12, ge=1)
    macd_slow: int = Field(default=26, ge=1)
    macd_signal_period: int = Field(default=9, ge=1)

    # Bollinger Bands
    bollinger_period: int = Field(default=20, ge=1)
    bollinger_k: float = Field(default=2.0, ge=0)

    # Bars making up one trading session (96 x 15m)
    day_bars: int = Field(default=96, ge=1)

    @model_validator(mode="after")
    def check_macd_periods(self) -> "IndicatorConfig":
        if self.macd_fast >= self.macd_slow:
            raise ValueError(
                f"macd_fast ({self.macd_fast}) must be less than macd_slow ({self.macd_slow})"
            )
        return self

    @property
    def max_lookback(self) -> int:
        """Longest history any configured indicator needs."""
        return max(
            self.sma_short_period,
            self.sma_long_period,
            self.sma_very_long_period,
            self.rsi_period + 1,
            self.macd_slow + self.macd_signal_period - 1,
            self.bollinger_period,
        )


@lru_cache
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config()


@lru_cache
def get_indicator_config() -> IndicatorConfig:
    """Get cached indicator configuration."""
    return IndicatorConfig()
