"""Exception types raised by the analysis pipeline and the quote client."""

from typing import Optional


class StockPulseError(Exception):
    """Base exception for stock-pulse errors."""

    pass


class MalformedInputError(StockPulseError, ValueError):
    """Raised when price/volume arrays cannot be aligned into one series."""

    pass


class UpstreamFetchError(StockPulseError):
    """Raised when the quote provider cannot supply a usable price series."""

    def __init__(self, symbol: str, cause: Optional[str] = None):
        self.symbol = symbol
        self.cause = cause or "Unknown error"
        super().__init__(f"Failed to fetch data for {symbol}. {self.cause}")
