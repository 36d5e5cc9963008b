"""
Yahoo Finance chart client.

Fetches one interval/range of OHLCV bars for a symbol and hands the analysis
pipeline a dense series: any bar with a missing field is dropped as a whole so
the columns stay aligned.
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from ..config import Config, get_config
from ..errors import UpstreamFetchError
from .models import PriceBar, PriceSeries, QuoteMeta

logger = logging.getLogger(__name__)

QUOTE_FIELDS = ("open", "high", "low", "close", "volume")


def parse_chart_response(
    symbol: str,
    payload: dict[str, Any],
    interval: str = "15m",
) -> tuple[PriceSeries, QuoteMeta]:
    """
    Convert a v8 chart payload into a price series and quote metadata.

    Args:
        symbol: Requested symbol
        payload: Decoded JSON body
        interval: Interval the data was requested at

    Returns:
        Tuple of (PriceSeries, QuoteMeta)

    Raises:
        UpstreamFetchError: if the payload has no usable bars or a bar holds
            an invalid value
    """
    results = (payload.get("chart") or {}).get("result") or []
    if not results:
        raise UpstreamFetchError(symbol, "Invalid data format received")

    result = results[0]
    quotes = (result.get("indicators") or {}).get("quote") or []
    quote = quotes[0] if quotes else None
    if not quote or not quote.get("close"):
        raise UpstreamFetchError(symbol, "No quote data available")

    timestamps = result.get("timestamp") or []
    columns = {name: quote.get(name) or [] for name in QUOTE_FIELDS}

    bars = []
    dropped = 0
    for i, ts in enumerate(timestamps):
        row = {name: col[i] if i < len(col) else None for name, col in columns.items()}
        if ts is None or any(v is None for v in row.values()):
            dropped += 1
            continue
        try:
            bar = PriceBar(
                timestamp=int(ts),
                open=float(row["open"]),
                high=float(row["high"]),
                low=float(row["low"]),
                close=float(row["close"]),
                volume=int(row["volume"]),
            )
        except (ValidationError, TypeError, ValueError) as e:
            raise UpstreamFetchError(symbol, f"Invalid bar at index {i}: {e}") from e
        bars.append(bar)

    if dropped:
        logger.warning(f"{symbol}: dropped {dropped} incomplete bars")

    if not bars:
        raise UpstreamFetchError(symbol, "No quote data available")

    meta_raw = result.get("meta") or {}
    meta = QuoteMeta(
        name=meta_raw.get("shortName"),
        currency=meta_raw.get("currency") or "INR",
        fifty_two_week_high=meta_raw.get("fiftyTwoWeekHigh"),
        fifty_two_week_low=meta_raw.get("fiftyTwoWeekLow"),
    )

    return PriceSeries(symbol=symbol, interval=interval, bars=bars), meta


class YahooChartClient:
    """
    Async client for the Yahoo Finance chart endpoint.

    Usable as an async context manager; an httpx.AsyncClient can be injected
    for testing.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config or get_config()
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "YahooChartClient":
        if self._client is None:
            self._client = self._new_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.config.request_timeout_seconds,
            headers={"User-Agent": self.config.user_agent},
        )

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def get_price_series(
        self,
        symbol: str,
        interval: Optional[str] = None,
        range_: Optional[str] = None,
    ) -> tuple[PriceSeries, QuoteMeta]:
        """
        Fetch OHLCV bars for a symbol.

        Args:
            symbol: Ticker, e.g. "RELIANCE.NS"
            interval: Bar interval (default from config, "15m")
            range_: History range (default from config, "5d")

        Returns:
            Tuple of (PriceSeries, QuoteMeta)

        Raises:
            UpstreamFetchError: on HTTP, transport or payload failures
        """
        if self._client is None:
            self._client = self._new_client()

        interval = interval or self.config.default_interval
        range_ = range_ or self.config.default_range
        url = f"{self.config.yahoo_base_url.rstrip('/')}/{symbol}"

        logger.info(f"Fetching {symbol} ({interval}, {range_})")

        try:
            response = await self._client.get(
                url, params={"interval": interval, "range": range_}
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamFetchError(
                symbol, f"HTTP {e.response.status_code} from quote provider"
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamFetchError(symbol, str(e) or type(e).__name__) from e
        except ValueError as e:
            raise UpstreamFetchError(symbol, "Invalid data format received") from e

        return parse_chart_response(symbol, payload, interval)
