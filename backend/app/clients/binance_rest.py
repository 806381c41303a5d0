"""Binance REST API client for fetching market data."""

import asyncio
from datetime import datetime, timezone
from typing import Any

import httpx

from app.models import Kline


class MarketDataError(Exception):
    """Market data could not be fetched or had an unexpected shape."""


class RateLimiter:
    """Simple rate limiter for API calls."""

    def __init__(self, calls_per_minute: int = 1200):
        self.calls_per_minute = calls_per_minute
        self.interval = 60.0 / calls_per_minute
        self.last_call = 0.0
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """Wait if necessary to respect rate limit."""
        async with self._lock:
            loop = asyncio.get_running_loop()
            wait_time = self.last_call + self.interval - loop.time()
            if wait_time > 0:
                await asyncio.sleep(wait_time)
            self.last_call = loop.time()


class BinanceRestClient:
    """Binance public market data client (spot data API + futures depth)."""

    SPOT_BASE_URL = "https://data-api.binance.vision"
    FUTURES_BASE_URL = "https://fapi.binance.com"

    def __init__(
        self,
        spot_base_url: str = SPOT_BASE_URL,
        futures_base_url: str = FUTURES_BASE_URL,
        timeout: float = 30.0,
        calls_per_minute: int = 1200,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.spot_base_url = spot_base_url.rstrip("/")
        self.futures_base_url = futures_base_url.rstrip("/")
        self.timeout = timeout
        self.rate_limiter = RateLimiter(calls_per_minute)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "BinanceRestClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        base_url: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an API request with rate limiting."""
        await self.rate_limiter.acquire()
        client = await self._get_client()
        try:
            response = await client.request(method, f"{base_url}{endpoint}", params=params)
        except httpx.HTTPError as e:
            raise MarketDataError(f"Binance {method} {endpoint} failed: {e}") from e

        if response.is_error:
            raise MarketDataError(
                f"Binance {method} {endpoint} failed "
                f"({response.status_code}): {response.text}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise MarketDataError(
                f"Binance {method} {endpoint} returned invalid JSON: {response.text[:200]!r}"
            ) from e

    async def get_klines(
        self,
        symbol: str,
        interval: str,
        limit: int = 500,
    ) -> list[Kline]:
        """
        Fetch the most recent K-lines from Binance.

        Args:
            symbol: Trading pair (e.g., "BTCUSDT")
            interval: K-line interval (e.g., "5m", "1h")
            limit: Maximum number of K-lines (max 1000)

        Returns:
            List of Kline objects, oldest first (empty if Binance has none)
        """
        params: dict[str, Any] = {
            "symbol": symbol,
            "interval": interval,
            "limit": min(limit, 1000),
        }

        data = await self._request("GET", self.spot_base_url, "/api/v3/klines", params)
        if not isinstance(data, list):
            raise MarketDataError(f"Unexpected klines payload for {symbol}: {data!r}")

        klines = []
        for item in data:
            try:
                klines.append(
                    Kline(
                        open_time=datetime.fromtimestamp(item[0] / 1000, tz=timezone.utc),
                        open=float(item[1]),
                        high=float(item[2]),
                        low=float(item[3]),
                        close=float(item[4]),
                        volume=float(item[5]),
                    )
                )
            except (IndexError, KeyError, TypeError, ValueError) as e:
                raise MarketDataError(f"Malformed kline row for {symbol}: {item!r}") from e

        return klines

    async def get_24h_tickers(self) -> list[dict[str, Any]]:
        """Fetch 24h ticker statistics for every symbol."""
        data = await self._request("GET", self.spot_base_url, "/api/v3/ticker/24hr")
        if not isinstance(data, list):
            raise MarketDataError(f"Unexpected ticker payload: {data!r}")
        return data

    async def get_order_book(self, symbol: str, limit: int = 100) -> dict[str, Any]:
        """Fetch futures order book depth for a symbol."""
        data = await self._request(
            "GET",
            self.futures_base_url,
            "/fapi/v1/depth",
            {"symbol": symbol, "limit": limit},
        )
        if not isinstance(data, dict) or "bids" not in data or "asks" not in data:
            raise MarketDataError(f"Unexpected depth payload for {symbol}: {data!r}")
        return data
