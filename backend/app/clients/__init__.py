"""Exchange clients."""

from app.clients.binance_rest import BinanceRestClient, MarketDataError, RateLimiter

__all__ = [
    "BinanceRestClient",
    "MarketDataError",
    "RateLimiter",
]
