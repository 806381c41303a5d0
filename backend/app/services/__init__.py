"""Business services."""

from app.services.market_scanner import MarketScanner

__all__ = [
    "MarketScanner",
]
