"""Exchange market data models (24h tickers, order book depth)."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from core.models import IndicatorSnapshot, Signal


def _to_float(value: Any) -> float:
    """Parse an exchange numeric field; missing or empty values read as 0."""
    if value is None or value == "":
        return 0.0
    return float(value)


class Ticker(BaseModel):
    """24h ticker for one instrument."""

    model_config = ConfigDict(frozen=True)

    symbol: str  # Base asset, e.g. "BTC"
    pair: str  # Exchange symbol, e.g. "BTCUSDT"
    price: float
    change: float  # 24h change in percent
    quote_volume: float
    fund_flow: float  # quote_volume * change / 100

    @classmethod
    def from_binance(cls, raw: dict[str, Any], quote_asset: str = "USDT") -> "Ticker":
        """Build from a Binance /ticker/24hr entry."""
        pair = raw["symbol"]
        price = _to_float(raw.get("lastPrice"))
        change = _to_float(raw.get("priceChangePercent"))
        quote_volume = _to_float(raw.get("quoteVolume"))
        fund_flow = quote_volume * (change / 100)

        return cls(
            symbol=pair.removesuffix(quote_asset),
            pair=pair,
            price=round(price, 8),
            change=round(change, 2),
            quote_volume=round(quote_volume, 2),
            fund_flow=round(fund_flow, 2),
        )


class OrderBookLevel(BaseModel):
    """Single price level of an order book side."""

    model_config = ConfigDict(frozen=True)

    price: float
    quantity: float
    total: float  # price * quantity


class OrderBookSnapshot(BaseModel):
    """Top of the order book for one instrument."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    timestamp: datetime
    bids: tuple[OrderBookLevel, ...]
    asks: tuple[OrderBookLevel, ...]
    current_price: float | None  # Bid/ask mid, None if either side is empty

    @classmethod
    def from_binance(
        cls,
        symbol: str,
        raw: dict[str, Any],
        timestamp: datetime,
        levels: int = 50,
    ) -> "OrderBookSnapshot":
        """Build from a Binance /depth response, keeping the top ``levels`` per side."""

        def _side(entries: list[list[str]]) -> tuple[OrderBookLevel, ...]:
            result = []
            for price_str, quantity_str in entries[:levels]:
                price = float(price_str)
                quantity = float(quantity_str)
                result.append(
                    OrderBookLevel(price=price, quantity=quantity, total=price * quantity)
                )
            return tuple(result)

        bids = _side(raw.get("bids", []))
        asks = _side(raw.get("asks", []))
        current_price = (bids[0].price + asks[0].price) / 2 if bids and asks else None

        return cls(
            symbol=symbol,
            timestamp=timestamp,
            bids=bids,
            asks=asks,
            current_price=current_price,
        )


class InstrumentResult(BaseModel):
    """One instrument's ticker paired with its snapshot and signal."""

    model_config = ConfigDict(frozen=True)

    ticker: Ticker
    snapshot: IndicatorSnapshot
    signal: Signal
