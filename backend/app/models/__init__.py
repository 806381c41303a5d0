"""Data models."""

from core.models import (
    IndicatorConfig,
    IndicatorSnapshot,
    Kline,
    KlineHistory,
    Signal,
    SignalSide,
    SnapshotStatus,
)
from app.models.market import (
    InstrumentResult,
    OrderBookLevel,
    OrderBookSnapshot,
    Ticker,
)

__all__ = [
    # Engine models
    "IndicatorConfig",
    "IndicatorSnapshot",
    "Kline",
    "KlineHistory",
    "Signal",
    "SignalSide",
    "SnapshotStatus",
    # Market data
    "InstrumentResult",
    "OrderBookLevel",
    "OrderBookSnapshot",
    "Ticker",
]
