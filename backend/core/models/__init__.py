"""Engine data models."""

from core.models.kline import Kline, KlineHistory
from core.models.config import IndicatorConfig
from core.models.indicator import (
    INDICATOR_FIELDS,
    IndicatorSnapshot,
    SnapshotStatus,
)
from core.models.signal import Signal, SignalSide

__all__ = [
    "Kline",
    "KlineHistory",
    "IndicatorConfig",
    "INDICATOR_FIELDS",
    "IndicatorSnapshot",
    "SnapshotStatus",
    "Signal",
    "SignalSide",
]
