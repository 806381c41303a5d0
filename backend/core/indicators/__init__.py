"""Technical indicators (pure math, no I/O)."""

from core.indicators.indicators import (
    OffsetSeries,
    RsiResult,
    MacdResult,
    aligned_index,
    series_difference,
    ema,
    rsi,
    macd,
    macd_line,
    vwap,
)
from core.indicators.snapshot import NOT_ENOUGH_CANDLES, build_snapshot

__all__ = [
    "OffsetSeries",
    "RsiResult",
    "MacdResult",
    "aligned_index",
    "series_difference",
    "ema",
    "rsi",
    "macd",
    "macd_line",
    "vwap",
    "NOT_ENOUGH_CANDLES",
    "build_snapshot",
]
