"""Technical indicators for signal generation.

All functions are pure: they read the given series and return new
values. Insufficient history is reported as ``None`` (EMA, VWAP) or as a
not-ready result carrying a reason (RSI, MACD), never as an exception.
Derived series keep track of where they start in the source series so
that series computed over different windows can be combined at equal
timestamps.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np


# =============================================================================
# Offset series and index mapping
# =============================================================================

@dataclass(frozen=True, slots=True)
class OffsetSeries:
    """Series derived from a source series.

    ``values[0]`` applies to ``source[offset]``; ``values[i]`` applies to
    ``source[offset + i]``.
    """

    values: tuple[float, ...]
    offset: int

    @property
    def latest(self) -> float:
        """Get the most recent value."""
        return self.values[-1]

    def __len__(self) -> int:
        return len(self.values)


def aligned_index(index: int, from_offset: int, to_offset: int) -> int:
    """Map a position between two series derived from the same source.

    Position ``index`` of a series starting at source index ``from_offset``
    refers to ``source[from_offset + index]``, which is position
    ``from_offset + index - to_offset`` of a series starting at ``to_offset``.
    The result may fall outside the target series.
    """
    return index + from_offset - to_offset


def series_difference(minuend: OffsetSeries, subtrahend: OffsetSeries) -> OffsetSeries:
    """Subtract two derived series at equal source positions.

    Only positions present in both series are combined. The result starts
    at the first source position they share.
    """
    values: list[float] = []
    offset: int | None = None
    for i, value in enumerate(subtrahend.values):
        j = aligned_index(i, subtrahend.offset, minuend.offset)
        if 0 <= j < len(minuend.values):
            if offset is None:
                offset = subtrahend.offset + i
            values.append(minuend.values[j] - value)

    if offset is None:
        offset = max(minuend.offset, subtrahend.offset)
    return OffsetSeries(values=tuple(values), offset=offset)


# =============================================================================
# Series math
# =============================================================================

def _check_period(name: str, period: int) -> None:
    if period < 1:
        raise ValueError(f"{name} must be >= 1, got {period}")


def ema(values: Sequence[float], period: int) -> OffsetSeries | None:
    """
    Calculate Exponential Moving Average.

    Seeded with the arithmetic mean of the first ``period`` values, then
    ``ema_i = v * k + ema_{i-1} * (1 - k)`` with ``k = 2 / (period + 1)``.

    Args:
        values: Sequence of values, oldest first
        period: EMA period

    Returns:
        OffsetSeries with ``len(values) - period + 1`` values starting at
        ``period - 1``, or None if there are fewer than ``period`` values
    """
    _check_period("period", period)
    if len(values) < period:
        return None

    arr = np.asarray(values, dtype=np.float64)
    multiplier = 2.0 / (period + 1)

    result = np.empty(len(arr) - period + 1, dtype=np.float64)
    result[0] = np.mean(arr[:period])

    for i in range(period, len(arr)):
        j = i - period + 1
        result[j] = arr[i] * multiplier + result[j - 1] * (1 - multiplier)

    return OffsetSeries(values=tuple(float(v) for v in result), offset=period - 1)


# =============================================================================
# RSI
# =============================================================================

@dataclass(frozen=True, slots=True)
class RsiResult:
    """RSI outcome: either ready with values, or not ready with a reason."""

    ready: bool
    reason: str | None = None
    value: float | None = None  # Latest raw RSI
    signal: float | None = None  # Latest EMA-smoothed RSI


def _rsi_point(avg_gain: float, avg_loss: float) -> float:
    # Zero loss wins over zero gain: a flat series reports 100.
    if avg_loss == 0:
        return 100.0
    if avg_gain == 0:
        return 0.0
    return 100.0 - 100.0 / (1.0 + avg_gain / avg_loss)


def rsi(closes: Sequence[float], period: int = 14, smoothing: int = 3) -> RsiResult:
    """
    Calculate Relative Strength Index with an EMA-smoothed signal line.

    Initial average gain/loss is the mean over the first ``period``
    changes; later averages use Wilder's smoothing
    ``avg = (avg * (period - 1) + current) / period``.

    Args:
        closes: Close prices, oldest first
        period: RSI period
        smoothing: EMA period of the signal line

    Returns:
        RsiResult with latest raw and smoothed RSI
    """
    _check_period("period", period)
    _check_period("smoothing", smoothing)
    if len(closes) < period + smoothing:
        return RsiResult(ready=False, reason="insufficient closes")

    deltas = np.diff(np.asarray(closes, dtype=np.float64))
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    avg_gain = float(np.mean(gains[:period]))
    avg_loss = float(np.mean(losses[:period]))
    points = [_rsi_point(avg_gain, avg_loss)]

    for i in range(period, len(deltas)):
        avg_gain = (avg_gain * (period - 1) + float(gains[i])) / period
        avg_loss = (avg_loss * (period - 1) + float(losses[i])) / period
        points.append(_rsi_point(avg_gain, avg_loss))

    smoothed = ema(points, smoothing)
    if smoothed is None:
        return RsiResult(ready=False, reason="insufficient RSI points")

    return RsiResult(ready=True, value=points[-1], signal=smoothed.latest)


# =============================================================================
# MACD
# =============================================================================

@dataclass(frozen=True, slots=True)
class MacdResult:
    """MACD outcome: either ready with values, or not ready with a reason."""

    ready: bool
    reason: str | None = None
    macd: float | None = None
    signal: float | None = None
    histogram: float | None = None


def macd_line(
    values: Sequence[float], fast_period: int, slow_period: int
) -> OffsetSeries | None:
    """
    Calculate the MACD line: fast EMA minus slow EMA at equal timestamps.

    The fast EMA starts ``slow_period - fast_period`` values earlier than
    the slow EMA, so the two are combined through their offsets rather
    than position by position.

    Returns:
        OffsetSeries over the source, or None if either EMA is undefined
    """
    fast = ema(values, fast_period)
    slow = ema(values, slow_period)
    if fast is None or slow is None:
        return None
    return series_difference(fast, slow)


def macd(
    values: Sequence[float],
    fast_period: int = 12,
    slow_period: int = 48,
    signal_period: int = 192,
) -> MacdResult:
    """
    Calculate MACD with its signal line and histogram.

    Args:
        values: Source values (typically closes), oldest first
        fast_period: Fast EMA period
        slow_period: Slow EMA period
        signal_period: EMA period of the signal line

    Returns:
        MacdResult with latest MACD, signal and histogram (macd - signal)
    """
    _check_period("fast_period", fast_period)
    _check_period("slow_period", slow_period)
    _check_period("signal_period", signal_period)
    if len(values) < slow_period + signal_period:
        return MacdResult(ready=False, reason="insufficient closes for MACD")

    line = macd_line(values, fast_period, slow_period)
    if line is None or len(line) < signal_period:
        return MacdResult(ready=False, reason="insufficient MACD points")

    signal_line = ema(line.values, signal_period)
    if signal_line is None:
        return MacdResult(ready=False, reason="insufficient MACD points")

    macd_value = line.latest
    signal_value = signal_line.latest
    return MacdResult(
        ready=True,
        macd=macd_value,
        signal=signal_value,
        histogram=macd_value - signal_value,
    )


# =============================================================================
# VWAP
# =============================================================================

def vwap(typical_prices: Sequence[float], volumes: Sequence[float]) -> float | None:
    """
    Calculate Volume Weighted Average Price over the whole window.

    The window is whatever the caller supplies; this is not a rolling or
    session-reset VWAP.

    Args:
        typical_prices: Typical price per candle, (high + low + close) / 3
        volumes: Volume per candle

    Returns:
        sum(tp * volume) / sum(volume), or None for empty or mismatched
        input or zero total volume
    """
    if not typical_prices or len(typical_prices) != len(volumes):
        return None

    tp = np.asarray(typical_prices, dtype=np.float64)
    vol = np.asarray(volumes, dtype=np.float64)

    total_volume = float(np.sum(vol))
    if total_volume == 0:
        return None

    return float(np.sum(tp * vol)) / total_volume
