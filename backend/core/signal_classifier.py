"""Signal classification from an indicator snapshot.

Three independent factors are read from a ready snapshot:
- Price stack: price against the EMA stack and VWAP
- Momentum: raw RSI against its smoothed signal and the 55/45 levels
- Trend: MACD line against its signal line and the histogram sign

All three bullish -> STRONG_BUY, all three bearish -> STRONG_SELL.
Otherwise two or more bullish -> WATCH_BULL, two or more bearish ->
WATCH_BEAR, else NEUTRAL.

This module is pure business logic with no I/O dependencies.
"""

import logging
from dataclasses import dataclass

from core.models import IndicatorSnapshot, Signal, SignalSide, SnapshotStatus

logger = logging.getLogger(__name__)

RSI_BULL_LEVEL = 55.0
RSI_BEAR_LEVEL = 45.0

STRONG_BUY_LABEL = "Strong Buy"
STRONG_SELL_LABEL = "Strong Sell"
WATCH_BULL_LABEL = "Watch (bullish)"
WATCH_BEAR_LABEL = "Watch (bearish)"
NEUTRAL_LABEL = "Neutral"
PENDING_LABEL = "Pending"
ERROR_LABEL = "Data error"

STRONG_BUY_REASONS = (
    "Price above EMA stack and VWAP",
    f"RSI above its signal and above {RSI_BULL_LEVEL:g}",
    "MACD above signal with positive histogram",
)
STRONG_SELL_REASONS = (
    "Price below EMA stack and VWAP",
    f"RSI below its signal and below {RSI_BEAR_LEVEL:g}",
    "MACD below signal with negative histogram",
)


@dataclass(frozen=True, slots=True)
class SignalFactors:
    """Bullish/bearish state of each factor. At most one side holds per factor."""

    price_bullish: bool
    price_bearish: bool
    momentum_bullish: bool
    momentum_bearish: bool
    trend_bullish: bool
    trend_bearish: bool

    @property
    def bullish_count(self) -> int:
        return sum((self.price_bullish, self.momentum_bullish, self.trend_bullish))

    @property
    def bearish_count(self) -> int:
        return sum((self.price_bearish, self.momentum_bearish, self.trend_bearish))


def _require_ready(snapshot: IndicatorSnapshot) -> None:
    if not snapshot.ready:
        raise ValueError(
            f"cannot classify a {snapshot.status.value} snapshot: {snapshot.reason}"
        )


def evaluate_factors(price: float, snapshot: IndicatorSnapshot) -> SignalFactors:
    """Evaluate the three factors for a ready snapshot at the current price."""
    _require_ready(snapshot)

    levels = (snapshot.ema_short, snapshot.ema_medium, snapshot.ema_long, snapshot.vwap)
    rsi, rsi_signal = snapshot.rsi, snapshot.rsi_signal
    histogram = snapshot.macd_histogram

    return SignalFactors(
        price_bullish=all(price > level for level in levels),
        price_bearish=all(price < level for level in levels),
        momentum_bullish=rsi > rsi_signal and rsi > RSI_BULL_LEVEL,
        momentum_bearish=rsi < rsi_signal and rsi < RSI_BEAR_LEVEL,
        trend_bullish=histogram > 0 and snapshot.macd > snapshot.macd_signal,
        trend_bearish=histogram < 0 and snapshot.macd < snapshot.macd_signal,
    )


def _describe(factors: SignalFactors) -> tuple[str, ...]:
    """One phrase per factor, whichever way it points."""
    if factors.price_bullish:
        price = "Price above EMA stack and VWAP"
    elif factors.price_bearish:
        price = "Price below EMA stack and VWAP"
    else:
        price = "Price inside EMA/VWAP range"

    if factors.momentum_bullish:
        momentum = "RSI momentum bullish"
    elif factors.momentum_bearish:
        momentum = "RSI momentum bearish"
    else:
        momentum = "RSI momentum flat"

    if factors.trend_bullish:
        trend = "MACD trend bullish"
    elif factors.trend_bearish:
        trend = "MACD trend bearish"
    else:
        trend = "MACD trend flat"

    return (price, momentum, trend)


def classify(price: float, snapshot: IndicatorSnapshot) -> Signal:
    """
    Classify a ready snapshot into a directional signal.

    Args:
        price: Current price of the instrument
        snapshot: Ready indicator snapshot

    Returns:
        Signal with side, label and reasons

    Raises:
        ValueError: If the snapshot is not ready
    """
    factors = evaluate_factors(price, snapshot)

    if factors.bullish_count == 3:
        signal = Signal(
            side=SignalSide.STRONG_BUY,
            label=STRONG_BUY_LABEL,
            reasons=STRONG_BUY_REASONS,
        )
    elif factors.bearish_count == 3:
        signal = Signal(
            side=SignalSide.STRONG_SELL,
            label=STRONG_SELL_LABEL,
            reasons=STRONG_SELL_REASONS,
        )
    elif factors.bullish_count >= 2:
        signal = Signal(
            side=SignalSide.WATCH_BULL,
            label=WATCH_BULL_LABEL,
            reasons=_describe(factors),
        )
    elif factors.bearish_count >= 2:
        signal = Signal(
            side=SignalSide.WATCH_BEAR,
            label=WATCH_BEAR_LABEL,
            reasons=_describe(factors),
        )
    else:
        signal = Signal(
            side=SignalSide.NEUTRAL,
            label=NEUTRAL_LABEL,
            reasons=_describe(factors),
        )

    logger.debug(
        f"Classified @ {price}: {signal.side.value} "
        f"(bullish={factors.bullish_count}, bearish={factors.bearish_count})"
    )
    return signal


def pending_signal(reason: str) -> Signal:
    """Signal emitted while a snapshot is still warming up."""
    return Signal(side=SignalSide.NEUTRAL, label=PENDING_LABEL, reasons=(reason,))


def error_signal(message: str) -> Signal:
    """Signal emitted when computing an instrument failed."""
    return Signal(side=SignalSide.NEUTRAL, label=ERROR_LABEL, reasons=(message,))


def classify_snapshot(price: float, snapshot: IndicatorSnapshot) -> Signal:
    """Dispatch a snapshot of any status to its signal."""
    if snapshot.status == SnapshotStatus.READY:
        return classify(price, snapshot)
    if snapshot.status == SnapshotStatus.NOT_READY:
        return pending_signal(snapshot.reason)
    return error_signal(snapshot.reason)
