"""Tests for signal classification."""

import pytest

from core.models import IndicatorSnapshot, Signal, SignalSide, SnapshotStatus
from core.signal_classifier import (
    ERROR_LABEL,
    NEUTRAL_LABEL,
    PENDING_LABEL,
    STRONG_BUY_LABEL,
    STRONG_BUY_REASONS,
    STRONG_SELL_LABEL,
    STRONG_SELL_REASONS,
    WATCH_BEAR_LABEL,
    WATCH_BULL_LABEL,
    classify,
    classify_snapshot,
    error_signal,
    evaluate_factors,
    pending_signal,
)


def _snapshot(
    ema_short: float = 100.0,
    ema_medium: float = 100.0,
    ema_long: float = 100.0,
    vwap: float = 100.0,
    rsi: float = 50.0,
    rsi_signal: float = 50.0,
    macd: float = 0.0,
    macd_signal: float = 0.0,
) -> IndicatorSnapshot:
    """Create a ready snapshot; defaults are neutral at price 100."""
    return IndicatorSnapshot(
        status=SnapshotStatus.READY,
        ema_short=ema_short,
        ema_medium=ema_medium,
        ema_long=ema_long,
        vwap=vwap,
        rsi=rsi,
        rsi_signal=rsi_signal,
        macd=macd,
        macd_signal=macd_signal,
        macd_histogram=macd - macd_signal,
    )


BULL_MOMENTUM = {"rsi": 62.0, "rsi_signal": 58.0}
BEAR_MOMENTUM = {"rsi": 38.0, "rsi_signal": 42.0}
BULL_TREND = {"macd": 1.5, "macd_signal": 1.0}
BEAR_TREND = {"macd": -1.5, "macd_signal": -1.0}


class TestFactors:
    """Tests for factor evaluation."""

    def test_price_above_stack(self):
        factors = evaluate_factors(110.0, _snapshot(ema_short=105.0, vwap=101.0))
        assert factors.price_bullish
        assert not factors.price_bearish

    def test_price_below_stack(self):
        factors = evaluate_factors(90.0, _snapshot(ema_long=95.0))
        assert factors.price_bearish
        assert not factors.price_bullish

    def test_price_inside_stack(self):
        """Above the EMAs but below VWAP is neither."""
        factors = evaluate_factors(100.5, _snapshot(vwap=101.0))
        assert not factors.price_bullish
        assert not factors.price_bearish

    def test_price_equal_to_level_is_not_strict(self):
        factors = evaluate_factors(100.0, _snapshot())
        assert not factors.price_bullish
        assert not factors.price_bearish

    def test_momentum_needs_level_and_signal(self):
        # Above signal but below 55
        factors = evaluate_factors(100.0, _snapshot(rsi=54.0, rsi_signal=50.0))
        assert not factors.momentum_bullish

        # Above 55 but below signal
        factors = evaluate_factors(100.0, _snapshot(rsi=60.0, rsi_signal=65.0))
        assert not factors.momentum_bullish
        assert not factors.momentum_bearish

        factors = evaluate_factors(100.0, _snapshot(**BULL_MOMENTUM))
        assert factors.momentum_bullish

        factors = evaluate_factors(100.0, _snapshot(**BEAR_MOMENTUM))
        assert factors.momentum_bearish

    def test_trend(self):
        assert evaluate_factors(100.0, _snapshot(**BULL_TREND)).trend_bullish
        assert evaluate_factors(100.0, _snapshot(**BEAR_TREND)).trend_bearish

        flat = evaluate_factors(100.0, _snapshot(macd=1.0, macd_signal=1.0))
        assert not flat.trend_bullish
        assert not flat.trend_bearish

    def test_counts(self):
        factors = evaluate_factors(110.0, _snapshot(**BULL_MOMENTUM, **BEAR_TREND))
        assert factors.bullish_count == 2
        assert factors.bearish_count == 1

    def test_not_ready_snapshot_rejected(self):
        with pytest.raises(ValueError, match="not_ready"):
            evaluate_factors(100.0, IndicatorSnapshot.not_ready("warming up"))


class TestClassify:
    """Tests for the decision rule."""

    def test_strong_buy(self):
        signal = classify(110.0, _snapshot(**BULL_MOMENTUM, **BULL_TREND))

        assert signal.side == SignalSide.STRONG_BUY
        assert signal.label == STRONG_BUY_LABEL
        assert signal.reasons == STRONG_BUY_REASONS

    def test_strong_sell(self):
        signal = classify(90.0, _snapshot(**BEAR_MOMENTUM, **BEAR_TREND))

        assert signal.side == SignalSide.STRONG_SELL
        assert signal.label == STRONG_SELL_LABEL
        assert signal.reasons == STRONG_SELL_REASONS

    def test_watch_bull(self):
        signal = classify(110.0, _snapshot(**BULL_TREND))

        assert signal.side == SignalSide.WATCH_BULL
        assert signal.label == WATCH_BULL_LABEL
        assert signal.reasons == (
            "Price above EMA stack and VWAP",
            "RSI momentum flat",
            "MACD trend bullish",
        )

    def test_watch_bull_with_one_bearish_factor(self):
        signal = classify(110.0, _snapshot(**BULL_MOMENTUM, **BEAR_TREND))

        assert signal.side == SignalSide.WATCH_BULL
        assert signal.reasons[2] == "MACD trend bearish"

    def test_watch_bear(self):
        signal = classify(90.0, _snapshot(**BEAR_MOMENTUM))

        assert signal.side == SignalSide.WATCH_BEAR
        assert signal.label == WATCH_BEAR_LABEL
        assert signal.reasons == (
            "Price below EMA stack and VWAP",
            "RSI momentum bearish",
            "MACD trend flat",
        )

    def test_neutral(self):
        signal = classify(100.5, _snapshot(vwap=101.0, **BULL_MOMENTUM, **BEAR_TREND))

        assert signal.side == SignalSide.NEUTRAL
        assert signal.label == NEUTRAL_LABEL
        assert signal.reasons == (
            "Price inside EMA/VWAP range",
            "RSI momentum bullish",
            "MACD trend bearish",
        )

    def test_classify_rejects_not_ready(self):
        with pytest.raises(ValueError):
            classify(100.0, IndicatorSnapshot.not_ready("insufficient closes"))

    def test_signal_is_frozen(self):
        signal = classify(110.0, _snapshot(**BULL_MOMENTUM, **BULL_TREND))
        with pytest.raises(Exception):
            signal.side = SignalSide.NEUTRAL


class TestOutcomeSignals:
    """Pending and error outcomes stay distinct."""

    def test_pending(self):
        signal = classify_snapshot(100.0, IndicatorSnapshot.not_ready("insufficient closes"))

        assert signal == pending_signal("insufficient closes")
        assert signal.side == SignalSide.NEUTRAL
        assert signal.label == PENDING_LABEL
        assert signal.reasons == ("insufficient closes",)

    def test_error(self):
        signal = classify_snapshot(100.0, IndicatorSnapshot.failed("timeout"))

        assert signal == error_signal("timeout")
        assert signal.label == ERROR_LABEL
        assert signal.reasons == ("timeout",)

    def test_pending_and_error_differ(self):
        assert pending_signal("x").label != error_signal("x").label

    def test_ready_dispatches_to_classify(self):
        snapshot = _snapshot(**BULL_MOMENTUM, **BULL_TREND)
        assert classify_snapshot(110.0, snapshot) == classify(110.0, snapshot)

    def test_neutral_is_not_directional(self):
        assert not pending_signal("x").is_directional
        assert Signal(side=SignalSide.WATCH_BEAR, label=WATCH_BEAR_LABEL).is_directional
