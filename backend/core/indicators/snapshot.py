"""Indicator snapshot builder.

Runs every indicator over one instrument's kline history and decides
readiness in stages. The first stage that lacks history supplies the
reason; later stages are not computed.
"""

import logging
from typing import Sequence

from core.indicators.indicators import ema, macd, rsi, vwap
from core.models import (
    IndicatorConfig,
    IndicatorSnapshot,
    Kline,
    KlineHistory,
    SnapshotStatus,
)

logger = logging.getLogger(__name__)

NOT_ENOUGH_CANDLES = "not enough candles for EMAs/VWAP"


def build_snapshot(
    klines: Sequence[Kline] | KlineHistory,
    config: IndicatorConfig | None = None,
) -> IndicatorSnapshot:
    """
    Build the indicator snapshot for one instrument.

    Args:
        klines: Kline history, oldest first
        config: Indicator periods (defaults to IndicatorConfig())

    Returns:
        Ready snapshot, or not-ready snapshot with the failing stage's reason

    Raises:
        ValueError: If the klines are not ordered oldest first
    """
    config = config or IndicatorConfig()
    if isinstance(klines, KlineHistory):
        history = klines
    else:
        history = KlineHistory.from_klines(klines)
    closes = history.get_closes()

    # Stage 1: EMA stack and VWAP, checked first to fail fast on short histories
    ema_short = ema(closes, config.short_period)
    ema_medium = ema(closes, config.medium_period)
    ema_long = ema(closes, config.long_period)
    vwap_value = vwap(history.get_typical_prices(), history.get_volumes())

    if ema_short is None or ema_medium is None or ema_long is None or vwap_value is None:
        logger.debug(f"Snapshot not ready with {len(history)} klines: {NOT_ENOUGH_CANDLES}")
        return IndicatorSnapshot.not_ready(NOT_ENOUGH_CANDLES)

    # Stage 2: momentum and trend
    rsi_result = rsi(closes, config.rsi_period, config.rsi_smoothing)
    if not rsi_result.ready:
        logger.debug(f"Snapshot not ready with {len(history)} klines: {rsi_result.reason}")
        return IndicatorSnapshot.not_ready(rsi_result.reason)

    macd_result = macd(closes, config.macd_fast, config.macd_slow, config.macd_signal)
    if not macd_result.ready:
        logger.debug(f"Snapshot not ready with {len(history)} klines: {macd_result.reason}")
        return IndicatorSnapshot.not_ready(macd_result.reason)

    return IndicatorSnapshot(
        status=SnapshotStatus.READY,
        ema_short=ema_short.latest,
        ema_medium=ema_medium.latest,
        ema_long=ema_long.latest,
        vwap=vwap_value,
        rsi=rsi_result.value,
        rsi_signal=rsi_result.signal,
        macd=macd_result.macd,
        macd_signal=macd_result.signal,
        macd_histogram=macd_result.histogram,
    )
