"""Indicator configuration loaded from indicators.yaml.

Example:

    ema:
      short: 12
      medium: 48
      long: 192
    rsi:
      period: 14
      smoothing: 3
    macd:
      fast: 12
      slow: 48
      signal: 192

Sections and keys that are left out keep their defaults. No YAML file
means every default applies.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict

from core.models import IndicatorConfig

logger = logging.getLogger(__name__)

_DEFAULTS = IndicatorConfig()


class EmaSection(BaseModel):
    """EMA stack periods."""

    model_config = ConfigDict(extra="forbid")

    short: int = _DEFAULTS.short_period
    medium: int = _DEFAULTS.medium_period
    long: int = _DEFAULTS.long_period


class RsiSection(BaseModel):
    """RSI period and signal-line smoothing."""

    model_config = ConfigDict(extra="forbid")

    period: int = _DEFAULTS.rsi_period
    smoothing: int = _DEFAULTS.rsi_smoothing


class MacdSection(BaseModel):
    """MACD fast/slow/signal periods."""

    model_config = ConfigDict(extra="forbid")

    fast: int = _DEFAULTS.macd_fast
    slow: int = _DEFAULTS.macd_slow
    signal: int = _DEFAULTS.macd_signal


class IndicatorFile(BaseModel):
    """Top-level indicators.yaml configuration."""

    model_config = ConfigDict(extra="forbid")

    ema: EmaSection = EmaSection()
    rsi: RsiSection = RsiSection()
    macd: MacdSection = MacdSection()

    def to_indicator_config(self) -> IndicatorConfig:
        return IndicatorConfig(
            short_period=self.ema.short,
            medium_period=self.ema.medium,
            long_period=self.ema.long,
            rsi_period=self.rsi.period,
            rsi_smoothing=self.rsi.smoothing,
            macd_fast=self.macd.fast,
            macd_slow=self.macd.slow,
            macd_signal=self.macd.signal,
        )


_DEFAULT_PATH = Path(__file__).parent.parent / "indicators.yaml"


def load_indicator_config(path: Path | None = None) -> IndicatorConfig:
    """Load indicator periods from a YAML file.

    Falls back to defaults if the file doesn't exist.
    """
    config_path = path or _DEFAULT_PATH

    if not config_path.exists():
        logger.info("No indicators.yaml found at %s, using defaults", config_path)
        return IndicatorConfig()

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    config = IndicatorFile(**raw).to_indicator_config()
    logger.info(
        "Loaded indicator config: EMA %d/%d/%d, RSI %d/%d, MACD %d/%d/%d "
        "(min %d candles)",
        config.short_period,
        config.medium_period,
        config.long_period,
        config.rsi_period,
        config.rsi_smoothing,
        config.macd_fast,
        config.macd_slow,
        config.macd_signal,
        config.min_candles,
    )
    return config
