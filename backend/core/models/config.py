"""Indicator configuration models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class IndicatorConfig(BaseModel):
    """Indicator periods used by the snapshot builder."""

    model_config = ConfigDict(frozen=True)

    # EMA stack
    short_period: int = Field(default=12, ge=1)
    medium_period: int = Field(default=48, ge=1)
    long_period: int = Field(default=192, ge=1)

    # RSI with EMA-smoothed signal line
    rsi_period: int = Field(default=14, ge=1)
    rsi_smoothing: int = Field(default=3, ge=1)

    # MACD
    macd_fast: int = Field(default=12, ge=1)
    macd_slow: int = Field(default=48, ge=1)
    macd_signal: int = Field(default=192, ge=1)

    @model_validator(mode="after")
    def _validate(self):
        if self.macd_fast >= self.macd_slow:
            raise ValueError(
                f"macd_fast ({self.macd_fast}) must be below macd_slow ({self.macd_slow})"
            )
        return self

    @property
    def min_candles(self) -> int:
        """Shortest history that can produce a ready snapshot."""
        return max(
            self.short_period,
            self.medium_period,
            self.long_period,
            self.rsi_period + self.rsi_smoothing,
            self.macd_slow + self.macd_signal,
        )
