"""Indicator snapshot model."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class SnapshotStatus(str, Enum):
    """Outcome of computing indicators for one instrument."""

    READY = "ready"
    NOT_READY = "not_ready"  # Warm-up: not enough history yet
    FAILED = "failed"  # Unexpected failure while fetching or computing


INDICATOR_FIELDS = (
    "ema_short",
    "ema_medium",
    "ema_long",
    "vwap",
    "rsi",
    "rsi_signal",
    "macd",
    "macd_signal",
    "macd_histogram",
)


class IndicatorSnapshot(BaseModel):
    """Latest indicator values for one instrument.

    Readiness is all-or-nothing: a ready snapshot carries every indicator
    value and no reason, any other snapshot carries only a reason.
    """

    model_config = ConfigDict(frozen=True)

    status: SnapshotStatus
    reason: str | None = None

    ema_short: float | None = None
    ema_medium: float | None = None
    ema_long: float | None = None
    vwap: float | None = None
    rsi: float | None = None
    rsi_signal: float | None = None
    macd: float | None = None
    macd_signal: float | None = None
    macd_histogram: float | None = None

    @model_validator(mode="after")
    def _check_readiness(self):
        values = [getattr(self, name) for name in INDICATOR_FIELDS]
        if self.status == SnapshotStatus.READY:
            if self.reason is not None:
                raise ValueError("ready snapshot must not carry a reason")
            missing = [n for n, v in zip(INDICATOR_FIELDS, values) if v is None]
            if missing:
                raise ValueError(f"ready snapshot is missing {', '.join(missing)}")
        else:
            if not self.reason:
                raise ValueError(f"{self.status.value} snapshot requires a reason")
            if any(v is not None for v in values):
                raise ValueError(
                    f"{self.status.value} snapshot must not carry indicator values"
                )
        return self

    @classmethod
    def not_ready(cls, reason: str) -> "IndicatorSnapshot":
        return cls(status=SnapshotStatus.NOT_READY, reason=reason)

    @classmethod
    def failed(cls, reason: str) -> "IndicatorSnapshot":
        return cls(status=SnapshotStatus.FAILED, reason=reason)

    @property
    def ready(self) -> bool:
        return self.status == SnapshotStatus.READY
