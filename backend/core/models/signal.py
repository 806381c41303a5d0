"""Trading signal models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class SignalSide(str, Enum):
    """Directional signal side."""

    STRONG_BUY = "strong_buy"
    STRONG_SELL = "strong_sell"
    WATCH_BULL = "watch_bull"  # Leaning bullish, not confirmed
    WATCH_BEAR = "watch_bear"  # Leaning bearish, not confirmed
    NEUTRAL = "neutral"


class Signal(BaseModel):
    """Classified signal with its human-readable justifications."""

    model_config = ConfigDict(frozen=True)

    side: SignalSide
    label: str
    reasons: tuple[str, ...] = ()

    @property
    def is_directional(self) -> bool:
        """Check if the signal leans either way."""
        return self.side != SignalSide.NEUTRAL
