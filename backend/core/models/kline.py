"""K-line (candlestick) data models."""

from datetime import datetime
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Kline(BaseModel):
    """K-line (candlestick) data model."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    open_time: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float = Field(ge=0)

    @model_validator(mode="after")
    def _check_range(self):
        if self.high < self.low:
            raise ValueError(f"high {self.high} is below low {self.low}")
        return self

    @property
    def typical_price(self) -> float:
        """Get the typical price: (high + low + close) / 3."""
        return (self.high + self.low + self.close) / 3


class KlineHistory(BaseModel):
    """Ordered K-line history for one instrument, oldest first."""

    model_config = ConfigDict(frozen=True)

    klines: tuple[Kline, ...] = ()

    @classmethod
    def from_klines(cls, klines: Sequence[Kline]) -> "KlineHistory":
        """Build a history, rejecting klines that are not oldest first."""
        for prev, curr in zip(klines, klines[1:]):
            if curr.open_time <= prev.open_time:
                raise ValueError(
                    f"klines must be ordered oldest first: {curr.open_time} "
                    f"follows {prev.open_time}"
                )
        return cls(klines=tuple(klines))

    def get_closes(self) -> list[float]:
        """Get list of close prices."""
        return [k.close for k in self.klines]

    def get_highs(self) -> list[float]:
        """Get list of high prices."""
        return [k.high for k in self.klines]

    def get_lows(self) -> list[float]:
        """Get list of low prices."""
        return [k.low for k in self.klines]

    def get_volumes(self) -> list[float]:
        """Get list of volumes."""
        return [k.volume for k in self.klines]

    def get_typical_prices(self) -> list[float]:
        """Get list of typical prices."""
        return [k.typical_price for k in self.klines]

    def __len__(self) -> int:
        return len(self.klines)
