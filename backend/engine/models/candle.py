"""Candle (OHLCV) data models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Candle(BaseModel):
    """One period of open/high/low/close/volume data."""

    model_config = ConfigDict(frozen=True)

    time: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

    @property
    def is_bullish(self) -> bool:
        """Check if this is a bullish (green) candle."""
        return self.close > self.open

    @property
    def is_bearish(self) -> bool:
        """Check if this is a bearish (red) candle."""
        return self.close < self.open

    @property
    def range_size(self) -> float:
        """Get the full range (high - low) of the candle."""
        return self.high - self.low


class CandleSeries(BaseModel):
    """Ascending, contiguous candles for one ticker and timeframe.

    The engine never fills gaps or resamples; whatever the candle source
    hands over is taken as-is.
    """

    model_config = ConfigDict(frozen=True)

    ticker: str
    timeframe: str = "1d"
    candles: tuple[Candle, ...] = Field(default_factory=tuple)

    @field_validator("ticker")
    @classmethod
    def _normalize_ticker(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def last(self) -> Candle | None:
        return self.candles[-1] if self.candles else None

    def closes(self) -> list[float]:
        """Get list of close prices."""
        return [c.close for c in self.candles]

    def highs(self) -> list[float]:
        """Get list of high prices."""
        return [c.high for c in self.candles]

    def lows(self) -> list[float]:
        """Get list of low prices."""
        return [c.low for c in self.candles]

    def volumes(self) -> list[float]:
        """Get list of volumes."""
        return [c.volume for c in self.candles]

    def times(self) -> list[datetime]:
        return [c.time for c in self.candles]

    def truncate(self, end: int) -> CandleSeries:
        """Return the prefix ``candles[:end]`` as a new series."""
        return self.model_copy(update={"candles": self.candles[:end]})

    def tail(self, n: int) -> CandleSeries:
        """Return the last ``n`` candles as a new series."""
        if n <= 0:
            return self.model_copy(update={"candles": ()})
        return self.model_copy(update={"candles": self.candles[-n:]})

    def __len__(self) -> int:
        return len(self.candles)
