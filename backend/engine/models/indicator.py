"""Indicator point models and the optional-series alias."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

# One element per source candle/value. None marks an undefined position
# (not enough lookback yet); once a position is defined every later one is too.
Series = list[Optional[float]]


class MacdPoint(BaseModel):
    """MACD line, signal line and histogram at one index."""

    model_config = ConfigDict(frozen=True)

    macd: float | None = None
    signal: float | None = None
    histogram: float | None = None

    @property
    def is_defined(self) -> bool:
        return self.histogram is not None


class PulsePoint(BaseModel):
    """Pulse indicator value at one index."""

    model_config = ConfigDict(frozen=True)

    positive_count: int
    negative_count: int
    trend_score: int
    intensity: float
    di_plus: float
    di_minus: float
    is_bullish: bool

    @classmethod
    def neutral(cls) -> PulsePoint:
        """Zeroed record used in place of undefined points at the serving boundary.

        is_bullish defaults to True here, so a warm-up point reads as
        bullish-leaning rather than "no data". Kept for client compatibility.
        """
        return cls(
            positive_count=0,
            negative_count=0,
            trend_score=0,
            intensity=0.0,
            di_plus=0.0,
            di_minus=0.0,
            is_bullish=True,
        )
