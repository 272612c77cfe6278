"""Serving-boundary response models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from engine.context import MarketContext
from engine.decision_zone import DecisionZone
from engine.models.indicator import MacdPoint, PulsePoint
from engine.models.signal import RiskLevel, SetupStatus, SetupType


class IndicatorSeriesResponse(BaseModel):
    """EMA and MACD series aligned to the requested output window."""

    ticker: str
    timeframe: str
    times: list[datetime]
    ema_short: list[Optional[float]]
    ema_long: list[Optional[float]]
    macd: list[MacdPoint]


class PulseDataPoint(BaseModel):
    """Pulse point as exposed to clients (never undefined)."""

    time: datetime
    positive_count: int
    negative_count: int
    trend_score: int
    intensity: float
    di_plus: float
    di_minus: float
    is_bullish: bool

    @classmethod
    def from_point(cls, time: datetime, point: PulsePoint | None) -> "PulseDataPoint":
        """Build from an engine point, zero-filling undefined ones."""
        point = point or PulsePoint.neutral()
        return cls(
            time=time,
            positive_count=point.positive_count,
            negative_count=point.negative_count,
            trend_score=point.trend_score,
            intensity=round(point.intensity, 2),
            di_plus=round(point.di_plus, 2),
            di_minus=round(point.di_minus, 2),
            is_bullish=point.is_bullish,
        )


class PulseSeriesResponse(BaseModel):
    ticker: str
    timeframe: str
    data: list[PulseDataPoint]


class SetupStatusEntry(BaseModel):
    setup_type: SetupType
    status: SetupStatus
    risk: RiskLevel


class AnalysisResponse(BaseModel):
    """Context, decision zone and current setup states for the latest candle."""

    ticker: str
    timeframe: str
    price: float
    updated_at: datetime
    context: MarketContext
    decision_zone: DecisionZone
    reasons: list[str]
    setups: list[SetupStatusEntry]
    meta: dict[str, float]


class StatsResponse(BaseModel):
    """Signal outcome stats for a ticker, optionally one setup type."""

    ticker: str
    setup_type: Optional[SetupType] = None
    count: int
    wins: int
    losses: int
    pending: int
    win_rate: float
