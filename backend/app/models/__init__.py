"""Response models for the serving boundary."""

from app.models.responses import (
    IndicatorSeriesResponse,
    PulseDataPoint,
    PulseSeriesResponse,
    SetupStatusEntry,
    AnalysisResponse,
    StatsResponse,
)

__all__ = [
    "IndicatorSeriesResponse",
    "PulseDataPoint",
    "PulseSeriesResponse",
    "SetupStatusEntry",
    "AnalysisResponse",
    "StatsResponse",
]
