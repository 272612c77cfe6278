"""Engine data models."""

from engine.models.candle import Candle, CandleSeries
from engine.models.config import (
    IndicatorConfig,
    BreakoutConfig,
    BreakdownConfig,
    PullbackConfig,
    PulseFlipConfig,
    Setup123Config,
    ContextConfig,
)
from engine.models.indicator import MacdPoint, PulsePoint, Series
from engine.models.signal import (
    Direction,
    Outcome,
    RiskLevel,
    SetupStatus,
    SetupType,
    SignalRecord,
)

__all__ = [
    "Candle",
    "CandleSeries",
    "IndicatorConfig",
    "BreakoutConfig",
    "BreakdownConfig",
    "PullbackConfig",
    "PulseFlipConfig",
    "Setup123Config",
    "ContextConfig",
    "MacdPoint",
    "PulsePoint",
    "Series",
    "Direction",
    "Outcome",
    "RiskLevel",
    "SetupStatus",
    "SetupType",
    "SignalRecord",
]
