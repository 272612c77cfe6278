"""Decision zone: one overall reading from market context and setup states.

Rules are checked in order and the first match wins:

1. Breakdown active                               -> risk
2. Breakout active, uptrend, high volume          -> favorable
3. Pullback active, uptrend                       -> favorable
4. High volatility and no active setup            -> neutral
5. Downtrend                                      -> risk with high volume,
                                                     otherwise neutral
6. Anything else                                  -> neutral
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping

from pydantic import BaseModel

from engine.context import MarketContext, Trend, VolatilityLevel, VolumeLevel
from engine.models.signal import SetupStatus, SetupType


class DecisionZone(str, Enum):
    FAVORABLE = "favorable"
    NEUTRAL = "neutral"
    RISK = "risk"


class DecisionZoneResult(BaseModel):
    zone: DecisionZone
    reasons: list[str]


def _is_active(statuses: Mapping[SetupType, SetupStatus], setup_type: SetupType) -> bool:
    return statuses.get(setup_type) == SetupStatus.ACTIVE


def calculate_decision_zone(
    context: MarketContext,
    statuses: Mapping[SetupType, SetupStatus],
) -> DecisionZoneResult:
    """
    Classify the current moment as favorable, neutral or risk.

    Args:
        context: Trend / volume / volatility of the asset
        statuses: Current status per setup type; missing types count as inactive

    Returns:
        Zone plus the reasons that led to it, in rule order
    """
    active_count = sum(1 for s in statuses.values() if s == SetupStatus.ACTIVE)
    reasons: list[str] = []

    if _is_active(statuses, SetupType.BREAKDOWN):
        reasons.append("Support breakdown detected")
        reasons.append("Capital protection first")
        if context.volatility == VolatilityLevel.HIGH:
            reasons.append("High volatility adds to the risk")
        return DecisionZoneResult(zone=DecisionZone.RISK, reasons=reasons)

    if (
        _is_active(statuses, SetupType.BREAKOUT)
        and context.trend == Trend.UP
        and context.volume == VolumeLevel.HIGH
    ):
        reasons.append("Resistance breakout confirmed")
        reasons.append("Uptrend")
        reasons.append("Volume above average")
        return DecisionZoneResult(zone=DecisionZone.FAVORABLE, reasons=reasons)

    if _is_active(statuses, SetupType.PULLBACK) and context.trend == Trend.UP:
        reasons.append("Pullback within an uptrend")
        reasons.append("Retest of the short moving average")
        if context.volume != VolumeLevel.LOW:
            reasons.append("Volume adequate")
        return DecisionZoneResult(zone=DecisionZone.FAVORABLE, reasons=reasons)

    if context.volatility == VolatilityLevel.HIGH and active_count == 0:
        reasons.append("High volatility")
        reasons.append("No active setup")
        reasons.append("Waiting for volatility to settle")
        return DecisionZoneResult(zone=DecisionZone.NEUTRAL, reasons=reasons)

    if context.trend == Trend.DOWN:
        reasons.append("Downtrend")
        if context.volume == VolumeLevel.HIGH:
            reasons.append("High volume may extend the decline")
            return DecisionZoneResult(zone=DecisionZone.RISK, reasons=reasons)
        reasons.append("Caution advised")
        return DecisionZoneResult(zone=DecisionZone.NEUTRAL, reasons=reasons)

    reasons.append(f"Trend: {context.trend.value}")
    reasons.append(f"Volume: {context.volume.value}")
    reasons.append(f"Volatility: {context.volatility.value}")
    if active_count > 0:
        reasons.append(f"{active_count} active setup(s)")
    return DecisionZoneResult(zone=DecisionZone.NEUTRAL, reasons=reasons)
