"""Breakout / breakdown detectors.

Breakout:  close above the highest high of the previous N candles with
           volume above its recent average -> LONG.
Breakdown: close below the lowest low of the previous N candles with
           volume above its recent average -> SHORT.

The current candle is excluded from the level. Stops sit half an ATR
beyond the broken level.
"""

from __future__ import annotations

from engine.indicators.bundle import IndicatorBundle
from engine.indicators.oscillators import atr, volume_ratio
from engine.models.candle import CandleSeries
from engine.models.config import BreakdownConfig, BreakoutConfig, IndicatorConfig
from engine.models.signal import Direction, SetupStatus, SetupType
from engine.setups.base import BaseDetector, Evaluation
from engine.setups.registry import register_detector


def _offset_from_level(
    series: CandleSeries,
    indicators: IndicatorBundle,
    level: float,
    atr_mult: float,
) -> float:
    """Level shifted by ``atr_mult`` ATRs (the level itself without ATR)."""
    atr_value = atr(indicators.config.atr_period, series.candles)
    if atr_value is None:
        return level
    return level + atr_mult * atr_value


@register_detector(SetupType.BREAKOUT)
class BreakoutDetector(BaseDetector):
    """Close above resistance (highest high of the lookback) with volume."""

    setup_type = SetupType.BREAKOUT

    def __init__(self, config: BreakoutConfig | None = None):
        self.config = config or BreakoutConfig()

    def min_candles(self, indicators: IndicatorConfig) -> int:
        return max(self.config.lookback, self.config.volume_period) + 1

    def _evaluate(self, series: CandleSeries, indicators: IndicatorBundle) -> Evaluation:
        candles = series.candles
        current = candles[-1]
        resistance = max(c.high for c in candles[-self.config.lookback - 1 : -1])
        ratio = volume_ratio(self.config.volume_period, candles) or 0.0

        if current.close > resistance and ratio > self.config.volume_multiplier:
            return Evaluation(
                status=SetupStatus.ACTIVE,
                direction=Direction.LONG,
                entry_price=current.close,
                stop_price=_offset_from_level(
                    series, indicators, resistance, -self.config.stop_atr_mult
                ),
            )
        if current.close >= resistance * self.config.proximity:
            return Evaluation(status=SetupStatus.FORMING, direction=Direction.LONG)
        return Evaluation(status=SetupStatus.INVALID)


@register_detector(SetupType.BREAKDOWN)
class BreakdownDetector(BaseDetector):
    """Close below support (lowest low of the lookback) with volume."""

    setup_type = SetupType.BREAKDOWN

    def __init__(self, config: BreakdownConfig | None = None):
        self.config = config or BreakdownConfig()

    def min_candles(self, indicators: IndicatorConfig) -> int:
        return max(self.config.lookback, self.config.volume_period) + 1

    def _evaluate(self, series: CandleSeries, indicators: IndicatorBundle) -> Evaluation:
        candles = series.candles
        current = candles[-1]
        support = min(c.low for c in candles[-self.config.lookback - 1 : -1])
        ratio = volume_ratio(self.config.volume_period, candles) or 0.0

        if current.close < support and ratio > self.config.volume_multiplier:
            return Evaluation(
                status=SetupStatus.ACTIVE,
                direction=Direction.SHORT,
                entry_price=current.close,
                stop_price=_offset_from_level(
                    series, indicators, support, self.config.stop_atr_mult
                ),
            )
        if current.close <= support * self.config.proximity:
            return Evaluation(status=SetupStatus.FORMING, direction=Direction.SHORT)
        return Evaluation(status=SetupStatus.INVALID)
