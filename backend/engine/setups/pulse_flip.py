"""Pulse flip detector.

Fires when the Pulse polarity (is_bullish) changes against the previous
defined point and the new reading carries enough intensity, so weak
back-and-forth flips are ignored.
"""

from __future__ import annotations

from engine.context import MarketContext, Trend
from engine.indicators.bundle import IndicatorBundle
from engine.indicators.oscillators import atr
from engine.models.candle import CandleSeries
from engine.models.config import IndicatorConfig, PulseFlipConfig
from engine.models.signal import Direction, RiskLevel, SetupStatus, SetupType
from engine.setups.base import BaseDetector, Evaluation
from engine.setups.registry import register_detector


@register_detector(SetupType.PULSE_FLIP)
class PulseFlipDetector(BaseDetector):
    """Fresh directional dominance on the Pulse indicator."""

    setup_type = SetupType.PULSE_FLIP

    def __init__(self, config: PulseFlipConfig | None = None):
        self.config = config or PulseFlipConfig()

    def min_candles(self, indicators: IndicatorConfig) -> int:
        # Two defined points are needed to see a flip
        return indicators.pulse_warmup + 2

    def _evaluate(self, series: CandleSeries, indicators: IndicatorBundle) -> Evaluation:
        current = indicators.pulse[-1]
        previous = indicators.pulse[-2]
        if current is None or previous is None:
            return Evaluation(status=SetupStatus.INVALID)

        if current.is_bullish == previous.is_bullish:
            return Evaluation(status=SetupStatus.INVALID)

        direction = Direction.LONG if current.is_bullish else Direction.SHORT
        if current.intensity <= self.config.min_intensity:
            return Evaluation(status=SetupStatus.FORMING, direction=direction)

        close = series.last.close
        stop = None
        atr_value = atr(indicators.config.atr_period, series.candles)
        if atr_value is not None:
            stop = close - direction.value * self.config.stop_atr_mult * atr_value

        return Evaluation(
            status=SetupStatus.ACTIVE,
            direction=direction,
            entry_price=close,
            stop_price=stop,
        )

    def risk_level(self, context: MarketContext, indicators: IndicatorBundle) -> RiskLevel:
        """High when the latest Pulse polarity runs against the trend."""
        point = indicators.pulse[-1] if indicators.pulse else None
        if point is not None:
            if point.is_bullish and context.trend == Trend.DOWN:
                return RiskLevel.HIGH
            if not point.is_bullish and context.trend == Trend.UP:
                return RiskLevel.HIGH
        return super().risk_level(context, indicators)
