"""Pullback to the short moving average.

Trend comes from the slope of the long SMA over ``slope_lookback`` candles.
In an uptrend the candle's low has to touch the short SMA (within the
tolerance) and the candle has to close bullish above it; the downtrend case
mirrors this with the high and a bearish close below.
"""

from __future__ import annotations

from engine.context import MarketContext, VolatilityLevel, VolumeLevel
from engine.indicators.bundle import IndicatorBundle
from engine.indicators.oscillators import atr
from engine.models.candle import CandleSeries
from engine.models.config import IndicatorConfig, PullbackConfig
from engine.models.signal import Direction, RiskLevel, SetupStatus, SetupType
from engine.setups.base import BaseDetector, Evaluation
from engine.setups.registry import register_detector


@register_detector(SetupType.PULLBACK)
class PullbackDetector(BaseDetector):
    """Retrace to the short SMA followed by a resumption candle."""

    setup_type = SetupType.PULLBACK

    def __init__(self, config: PullbackConfig | None = None):
        self.config = config or PullbackConfig()

    def min_candles(self, indicators: IndicatorConfig) -> int:
        return max(
            indicators.sma_long_period + self.config.slope_lookback,
            indicators.sma_short_period,
            indicators.atr_period + 1,
        )

    def _trend(self, indicators: IndicatorBundle) -> Direction | None:
        now = indicators.sma_long[-1]
        before = indicators.sma_long[-1 - self.config.slope_lookback]
        if now is None or before is None or now == before:
            return None
        return Direction.LONG if now > before else Direction.SHORT

    def _evaluate(self, series: CandleSeries, indicators: IndicatorBundle) -> Evaluation | None:
        average = indicators.sma_short[-1]
        trend = self._trend(indicators)
        if average is None or trend is None:
            return Evaluation(status=SetupStatus.INVALID)

        current = series.last
        atr_value = atr(indicators.config.atr_period, series.candles)
        buffer = atr_value * self.config.proximity_atr_mult if atr_value is not None else 0.0
        tolerance = self.config.touch_tolerance

        if trend == Direction.LONG:
            touched = current.low <= average * (1 + tolerance)
            resumed = current.close > average and current.is_bullish
            stop = average - buffer
        else:
            touched = current.high >= average * (1 - tolerance)
            resumed = current.close < average and current.is_bearish
            stop = average + buffer

        if touched and resumed:
            return Evaluation(
                status=SetupStatus.ACTIVE,
                direction=trend,
                entry_price=current.close,
                stop_price=stop,
            )
        if atr_value is not None and abs(current.close - average) <= buffer:
            return Evaluation(status=SetupStatus.FORMING, direction=trend)
        return Evaluation(status=SetupStatus.INVALID)

    def risk_level(self, context: MarketContext, indicators: IndicatorBundle) -> RiskLevel:
        # Weak volume or high volatility undermines the retest
        if context.volume == VolumeLevel.LOW or context.volatility == VolatilityLevel.HIGH:
            return RiskLevel.HIGH
        if context.volatility == VolatilityLevel.MEDIUM:
            return RiskLevel.MODERATE
        return RiskLevel.LOW
