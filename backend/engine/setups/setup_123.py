"""1-2-3 setup.

Buy (uptrend, EMA short > EMA long on P3):
    P2 low below P1 low, P3 low above P2 low, MACD histogram > 0.
    Entry on the break of the P3 high, stop at the P2 low.

Sell (downtrend, EMA short < EMA long on P3):
    P2 high above P1 high, P3 high below P2 high, MACD histogram < 0.
    Entry on the break of the P3 low, stop at the P2 high.

detect() fires on the candle that completes the pattern (P3) and records
the pending entry. status() looks back for the most recent pattern and
reports whether price has broken the entry (active), is still between entry
and stop (forming) or has hit the stop (invalid). On the P3 candle itself
the close is never above the P3 high, so the setup reads as forming until a
later candle breaks the entry. is_active() follows status().
"""

from __future__ import annotations

from engine.context import MarketContext
from engine.indicators.bundle import IndicatorBundle
from engine.models.candle import CandleSeries
from engine.models.config import IndicatorConfig, Setup123Config
from engine.models.signal import Direction, RiskLevel, SetupStatus, SetupType
from engine.setups.base import BaseDetector, Evaluation
from engine.setups.registry import register_detector


@register_detector(SetupType.SETUP_123)
class Setup123Detector(BaseDetector):
    """Three consecutive candles forming a higher low / lower high in trend."""

    setup_type = SetupType.SETUP_123

    def __init__(self, config: Setup123Config | None = None):
        self.config = config or Setup123Config()

    def min_candles(self, indicators: IndicatorConfig) -> int:
        return max(
            indicators.ema_short_period,
            indicators.ema_long_period,
            indicators.macd_warmup + 1,
            3,
        )

    def _pattern_at(
        self,
        series: CandleSeries,
        indicators: IndicatorBundle,
        p3: int,
    ) -> Evaluation | None:
        """Pattern whose P3 is at index ``p3``, or None."""
        if p3 < 2:
            return None

        short = indicators.ema_short[p3]
        long = indicators.ema_long[p3]
        histogram = indicators.macd[p3].histogram
        if short is None or long is None or histogram is None:
            return None

        c1, c2, c3 = series.candles[p3 - 2 : p3 + 1]

        if short > long and c2.low < c1.low and c3.low > c2.low and histogram > 0:
            return Evaluation(
                status=SetupStatus.ACTIVE,
                direction=Direction.LONG,
                entry_price=c3.high,
                stop_price=c2.low,
            )
        if short < long and c2.high > c1.high and c3.high < c2.high and histogram < 0:
            return Evaluation(
                status=SetupStatus.ACTIVE,
                direction=Direction.SHORT,
                entry_price=c3.low,
                stop_price=c2.high,
            )
        return None

    def _evaluate(self, series: CandleSeries, indicators: IndicatorBundle) -> Evaluation:
        pattern = self._pattern_at(series, indicators, len(series) - 1)
        return pattern or Evaluation(status=SetupStatus.INVALID)

    def status(self, series: CandleSeries, indicators: IndicatorBundle) -> SetupStatus:
        if len(series) < self.min_candles(indicators.config):
            return SetupStatus.INVALID

        last_index = len(series) - 1
        start = max(2, last_index - self.config.lookback_window)
        price = series.last.close

        for p3 in range(last_index, start - 1, -1):
            pattern = self._pattern_at(series, indicators, p3)
            if pattern is None:
                continue

            sign = pattern.direction.value
            if (price - pattern.stop_price) * sign < 0:
                return SetupStatus.INVALID
            if (price - pattern.entry_price) * sign > 0:
                return SetupStatus.ACTIVE
            return SetupStatus.FORMING

        return SetupStatus.INVALID

    def is_active(self, series: CandleSeries, indicators: IndicatorBundle) -> bool:
        window = self.config.lookback_window + self.min_candles(indicators.config)
        return self.status(series.tail(window), indicators.tail(window)) == SetupStatus.ACTIVE

    def risk_level(self, context: MarketContext, indicators: IndicatorBundle) -> RiskLevel:
        # The stop sits at P2, so the risk is bounded by the pattern itself
        return RiskLevel.MODERATE
