"""Precomputed indicator series shared by all detectors.

Computing a bundle once per candle series and handing it to every detector
avoids recomputing the same EMAs/MACD/Pulse per setup type. Every series
is causal (the value at index i depends only on candles 0..i), so slicing a
bundle gives the same values as recomputing it on the sliced candles.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from engine.indicators.macd import macd_series
from engine.indicators.moving_average import ema_series, sma_series
from engine.indicators.pulse import pulse_series
from engine.models.candle import CandleSeries
from engine.models.config import IndicatorConfig
from engine.models.indicator import MacdPoint, PulsePoint, Series


@dataclass(frozen=True)
class IndicatorBundle:
    """Indicator series aligned index-for-index with a candle series."""

    config: IndicatorConfig = field(default_factory=IndicatorConfig)
    ema_short: Series = field(default_factory=list)
    ema_long: Series = field(default_factory=list)
    sma_short: Series = field(default_factory=list)
    sma_long: Series = field(default_factory=list)
    macd: list[MacdPoint] = field(default_factory=list)
    pulse: list[PulsePoint | None] = field(default_factory=list)

    @classmethod
    def compute(
        cls,
        series: CandleSeries,
        config: IndicatorConfig | None = None,
    ) -> IndicatorBundle:
        """Calculate every series in the bundle for the given candles."""
        config = config or IndicatorConfig()
        closes = series.closes()

        return cls(
            config=config,
            ema_short=ema_series(config.ema_short_period, closes),
            ema_long=ema_series(config.ema_long_period, closes),
            sma_short=sma_series(config.sma_short_period, closes),
            sma_long=sma_series(config.sma_long_period, closes),
            macd=macd_series(
                closes,
                config.macd_fast_period,
                config.macd_slow_period,
                config.macd_signal_period,
            ),
            pulse=pulse_series(
                series.candles,
                config.pulse_adx_length,
                config.pulse_collect_length,
                config.pulse_gamma,
            ),
        )

    def _slice(self, sl: slice) -> IndicatorBundle:
        return replace(
            self,
            ema_short=self.ema_short[sl],
            ema_long=self.ema_long[sl],
            sma_short=self.sma_short[sl],
            sma_long=self.sma_long[sl],
            macd=self.macd[sl],
            pulse=self.pulse[sl],
        )

    def truncate(self, end: int) -> IndicatorBundle:
        """Bundle for the prefix ``candles[:end]``."""
        return self._slice(slice(None, end))

    def tail(self, n: int) -> IndicatorBundle:
        """Bundle for the last ``n`` candles."""
        if n <= 0:
            return self._slice(slice(0, 0))
        return self._slice(slice(-n, None))

    def __len__(self) -> int:
        return len(self.ema_short)
