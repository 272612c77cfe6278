"""Indicator series for the serving layer.

Callers are expected to fetch ``required_lookback(n)`` candles once and ask
for an ``n``-point output window, so every exposed point has full warm-up
behind it instead of re-fetching per indicator.
"""

from __future__ import annotations

import logging
from typing import Sequence, TypeVar

from app.config import Settings, get_settings
from app.models.responses import (
    IndicatorSeriesResponse,
    PulseDataPoint,
    PulseSeriesResponse,
)
from engine.indicators.bundle import IndicatorBundle
from engine.models.candle import CandleSeries

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InsufficientDataError(ValueError):
    """Raised when a candle series is too short to produce useful output."""

    def __init__(self, ticker: str, required: int, found: int):
        self.ticker = ticker
        self.required = required
        self.found = found
        super().__init__(
            f"Insufficient data for {ticker}: need at least {required} candles, found {found}"
        )


def required_lookback(output_length: int, settings: Settings | None = None) -> int:
    """Candles to fetch so that ``output_length`` points are fully warmed up."""
    settings = settings or get_settings()
    return settings.indicator_config().max_warmup + output_length


def ensure_enough_candles(series: CandleSeries, settings: Settings) -> None:
    """Raise InsufficientDataError below the serving minimum."""
    if len(series) < settings.min_candles_required:
        logger.warning(
            "Rejecting %s %s: %d candles, need %d",
            series.ticker,
            series.timeframe,
            len(series),
            settings.min_candles_required,
        )
        raise InsufficientDataError(series.ticker, settings.min_candles_required, len(series))


def _window(values: Sequence[T], output_length: int | None) -> list[T]:
    if output_length is None:
        return list(values)
    if output_length <= 0:
        return []
    return list(values[-output_length:])


class IndicatorService:
    """Build indicator responses from already-fetched candles."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.indicator_config = self.settings.indicator_config()

    def bundle(self, series: CandleSeries) -> IndicatorBundle:
        ensure_enough_candles(series, self.settings)
        return IndicatorBundle.compute(series, self.indicator_config)

    def indicator_series(
        self,
        series: CandleSeries,
        output_length: int | None = None,
        bundle: IndicatorBundle | None = None,
    ) -> IndicatorSeriesResponse:
        """
        EMA short/long and MACD for the last ``output_length`` candles.

        Undefined positions stay None.

        Raises:
            InsufficientDataError: If the series is below the serving minimum
        """
        bundle = bundle or self.bundle(series)
        return IndicatorSeriesResponse(
            ticker=series.ticker,
            timeframe=series.timeframe,
            times=_window(series.times(), output_length),
            ema_short=_window(bundle.ema_short, output_length),
            ema_long=_window(bundle.ema_long, output_length),
            macd=_window(bundle.macd, output_length),
        )

    def pulse_series(
        self,
        series: CandleSeries,
        output_length: int | None = None,
        bundle: IndicatorBundle | None = None,
    ) -> PulseSeriesResponse:
        """
        Pulse points for the last ``output_length`` candles.

        Undefined warm-up points are replaced with the zeroed neutral record.

        Raises:
            InsufficientDataError: If the series is below the serving minimum
        """
        bundle = bundle or self.bundle(series)
        points = [
            PulseDataPoint.from_point(time, point)
            for time, point in zip(series.times(), bundle.pulse)
        ]
        return PulseSeriesResponse(
            ticker=series.ticker,
            timeframe=series.timeframe,
            data=_window(points, output_length),
        )
