"""Shared detector plumbing.

Concrete detectors implement ``min_candles`` and ``_evaluate``; the base
class turns an evaluation into the detect / is_active / status calls of the
Detector protocol.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from engine.context import MarketContext, VolatilityLevel
from engine.indicators.bundle import IndicatorBundle
from engine.models.candle import CandleSeries
from engine.models.config import IndicatorConfig
from engine.models.signal import (
    Direction,
    RiskLevel,
    SetupStatus,
    SetupType,
    SignalRecord,
)

logger = logging.getLogger(__name__)

_VOLATILITY_RISK = {
    VolatilityLevel.LOW: RiskLevel.LOW,
    VolatilityLevel.MEDIUM: RiskLevel.MODERATE,
    VolatilityLevel.HIGH: RiskLevel.HIGH,
}


@dataclass
class Evaluation:
    """Outcome of evaluating a setup on the last candle."""

    status: SetupStatus
    direction: Direction | None = None
    entry_price: float | None = None
    stop_price: float | None = None

    @property
    def fires(self) -> bool:
        return self.status == SetupStatus.ACTIVE and self.direction is not None


class BaseDetector:
    """Base class for the built-in detectors."""

    setup_type: SetupType

    def min_candles(self, indicators: IndicatorConfig) -> int:
        raise NotImplementedError

    def _evaluate(
        self,
        series: CandleSeries,
        indicators: IndicatorBundle,
    ) -> Evaluation | None:
        """Evaluate the last candle. Only called with enough candles."""
        raise NotImplementedError

    def _safe_evaluate(
        self,
        series: CandleSeries,
        indicators: IndicatorBundle,
    ) -> Evaluation | None:
        if len(series) < self.min_candles(indicators.config):
            return None
        return self._evaluate(series, indicators)

    def detect(
        self,
        series: CandleSeries,
        indicators: IndicatorBundle,
    ) -> SignalRecord | None:
        evaluation = self._safe_evaluate(series, indicators)
        if evaluation is None or not evaluation.fires:
            return None

        signal = SignalRecord(
            ticker=series.ticker,
            timeframe=series.timeframe,
            setup_type=self.setup_type,
            detected_at=series.last.time,
            direction=evaluation.direction,
            entry_price=evaluation.entry_price,
            stop_price=evaluation.stop_price,
        )
        logger.info(
            "%s %s: %s %s @ %s stop=%s",
            self.setup_type.value,
            evaluation.direction.name,
            series.ticker,
            series.timeframe,
            evaluation.entry_price,
            evaluation.stop_price,
        )
        return signal

    def is_active(
        self,
        series: CandleSeries,
        indicators: IndicatorBundle,
    ) -> bool:
        window = self.min_candles(indicators.config)
        evaluation = self._safe_evaluate(series.tail(window), indicators.tail(window))
        return evaluation is not None and evaluation.fires

    def status(
        self,
        series: CandleSeries,
        indicators: IndicatorBundle,
    ) -> SetupStatus:
        evaluation = self._safe_evaluate(series, indicators)
        return evaluation.status if evaluation else SetupStatus.INVALID

    def risk_level(
        self,
        context: MarketContext,
        indicators: IndicatorBundle,
    ) -> RiskLevel:
        """Risk from the volatility level alone."""
        return _VOLATILITY_RISK[context.volatility]
