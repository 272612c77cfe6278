"""Detector protocol defining the interface all setup detectors implement."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from engine.context import MarketContext
from engine.indicators.bundle import IndicatorBundle
from engine.models.candle import CandleSeries
from engine.models.config import IndicatorConfig
from engine.models.signal import RiskLevel, SetupStatus, SetupType, SignalRecord


@runtime_checkable
class Detector(Protocol):
    """Protocol that all setup detectors must implement.

    Detectors are stateless: every call looks only at the candles and
    indicator bundle it is given. Insufficient history is never an error,
    it simply means "no detection".
    """

    @property
    def setup_type(self) -> SetupType:
        """Setup type this detector emits."""
        ...

    def min_candles(self, indicators: IndicatorConfig) -> int:
        """Smallest series length for which the detector can fire."""
        ...

    def detect(
        self,
        series: CandleSeries,
        indicators: IndicatorBundle,
    ) -> SignalRecord | None:
        """Return a signal if the setup triggers on the last candle."""
        ...

    def is_active(
        self,
        series: CandleSeries,
        indicators: IndicatorBundle,
    ) -> bool:
        """Check whether the setup is live now, using only the trailing window."""
        ...

    def status(
        self,
        series: CandleSeries,
        indicators: IndicatorBundle,
    ) -> SetupStatus:
        """Classify the setup on the last candle as active, forming or invalid."""
        ...

    def risk_level(
        self,
        context: MarketContext,
        indicators: IndicatorBundle,
    ) -> RiskLevel:
        """Risk of taking the setup in the given market context."""
        ...
