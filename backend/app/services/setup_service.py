"""Setup detection and stats for the serving layer."""

from __future__ import annotations

import logging
from typing import Iterable

from app.config import Settings, get_settings
from app.models.responses import AnalysisResponse, SetupStatusEntry, StatsResponse
from app.services.indicator_service import ensure_enough_candles
from backtest.stats import SetupStats, StatsAggregator
from engine.context import calculate_context, context_meta
from engine.decision_zone import calculate_decision_zone
from engine.indicators.bundle import IndicatorBundle
from engine.models.candle import CandleSeries
from engine.models.signal import SetupType, SignalRecord
from engine.setups import Detector, active_setups, create_detector, scan_history

logger = logging.getLogger(__name__)


def build_detectors(settings: Settings) -> list[Detector]:
    """Instantiate the enabled detectors with their configured parameters."""
    configs = settings.detector_configs()
    return [
        create_detector(setup_type, config=configs[setup_type])
        for setup_type in SetupType
        if setup_type in settings.enabled_setups
    ]


def _stats_response(stats: SetupStats) -> StatsResponse:
    return StatsResponse(
        ticker=stats.ticker,
        setup_type=stats.setup_type,
        count=stats.count,
        wins=stats.wins,
        losses=stats.losses,
        pending=stats.pending,
        win_rate=stats.win_rate,
    )


class SetupService:
    """Run detectors on candle series and summarise stored outcomes."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.indicator_config = self.settings.indicator_config()
        self.detectors = build_detectors(self.settings)
        self.aggregator = StatsAggregator()

    def _bundle(self, series: CandleSeries) -> IndicatorBundle:
        ensure_enough_candles(series, self.settings)
        return IndicatorBundle.compute(series, self.indicator_config)

    def detect(self, series: CandleSeries) -> list[SignalRecord]:
        """Signals firing on the last candle, ready to hand to the signal store."""
        bundle = self._bundle(series)
        signals = []
        for detector in self.detectors:
            signal = detector.detect(series, bundle)
            if signal is not None:
                signals.append(signal)
        return signals

    def active_setups(self, series: CandleSeries) -> list[SetupType]:
        bundle = self._bundle(series)
        return active_setups(series, self.detectors, bundle=bundle)

    def scan(self, series: CandleSeries) -> list[SignalRecord]:
        """Every signal the enabled detectors produce over the whole history."""
        bundle = self._bundle(series)
        signals = scan_history(series, self.detectors, bundle=bundle)
        logger.info(
            "Scan %s %s: %d signals over %d candles",
            series.ticker,
            series.timeframe,
            len(signals),
            len(series),
        )
        return signals

    def analyze(self, series: CandleSeries) -> AnalysisResponse:
        """Market context, decision zone and the status of every enabled setup."""
        bundle = self._bundle(series)
        last = series.last
        context = calculate_context(
            series, self.indicator_config, self.settings.context_config()
        )
        setups = [
            SetupStatusEntry(
                setup_type=d.setup_type,
                status=d.status(series, bundle),
                risk=d.risk_level(context, bundle),
            )
            for d in self.detectors
        ]
        decision = calculate_decision_zone(
            context, {entry.setup_type: entry.status for entry in setups}
        )
        logger.debug(
            "Analysis %s %s: %s (%s)",
            series.ticker,
            series.timeframe,
            decision.zone.value,
            "; ".join(decision.reasons),
        )
        return AnalysisResponse(
            ticker=series.ticker,
            timeframe=series.timeframe,
            price=last.close,
            updated_at=last.time,
            context=context,
            decision_zone=decision.zone,
            reasons=decision.reasons,
            setups=setups,
            meta=context_meta(series, self.indicator_config),
        )

    def stats(
        self,
        signals: Iterable[SignalRecord],
        ticker: str,
        setup_type: SetupType | str | None = None,
    ) -> StatsResponse:
        return _stats_response(self.aggregator.calculate(signals, ticker, setup_type))

    def stats_by_setup_type(
        self,
        signals: Iterable[SignalRecord],
        ticker: str,
    ) -> list[StatsResponse]:
        return [
            _stats_response(s) for s in self.aggregator.by_setup_type(signals, ticker)
        ]
