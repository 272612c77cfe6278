"""Run detectors over a whole candle history.

The indicator bundle is computed once for the full series and sliced per
index, which is equivalent to recomputing it on each prefix because every
bundle series is causal.
"""

from __future__ import annotations

import logging
from typing import Sequence

from engine.indicators.bundle import IndicatorBundle
from engine.models.candle import CandleSeries
from engine.models.config import IndicatorConfig
from engine.models.signal import SetupType, SignalRecord
from engine.setups.protocol import Detector

logger = logging.getLogger(__name__)


def scan_history(
    series: CandleSeries,
    detectors: Sequence[Detector],
    config: IndicatorConfig | None = None,
    bundle: IndicatorBundle | None = None,
) -> list[SignalRecord]:
    """
    Evaluate every detector at every candle of the series.

    Args:
        series: Candle history, oldest first
        detectors: Detectors to run
        config: Indicator periods (ignored when a bundle is given)
        bundle: Precomputed bundle for ``series``

    Returns:
        All detected signals (outcome pending) in time order; signals of
        different setup types on the same candle keep detector order
    """
    if not detectors or len(series) == 0:
        return []

    bundle = bundle or IndicatorBundle.compute(series, config)
    start = min(d.min_candles(bundle.config) for d in detectors)

    signals: list[SignalRecord] = []
    for end in range(max(start, 1), len(series) + 1):
        prefix = series.truncate(end)
        prefix_bundle = bundle.truncate(end)
        for detector in detectors:
            signal = detector.detect(prefix, prefix_bundle)
            if signal is not None:
                signals.append(signal)

    logger.debug(
        "Scanned %s %s: %d candles, %d detectors, %d signals",
        series.ticker,
        series.timeframe,
        len(series),
        len(detectors),
        len(signals),
    )
    return signals


def active_setups(
    series: CandleSeries,
    detectors: Sequence[Detector],
    config: IndicatorConfig | None = None,
    bundle: IndicatorBundle | None = None,
) -> list[SetupType]:
    """Setup types whose detector is active on the last candle."""
    if not detectors or len(series) == 0:
        return []

    bundle = bundle or IndicatorBundle.compute(series, config)
    return [d.setup_type for d in detectors if d.is_active(series, bundle)]
