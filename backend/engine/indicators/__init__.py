"""Technical indicators (pure math, no I/O)."""

from engine.indicators.moving_average import (
    sma,
    sma_series,
    sma_warmup,
    ema,
    ema_series,
    ema_warmup,
)
from engine.indicators.oscillators import (
    true_range,
    atr,
    atr_percent,
    rsi,
    avg_volume,
    volume_ratio,
)
from engine.indicators.macd import macd, macd_series, macd_warmup
from engine.indicators.pulse import pulse, pulse_series, pulse_warmup
from engine.indicators.bundle import IndicatorBundle

__all__ = [
    "sma",
    "sma_series",
    "sma_warmup",
    "ema",
    "ema_series",
    "ema_warmup",
    "true_range",
    "atr",
    "atr_percent",
    "rsi",
    "avg_volume",
    "volume_ratio",
    "macd",
    "macd_series",
    "macd_warmup",
    "pulse",
    "pulse_series",
    "pulse_warmup",
    "IndicatorBundle",
]
