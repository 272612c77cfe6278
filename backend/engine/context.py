"""Market context: trend, volume level and volatility level of an asset.

Each classifier falls back to its neutral level (sideways / normal /
medium) when there is not enough data.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from engine.indicators.moving_average import ema
from engine.indicators.oscillators import atr_percent, rsi, volume_ratio
from engine.models.candle import CandleSeries
from engine.models.config import ContextConfig, IndicatorConfig


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    SIDEWAYS = "sideways"


class VolumeLevel(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


class VolatilityLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MarketContext(BaseModel):
    trend: Trend
    volume: VolumeLevel
    volatility: VolatilityLevel


def calculate_trend(
    series: CandleSeries,
    indicators: IndicatorConfig | None = None,
) -> Trend:
    """EMA short above EMA long -> up, below -> down, otherwise sideways."""
    indicators = indicators or IndicatorConfig()
    closes = series.closes()

    short = ema(indicators.ema_short_period, closes)
    long = ema(indicators.ema_long_period, closes)

    if short is None or long is None:
        return Trend.SIDEWAYS
    if short > long:
        return Trend.UP
    if short < long:
        return Trend.DOWN
    return Trend.SIDEWAYS


def calculate_volume_level(
    series: CandleSeries,
    indicators: IndicatorConfig | None = None,
    config: ContextConfig | None = None,
) -> VolumeLevel:
    """Classify the last candle's volume against its recent average."""
    indicators = indicators or IndicatorConfig()
    config = config or ContextConfig()

    ratio = volume_ratio(indicators.volume_period, series.candles)
    if ratio is None:
        return VolumeLevel.NORMAL
    if ratio < config.volume_low_threshold:
        return VolumeLevel.LOW
    if ratio > config.volume_high_threshold:
        return VolumeLevel.HIGH
    return VolumeLevel.NORMAL


def calculate_volatility_level(
    series: CandleSeries,
    indicators: IndicatorConfig | None = None,
    config: ContextConfig | None = None,
) -> VolatilityLevel:
    """Classify ATR% (ATR / close * 100)."""
    indicators = indicators or IndicatorConfig()
    config = config or ContextConfig()

    pct = atr_percent(indicators.atr_period, series.candles)
    if pct is None:
        return VolatilityLevel.MEDIUM
    if pct < config.volatility_low_threshold:
        return VolatilityLevel.LOW
    if pct > config.volatility_high_threshold:
        return VolatilityLevel.HIGH
    return VolatilityLevel.MEDIUM


def calculate_context(
    series: CandleSeries,
    indicators: IndicatorConfig | None = None,
    config: ContextConfig | None = None,
) -> MarketContext:
    return MarketContext(
        trend=calculate_trend(series, indicators),
        volume=calculate_volume_level(series, indicators, config),
        volatility=calculate_volatility_level(series, indicators, config),
    )


def context_meta(
    series: CandleSeries,
    indicators: IndicatorConfig | None = None,
) -> dict[str, float]:
    """Numeric inputs behind the context plus RSI, 0 where undefined."""
    indicators = indicators or IndicatorConfig()
    closes = series.closes()
    last = series.last

    values = {
        "ema_short": ema(indicators.ema_short_period, closes),
        "ema_long": ema(indicators.ema_long_period, closes),
        "atr_percent": atr_percent(indicators.atr_period, series.candles),
        "volume_ratio": volume_ratio(indicators.volume_period, series.candles),
        "rsi": rsi(indicators.rsi_period, closes),
        "current_close": last.close if last else None,
        "current_volume": last.volume if last else None,
    }
    return {key: value if value is not None else 0.0 for key, value in values.items()}
