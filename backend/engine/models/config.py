"""Indicator and detector configuration models."""

from __future__ import annotations

from pydantic import BaseModel


class IndicatorConfig(BaseModel):
    """Periods for every series in an indicator bundle."""

    # Trend EMAs
    ema_short_period: int = 8
    ema_long_period: int = 80

    # Pullback averages
    sma_short_period: int = 20
    sma_long_period: int = 50

    # MACD
    macd_fast_period: int = 12
    macd_slow_period: int = 26
    macd_signal_period: int = 9

    # Pulse
    pulse_adx_length: int = 9
    pulse_collect_length: int = 100
    pulse_gamma: float = 0.7

    # Oscillators
    atr_period: int = 14
    rsi_period: int = 14
    volume_period: int = 20

    # -- Warm-up: index of the first defined value of each series ----------

    @property
    def ema_short_warmup(self) -> int:
        return self.ema_short_period - 1

    @property
    def ema_long_warmup(self) -> int:
        return self.ema_long_period - 1

    @property
    def sma_short_warmup(self) -> int:
        return self.sma_short_period - 1

    @property
    def sma_long_warmup(self) -> int:
        return self.sma_long_period - 1

    @property
    def macd_warmup(self) -> int:
        """Index of the first defined histogram value."""
        return (
            max(self.macd_fast_period, self.macd_slow_period)
            + self.macd_signal_period
            - 2
        )

    @property
    def pulse_warmup(self) -> int:
        return self.pulse_adx_length + self.pulse_collect_length - 1

    @property
    def atr_warmup(self) -> int:
        return self.atr_period

    @property
    def max_warmup(self) -> int:
        """Largest warm-up of any bundle series."""
        return max(
            self.ema_short_warmup,
            self.ema_long_warmup,
            self.sma_short_warmup,
            self.sma_long_warmup,
            self.macd_warmup,
            self.pulse_warmup,
            self.atr_warmup,
        )


class BreakoutConfig(BaseModel):
    """Breakout above the recent high with volume confirmation."""

    lookback: int = 20
    volume_period: int = 20
    volume_multiplier: float = 1.2
    proximity: float = 0.995  # close >= resistance * proximity -> forming
    stop_atr_mult: float = 0.5


class BreakdownConfig(BaseModel):
    """Breakdown below the recent low with volume confirmation."""

    lookback: int = 20
    volume_period: int = 20
    volume_multiplier: float = 1.2
    proximity: float = 1.005  # close <= support * proximity -> forming
    stop_atr_mult: float = 0.5


class PullbackConfig(BaseModel):
    """Pullback to the short SMA inside a trend set by the long SMA slope."""

    slope_lookback: int = 5
    touch_tolerance: float = 0.002  # 0.2%
    proximity_atr_mult: float = 0.5


class PulseFlipConfig(BaseModel):
    """Pulse polarity flip with a minimum intensity."""

    min_intensity: float = 0.5
    stop_atr_mult: float = 1.5


class Setup123Config(BaseModel):
    """Three-candle 1-2-3 reversal in trend direction, MACD filtered."""

    lookback_window: int = 100  # How far back status() searches for a pattern


class ContextConfig(BaseModel):
    """Thresholds for the trend/volume/volatility market context."""

    volume_low_threshold: float = 0.8
    volume_high_threshold: float = 1.2
    volatility_low_threshold: float = 1.5  # ATR% below -> low
    volatility_high_threshold: float = 3.0  # ATR% above -> high
