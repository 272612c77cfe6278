"""Application configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from engine.models.config import (
    BreakdownConfig,
    BreakoutConfig,
    ContextConfig,
    IndicatorConfig,
    PullbackConfig,
    PulseFlipConfig,
    Setup123Config,
)
from engine.models.signal import SetupType


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Serving boundary
    min_candles_required: int = 20
    default_timeframe: str = "1d"
    enabled_setups: list[SetupType] = list(SetupType)

    # Indicator periods
    ema_short_period: int = 8
    ema_long_period: int = 80
    sma_short_period: int = 20
    sma_long_period: int = 50
    macd_fast_period: int = 12
    macd_slow_period: int = 26
    macd_signal_period: int = 9
    atr_period: int = 14
    rsi_period: int = 14
    volume_period: int = 20

    # Pulse
    pulse_adx_length: int = 9
    pulse_collect_length: int = 100
    pulse_gamma: float = 0.7
    pulse_min_intensity: float = 0.5
    pulse_stop_atr_mult: float = 1.5

    # Breakout / breakdown
    breakout_lookback: int = 20
    breakout_volume_multiplier: float = 1.2
    breakout_proximity: float = 0.995
    breakout_stop_atr_mult: float = 0.5
    breakdown_lookback: int = 20
    breakdown_volume_multiplier: float = 1.2
    breakdown_proximity: float = 1.005
    breakdown_stop_atr_mult: float = 0.5

    # Pullback
    pullback_slope_lookback: int = 5
    pullback_touch_tolerance: float = 0.002
    pullback_proximity_atr_mult: float = 0.5

    # 1-2-3
    setup_123_lookback_window: int = 100

    # Market context
    volume_low_threshold: float = 0.8
    volume_high_threshold: float = 1.2
    volatility_low_threshold: float = 1.5
    volatility_high_threshold: float = 3.0

    def indicator_config(self) -> IndicatorConfig:
        return IndicatorConfig(
            ema_short_period=self.ema_short_period,
            ema_long_period=self.ema_long_period,
            sma_short_period=self.sma_short_period,
            sma_long_period=self.sma_long_period,
            macd_fast_period=self.macd_fast_period,
            macd_slow_period=self.macd_slow_period,
            macd_signal_period=self.macd_signal_period,
            pulse_adx_length=self.pulse_adx_length,
            pulse_collect_length=self.pulse_collect_length,
            pulse_gamma=self.pulse_gamma,
            atr_period=self.atr_period,
            rsi_period=self.rsi_period,
            volume_period=self.volume_period,
        )

    def detector_configs(self) -> dict[SetupType, object]:
        """Constructor config for each setup type's detector."""
        return {
            SetupType.BREAKOUT: BreakoutConfig(
                lookback=self.breakout_lookback,
                volume_period=self.volume_period,
                volume_multiplier=self.breakout_volume_multiplier,
                proximity=self.breakout_proximity,
                stop_atr_mult=self.breakout_stop_atr_mult,
            ),
            SetupType.BREAKDOWN: BreakdownConfig(
                lookback=self.breakdown_lookback,
                volume_period=self.volume_period,
                volume_multiplier=self.breakdown_volume_multiplier,
                proximity=self.breakdown_proximity,
                stop_atr_mult=self.breakdown_stop_atr_mult,
            ),
            SetupType.PULLBACK: PullbackConfig(
                slope_lookback=self.pullback_slope_lookback,
                touch_tolerance=self.pullback_touch_tolerance,
                proximity_atr_mult=self.pullback_proximity_atr_mult,
            ),
            SetupType.PULSE_FLIP: PulseFlipConfig(
                min_intensity=self.pulse_min_intensity,
                stop_atr_mult=self.pulse_stop_atr_mult,
            ),
            SetupType.SETUP_123: Setup123Config(
                lookback_window=self.setup_123_lookback_window,
            ),
        }

    def context_config(self) -> ContextConfig:
        return ContextConfig(
            volume_low_threshold=self.volume_low_threshold,
            volume_high_threshold=self.volume_high_threshold,
            volatility_low_threshold=self.volatility_low_threshold,
            volatility_high_threshold=self.volatility_high_threshold,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
