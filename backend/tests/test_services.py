"""Tests for the serving-layer services."""

from datetime import datetime, timedelta, timezone

import pytest

from app.config import Settings
from app.services import (
    IndicatorService,
    InsufficientDataError,
    SetupService,
    build_detectors,
    required_lookback,
)
from engine.context import Trend, VolatilityLevel, VolumeLevel
from engine.decision_zone import DecisionZone
from engine.models.candle import Candle, CandleSeries
from engine.models.signal import Direction, Outcome, RiskLevel, SetupStatus, SetupType

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _make_settings(**overrides) -> Settings:
    fields = dict(
        ema_short_period=3,
        ema_long_period=10,
        sma_short_period=5,
        sma_long_period=10,
        macd_fast_period=3,
        macd_slow_period=6,
        macd_signal_period=3,
        pulse_adx_length=3,
        pulse_collect_length=5,
        atr_period=5,
    )
    fields.update(overrides)
    return Settings(**fields)


def _make_series(n: int = 30, last_volume: float = 2000.0) -> CandleSeries:
    """Steady rise ending in a high-volume breakout candle."""
    candles = []
    for i in range(n):
        close = 100.0 + i
        candles.append(
            Candle(
                time=BASE_TIME + timedelta(days=i),
                open=close - 0.2,
                high=close + 0.5,
                low=close - 0.5,
                close=close,
                volume=last_volume if i == n - 1 else 1000.0,
            )
        )
    return CandleSeries(ticker="aapl", timeframe="1d", candles=tuple(candles))


# ---------------------------------------------------------------------------
# Indicator service
# ---------------------------------------------------------------------------


class TestRequiredLookback:
    """Lookback needed for a warmed-up output window."""

    def test_defaults(self):
        assert required_lookback(50, Settings()) == 158

    def test_custom_periods(self):
        # max warm-up: EMA long 9, SMA long 9, MACD 7, Pulse 7, ATR 5
        assert required_lookback(20, _make_settings()) == 29


class TestIndicatorService:
    """Tests for IndicatorService."""

    def test_insufficient_data(self):
        service = IndicatorService(_make_settings())

        with pytest.raises(InsufficientDataError) as exc_info:
            service.indicator_series(_make_series(10))

        assert exc_info.value.ticker == "AAPL"
        assert exc_info.value.required == 20
        assert exc_info.value.found == 10
        assert isinstance(exc_info.value, ValueError)

    def test_indicator_series_full(self):
        series = _make_series(30)
        response = IndicatorService(_make_settings()).indicator_series(series)

        assert response.ticker == "AAPL"
        assert len(response.times) == 30
        assert len(response.ema_short) == 30
        assert len(response.macd) == 30
        assert response.ema_short[:2] == [None, None]
        assert response.ema_short[2] == pytest.approx(101.0)
        assert response.ema_long[8] is None
        assert response.ema_long[9] is not None

    def test_indicator_series_window(self):
        series = _make_series(30)
        response = IndicatorService(_make_settings()).indicator_series(series, output_length=10)

        assert response.times == series.times()[-10:]
        assert len(response.ema_long) == 10
        assert all(v is not None for v in response.ema_long)
        assert all(p.is_defined for p in response.macd)

    def test_pulse_series_zero_fills_warmup(self):
        series = _make_series(30)
        response = IndicatorService(_make_settings()).pulse_series(series)

        assert len(response.data) == 30
        for point in response.data[:7]:
            assert point.positive_count == 0
            assert point.negative_count == 0
            assert point.trend_score == 0
            assert point.intensity == 0
            assert point.di_plus == 0
            assert point.di_minus == 0
            assert point.is_bullish
        assert response.data[7].positive_count == 5

    def test_pulse_series_rounding(self):
        series = _make_series(30)
        response = IndicatorService(_make_settings()).pulse_series(series, output_length=5)

        assert len(response.data) == 5
        assert response.data[-1].time == series.last.time
        for point in response.data:
            assert point.intensity == round(point.intensity, 2)
            assert point.di_plus == round(point.di_plus, 2)

    def test_empty_window(self):
        series = _make_series(30)
        response = IndicatorService(_make_settings()).pulse_series(series, output_length=0)

        assert response.data == []


# ---------------------------------------------------------------------------
# Setup service
# ---------------------------------------------------------------------------


class TestBuildDetectors:
    """Detector instantiation from settings."""

    def test_all_enabled(self):
        detectors = build_detectors(Settings())
        assert [d.setup_type for d in detectors] == list(SetupType)

    def test_subset_keeps_declaration_order(self):
        settings = Settings(enabled_setups=[SetupType.SETUP_123, SetupType.BREAKOUT])
        detectors = build_detectors(settings)

        assert [d.setup_type for d in detectors] == [SetupType.BREAKOUT, SetupType.SETUP_123]

    def test_configured_parameters(self):
        detectors = build_detectors(Settings(breakout_lookback=15, enabled_setups=["breakout"]))
        assert detectors[0].config.lookback == 15


class TestSetupService:
    """Tests for SetupService."""

    def _service(self, **overrides) -> SetupService:
        overrides.setdefault("enabled_setups", [SetupType.BREAKOUT, SetupType.BREAKDOWN])
        return SetupService(_make_settings(**overrides))

    def test_detect(self):
        signals = self._service().detect(_make_series())

        assert len(signals) == 1
        assert signals[0].setup_type == SetupType.BREAKOUT
        assert signals[0].direction == Direction.LONG
        assert signals[0].ticker == "AAPL"

    def test_active_setups(self):
        assert self._service().active_setups(_make_series()) == [SetupType.BREAKOUT]
        assert self._service().active_setups(_make_series(last_volume=1000.0)) == []

    def test_scan(self):
        signals = self._service().scan(_make_series())

        assert [s.setup_type for s in signals] == [SetupType.BREAKOUT]

    def test_analyze(self):
        series = _make_series()
        response = self._service().analyze(series)

        assert response.ticker == "AAPL"
        assert response.price == 129.0
        assert response.updated_at == series.last.time
        assert response.context.trend == Trend.UP
        assert [(s.setup_type, s.status) for s in response.setups] == [
            (SetupType.BREAKOUT, SetupStatus.ACTIVE),
            (SetupType.BREAKDOWN, SetupStatus.INVALID),
        ]

    def test_analyze_decision_zone(self):
        # Active breakout in an uptrend on doubled volume
        response = self._service().analyze(_make_series())

        assert response.context.volume == VolumeLevel.HIGH
        assert response.decision_zone == DecisionZone.FAVORABLE
        assert response.reasons == [
            "Resistance breakout confirmed",
            "Uptrend",
            "Volume above average",
        ]

    def test_analyze_risk_levels(self):
        # ATR(5) = 1.5 on a 129 close -> low volatility
        response = self._service().analyze(_make_series())

        assert response.context.volatility == VolatilityLevel.LOW
        assert [s.risk for s in response.setups] == [RiskLevel.LOW, RiskLevel.LOW]

    def test_analyze_without_volume_is_neutral(self):
        response = self._service().analyze(_make_series(last_volume=1000.0))

        assert response.decision_zone == DecisionZone.NEUTRAL

    def test_analyze_meta(self):
        response = self._service().analyze(_make_series())

        assert response.meta["current_close"] == 129.0
        assert response.meta["volume_ratio"] == pytest.approx(2.0)
        assert response.meta["rsi"] == 100
        assert response.meta["ema_short"] > response.meta["ema_long"]

    def test_configured_stop_multiplier(self):
        service = self._service(breakout_stop_atr_mult=1.0)

        signals = service.detect(_make_series())

        # resistance 128.5, ATR(5) = 1.5
        assert signals[0].stop_price == pytest.approx(127.0)

    def test_insufficient_data(self):
        with pytest.raises(InsufficientDataError):
            self._service().analyze(_make_series(5))

    def test_stats(self):
        service = self._service()
        signals = service.scan(_make_series())
        resolved = [s.model_copy(update={"outcome": Outcome.WIN}) for s in signals]

        response = service.stats(resolved + signals, "aapl")

        assert response.ticker == "AAPL"
        assert response.count == 2
        assert response.wins == 1
        assert response.pending == 1
        assert response.win_rate == pytest.approx(1.0)

    def test_stats_by_setup_type(self):
        service = self._service()
        signals = service.scan(_make_series())

        result = service.stats_by_setup_type(signals, "AAPL")

        assert [r.setup_type for r in result] == [SetupType.BREAKOUT]
        assert result[0].win_rate == 0.0
