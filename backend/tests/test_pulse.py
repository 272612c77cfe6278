"""Tests for the Pulse directional strength indicator."""

from datetime import datetime, timedelta, timezone

import pytest

from engine.indicators import pulse, pulse_series, pulse_warmup
from engine.indicators.pulse import directional_movement
from engine.models.candle import Candle
from engine.models.indicator import PulsePoint

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _make_candle(i: int, close: float, spread: float = 1.0) -> Candle:
    return Candle(
        time=BASE_TIME + timedelta(days=i),
        open=close,
        high=close + spread,
        low=close - spread,
        close=close,
        volume=1000,
    )


def _rising(n: int, step: float = 1.0) -> list[Candle]:
    return [_make_candle(i, 100 + i * step) for i in range(n)]


def _falling(n: int, step: float = 1.0) -> list[Candle]:
    return [_make_candle(i, 200 - i * step) for i in range(n)]


def _zigzag(n: int) -> list[Candle]:
    """Two steps up, one step down, with uneven sizes."""
    candles = []
    close = 100.0
    for i in range(n):
        close += (1.5, 0.7, -2.1, 0.4, -0.9)[i % 5]
        candles.append(_make_candle(i, close, spread=0.5 + (i % 3) * 0.3))
    return candles


# ---------------------------------------------------------------------------
# Directional movement
# ---------------------------------------------------------------------------


class TestDirectionalMovement:
    """Tests for per-candle DM+/DM-."""

    def test_up_move_dominates(self):
        dm_plus, dm_minus = directional_movement(_make_candle(1, 102), _make_candle(0, 100))

        assert dm_plus == pytest.approx(2.0)
        assert dm_minus == 0

    def test_down_move_dominates(self):
        dm_plus, dm_minus = directional_movement(_make_candle(1, 97), _make_candle(0, 100))

        assert dm_plus == 0
        assert dm_minus == pytest.approx(3.0)

    def test_inside_candle_has_no_movement(self):
        previous = _make_candle(0, 100, spread=2.0)
        current = _make_candle(1, 100, spread=1.0)

        assert directional_movement(current, previous) == (0.0, 0.0)


# ---------------------------------------------------------------------------
# Pulse series
# ---------------------------------------------------------------------------


class TestPulseValidation:
    """Parameter validation."""

    @pytest.mark.parametrize(
        "adx_length,collect_length,gamma",
        [(0, 10, 0.7), (9, 0, 0.7), (9, 10, 0.0), (9, 10, 1.5), (9, 10, -0.1)],
    )
    def test_invalid_parameters(self, adx_length, collect_length, gamma):
        with pytest.raises(ValueError):
            pulse_series(_rising(30), adx_length, collect_length, gamma)

    def test_gamma_one_is_allowed(self):
        result = pulse_series(_rising(20), 3, 5, 1.0)
        assert result[-1] is not None


class TestPulseWarmup:
    """Warm-up boundary."""

    def test_warmup_index(self):
        assert pulse_warmup(3, 5) == 7
        assert pulse_warmup() == 108

    def test_undefined_before_warmup(self):
        result = pulse_series(_zigzag(20), 3, 5)

        assert len(result) == 20
        assert all(p is None for p in result[:7])
        assert all(p is not None for p in result[7:])

    def test_short_input_all_undefined(self):
        result = pulse_series(_rising(7), 3, 5)

        assert result == [None] * 7

    def test_empty_input(self):
        assert pulse_series([], 3, 5) == []
        assert pulse([], 3, 5) is None


class TestPulseValues:
    """Pulse values on known shapes."""

    def test_steady_rise_is_fully_bullish(self):
        # Every candle: DM+ = 1, DM- = 0, TR = 2 -> DI+ = 50, DI- = 0
        point = pulse(_rising(30), 3, 5)

        assert point.positive_count == 5
        assert point.negative_count == 0
        assert point.trend_score == 5
        assert point.intensity == pytest.approx(1.0)
        assert point.di_plus == pytest.approx(50.0)
        assert point.di_minus == pytest.approx(0.0)
        assert point.is_bullish

    def test_steady_fall_is_fully_bearish(self):
        point = pulse(_falling(30), 3, 5)

        assert point.positive_count == 0
        assert point.negative_count == 5
        assert point.trend_score == -5
        assert point.intensity == pytest.approx(1.0)
        assert not point.is_bullish

    def test_flat_candles_are_neutral(self):
        candles = [
            Candle(time=BASE_TIME + timedelta(days=i), open=100, high=100, low=100, close=100)
            for i in range(20)
        ]
        point = pulse(candles, 3, 5)

        assert point.di_plus == 0
        assert point.di_minus == 0
        assert point.trend_score == 0
        assert point.intensity == 0
        # Tie-break: di_plus >= di_minus
        assert point.is_bullish

    def test_counts_sum_within_window(self):
        for point in pulse_series(_zigzag(60), 4, 10):
            if point is None:
                continue
            assert point.positive_count + point.negative_count <= 10
            assert point.trend_score == point.positive_count - point.negative_count

    def test_bounds(self):
        for point in pulse_series(_zigzag(60), 4, 10):
            if point is None:
                continue
            assert 0.0 <= point.intensity <= 1.0
            assert 0.0 <= point.di_plus <= 100.0
            assert 0.0 <= point.di_minus <= 100.0

    def test_is_bullish_follows_trend_score(self):
        for point in pulse_series(_zigzag(60), 4, 10):
            if point is None:
                continue
            if point.trend_score > 0:
                assert point.is_bullish
            elif point.trend_score < 0:
                assert not point.is_bullish
            else:
                assert point.is_bullish == (point.di_plus >= point.di_minus)

    def test_recent_reversal_flips_polarity(self):
        """Two hard down candles after a rise flip the 3-point window."""
        candles = _rising(10)
        candles.append(Candle(time=BASE_TIME + timedelta(days=10), open=104, high=105, low=103, close=104))
        candles.append(Candle(time=BASE_TIME + timedelta(days=11), open=99, high=100, low=98, close=99))

        result = pulse_series(candles, 2, 3)

        # Window [+, +, -] at index 10, [+, -, -] at index 11
        assert result[10].trend_score == 1
        assert result[10].is_bullish
        assert result[11].trend_score == -1
        assert not result[11].is_bullish
        # |-1 - 0.7 + 0.49| / (1 + 0.7 + 0.49)
        assert result[11].intensity == pytest.approx(1.21 / 2.19)
        assert result[11].di_plus == pytest.approx(5.0)
        assert result[11].di_minus == pytest.approx(75.0)

    def test_latest_matches_series(self):
        candles = _zigzag(40)
        assert pulse(candles, 3, 5) == pulse_series(candles, 3, 5)[-1]


class TestPulsePoint:
    """Tests for the PulsePoint model."""

    def test_neutral(self):
        point = PulsePoint.neutral()

        assert point.positive_count == 0
        assert point.negative_count == 0
        assert point.trend_score == 0
        assert point.intensity == 0
        assert point.di_plus == 0
        assert point.di_minus == 0
