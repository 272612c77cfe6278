"""Tests for the decision zone classification."""

import pytest

from engine.context import MarketContext, Trend, VolatilityLevel, VolumeLevel
from engine.decision_zone import DecisionZone, calculate_decision_zone
from engine.models.signal import SetupStatus, SetupType


def _make_context(
    trend: Trend = Trend.SIDEWAYS,
    volume: VolumeLevel = VolumeLevel.NORMAL,
    volatility: VolatilityLevel = VolatilityLevel.MEDIUM,
) -> MarketContext:
    return MarketContext(trend=trend, volume=volume, volatility=volatility)


def _active(*setup_types: SetupType) -> dict[SetupType, SetupStatus]:
    statuses = {t: SetupStatus.INVALID for t in SetupType}
    statuses.update({t: SetupStatus.ACTIVE for t in setup_types})
    return statuses


class TestRiskZone:
    """Rules that end in risk."""

    def test_breakdown_active(self):
        result = calculate_decision_zone(_make_context(), _active(SetupType.BREAKDOWN))

        assert result.zone == DecisionZone.RISK
        assert result.reasons == ["Support breakdown detected", "Capital protection first"]

    def test_breakdown_with_high_volatility(self):
        context = _make_context(volatility=VolatilityLevel.HIGH)
        result = calculate_decision_zone(context, _active(SetupType.BREAKDOWN))

        assert result.zone == DecisionZone.RISK
        assert result.reasons[-1] == "High volatility adds to the risk"

    def test_breakdown_wins_over_breakout(self):
        context = _make_context(Trend.UP, VolumeLevel.HIGH)
        statuses = _active(SetupType.BREAKDOWN, SetupType.BREAKOUT)

        assert calculate_decision_zone(context, statuses).zone == DecisionZone.RISK

    def test_downtrend_high_volume(self):
        context = _make_context(Trend.DOWN, VolumeLevel.HIGH)
        result = calculate_decision_zone(context, _active())

        assert result.zone == DecisionZone.RISK
        assert result.reasons == ["Downtrend", "High volume may extend the decline"]


class TestFavorableZone:
    """Rules that end favorable."""

    def test_breakout_uptrend_high_volume(self):
        context = _make_context(Trend.UP, VolumeLevel.HIGH)
        result = calculate_decision_zone(context, _active(SetupType.BREAKOUT))

        assert result.zone == DecisionZone.FAVORABLE
        assert len(result.reasons) == 3

    def test_breakout_without_volume_is_not_favorable(self):
        context = _make_context(Trend.UP, VolumeLevel.NORMAL)
        result = calculate_decision_zone(context, _active(SetupType.BREAKOUT))

        assert result.zone == DecisionZone.NEUTRAL
        assert result.reasons[-1] == "1 active setup(s)"

    def test_pullback_uptrend(self):
        context = _make_context(Trend.UP)
        result = calculate_decision_zone(context, _active(SetupType.PULLBACK))

        assert result.zone == DecisionZone.FAVORABLE
        assert result.reasons[-1] == "Volume adequate"

    def test_pullback_low_volume_omits_volume_reason(self):
        context = _make_context(Trend.UP, VolumeLevel.LOW)
        result = calculate_decision_zone(context, _active(SetupType.PULLBACK))

        assert result.zone == DecisionZone.FAVORABLE
        assert "Volume adequate" not in result.reasons

    def test_pullback_in_downtrend_is_not_favorable(self):
        context = _make_context(Trend.DOWN)
        result = calculate_decision_zone(context, _active(SetupType.PULLBACK))

        assert result.zone == DecisionZone.NEUTRAL


class TestNeutralZone:
    """Rules that end neutral."""

    def test_high_volatility_no_setup(self):
        context = _make_context(volatility=VolatilityLevel.HIGH)
        result = calculate_decision_zone(context, _active())

        assert result.zone == DecisionZone.NEUTRAL
        assert result.reasons[0] == "High volatility"

    def test_high_volatility_checked_before_downtrend(self):
        context = _make_context(Trend.DOWN, VolumeLevel.HIGH, VolatilityLevel.HIGH)

        assert calculate_decision_zone(context, _active()).zone == DecisionZone.NEUTRAL

    def test_downtrend_normal_volume(self):
        result = calculate_decision_zone(_make_context(Trend.DOWN), _active())

        assert result.zone == DecisionZone.NEUTRAL
        assert result.reasons == ["Downtrend", "Caution advised"]

    def test_default(self):
        result = calculate_decision_zone(_make_context(), {})

        assert result.zone == DecisionZone.NEUTRAL
        assert result.reasons == ["Trend: sideways", "Volume: normal", "Volatility: medium"]

    def test_forming_setups_do_not_count(self):
        statuses = {t: SetupStatus.FORMING for t in SetupType}
        context = _make_context(Trend.UP, VolumeLevel.HIGH)

        result = calculate_decision_zone(context, statuses)

        assert result.zone == DecisionZone.NEUTRAL
        assert len(result.reasons) == 3

    @pytest.mark.parametrize("trend", list(Trend))
    def test_reasons_are_deterministic(self, trend):
        context = _make_context(trend)

        first = calculate_decision_zone(context, _active())
        second = calculate_decision_zone(context, _active())

        assert first == second
