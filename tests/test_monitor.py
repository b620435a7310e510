"""Tests for the monitor tick: full recomputation, wholesale replacement, dispatch."""

import pytest

from vitalcore.schemas.cycle import CyclePhase
from vitalcore.schemas.notification import NotificationType
from vitalcore.schemas.user import Gender, UserSettings
from vitalcore.services.monitor import HealthMonitor
from vitalcore.services.notifications import RecordingDispatcher
from vitalcore.services.score_engine import readiness
from vitalcore.services.telemetry_source import (
    FixtureDailyRecordSource,
    FixtureTelemetrySource,
    TelemetrySource,
    TelemetryUnavailableError,
)


def test_compose_tick_applies_luteal_dampening(monitor, now):
    summary = monitor.compose_tick(now)
    assert summary.cycle is not None
    assert summary.cycle.phase == CyclePhase.LUTEAL
    # hrv 65 -> 0.6428..., sleep 90 -> 0.9, 45 active min -> 0.375
    assert summary.recovery.readiness_score == readiness(45 / 70, 0.9, 0.375, luteal_active=True)
    assert summary.recovery.readiness_score == 46
    assert summary.recovery.recovery_score == 85
    assert monitor.latest is None


def test_male_user_skips_cycle(vitals, sleep, activity, recovery_inputs, now):
    monitor = HealthMonitor(
        FixtureTelemetrySource([vitals]),
        FixtureDailyRecordSource(sleep, activity, recovery_inputs, cycle_day=22),
        UserSettings(gender=Gender.MALE),
    )
    summary = monitor.compose_tick(now)
    assert summary.cycle is None
    assert summary.recovery.readiness_score == 54


def test_opted_out_user_skips_cycle(vitals, sleep, activity, recovery_inputs, now):
    monitor = HealthMonitor(
        FixtureTelemetrySource([vitals]),
        FixtureDailyRecordSource(sleep, activity, recovery_inputs, cycle_day=22),
        UserSettings(cycle_tracking_enabled=False),
    )
    assert monitor.compose_tick(now).cycle is None


@pytest.mark.asyncio
async def test_run_tick_replaces_latest(monitor, now):
    first = await monitor.run_tick(now)
    assert monitor.latest is first
    second = await monitor.run_tick(now)
    assert monitor.latest is second
    assert second is not first


@pytest.mark.asyncio
async def test_run_tick_skips_when_telemetry_unavailable(vitals, sleep, activity, recovery_inputs, now, caplog):
    monitor = HealthMonitor(
        FixtureTelemetrySource([vitals]),
        FixtureDailyRecordSource(sleep, activity, recovery_inputs),
        UserSettings(),
    )
    kept = await monitor.run_tick(now)
    assert await monitor.run_tick(now) is None
    assert monitor.latest is kept
    assert "Monitor tick skipped" in caplog.text


@pytest.mark.asyncio
async def test_run_tick_dispatches_high_priority(vitals, sleep, activity, recovery_inputs, now):
    dispatcher = RecordingDispatcher()
    monitor = HealthMonitor(
        FixtureTelemetrySource([vitals]),
        FixtureDailyRecordSource(sleep, activity, recovery_inputs.model_copy(update={"recovery_score": 60})),
        UserSettings(),
        dispatcher=dispatcher,
    )
    await monitor.run_tick(now)
    assert [p.title for p in dispatcher.sent] == ["Recovery Day Recommended"]


class FlakyTelemetrySource(TelemetrySource):
    """Serves the given outcomes in order; None means the bracelet is out of range."""

    def __init__(self, outcomes):
        self._outcomes = list(outcomes)

    def next_sample(self):
        outcome = self._outcomes.pop(0)
        if outcome is None:
            raise TelemetryUnavailableError("bracelet out of range")
        return outcome


@pytest.mark.asyncio
async def test_run_tick_dispatches_windowed_alerts(vitals, sleep, activity, recovery_inputs, now):
    dispatcher = RecordingDispatcher()
    strained = vitals.model_copy(update={"hrv": 20})
    monitor = HealthMonitor(
        FixtureTelemetrySource([strained] * 5),
        FixtureDailyRecordSource(sleep, activity, recovery_inputs),
        UserSettings(),
        dispatcher=dispatcher,
    )
    for _ in range(4):
        summary = await monitor.run_tick(now)
        assert summary.alerts == ()
    assert dispatcher.sent == []

    summary = await monitor.run_tick(now)
    assert [a.id for a in summary.alerts] == ["pattern_low_hrv"]
    assert [p.title for p in dispatcher.sent] == ["Low HRV: Recovery Needed"]


@pytest.mark.asyncio
async def test_bracelet_disconnect_is_notified_once(vitals, sleep, activity, recovery_inputs, now):
    dispatcher = RecordingDispatcher()
    monitor = HealthMonitor(
        FixtureTelemetrySource([vitals]),
        FixtureDailyRecordSource(sleep, activity, recovery_inputs),
        UserSettings(),
        dispatcher=dispatcher,
    )
    await monitor.run_tick(now)
    assert dispatcher.sent == []
    await monitor.run_tick(now)
    await monitor.run_tick(now)
    assert [p.title for p in dispatcher.sent] == ["Bracelet Disconnected"]
    assert dispatcher.sent[0].type == NotificationType.BRACELET_STATUS
    assert monitor.telemetry_available is False


@pytest.mark.asyncio
async def test_bracelet_reconnect_is_notified(vitals, sleep, activity, recovery_inputs, now):
    dispatcher = RecordingDispatcher()
    monitor = HealthMonitor(
        FlakyTelemetrySource([None, vitals, vitals]),
        FixtureDailyRecordSource(sleep, activity, recovery_inputs),
        UserSettings(),
        dispatcher=dispatcher,
    )
    for _ in range(3):
        await monitor.run_tick(now)
    assert [p.title for p in dispatcher.sent] == ["Bracelet Disconnected", "Bracelet Connected"]
    assert monitor.telemetry_available is True


@pytest.mark.asyncio
async def test_bracelet_notices_respect_muted_user(vitals, sleep, activity, recovery_inputs, now):
    dispatcher = RecordingDispatcher()
    monitor = HealthMonitor(
        FlakyTelemetrySource([None, vitals]),
        FixtureDailyRecordSource(sleep, activity, recovery_inputs),
        UserSettings(notifications_enabled=False),
        dispatcher=dispatcher,
    )
    await monitor.run_tick(now)
    await monitor.run_tick(now)
    assert dispatcher.sent == []
