"""Pytest configuration and shared fixtures: one calm day of records, and an API client."""

import os
from datetime import date, datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# No background scheduler or push delivery under test
os.environ.setdefault("MONITOR_ENABLED", "false")
os.environ.setdefault("EXPO_PUSH_TOKEN", "")

from vitalcore.main import app
from vitalcore.schemas.recovery import RecoverySnapshot
from vitalcore.schemas.summary import HealthSummary
from vitalcore.schemas.telemetry import ActivityRecord, MuscleFatigue, RecoveryInputs, SleepRecord, VitalSample
from vitalcore.schemas.user import UserSettings
from vitalcore.services import summary_composer
from vitalcore.services.monitor import HealthMonitor
from vitalcore.services.notifications import RecordingDispatcher
from vitalcore.services.telemetry_source import FixtureDailyRecordSource, FixtureTelemetrySource

pytest_plugins = ["pytest_asyncio"]

TODAY = date(2026, 3, 2)
NOW = datetime(2026, 3, 2, 7, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def vitals() -> VitalSample:
    """Resting values that trigger no threshold rule."""
    return VitalSample(
        timestamp=NOW,
        heart_rate=70,
        hrv=65,
        blood_oxygen=98,
        skin_temperature=36.6,
        stress_level=20,
        muscle_oxygen=72,
        muscle_fatigue=MuscleFatigue.LOW,
    )


@pytest.fixture
def sleep() -> SleepRecord:
    return SleepRecord(
        date=TODAY,
        total_duration=480,
        deep_sleep=110,
        light_sleep=250,
        rem_sleep=100,
        awake_time=20,
        sleep_score=90,
        bed_time=datetime(2026, 3, 1, 23, 0, tzinfo=timezone.utc),
        wake_time=datetime(2026, 3, 2, 7, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def activity() -> ActivityRecord:
    return ActivityRecord(
        date=TODAY,
        steps=9000,
        distance=6.8,
        calories_burned=320,
        active_minutes=45,
        standing_hours=10,
        floors=12,
    )


@pytest.fixture
def recovery() -> RecoverySnapshot:
    return RecoverySnapshot(
        date=TODAY,
        recovery_score=85,
        readiness_score=78,
        muscle_recovery=80,
        energy_level=75,
    )


@pytest.fixture
def recovery_inputs() -> RecoveryInputs:
    return RecoveryInputs(recovery_score=85, muscle_recovery=80, energy_level=75)


@pytest.fixture
def summary(vitals, sleep, activity, recovery) -> HealthSummary:
    return summary_composer.compose(vitals, sleep, activity, recovery, now=NOW)


@pytest.fixture
def monitor(vitals, sleep, activity, recovery_inputs) -> HealthMonitor:
    """Monitor over fixture sources: three samples, female user on cycle day 22."""
    return HealthMonitor(
        FixtureTelemetrySource([vitals, vitals, vitals]),
        FixtureDailyRecordSource(sleep, activity, recovery_inputs, cycle_day=22),
        UserSettings(),
        dispatcher=RecordingDispatcher(),
    )


@pytest_asyncio.fixture
async def client(monitor):
    """Yield AsyncClient with the fixture monitor installed. ASGITransport does not run lifespan."""
    app.state.monitor = monitor
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.state.monitor = None
