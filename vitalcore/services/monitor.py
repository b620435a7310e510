"""
HealthMonitor: one full, independent recomputation per tick.

sample -> cycle state (women who opted in) -> normalized inputs -> recovery
snapshot -> pattern alerts over the source's recent window -> composed summary.
The latest summary is replaced wholesale; apart from the device link state used
for connect/disconnect notices, nothing carries over between ticks.
"""
import logging
from datetime import date, datetime, timezone

from vitalcore.schemas.cycle import CycleBoundaries, CycleState
from vitalcore.schemas.insight import Priority
from vitalcore.schemas.notification import NotificationPayload
from vitalcore.schemas.summary import HealthSummary
from vitalcore.schemas.user import UserSettings
from vitalcore.services import summary_composer
from vitalcore.services.cycle_model import DEFAULT_TEMP_RISE, compute_cycle_state
from vitalcore.services.notifications import NotificationDispatcher, bracelet_status_payload, select_for_dispatch
from vitalcore.services.pattern_detector import WINDOW_SIZE, detect_patterns
from vitalcore.services.score_engine import (
    build_recovery_snapshot,
    normalize_hrv,
    normalize_sleep_quality,
    normalize_strain,
)
from vitalcore.services.telemetry_source import DailyRecordSource, TelemetrySource, TelemetryUnavailableError

logger = logging.getLogger(__name__)


class HealthMonitor:
    def __init__(
        self,
        telemetry: TelemetrySource,
        daily_records: DailyRecordSource,
        user_settings: UserSettings,
        *,
        boundaries: CycleBoundaries | None = None,
        baseline_temp: float = 36.5,
        temp_rise: float = DEFAULT_TEMP_RISE,
        dispatcher: NotificationDispatcher | None = None,
        min_priority: Priority = Priority.HIGH,
    ):
        self.telemetry = telemetry
        self.daily_records = daily_records
        self.user_settings = user_settings
        self.boundaries = boundaries or CycleBoundaries()
        self.baseline_temp = baseline_temp
        self.temp_rise = temp_rise
        self.dispatcher = dispatcher
        self.min_priority = min_priority
        self.latest: HealthSummary | None = None
        # Device link as seen by the last tick; only transitions are notified
        self.telemetry_available = True

    def cycle_state_for(self, day: date) -> CycleState | None:
        if not self.user_settings.cycle_applicable:
            return None
        cycle_day = self.daily_records.cycle_day_for(day)
        if cycle_day is None:
            return None
        return compute_cycle_state(
            cycle_day,
            self.baseline_temp,
            temp_rise=self.temp_rise,
            boundaries=self.boundaries,
            today=day,
        )

    def compose_tick(self, now: datetime | None = None) -> HealthSummary:
        """Pure recomputation from the sources; does not touch `latest`."""
        now = now or datetime.now(timezone.utc)
        day = now.date()
        vitals = self.telemetry.next_sample()
        sleep = self.daily_records.sleep_for(day)
        activity = self.daily_records.activity_for(day)
        inputs = self.daily_records.recovery_inputs_for(day)
        cycle = self.cycle_state_for(day)
        alerts = detect_patterns(self.telemetry.recent_samples(WINDOW_SIZE), now=now)

        recovery = build_recovery_snapshot(
            day,
            normalize_hrv(vitals.hrv),
            normalize_sleep_quality(sleep.sleep_score),
            normalize_strain(activity.active_minutes),
            luteal_active=cycle is not None and cycle.luteal_active,
            recovery_score=inputs.recovery_score,
            muscle_recovery=inputs.muscle_recovery,
            energy_level=inputs.energy_level,
        )
        return summary_composer.compose(vitals, sleep, activity, recovery, cycle=cycle, alerts=alerts, now=now)

    async def run_tick(self, now: datetime | None = None) -> HealthSummary | None:
        """Compose, publish, and forward notifications. Returns None when telemetry is unavailable."""
        try:
            summary = self.compose_tick(now)
        except TelemetryUnavailableError as e:
            logger.warning("Monitor tick skipped: %s", e)
            await self._set_telemetry_available(False)
            return None
        await self._set_telemetry_available(True)
        self.latest = summary
        logger.debug(
            "Monitor tick: overall=%s readiness=%s insights=%s alerts=%s",
            summary.overall_score, summary.recovery.readiness_score, len(summary.insights), len(summary.alerts),
        )
        selected = select_for_dispatch(summary.insights + summary.alerts, self.user_settings, self.min_priority)
        for payload in selected:
            await self._dispatch(payload)
        return summary

    async def _set_telemetry_available(self, available: bool) -> None:
        if available == self.telemetry_available:
            return
        self.telemetry_available = available
        logger.info("Bracelet %s", "connected" if available else "disconnected")
        if self.user_settings.notifications_enabled:
            await self._dispatch(bracelet_status_payload(available))

    async def _dispatch(self, payload: NotificationPayload) -> None:
        if self.dispatcher is not None:
            await self.dispatcher.dispatch(payload)
