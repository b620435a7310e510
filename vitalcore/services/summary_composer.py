"""Assemble one immutable HealthSummary per tick from the scoring services."""

from collections.abc import Sequence
from datetime import datetime, timezone

from vitalcore.core.numeric import round_half_up
from vitalcore.schemas.cycle import CycleState
from vitalcore.schemas.insight import Insight
from vitalcore.schemas.recovery import RecoverySnapshot
from vitalcore.schemas.summary import HealthSummary
from vitalcore.schemas.telemetry import ActivityRecord, SleepRecord, VitalSample
from vitalcore.services import insight_engine, nutrition_planner

STEPS_PER_SCORE_POINT = 100


def overall_score(sleep: SleepRecord, activity: ActivityRecord, recovery: RecoverySnapshot) -> int:
    activity_score = min(100, activity.steps / STEPS_PER_SCORE_POINT)
    return round_half_up((sleep.sleep_score + recovery.recovery_score + activity_score) / 3)


def compose(
    vitals: VitalSample,
    sleep: SleepRecord,
    activity: ActivityRecord,
    recovery: RecoverySnapshot,
    *,
    cycle: CycleState | None = None,
    alerts: Sequence[Insight] = (),
    now: datetime | None = None,
) -> HealthSummary:
    now = now or datetime.now(timezone.utc)
    return HealthSummary(
        date=now.date(),
        overall_score=overall_score(sleep, activity, recovery),
        vitals=vitals,
        sleep=sleep,
        activity=activity,
        recovery=recovery,
        insights=tuple(insight_engine.evaluate(vitals, sleep, activity, recovery, now=now)),
        nutrition_plan=nutrition_planner.plan(activity, recovery),
        cycle=cycle,
        alerts=tuple(alerts),
    )
