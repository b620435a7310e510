"""
Threshold rules over the current vitals/sleep/activity/recovery snapshot.

Rules run in a fixed order and never suppress each other; the SpO2 affirmation is
always appended last so the list is never empty. Insight ids are fixed per rule
(`insight_<rule>_1`, the SpO2 affirmation is `insight_positive_1`) and stay
stable across ticks so consumers can de-duplicate on them.
"""
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from vitalcore.core.numeric import round_half_up
from vitalcore.schemas.insight import Insight, InsightType, Priority
from vitalcore.schemas.recovery import RecoverySnapshot
from vitalcore.schemas.telemetry import ActivityRecord, SleepRecord, VitalSample

ELEVATED_HEART_RATE_BPM = 75
SLEEP_SCORE_TARGET = 80
STEP_REMINDER_BELOW = 8000
DAILY_STEP_GOAL = 10000
RECOVERY_DAY_BELOW = 75
ELEVATED_STRESS = 40


@dataclass(frozen=True)
class Snapshot:
    vitals: VitalSample
    sleep: SleepRecord
    activity: ActivityRecord
    recovery: RecoverySnapshot


@dataclass(frozen=True)
class InsightRule:
    """One rule: when `applies` holds, `build` produces the insight fields."""

    name: str
    insight_id: str
    type: InsightType
    priority: Priority
    applies: Callable[[Snapshot], bool]
    build: Callable[[Snapshot], dict]
    actionable: bool = True


def _heart_rate(s: Snapshot) -> dict:
    return {
        "title": "Elevated Resting Heart Rate",
        "description": (
            f"Your resting heart rate is {s.vitals.heart_rate:g} BPM, slightly higher than your baseline. "
            "This could indicate stress, dehydration, or insufficient recovery."
        ),
        "recommendation": "Consider taking a 10-minute breathing exercise and ensure you're well hydrated.",
    }


def _sleep(s: Snapshot) -> dict:
    deep_hours = round_half_up(s.sleep.deep_sleep / 60)
    return {
        "title": "Sleep Quality Could Improve",
        "description": (
            f"Your sleep score was {s.sleep.sleep_score:g}. You got {deep_hours} hours of deep sleep, "
            "which is below optimal levels."
        ),
        "recommendation": "Try reducing screen time 1 hour before bed and keep your room temperature around 18°C.",
    }


def _steps(s: Snapshot) -> dict:
    remaining = DAILY_STEP_GOAL - s.activity.steps
    return {
        "title": "Step Goal Progress",
        "description": (
            f"You've taken {s.activity.steps:,} steps today. "
            f"You're {remaining:,} steps away from your daily goal."
        ),
        "recommendation": "A 15-minute evening walk could help you reach your goal and improve sleep quality.",
    }


def _recovery(s: Snapshot) -> dict:
    return {
        "title": "Recovery Day Recommended",
        "description": (
            f"Your recovery score is {s.recovery.recovery_score}%. "
            "Your body needs more rest to perform optimally."
        ),
        "recommendation": "Focus on light stretching, hydration, and consider a protein-rich meal with 500-600 calories.",
    }


def _stress(s: Snapshot) -> dict:
    return {
        "title": "Elevated Stress Detected",
        "description": (
            f"Your HRV indicates a stress level of {s.vitals.stress_level:g}%. "
            "Taking time for relaxation could help restore balance."
        ),
        "recommendation": "Enable the calming rain sounds and practice 5 minutes of deep breathing.",
    }


def _spo2(s: Snapshot) -> dict:
    return {
        "title": "Blood Oxygen Optimal",
        "description": (
            f"Your SpO2 is at {s.vitals.blood_oxygen:g}%, which is excellent. "
            "Your cardiovascular system is functioning well."
        ),
        "recommendation": None,
    }


RULES: list[InsightRule] = [
    InsightRule("hr", "insight_hr_1", InsightType.HEALTH, Priority.MEDIUM,
                lambda s: s.vitals.heart_rate > ELEVATED_HEART_RATE_BPM, _heart_rate),
    InsightRule("sleep", "insight_sleep_1", InsightType.SLEEP, Priority.MEDIUM,
                lambda s: s.sleep.sleep_score < SLEEP_SCORE_TARGET, _sleep),
    InsightRule("activity", "insight_activity_1", InsightType.ACTIVITY, Priority.LOW,
                lambda s: s.activity.steps < STEP_REMINDER_BELOW, _steps),
    InsightRule("recovery", "insight_recovery_1", InsightType.RECOVERY, Priority.HIGH,
                lambda s: s.recovery.recovery_score < RECOVERY_DAY_BELOW, _recovery),
    InsightRule("stress", "insight_stress_1", InsightType.STRESS, Priority.MEDIUM,
                lambda s: s.vitals.stress_level > ELEVATED_STRESS, _stress),
    # Unconditional: guarantees a non-empty, not purely negative list
    InsightRule("spo2", "insight_positive_1", InsightType.HEALTH, Priority.LOW,
                lambda s: True, _spo2, actionable=False),
]


def evaluate(
    vitals: VitalSample,
    sleep: SleepRecord,
    activity: ActivityRecord,
    recovery: RecoverySnapshot,
    *,
    now: datetime | None = None,
) -> list[Insight]:
    """Run every rule in order; result order is rule order, never re-sorted by priority."""
    now = now or datetime.now(timezone.utc)
    snapshot = Snapshot(vitals=vitals, sleep=sleep, activity=activity, recovery=recovery)
    insights: list[Insight] = []
    for rule in RULES:
        if not rule.applies(snapshot):
            continue
        insights.append(
            Insight(
                id=rule.insight_id,
                type=rule.type,
                priority=rule.priority,
                actionable=rule.actionable,
                timestamp=now,
                **rule.build(snapshot),
            )
        )
    return insights
