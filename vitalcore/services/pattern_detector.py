"""
Pattern alerts over a short window of recent vitals samples, newest first.

The window is supplied by the telemetry collaborator on every tick; nothing is
remembered here between calls. Below MIN_WINDOW samples no pattern is reported.
"""
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

from vitalcore.schemas.insight import Insight, InsightType, Priority
from vitalcore.schemas.telemetry import VitalSample

MIN_WINDOW = 5
WINDOW_SIZE = 30

SUSTAINED_HR_LATEST = 90
SUSTAINED_HR_FLOOR = 85
SUSTAINED_HR_SAMPLES = 5
LOW_HRV_MS = 25
SUSTAINED_STRESS_LATEST = 70
SUSTAINED_STRESS_FLOOR = 65
SUSTAINED_STRESS_SAMPLES = 3
LOW_SPO2 = 94
RECOVERED_HRV_MS = 60
RECOVERED_STRESS = 25
RECOVERED_HR = 65


@dataclass(frozen=True)
class PatternRule:
    name: str
    type: InsightType
    priority: Priority
    applies: Callable[[Sequence[VitalSample]], bool]
    build: Callable[[VitalSample], dict]

    @property
    def insight_id(self) -> str:
        return f"pattern_{self.name}"


def _sustained_hr(window: Sequence[VitalSample]) -> bool:
    return window[0].heart_rate > SUSTAINED_HR_LATEST and all(
        v.heart_rate > SUSTAINED_HR_FLOOR for v in window[:SUSTAINED_HR_SAMPLES]
    )


def _sustained_stress(window: Sequence[VitalSample]) -> bool:
    return window[0].stress_level > SUSTAINED_STRESS_LATEST and all(
        v.stress_level > SUSTAINED_STRESS_FLOOR for v in window[:SUSTAINED_STRESS_SAMPLES]
    )


def _recovered(window: Sequence[VitalSample]) -> bool:
    latest = window[0]
    return (
        latest.hrv > RECOVERED_HRV_MS
        and latest.stress_level < RECOVERED_STRESS
        and latest.heart_rate < RECOVERED_HR
    )


PATTERN_RULES: list[PatternRule] = [
    PatternRule(
        "elevated_hr", InsightType.HEALTH, Priority.HIGH, _sustained_hr,
        lambda v: {
            "title": "Elevated Heart Rate Detected",
            "description": (
                f"Your heart rate has been consistently above {SUSTAINED_HR_FLOOR} BPM "
                f"(currently {v.heart_rate:g} BPM). This could indicate stress, dehydration, "
                "or insufficient recovery."
            ),
            "recommendation": "Try 5 minutes of deep breathing or drink water.",
        },
    ),
    PatternRule(
        "low_hrv", InsightType.RECOVERY, Priority.HIGH, lambda w: w[0].hrv < LOW_HRV_MS,
        lambda v: {
            "title": "Low HRV: Recovery Needed",
            "description": (
                f"Your HRV is {v.hrv:g}ms, below the healthy range. "
                "Your autonomic nervous system may be under strain."
            ),
            "recommendation": "Avoid intense exercise today. Focus on restorative activities.",
        },
    ),
    PatternRule(
        "sustained_stress", InsightType.STRESS, Priority.HIGH, _sustained_stress,
        lambda v: {
            "title": "Sustained High Stress",
            "description": (
                f"Stress has been above {SUSTAINED_STRESS_FLOOR}% for the past several readings "
                f"(currently {v.stress_level:g}%)."
            ),
            "recommendation": "Take a break. Try the rain sounds feature or step outside.",
        },
    ),
    PatternRule(
        "low_spo2", InsightType.HEALTH, Priority.HIGH, lambda w: w[0].blood_oxygen < LOW_SPO2,
        lambda v: {
            "title": "Low Blood Oxygen",
            "description": f"SpO2 at {v.blood_oxygen:g}% is below normal range.",
            "recommendation": "Take several deep breaths. If consistently low, consult a healthcare provider.",
        },
    ),
    PatternRule(
        "recovered", InsightType.RECOVERY, Priority.LOW, _recovered,
        lambda v: {
            "title": "Excellent Recovery State",
            "description": (
                f"HRV at {v.hrv:g}ms, stress {v.stress_level:g}%, HR {v.heart_rate:g} BPM. "
                "Your body is deeply recovered."
            ),
            "recommendation": "Great time for challenging workouts or deep focus work.",
        },
    ),
]


def detect_patterns(recent: Sequence[VitalSample], *, now: datetime | None = None) -> list[Insight]:
    """Alerts from `recent` (newest first), in rule order."""
    if len(recent) < MIN_WINDOW:
        return []
    now = now or datetime.now(timezone.utc)
    latest = recent[0]
    return [
        Insight(
            id=rule.insight_id,
            type=rule.type,
            priority=rule.priority,
            actionable=True,
            timestamp=now,
            **rule.build(latest),
        )
        for rule in PATTERN_RULES
        if rule.applies(recent)
    ]
