from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from vitalcore.schemas.cycle import CycleState
from vitalcore.schemas.insight import Insight
from vitalcore.schemas.nutrition import NutritionPlan
from vitalcore.schemas.recovery import RecoverySnapshot
from vitalcore.schemas.telemetry import ActivityRecord, SleepRecord, VitalSample


class HealthSummary(BaseModel):
    """Snapshot handed to UI/notification/persistence collaborators. Replaced wholesale each tick."""

    model_config = ConfigDict(frozen=True)

    date: date
    overall_score: int = Field(..., ge=0, le=100)
    vitals: VitalSample
    sleep: SleepRecord
    activity: ActivityRecord
    recovery: RecoverySnapshot
    insights: tuple[Insight, ...]
    nutrition_plan: NutritionPlan
    cycle: CycleState | None = None
    # Windowed pattern alerts, kept apart from the per-snapshot rule insights
    alerts: tuple[Insight, ...] = ()


class SummaryRequest(BaseModel):
    """Body for POST /summary: one tick's worth of inputs."""

    vitals: VitalSample
    sleep: SleepRecord
    activity: ActivityRecord
    recovery: RecoverySnapshot
    now: datetime | None = None
