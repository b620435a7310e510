"""Insight produced by the threshold rules."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class InsightType(str, Enum):
    HEALTH = "health"
    SLEEP = "sleep"
    ACTIVITY = "activity"
    RECOVERY = "recovery"
    NUTRITION = "nutrition"
    STRESS = "stress"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return {"low": 0, "medium": 1, "high": 2}[self.value]


class Insight(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    type: InsightType
    title: str
    description: str
    priority: Priority
    actionable: bool
    recommendation: str | None = None
    timestamp: datetime
