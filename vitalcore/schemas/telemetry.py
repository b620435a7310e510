"""Telemetry records supplied by the bracelet/sensor layer: vitals, sleep, activity."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MuscleFatigue(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class VitalSample(BaseModel):
    """One acquisition tick from the bracelet. muscle_oxygen/muscle_fatigue are optional channels."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    heart_rate: float = Field(..., ge=0, description="bpm")
    hrv: float = Field(..., ge=0, description="RMSSD in ms")
    blood_oxygen: float = Field(..., ge=0, le=100, description="SpO2 %")
    skin_temperature: float = Field(..., description="Celsius")
    stress_level: float = Field(..., ge=0, le=100)
    muscle_oxygen: float | None = Field(None, ge=0, le=100, description="SmO2 %")
    muscle_fatigue: MuscleFatigue | None = None


class SleepRecord(BaseModel):
    """One night of sleep. Durations in minutes."""

    model_config = ConfigDict(frozen=True)

    date: date
    total_duration: float = Field(..., ge=0)
    deep_sleep: float = Field(..., ge=0)
    light_sleep: float = Field(..., ge=0)
    rem_sleep: float = Field(..., ge=0)
    awake_time: float = Field(..., ge=0)
    sleep_score: float = Field(..., ge=0, le=100)
    bed_time: datetime
    wake_time: datetime

    @model_validator(mode="after")
    def _stages_fit_in_total(self) -> "SleepRecord":
        stages = self.deep_sleep + self.light_sleep + self.rem_sleep + self.awake_time
        if stages > self.total_duration:
            raise ValueError("deep + light + rem + awake must not exceed total_duration")
        return self


class ActivityRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: date
    steps: int = Field(..., ge=0)
    distance: float = Field(..., ge=0, description="km")
    calories_burned: float = Field(..., ge=0)
    active_minutes: float = Field(..., ge=0)
    standing_hours: float = Field(..., ge=0)
    floors: int = Field(..., ge=0)


class RecoveryInputs(BaseModel):
    """Upstream-derived recovery figures for a day; readiness itself is computed from vitals, sleep and activity."""

    model_config = ConfigDict(frozen=True)

    recovery_score: float
    muscle_recovery: float
    energy_level: float
