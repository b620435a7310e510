from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class RecoverySnapshot(BaseModel):
    """Daily recovery state. readiness_score is derived from the three normalized inputs."""

    model_config = ConfigDict(frozen=True)

    date: date
    recovery_score: int = Field(..., ge=0, le=100)
    readiness_score: int = Field(..., ge=0, le=100)
    muscle_recovery: int = Field(..., ge=0, le=100)
    energy_level: int = Field(..., ge=0, le=100)
    recommendation: str = ""
    hrv_normalized: float | None = None
    sleep_quality: float | None = None
    daily_strain: float | None = None


class ReadinessRequest(BaseModel):
    """Body for POST /readiness. Inputs are expected pre-normalized to 0..1."""

    hrv_normalized: float = Field(..., ge=0, le=1)
    sleep_quality: float = Field(..., ge=0, le=1)
    daily_strain: float = Field(..., ge=0, le=1)
    luteal_active: bool = False


class ReadinessResponse(BaseModel):
    readiness_score: int
    luteal_dampening_applied: bool
