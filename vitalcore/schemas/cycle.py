"""Menstrual cycle state and phase-derived guidance."""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CyclePhase(str, Enum):
    MENSTRUAL = "menstrual"
    FOLLICULAR = "follicular"
    OVULATION = "ovulation"
    LUTEAL = "luteal"


class PerformanceWindow(str, Enum):
    RESTORATION = "Restoration"
    RISING_ENERGY = "Rising Energy"
    PEAK_OUTPUT = "Peak Output"
    INTERNAL_RECOVERY = "Internal Recovery"


class HormoneTrend(str, Enum):
    LOW = "low"
    RISING = "rising"
    PEAK = "peak"
    FALLING = "falling"


class CycleBoundaries(BaseModel):
    """Last day (inclusive) of each phase; days after ovulation_end are luteal."""

    model_config = ConfigDict(frozen=True)

    menstrual_end: int = Field(5, ge=1)
    follicular_end: int = Field(12, ge=1)
    ovulation_end: int = Field(14, ge=1)
    cycle_length: int = Field(28, ge=1)

    @model_validator(mode="after")
    def _ordered(self) -> "CycleBoundaries":
        if not (self.menstrual_end < self.follicular_end < self.ovulation_end < self.cycle_length):
            raise ValueError("phase boundaries must be strictly increasing and within cycle_length")
        return self


class CycleState(BaseModel):
    model_config = ConfigDict(frozen=True)

    cycle_day: int = Field(..., ge=1)
    phase: CyclePhase
    estimated_ovulation: date | None = None
    next_period: date | None = None
    symptoms: tuple[str, ...] = ()
    fertile_window: bool = False
    basal_body_temp: float | None = None
    temp_rise_from_baseline: float = 0.0
    # True when a post-ovulation rise fell outside the valid band and was ignored
    ambiguous_temp_reading: bool = False
    ovulation_confirmed: bool = False

    @property
    def luteal_active(self) -> bool:
        return self.phase == CyclePhase.LUTEAL


class HormoneInsight(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: date
    estrogen_trend: HormoneTrend
    progesterone_trend: HormoneTrend
    recommendation: str
    luteal_phase_active: bool
    performance_window: PerformanceWindow


class CycleStateRequest(BaseModel):
    """Body for POST /cycle/state."""

    cycle_day: int = Field(..., ge=1, le=60)
    baseline_temp: float = Field(36.5, ge=34, le=39)
    temp_rise: float | None = Field(None, ge=0, le=2, description="Measured post-ovulation rise in Celsius")


class CycleStateResponse(BaseModel):
    state: CycleState
    performance_window: PerformanceWindow
    hormones: HormoneInsight
