"""Aggregates over a history of daily summaries."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from vitalcore.schemas.summary import HealthSummary


class WeeklyValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    week: str
    value: int


class AnalyticsSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    avg_heart_rate: int
    avg_hrv: int
    avg_sleep_score: int
    avg_sleep_duration: int
    avg_steps: int
    avg_readiness: int
    avg_recovery: int
    avg_calories: int
    avg_active_minutes: int
    avg_stress: int

    # Percent change, last 7 days vs the 7 before; positive = improving
    hrv_trend: int
    sleep_trend: int
    readiness_trend: int
    activity_trend: int

    peak_hrv: float
    peak_steps: int
    peak_sleep_score: float
    peak_readiness: int
    best_day: date
    worst_day: date

    weekly_readiness: tuple[WeeklyValue, ...]
    weekly_hrv: tuple[WeeklyValue, ...]
    weekly_sleep: tuple[WeeklyValue, ...]
    weekly_activity: tuple[WeeklyValue, ...]

    sleep_to_readiness_correlation: str
    hrv_to_performance_correlation: str
    strain_to_recovery_balance: str

    total_steps: int
    total_calories: int
    total_active_minutes: int
    total_sleep_hours: int
    days_above_readiness_70: int


class AnalyticsRequest(BaseModel):
    """Body for POST /analytics: daily summaries, oldest first."""

    history: list[HealthSummary] = Field(..., min_length=1, max_length=366)
