"""
Averages, trends, peaks and weekly breakdowns over a history of daily
summaries (oldest first). The history is supplied by the persistence
collaborator; this module only aggregates it.
"""
from collections.abc import Sequence
from statistics import fmean

from vitalcore.core.numeric import round_half_up
from vitalcore.schemas.analytics import AnalyticsSummary, WeeklyValue
from vitalcore.schemas.summary import HealthSummary

TREND_DAYS = 7
WEEK_DAYS = 7
READINESS_GOOD = 70
HIGH_SLEEP_SCORE = 75
LOW_SLEEP_SCORE = 65
SLEEP_READINESS_GAP = 10
# Recovery balances strain when it beats 70 % of readiness on average
STRAIN_BALANCE_FACTOR = 0.7


def trend(values: Sequence[float]) -> int:
    """Percent change of the last 7 values against the 7 before; 0 without two full weeks."""
    if len(values) < 2 * TREND_DAYS:
        return 0
    recent = fmean(values[-TREND_DAYS:])
    previous = fmean(values[-2 * TREND_DAYS:-TREND_DAYS])
    if previous == 0:
        return 0
    return round_half_up((recent - previous) / previous * 100)


def weekly(values: Sequence[float]) -> tuple[WeeklyValue, ...]:
    """Mean per consecutive 7-day chunk; the last chunk may be shorter."""
    return tuple(
        WeeklyValue(week=f"W{i // WEEK_DAYS + 1}", value=round_half_up(fmean(values[i:i + WEEK_DAYS])))
        for i in range(0, len(values), WEEK_DAYS)
    )


def _sleep_readiness_note(history: Sequence[HealthSummary]) -> str:
    high = [d.recovery.readiness_score for d in history if d.sleep.sleep_score >= HIGH_SLEEP_SCORE]
    low = [d.recovery.readiness_score for d in history if d.sleep.sleep_score < LOW_SLEEP_SCORE]
    gap = (fmean(high) if high else 0) - (fmean(low) if low else 0)
    if gap > SLEEP_READINESS_GAP:
        return "Strong positive correlation: better sleep quality leads to significantly higher readiness scores."
    return "Moderate correlation: sleep quality has some impact on your readiness."


def compute_analytics(history: Sequence[HealthSummary]) -> AnalyticsSummary:
    if not history:
        raise ValueError("analytics need at least one daily summary")

    hrs = [d.vitals.heart_rate for d in history]
    hrvs = [d.vitals.hrv for d in history]
    sleep_scores = [d.sleep.sleep_score for d in history]
    sleep_durations = [d.sleep.total_duration for d in history]
    steps = [d.activity.steps for d in history]
    readiness = [d.recovery.readiness_score for d in history]
    recovery = [d.recovery.recovery_score for d in history]
    calories = [d.activity.calories_burned for d in history]
    active_minutes = [d.activity.active_minutes for d in history]
    stress = [d.vitals.stress_level for d in history]

    # First occurrence wins on ties
    best = readiness.index(max(readiness))
    worst = readiness.index(min(readiness))
    hrv_trend = trend(hrvs)

    return AnalyticsSummary(
        avg_heart_rate=round_half_up(fmean(hrs)),
        avg_hrv=round_half_up(fmean(hrvs)),
        avg_sleep_score=round_half_up(fmean(sleep_scores)),
        avg_sleep_duration=round_half_up(fmean(sleep_durations)),
        avg_steps=round_half_up(fmean(steps)),
        avg_readiness=round_half_up(fmean(readiness)),
        avg_recovery=round_half_up(fmean(recovery)),
        avg_calories=round_half_up(fmean(calories)),
        avg_active_minutes=round_half_up(fmean(active_minutes)),
        avg_stress=round_half_up(fmean(stress)),
        hrv_trend=hrv_trend,
        sleep_trend=trend(sleep_scores),
        readiness_trend=trend(readiness),
        activity_trend=trend(steps),
        peak_hrv=max(hrvs),
        peak_steps=max(steps),
        peak_sleep_score=max(sleep_scores),
        peak_readiness=max(readiness),
        best_day=history[best].date,
        worst_day=history[worst].date,
        weekly_readiness=weekly(readiness),
        weekly_hrv=weekly(hrvs),
        weekly_sleep=weekly(sleep_scores),
        weekly_activity=weekly(steps),
        sleep_to_readiness_correlation=_sleep_readiness_note(history),
        hrv_to_performance_correlation=(
            "Positive trend: your HRV is improving, supporting better performance capacity."
            if hrv_trend > 0
            else "Watch area: HRV is trending down, which may limit performance output."
        ),
        strain_to_recovery_balance=(
            "Balanced: your recovery is keeping pace with training strain."
            if fmean(recovery) > fmean(readiness) * STRAIN_BALANCE_FACTOR
            else "Imbalanced: training strain is outpacing recovery. Consider a deload week."
        ),
        total_steps=sum(steps),
        total_calories=round_half_up(sum(calories)),
        total_active_minutes=round_half_up(sum(active_minutes)),
        total_sleep_hours=round_half_up(sum(sleep_durations) / 60),
        days_above_readiness_70=sum(1 for r in readiness if r >= READINESS_GOOD),
    )
