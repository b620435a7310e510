"""
Cycle phase model for users who opted in to cycle tracking.

Phase is a pure function of the cycle day against CycleBoundaries. After
ovulation, basal body temperature rises 0.3-0.5 C above baseline; a rise outside
that band is treated as non-significant (ignored, never clamped) and the state is
flagged as an ambiguous reading.
"""
import logging
from datetime import date, timedelta

from vitalcore.schemas.cycle import (
    CycleBoundaries,
    CyclePhase,
    CycleState,
    HormoneInsight,
    HormoneTrend,
    PerformanceWindow,
)

logger = logging.getLogger(__name__)

OVULATION_TEMP_RISE_MIN = 0.3  # Celsius
OVULATION_TEMP_RISE_MAX = 0.5
DEFAULT_TEMP_RISE = 0.4

# Fertile window relative to the estimated ovulation day
FERTILE_DAYS_BEFORE = 5
FERTILE_DAYS_AFTER = 1

PHASE_SYMPTOMS: dict[CyclePhase, tuple[str, ...]] = {
    CyclePhase.MENSTRUAL: ("Cramps", "Fatigue"),
    CyclePhase.FOLLICULAR: ("Increased energy",),
    CyclePhase.OVULATION: ("Peak energy", "Mild cramping"),
    CyclePhase.LUTEAL: ("Bloating", "Mood changes"),
}

PERFORMANCE_WINDOWS: dict[CyclePhase, PerformanceWindow] = {
    CyclePhase.MENSTRUAL: PerformanceWindow.RESTORATION,
    CyclePhase.FOLLICULAR: PerformanceWindow.RISING_ENERGY,
    CyclePhase.OVULATION: PerformanceWindow.PEAK_OUTPUT,
    CyclePhase.LUTEAL: PerformanceWindow.INTERNAL_RECOVERY,
}

# phase -> (estrogen, progesterone, recommendation)
HORMONE_PROFILES: dict[CyclePhase, tuple[HormoneTrend, HormoneTrend, str]] = {
    CyclePhase.MENSTRUAL: (
        HormoneTrend.LOW,
        HormoneTrend.LOW,
        "Energy reserves are lower during this window. Gentle movement and iron-rich meals support restoration.",
    ),
    CyclePhase.FOLLICULAR: (
        HormoneTrend.RISING,
        HormoneTrend.LOW,
        "Rising estrogen supports strength gains. A good window to progress training load.",
    ),
    CyclePhase.OVULATION: (
        HormoneTrend.PEAK,
        HormoneTrend.RISING,
        "You are in your peak output window. Prioritize warm-ups, as joint laxity can be higher.",
    ),
    CyclePhase.LUTEAL: (
        HormoneTrend.FALLING,
        HormoneTrend.PEAK,
        "Your readiness score is naturally adjusted during this phase. Consider steady-state movement rather than high-intensity training.",
    ),
}


def phase_for_day(cycle_day: int, boundaries: CycleBoundaries) -> CyclePhase:
    if cycle_day <= boundaries.menstrual_end:
        return CyclePhase.MENSTRUAL
    if cycle_day <= boundaries.follicular_end:
        return CyclePhase.FOLLICULAR
    if cycle_day <= boundaries.ovulation_end:
        return CyclePhase.OVULATION
    # Past cycle_length the period is late; still luteal
    return CyclePhase.LUTEAL


def is_valid_temp_rise(rise: float) -> bool:
    return OVULATION_TEMP_RISE_MIN <= rise <= OVULATION_TEMP_RISE_MAX


def compute_cycle_state(
    cycle_day: int,
    baseline_temp: float,
    *,
    temp_rise: float = DEFAULT_TEMP_RISE,
    boundaries: CycleBoundaries | None = None,
    today: date | None = None,
) -> CycleState:
    """
    Build the day's CycleState. temp_rise is the measured (or configured) rise
    above baseline; it only applies after ovulation.
    """
    boundaries = boundaries or CycleBoundaries()
    today = today or date.today()
    phase = phase_for_day(cycle_day, boundaries)
    post_ovulation = cycle_day > boundaries.ovulation_end

    measured_rise = temp_rise if post_ovulation else 0.0
    ambiguous = False
    if post_ovulation and not is_valid_temp_rise(measured_rise):
        logger.warning(
            "Cycle day %s: temperature rise %.2f C outside %.1f-%.1f C band, ignoring",
            cycle_day, measured_rise, OVULATION_TEMP_RISE_MIN, OVULATION_TEMP_RISE_MAX,
        )
        ambiguous = True
    significant_rise = 0.0 if ambiguous else measured_rise

    ovulation_day = boundaries.ovulation_end
    estimated_ovulation = today - timedelta(days=cycle_day - ovulation_day)
    days_to_period = boundaries.cycle_length - cycle_day
    next_period = today + timedelta(days=days_to_period) if days_to_period >= 0 else None
    fertile = ovulation_day - FERTILE_DAYS_BEFORE <= cycle_day <= ovulation_day + FERTILE_DAYS_AFTER

    return CycleState(
        cycle_day=cycle_day,
        phase=phase,
        estimated_ovulation=estimated_ovulation,
        next_period=next_period,
        symptoms=PHASE_SYMPTOMS[phase],
        fertile_window=fertile,
        basal_body_temp=round(baseline_temp + measured_rise, 2),
        temp_rise_from_baseline=significant_rise,
        ambiguous_temp_reading=ambiguous,
        ovulation_confirmed=post_ovulation and not ambiguous,
    )


def performance_window(phase: CyclePhase) -> PerformanceWindow:
    return PERFORMANCE_WINDOWS[phase]


def hormone_insight(state: CycleState, today: date | None = None) -> HormoneInsight:
    estrogen, progesterone, recommendation = HORMONE_PROFILES[state.phase]
    return HormoneInsight(
        date=today or date.today(),
        estrogen_trend=estrogen,
        progesterone_trend=progesterone,
        recommendation=recommendation,
        luteal_phase_active=state.luteal_active,
        performance_window=performance_window(state.phase),
    )
