"""
Readiness score: R = (HRV_norm * 0.4 + Sleep_quality * 0.4 - Strain_daily * 0.2) * 100,
dampened by 15% during an active luteal phase. Weights are fixed for output parity
with the device app. recovery_score, muscle_recovery and energy_level come from
upstream and are only clamped here.
"""
from datetime import date

from vitalcore.core.numeric import clamp, round_half_up
from vitalcore.schemas.recovery import RecoverySnapshot
from vitalcore.schemas.telemetry import MuscleFatigue

HRV_WEIGHT = 0.4
SLEEP_WEIGHT = 0.4
STRAIN_WEIGHT = 0.2
LUTEAL_READINESS_DAMPENING = 0.85

# Normalization ranges used by callers to pre-clamp inputs to 0..1
HRV_FLOOR_MS = 20.0
HRV_SPAN_MS = 70.0
STRAIN_FULL_ACTIVE_MINUTES = 120.0

# (min readiness, recommendation), first match wins
READINESS_RECOMMENDATIONS: list[tuple[int, str]] = [
    (80, "Your body is primed for output today. Consider high-intensity training."),
    (65, "Your recovery is solid. A balanced workout aligns with your readiness."),
    (50, "Moderate activity recommended. Your system is rebuilding strength."),
    (35, "Focus on steady-state movement. Your internal rhythm is resetting."),
    (0, "Restorative day advised. Light stretching and hydration will serve you best."),
]


def readiness_raw(hrv_norm: float, sleep_quality: float, daily_strain: float) -> float:
    return (hrv_norm * HRV_WEIGHT + sleep_quality * SLEEP_WEIGHT - daily_strain * STRAIN_WEIGHT) * 100


def readiness(
    hrv_norm: float,
    sleep_quality: float,
    daily_strain: float,
    luteal_active: bool = False,
) -> int:
    """
    Composite readiness 0..100. Inputs must already be in [0, 1]; they are not
    validated here.
    """
    raw = readiness_raw(hrv_norm, sleep_quality, daily_strain)
    if luteal_active:
        raw *= LUTEAL_READINESS_DAMPENING
    return int(clamp(round_half_up(raw), 0, 100))


def normalize_hrv(hrv_ms: float) -> float:
    return clamp((hrv_ms - HRV_FLOOR_MS) / HRV_SPAN_MS, 0.0, 1.0)


def normalize_sleep_quality(sleep_score: float) -> float:
    return clamp(sleep_score / 100, 0.0, 1.0)


def normalize_strain(active_minutes: float) -> float:
    return clamp(active_minutes / STRAIN_FULL_ACTIVE_MINUTES, 0.0, 1.0)


def derive_muscle_fatigue(muscle_oxygen: float | None) -> MuscleFatigue | None:
    """Fatigue band from SmO2; None when the NIRS channel is absent."""
    if muscle_oxygen is None:
        return None
    if muscle_oxygen < 40:
        return MuscleFatigue.HIGH
    if muscle_oxygen < 60:
        return MuscleFatigue.MEDIUM
    return MuscleFatigue.LOW


def recommendation_for(readiness_score: int) -> str:
    for threshold, text in READINESS_RECOMMENDATIONS:
        if readiness_score >= threshold:
            return text
    return READINESS_RECOMMENDATIONS[-1][1]


def build_recovery_snapshot(
    day: date,
    hrv_norm: float,
    sleep_quality: float,
    daily_strain: float,
    *,
    luteal_active: bool,
    recovery_score: float,
    muscle_recovery: float,
    energy_level: float,
) -> RecoverySnapshot:
    score = readiness(hrv_norm, sleep_quality, daily_strain, luteal_active)
    return RecoverySnapshot(
        date=day,
        recovery_score=int(clamp(round_half_up(recovery_score), 0, 100)),
        readiness_score=score,
        muscle_recovery=int(clamp(round_half_up(muscle_recovery), 0, 100)),
        energy_level=int(clamp(round_half_up(energy_level), 0, 100)),
        recommendation=recommendation_for(score),
        hrv_normalized=hrv_norm,
        sleep_quality=sleep_quality,
        daily_strain=daily_strain,
    )
