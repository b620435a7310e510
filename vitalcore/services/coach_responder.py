"""
Deterministic coach replies: ordered (keywords, template) table, first match wins.

Matching is a case-insensitive substring test, so table order decides which
branch answers a message that mentions several topics.
"""
from collections.abc import Callable
from dataclasses import dataclass

from vitalcore.core.numeric import round_half_up
from vitalcore.schemas.cycle import CycleState
from vitalcore.schemas.summary import HealthSummary

PRIMED_READINESS = 70


@dataclass(frozen=True)
class CoachRoute:
    name: str
    keywords: tuple[str, ...]
    template: Callable[[HealthSummary], str]

    def matches(self, lowered_message: str) -> bool:
        return any(k in lowered_message for k in self.keywords)


def _tired(s: HealthSummary) -> str:
    return (
        f"Your deep sleep was {round_half_up(s.sleep.deep_sleep)}min, below your baseline. "
        "Your body is prioritizing internal recovery, like roots deepening before new growth. "
        "Consider a steady-state walk rather than pushing through."
    )


def _workout(s: HealthSummary) -> str:
    readiness = s.recovery.readiness_score
    if readiness > PRIMED_READINESS:
        return (
            f"Your readiness score is {readiness}%. Your HRV at {s.vitals.hrv:g}ms supports "
            "high-output work today. The conditions are aligned for intensity."
        )
    return (
        f"Your readiness is {readiness}%, adjusted for your current recovery phase. "
        "Think of this as winter: restorative movement serves you better than force. "
        "Try steady-state cardio or mobility work."
    )


def _sleep(s: HealthSummary) -> str:
    outlook = "you need more recovery time" if s.recovery.readiness_score < PRIMED_READINESS else "solid restoration"
    return (
        f"You had {round_half_up(s.sleep.deep_sleep)}min of deep sleep, your body's repair window. "
        f"Your nocturnal HRV suggests {outlook}. Consider reducing screen time 1 hour before bed."
    )


def _stress(s: HealthSummary) -> str:
    return (
        f"Your HRV indicates a stress level of {s.vitals.stress_level:g}%. "
        "Even 5 minutes of grounded breathing can shift your system. "
        "Try the rain sounds, they're designed to lower cortisol."
    )


def _food(s: HealthSummary) -> str:
    return (
        f"Your activity burned {s.activity.calories_burned:g} calories. "
        f"Aim for {s.nutrition_plan.protein}g protein today to support recovery. "
        "Think of nutrition as fuel for the next growth cycle, not just today's energy."
    )


def _default(s: HealthSummary) -> str:
    readiness = s.recovery.readiness_score
    framing = (
        "Your system is primed for output."
        if readiness > PRIMED_READINESS
        else "Your body is asking for gentler input today."
    )
    return (
        f"Your HRV is {s.vitals.hrv:g}ms and readiness sits at {readiness}%. {framing} "
        "What would you like to explore?"
    )


ROUTES: list[CoachRoute] = [
    CoachRoute("tired", ("tired", "exhausted"), _tired),
    CoachRoute("workout", ("workout", "exercise"), _workout),
    CoachRoute("sleep", ("sleep", "rest"), _sleep),
    CoachRoute("stress", ("stress", "anxious", "calm"), _stress),
    CoachRoute("food", ("eat", "food", "hungry"), _food),
]


def match_route(message: str) -> CoachRoute | None:
    lowered = message.lower()
    for route in ROUTES:
        if route.matches(lowered):
            return route
    return None


def respond(user_message: str, summary: HealthSummary) -> str:
    route = match_route(user_message)
    if route is None:
        return _default(summary)
    return route.template(summary)


def morning_greeting(name: str, summary: HealthSummary) -> str:
    deep = round_half_up(summary.sleep.deep_sleep)
    score = summary.sleep.sleep_score
    hrv = summary.vitals.hrv
    if score >= 80:
        return (
            f"Good morning, {name}. Your deep sleep was {deep}min with a score of {score:g}, "
            f"like a river fully replenished. Your HRV of {hrv:g}ms says you're ready to flow today."
        )
    if score >= 50:
        return (
            f"Good morning, {name}. You logged {deep}min of deep sleep with a score of {score:g}. "
            "Your body is rebuilding, so consider taking the first hour gently."
        )
    return (
        f"Good morning, {name}. Your resting HR is {summary.vitals.heart_rate:g} BPM and HRV is {hrv:g}ms. "
        "Your body is in a quieter season. Honor that rhythm with steady movement today."
    )


def analyze_symptoms(symptoms: list[str], cycle_state: CycleState | None) -> str:
    if not symptoms:
        return ""
    phase = cycle_state.phase.value if cycle_state else "current"
    return (
        f"You've logged {', '.join(symptoms)} during your {phase} phase. "
        "These are common during this part of your cycle. "
        "Stay hydrated, prioritize rest, and listen to your body's natural rhythm."
    )
