"""Tests for the first-match coach table, greeting and symptom notes."""

import pytest

from vitalcore.services.coach_responder import ROUTES, analyze_symptoms, match_route, morning_greeting, respond
from vitalcore.services.cycle_model import compute_cycle_state

TIRED_REPLY = (
    "Your deep sleep was 110min, below your baseline. "
    "Your body is prioritizing internal recovery, like roots deepening before new growth. "
    "Consider a steady-state walk rather than pushing through."
)


def _with_readiness(summary, score):
    return summary.model_copy(update={"recovery": summary.recovery.model_copy(update={"readiness_score": score})})


def test_tired_matches_case_insensitively(summary):
    assert respond("I'm so TIRED today", summary) == TIRED_REPLY
    assert respond("Exhausted.", summary) == TIRED_REPLY


def test_first_match_wins(summary):
    # Mentions both workout and tired; tired is checked first
    assert respond("Should I workout? I'm tired", summary) == TIRED_REPLY
    assert match_route("I can't sleep and I'm stressed").name == "sleep"


def test_workout_branches_on_readiness(summary):
    primed = respond("Can I do a hard workout?", _with_readiness(summary, 78))
    assert primed.startswith("Your readiness score is 78%. Your HRV at 65ms supports high-output work")
    gentle = respond("Can I do a hard workout?", _with_readiness(summary, 70))
    assert gentle.startswith("Your readiness is 70%, adjusted for your current recovery phase.")


def test_sleep_reply_outlook(summary):
    assert "solid restoration" in respond("How was my sleep?", _with_readiness(summary, 78))
    assert "you need more recovery time" in respond("How was my sleep?", _with_readiness(summary, 55))


def test_stress_and_food_replies(summary):
    assert "stress level of 20%" in respond("I feel anxious", summary)
    food = respond("What should I eat?", summary)
    assert "burned 320 calories" in food
    assert "Aim for 123g protein" in food


def test_default_reply_framing(summary):
    assert respond("hello", summary) == (
        "Your HRV is 65ms and readiness sits at 78%. Your system is primed for output. "
        "What would you like to explore?"
    )
    assert "asking for gentler input" in respond("hello", _with_readiness(summary, 40))


def test_templates_do_not_share_wording(summary):
    replies = {route.name: route.template(summary) for route in ROUTES}
    assert len(set(replies.values())) == len(ROUTES)


@pytest.mark.parametrize(
    "score,fragment",
    [
        (90, "like a river fully replenished"),
        (60, "You logged 110min of deep sleep"),
        (40, "Your resting HR is 70 BPM"),
    ],
)
def test_morning_greeting_by_sleep_score(summary, score, fragment):
    day = summary.model_copy(update={"sleep": summary.sleep.model_copy(update={"sleep_score": score})})
    greeting = morning_greeting("Ana", day)
    assert greeting.startswith("Good morning, Ana.")
    assert fragment in greeting


def test_analyze_symptoms():
    assert analyze_symptoms([], None) == ""
    state = compute_cycle_state(22, 36.5)
    note = analyze_symptoms(["Bloating", "Fatigue"], state)
    assert "You've logged Bloating, Fatigue during your luteal phase." in note
    assert "during your current phase" in analyze_symptoms(["Cramps"], None)
