"""Tests for the assembled HealthSummary."""

import pytest
from pydantic import ValidationError

from vitalcore.services.cycle_model import compute_cycle_state
from vitalcore.services.summary_composer import compose, overall_score


def test_overall_score(sleep, activity, recovery):
    # (90 + 85 + 90) / 3
    assert overall_score(sleep, activity, recovery) == 88


def test_overall_score_caps_activity(sleep, activity, recovery):
    busy = activity.model_copy(update={"steps": 25000})
    assert overall_score(sleep, busy, recovery) == 92


def test_compose_assembles_every_part(vitals, sleep, activity, recovery, now):
    summary = compose(vitals, sleep, activity, recovery, now=now)
    assert summary.date == now.date()
    assert summary.overall_score == 88
    assert summary.vitals == vitals
    assert [i.id for i in summary.insights] == ["insight_positive_1"]
    assert summary.nutrition_plan.calories == 1960
    assert summary.cycle is None


def test_compose_carries_cycle_state(vitals, sleep, activity, recovery, now):
    state = compute_cycle_state(22, 36.5, today=now.date())
    summary = compose(vitals, sleep, activity, recovery, cycle=state, now=now)
    assert summary.cycle == state


def test_summary_is_immutable(summary):
    with pytest.raises(ValidationError):
        summary.overall_score = 10
    assert isinstance(summary.insights, tuple)
