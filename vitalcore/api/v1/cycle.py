"""Cycle API: phase, performance window and hormone trends for a given cycle day."""

from fastapi import APIRouter

from vitalcore.config import settings
from vitalcore.schemas.cycle import CycleStateRequest, CycleStateResponse
from vitalcore.services.cycle_model import compute_cycle_state, hormone_insight, performance_window

router = APIRouter(prefix="/cycle", tags=["cycle"])


@router.post("/state", response_model=CycleStateResponse, summary="Cycle state for a day")
def cycle_state(body: CycleStateRequest) -> CycleStateResponse:
    """Uses the configured phase boundaries; temp_rise falls back to the configured rise."""
    rise = body.temp_rise if body.temp_rise is not None else settings.ovulation_temp_rise_c
    state = compute_cycle_state(
        body.cycle_day,
        body.baseline_temp,
        temp_rise=rise,
        boundaries=settings.cycle_boundaries(),
    )
    return CycleStateResponse(
        state=state,
        performance_window=performance_window(state.phase),
        hormones=hormone_insight(state),
    )
