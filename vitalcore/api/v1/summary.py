"""Health summary API: compose from supplied records, or read/refresh the monitored one."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from vitalcore.api.deps import get_latest_summary, get_monitor
from vitalcore.schemas.recovery import ReadinessRequest, ReadinessResponse
from vitalcore.schemas.summary import HealthSummary, SummaryRequest
from vitalcore.services import summary_composer
from vitalcore.services.monitor import HealthMonitor
from vitalcore.services.score_engine import readiness

router = APIRouter(tags=["summary"])


@router.post("/summary", response_model=HealthSummary, summary="Compose a health summary")
def compose_summary(body: SummaryRequest) -> HealthSummary:
    """Stateless: compose one summary from the records in the body."""
    return summary_composer.compose(body.vitals, body.sleep, body.activity, body.recovery, now=body.now)


@router.get(
    "/summary/latest",
    response_model=HealthSummary,
    summary="Latest monitored summary",
    responses={404: {"description": "No tick has completed yet"}},
)
def latest_summary(summary: Annotated[HealthSummary, Depends(get_latest_summary)]) -> HealthSummary:
    return summary


@router.post(
    "/summary/refresh",
    response_model=HealthSummary,
    summary="Run a monitor tick now",
    responses={503: {"description": "Telemetry unavailable"}},
)
async def refresh_summary(monitor: Annotated[HealthMonitor, Depends(get_monitor)]) -> HealthSummary:
    summary = await monitor.run_tick()
    if summary is None:
        raise HTTPException(status_code=503, detail="Telemetry unavailable")
    return summary


@router.post("/readiness", response_model=ReadinessResponse, summary="Readiness score from normalized inputs")
def compute_readiness(body: ReadinessRequest) -> ReadinessResponse:
    score = readiness(body.hrv_normalized, body.sleep_quality, body.daily_strain, body.luteal_active)
    return ReadinessResponse(readiness_score=score, luteal_dampening_applied=body.luteal_active)
