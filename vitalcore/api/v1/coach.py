"""Coach API: templated replies over a health summary (no LLM)."""

from fastapi import APIRouter, Request

from vitalcore.api.deps import get_latest_summary, get_monitor
from vitalcore.schemas.coach import CoachRequest, CoachResponse, GreetingRequest
from vitalcore.schemas.summary import HealthSummary
from vitalcore.services import coach_responder

router = APIRouter(prefix="/coach", tags=["coach"])


def _summary_or_latest(request: Request, summary: HealthSummary | None) -> HealthSummary:
    if summary is not None:
        return summary
    return get_latest_summary(get_monitor(request))


@router.post(
    "/respond",
    response_model=CoachResponse,
    summary="Reply to a user message",
    responses={404: {"description": "No summary given and none computed yet"}},
)
def respond(request: Request, body: CoachRequest) -> CoachResponse:
    summary = _summary_or_latest(request, body.summary)
    return CoachResponse(reply=coach_responder.respond(body.message, summary))


@router.post("/greeting", response_model=CoachResponse, summary="Morning greeting")
def greeting(request: Request, body: GreetingRequest) -> CoachResponse:
    summary = _summary_or_latest(request, body.summary)
    return CoachResponse(reply=coach_responder.morning_greeting(body.name, summary))
