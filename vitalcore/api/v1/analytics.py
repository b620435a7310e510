"""Analytics API: aggregates over a caller-supplied history of daily summaries."""

from fastapi import APIRouter

from vitalcore.schemas.analytics import AnalyticsRequest, AnalyticsSummary
from vitalcore.services.analytics import compute_analytics

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.post(
    "/overview",
    response_model=AnalyticsSummary,
    summary="Analytics overview",
    responses={422: {"description": "Empty or invalid history"}},
)
def analytics_overview(body: AnalyticsRequest) -> AnalyticsSummary:
    return compute_analytics(body.history)
