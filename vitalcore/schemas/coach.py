from pydantic import BaseModel, Field

from vitalcore.schemas.summary import HealthSummary


class CoachRequest(BaseModel):
    """Body for POST /coach/respond. Without summary the latest monitored one is used."""

    message: str = Field(..., min_length=1, max_length=2000)
    summary: HealthSummary | None = None


class GreetingRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    summary: HealthSummary | None = None


class CoachResponse(BaseModel):
    reply: str
