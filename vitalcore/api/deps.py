"""FastAPI dependencies: the app's HealthMonitor and its latest summary."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from vitalcore.schemas.summary import HealthSummary
from vitalcore.services.monitor import HealthMonitor


def get_monitor(request: Request) -> HealthMonitor:
    monitor = getattr(request.app.state, "monitor", None)
    if monitor is None:
        raise HTTPException(status_code=503, detail="Health monitor not running")
    return monitor


def get_latest_summary(monitor: Annotated[HealthMonitor, Depends(get_monitor)]) -> HealthSummary:
    if monitor.latest is None:
        raise HTTPException(status_code=404, detail="No health summary computed yet")
    return monitor.latest
