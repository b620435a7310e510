import logging
import sys
from contextlib import asynccontextmanager

import httpx
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from starlette.middleware.base import BaseHTTPMiddleware
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from vitalcore.api.v1 import analytics, coach, cycle, summary

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stdout,
)
logging.getLogger("vitalcore").setLevel(logging.DEBUG)
from vitalcore.config import settings
from vitalcore.schemas.user import Gender
from vitalcore.services.monitor import HealthMonitor
from vitalcore.services.notifications import ExpoPushDispatcher, NotificationDispatcher, RecordingDispatcher
from vitalcore.services.telemetry_source import (
    DEFAULT_FEMALE_PROFILE,
    DEFAULT_MALE_PROFILE,
    SyntheticTelemetrySource,
)
from prometheus_client import Counter, make_asgi_app

logger = logging.getLogger("vitalcore.main")

scheduler = AsyncIOScheduler()

MONITOR_TICKS = Counter("vitalcore_monitor_ticks_total", "Monitor ticks by outcome", ["outcome"])


def build_monitor(http_client: httpx.AsyncClient) -> HealthMonitor:
    """Wire the monitor from settings: synthetic bracelet, configured profile and push target."""
    user = settings.user_settings()
    profile = DEFAULT_FEMALE_PROFILE if user.gender == Gender.FEMALE else DEFAULT_MALE_PROFILE
    source = SyntheticTelemetrySource(profile, seed=settings.telemetry_seed)
    dispatcher: NotificationDispatcher
    if settings.expo_push_token:
        dispatcher = ExpoPushDispatcher(settings.expo_push_token, http_client)
    else:
        dispatcher = RecordingDispatcher()
    return HealthMonitor(
        source,
        source,
        user,
        boundaries=settings.cycle_boundaries(),
        baseline_temp=settings.baseline_temp_c,
        temp_rise=settings.ovulation_temp_rise_c,
        dispatcher=dispatcher,
        min_priority=settings.notify_min_priority,
    )


async def scheduled_monitor_tick(monitor: HealthMonitor):
    """Full recomputation every refresh interval."""
    result = await monitor.run_tick()
    MONITOR_TICKS.labels(outcome="ok" if result is not None else "skipped").inc()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings.validate_cycle_config()
    http_client = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
    monitor = build_monitor(http_client)
    app.state.monitor = monitor

    if settings.monitor_enabled:
        await scheduled_monitor_tick(monitor)
        scheduler.add_job(
            scheduled_monitor_tick,
            "interval",
            minutes=settings.refresh_interval_minutes,
            args=[monitor],
            id="monitor_tick",
            replace_existing=True,
        )
        scheduler.start()
        logger.info("Health monitor scheduled every %s min", settings.refresh_interval_minutes)
    yield
    if scheduler.running:
        scheduler.shutdown()
    await http_client.aclose()


limiter = Limiter(key_func=get_remote_address, default_limits=["200/minute"])

app = FastAPI(
    title="VitalCore API",
    description="Health scoring engine: readiness, insights, nutrition, cycle-aware coaching",
    version="0.1.0",
    lifespan=lifespan,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=500)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()] if settings.cors_origins else ["*"]
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(summary.router, prefix="/api/v1")
app.include_router(coach.router, prefix="/api/v1")
app.include_router(cycle.router, prefix="/api/v1")
app.include_router(analytics.router, prefix="/api/v1")

metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)


@app.get("/health")
@limiter.exempt
def health(request: Request):
    return {"status": "ok"}
