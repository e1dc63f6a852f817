"""
Health check endpoints.
Report service status, version and uptime without touching dependencies.
"""

import time

from fastapi import APIRouter, Request

from shared.config.settings import settings
from shared.utils.schemas import HealthResponse
from menu_api.models import utcnow


router = APIRouter(tags=["health"])

SERVICE_NAME = "menu-api"


def _status(request: Request) -> HealthResponse:
    started_at = getattr(request.app.state, "started_at", None)
    uptime = time.monotonic() - started_at if started_at is not None else 0.0
    return HealthResponse(
        status="ok",
        service=SERVICE_NAME,
        version=settings.app_version,
        environment=settings.environment,
        uptime=round(uptime, 3),
        timestamp=utcnow(),
    )


@router.get("/", response_model=HealthResponse)
def root(request: Request) -> HealthResponse:
    return _status(request)


@router.get("/health", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """Basic health check endpoint."""
    return _status(request)
