"""Health and readiness endpoints."""

import os
import time
from datetime import UTC, datetime
from pathlib import Path

import structlog
from fastapi import APIRouter
from pydantic import BaseModel, Field

from api.config import get_settings

router = APIRouter(tags=["Health"])
logger = structlog.get_logger()

API_VERSION = "0.1.0"

# Track server start time for uptime calculation
_server_start_time = time.time()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Health status")
    timestamp: str = Field(..., description="ISO 8601 timestamp")
    version: str = Field(..., description="API version")
    uptime_seconds: int = Field(..., description="Server uptime in seconds")
    llm_enabled: bool = Field(..., description="Whether LLM enhancement is configured")


class ComponentCheck(BaseModel):
    status: str = Field(..., description="healthy, unhealthy or disabled")
    detail: str | None = None


class ReadyResponse(BaseModel):
    """Readiness check: can results be stored, is enhancement configured."""

    status: str = Field(..., description="ready or degraded")
    timestamp: str
    version: str
    checks: dict[str, ComponentCheck]


class ApiInfoResponse(BaseModel):
    """API information response."""

    name: str
    version: str
    env: str
    docs: str | None


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness only. Use /ready to check the result store."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC).isoformat(),
        version=API_VERSION,
        uptime_seconds=int(time.time() - _server_start_time),
        llm_enabled=get_settings().llm_enabled,
    )


def check_results_path(path: Path) -> ComponentCheck:
    """The results directory exists (or can be created) and is writable."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("results_path_unavailable", path=str(path), error=str(e))
        return ComponentCheck(status="unhealthy", detail=str(e))
    if not os.access(path, os.W_OK):
        return ComponentCheck(status="unhealthy", detail=f"{path} is not writable")
    return ComponentCheck(status="healthy", detail=str(path))


@router.get("/ready", response_model=ReadyResponse)
async def readiness_check() -> ReadyResponse:
    settings = get_settings()
    checks = {
        "results_store": check_results_path(Path(settings.results_path)),
        "llm": ComponentCheck(
            status="healthy" if settings.llm_enabled else "disabled",
            detail=settings.llm_provider if settings.llm_enabled else None,
        ),
    }
    ready = checks["results_store"].status == "healthy"
    return ReadyResponse(
        status="ready" if ready else "degraded",
        timestamp=datetime.now(UTC).isoformat(),
        version=API_VERSION,
        checks=checks,
    )


@router.get("/", response_model=ApiInfoResponse)
async def root() -> ApiInfoResponse:
    """Root endpoint with API information."""
    settings = get_settings()
    return ApiInfoResponse(
        name="PageLens API",
        version=API_VERSION,
        env=settings.env,
        docs="/docs" if settings.debug else None,
    )
