"""Health check routes."""

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from passage.util.observability import SERVICE_NAME, SERVICE_VERSION

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Liveness report."""

    status: str
    service: str
    version: str
    timestamp: datetime


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report that the process is up; the user store is not checked."""
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
        timestamp=datetime.now(timezone.utc),
    )
