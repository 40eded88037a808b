"""Health check endpoint."""

from fastapi import APIRouter

from soundseek_api.schemas.common import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> HealthResponse:
    """Liveness check. Does not touch the catalog."""
    return HealthResponse()
