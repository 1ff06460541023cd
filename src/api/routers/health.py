"""Health check endpoint."""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from core.config import Settings, get_settings

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    configured: bool


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """
    Liveness check.

    Does not touch the table. `configured` is False when no API key is set, in
    which case every authenticated request will fail with 500.
    """
    return HealthResponse(status="healthy", configured=settings.is_api_key_configured)
