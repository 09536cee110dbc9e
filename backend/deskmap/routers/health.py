"""
DeskMap - Health Check Router
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from deskmap.config import Settings, get_settings
from deskmap.schemas.base import CamelModel

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: str


class AuthStatusResponse(CamelModel):
    auth_enabled: bool
    mode: str


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Liveness probe, no authentication."""
    return HealthResponse(status="ok", timestamp=datetime.now(timezone.utc).isoformat())


@router.get("/auth/status", response_model=AuthStatusResponse)
async def auth_status(settings: Settings = Depends(get_settings)):
    """Tell the frontend whether bearer tokens are being checked."""
    return AuthStatusResponse(
        auth_enabled=not settings.disable_auth,
        mode="development" if settings.disable_auth else "production"
    )
