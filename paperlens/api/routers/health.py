"""
Health check API endpoints.

Routes: GET /health

Dependencies: paperlens.api.deps
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from paperlens.api.deps import SessionRegistry, get_session_registry


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
    active_sessions: int = 0


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(
    registry: SessionRegistry = Depends(get_session_registry),
) -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy", active_sessions=len(registry))
