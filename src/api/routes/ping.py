"""
Ping Route

Liveness endpoint for frontend connectivity testing.
"""

from datetime import datetime

from fastapi import APIRouter
from pydantic import BaseModel

from common import global_config

router = APIRouter()


class PingResponse(BaseModel):
    """Response for ping endpoint."""

    message: str  # noqa: F841
    status: str  # noqa: F841
    service: str
    mock_mode: bool
    timestamp: str


@router.get("/ping", response_model=PingResponse)  # noqa
async def ping() -> PingResponse:
    """Liveness check; also reports whether storyboards are being mocked."""
    return PingResponse(
        message="pong",
        status="ok",
        service=global_config.service_name,
        mock_mode=global_config.use_mock_mode,
        timestamp=datetime.now().isoformat(),
    )
