"""
Health check endpoint.
"""

from fastapi import APIRouter

from miniapp.api.health.models import HealthResponse
from miniapp.di import SettingsDep
from miniapp.middleware import utc_timestamp

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: SettingsDep) -> HealthResponse:
    """
    Health check endpoint.

    Returns:
        Service status, app name and current server time
    """
    return HealthResponse(
        status="ok", app=settings.app_name, timestamp=utc_timestamp()
    )
