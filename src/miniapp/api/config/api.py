"""
Configuration API endpoint.

Exposes the public subset of the server configuration to the client.
"""

from fastapi import APIRouter

from miniapp.api.config.models import PublicConfig
from miniapp.di import SettingsDep

router = APIRouter()


@router.get("/config", response_model=PublicConfig)
async def get_config(settings: SettingsDep) -> PublicConfig:
    """
    Get application configuration (non-sensitive).

    Args:
        settings: Application settings (injected).

    Returns:
        PublicConfig: App name and client ID.
    """
    return PublicConfig(app_name=settings.app_name, client_id=settings.client_id)
