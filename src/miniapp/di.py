"""
Dependency injection for the token-exchange server.

Route handlers receive settings and the Discord OAuth client through these
Annotated aliases; create_app() overrides get_settings per instance.
"""

from typing import Annotated

from fastapi import Depends

from miniapp.config import Settings, get_settings
from miniapp.infrastructure.providers.discord import DiscordOAuthService

# ============================================================================
# Settings Dependencies
# ============================================================================

SettingsDep = Annotated[Settings, Depends(get_settings)]
"""Settings of the running app."""


# ============================================================================
# OAuth Service Dependencies
# ============================================================================


def get_discord_oauth_service(settings: SettingsDep) -> DiscordOAuthService:
    """Discord OAuth client bound to the configured credentials."""
    return DiscordOAuthService(
        client_id=settings.client_id,
        client_secret=settings.client_secret,
        token_url=settings.discord_token_url,
    )


DiscordOAuthServiceDep = Annotated[
    DiscordOAuthService, Depends(get_discord_oauth_service)
]
"""Injected DiscordOAuthService."""
