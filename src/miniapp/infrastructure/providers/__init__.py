"""Identity provider clients."""

from miniapp.infrastructure.providers.discord import DiscordOAuthService

__all__ = ["DiscordOAuthService"]
