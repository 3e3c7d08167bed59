"""
Discord REST API calls made directly from the client with the user's token.
"""

import httpx

from miniapp.client.models import DiscordGuild


class DiscordAPIClient:
    """
    Minimal Discord API client authenticated with a user access token.

    Args:
        access_token: Bearer token from the token exchange
    """

    API_BASE_URL = "https://discord.com/api/v10"

    def __init__(self, access_token: str) -> None:
        self.access_token = access_token

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}

    async def get_current_user_guilds(self) -> list[DiscordGuild]:
        """
        List the guilds of the authenticated user.

        Raises:
            httpx.HTTPStatusError: If Discord rejects the request
        """
        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{self.API_BASE_URL}/users/@me/guilds", headers=self.headers
            )

        response.raise_for_status()
        return [DiscordGuild.model_validate(guild) for guild in response.json()]
