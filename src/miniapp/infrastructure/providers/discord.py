"""
OAuth service for Discord.

Confidential-client implementation of the authorization code exchange.
"""

from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict

from miniapp.domain.exceptions import OAuthProviderError

DISCORD_TOKEN_URL = "https://discord.com/api/oauth2/token"


class DiscordTokenPayload(BaseModel):
    """Fields of Discord's token response this server relies on."""

    model_config = ConfigDict(extra="ignore")

    access_token: str


class DiscordOAuthService:
    """
    OAuth 2.0 token exchange against Discord.

    The client secret only travels in the form body of the request to Discord.
    Only the access token is handed back to callers.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        token_url: str | None = None,
    ) -> None:
        """
        Initializes the OAuth service.

        Args:
            client_id: Discord application client ID
            client_secret: Discord application client secret
            token_url: Token endpoint override
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_url = token_url or DISCORD_TOKEN_URL

    @property
    def provider_name(self) -> str:
        """Provider identifier."""
        return "discord"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(client_id={self.client_id!r})"

    async def exchange_code_for_token(self, code: str) -> str:
        """
        Exchange an authorization code for an access token.

        Args:
            code: Authorization code obtained by the embedded client

        Returns:
            str: The access token. Refresh token, scope and expiry are dropped.

        Raises:
            OAuthProviderError: If Discord answers with a non-success status
            httpx.HTTPError: If the request itself fails
            pydantic.ValidationError: If a success body has no access token
        """
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "grant_type": "authorization_code",
            "code": code,
        }

        async with httpx.AsyncClient() as client:
            response = await client.post(
                self.token_url,
                data=data,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )

        if not response.is_success:
            raise OAuthProviderError(response.status_code, _error_payload(response))

        payload = DiscordTokenPayload.model_validate(response.json())
        return payload.access_token


def _error_payload(response: httpx.Response) -> dict[str, Any]:
    """Best-effort parse of an error body; anything but a JSON object becomes {}."""
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}
