"""
Structural interface of the Discord Embedded App SDK.

The SDK itself runs in the iframe host; any object exposing these members
(a bridge to the real SDK, or a fake in tests) can drive the client.
"""

from typing import Any, Protocol, runtime_checkable

AUTHORIZE_SCOPES: tuple[str, ...] = ("identify", "guilds", "rpc.voice.read")


@runtime_checkable
class EmbeddedAppSDK(Protocol):
    """Commands and context used by the authentication sequence and the UI."""

    channel_id: str | None
    guild_id: str | None

    async def ready(self) -> None:
        """Resolve once the hosting shell has attached the iframe."""
        ...

    async def authorize(
        self,
        *,
        client_id: str,
        response_type: str,
        state: str,
        prompt: str,
        scope: list[str],
    ) -> dict[str, Any]:
        """Ask the user to authorize the app; returns ``{"code": ...}``."""
        ...

    async def authenticate(self, *, access_token: str) -> dict[str, Any] | None:
        """Authenticate the SDK session; returns ``{"user": {...}, ...}``."""
        ...

    async def get_channel(self, *, channel_id: str) -> dict[str, Any]:
        """Fetch the channel the activity runs in."""
        ...
