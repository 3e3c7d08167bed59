"""
Activity controller.

Ties the authentication sequence, the Discord helpers and the UI together.
The UI is any object implementing ActivityView; the controller only decides
what to show.
"""

from typing import Any, Protocol

import httpx

from miniapp.client.auth import AuthenticationSequence
from miniapp.client.cdn import get_guild_icon_url, get_user_avatar_url
from miniapp.client.discord_api import DiscordAPIClient
from miniapp.client.models import DiscordGuild
from miniapp.client.sdk import EmbeddedAppSDK
from miniapp.client.session import ActivitySession
from miniapp.core.logging import logger
from miniapp.domain.exceptions import MiniAppError

CONNECT_FAILED_MESSAGE = "Failed to connect to Discord. Please try again."


class ActivityView(Protocol):
    """UI surface of the activity."""

    def show_content(self) -> None: ...

    def show_error(self, message: str) -> None: ...

    def show_output(self, data: Any) -> None: ...

    def set_user(self, name: str, avatar_url: str) -> None: ...

    def set_channel_name(self, name: str) -> None: ...

    def set_guild(self, name: str, icon_url: str | None) -> None: ...


class Activity:
    """
    One running activity: session, SDK bridge, HTTP client and view.

    Args:
        sdk: Embedded SDK bridge
        view: UI surface
        http_client: Client whose base URL is the token-exchange server
        client_id: Discord application client ID
        session: Session state, a fresh one by default
    """

    def __init__(
        self,
        sdk: EmbeddedAppSDK,
        view: ActivityView,
        http_client: httpx.AsyncClient,
        client_id: str,
        session: ActivitySession | None = None,
    ) -> None:
        self.sdk = sdk
        self.view = view
        self.http_client = http_client
        self.client_id = client_id
        self.session = session or ActivitySession()

    async def start(self) -> bool:
        """
        Authenticate, then fill the view.

        A failed handshake shows the error panel and never the content; a
        failure while filling the view replaces the content with the panel.

        Returns:
            True when the activity is authenticated and displayed
        """
        sequence = AuthenticationSequence(
            self.sdk, self.session, self.http_client, self.client_id
        )
        try:
            await sequence.run()
        except MiniAppError as e:
            logger.error(f"Failed to initialize Discord Mini App: {e}")
            self.view.show_error(str(e) or CONNECT_FAILED_MESSAGE)
            return False

        self.view.show_content()
        try:
            self.update_user_info()
            await self.update_channel_info()
            await self.update_guild_info()
        except Exception as e:
            logger.exception(f"Failed to initialize Discord Mini App: {e}")
            self.view.show_error(CONNECT_FAILED_MESSAGE)
            return False

        logger.info(
            f"Discord Mini App initialized (guild={self.sdk.guild_id}, "
            f"channel={self.sdk.channel_id})"
        )
        return True

    # ------------------------------------------------------------------
    # Discord helpers
    # ------------------------------------------------------------------

    async def get_voice_channel_info(self) -> dict[str, Any] | None:
        """Current voice channel, or None outside a voice channel or on failure."""
        if not self.sdk.channel_id:
            logger.info("Not in a voice channel")
            return None

        try:
            return await self.sdk.get_channel(channel_id=self.sdk.channel_id)
        except Exception as e:
            logger.error(f"Failed to get channel info: {e}")
            return None

    async def get_guild_info(self) -> DiscordGuild | None:
        """Guild the activity runs in, looked up among the user's guilds."""
        if not self.session.access_token or not self.sdk.guild_id:
            return None

        api = DiscordAPIClient(self.session.access_token)
        try:
            guilds = await api.get_current_user_guilds()
        except (httpx.HTTPError, ValueError) as e:
            # ValueError covers non-JSON bodies and items DiscordGuild rejects
            logger.error(f"Failed to get guild info: {type(e).__name__}: {e}")
            return None

        return next((g for g in guilds if g.id == self.sdk.guild_id), None)

    # ------------------------------------------------------------------
    # View updates
    # ------------------------------------------------------------------

    def update_user_info(self) -> None:
        user = self.session.user
        if user is None:
            return
        self.view.set_user(user.display_name, get_user_avatar_url(user.id, user.avatar))

    async def update_channel_info(self) -> None:
        channel = await self.get_voice_channel_info()
        if channel:
            self.view.set_channel_name(f"# {channel.get('name')}")

    async def update_guild_info(self) -> None:
        guild = await self.get_guild_info()
        if guild is None:
            return
        icon_url = get_guild_icon_url(guild.id, guild.icon) if guild.icon else None
        self.view.set_guild(guild.name, icon_url)

    # ------------------------------------------------------------------
    # Button handlers
    # ------------------------------------------------------------------

    async def show_voice_info(self) -> None:
        self.view.show_output(await self.get_voice_channel_info())

    async def show_participants(self) -> None:
        if not self.sdk.channel_id:
            self.view.show_output({"error": "Not in a voice channel"})
            return

        channel = await self.get_voice_channel_info()
        if channel and "voice_states" in channel:
            self.view.show_output(
                {
                    "channel": channel.get("name"),
                    "participants": channel["voice_states"],
                }
            )
        else:
            self.view.show_output({"message": "No voice state information available"})
