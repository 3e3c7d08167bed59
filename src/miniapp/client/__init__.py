"""
Embedded client library.

Drives the Embedded SDK authentication handshake, keeps session-scoped
state and builds Discord CDN URLs.
"""

from miniapp.client.activity import Activity, ActivityView
from miniapp.client.auth import AuthenticationSequence
from miniapp.client.cdn import (
    get_default_avatar_index,
    get_guild_icon_url,
    get_user_avatar_url,
)
from miniapp.client.models import DiscordGuild, DiscordUser
from miniapp.client.sdk import EmbeddedAppSDK
from miniapp.client.session import ActivitySession, AuthState

__all__ = [
    "Activity",
    "ActivitySession",
    "ActivityView",
    "AuthState",
    "AuthenticationSequence",
    "DiscordGuild",
    "DiscordUser",
    "EmbeddedAppSDK",
    "get_default_avatar_index",
    "get_guild_icon_url",
    "get_user_avatar_url",
]
