"""
Discord CDN URL builders.

Pure string functions: no network calls and no validation beyond
presence checks.
"""

CDN_BASE_URL = "https://cdn.discordapp.com"
DEFAULT_IMAGE_SIZE = 128
DEFAULT_AVATAR_COUNT = 5


def get_default_avatar_index(user_id: str | int) -> int:
    """
    Index of the default avatar for a user without one.

    Snowflake IDs exceed 2**53, so the modulo is taken on the exact integer
    value, never on a float.
    """
    return int(user_id) % DEFAULT_AVATAR_COUNT


def get_user_avatar_url(
    user_id: str, avatar_hash: str | None, size: int = DEFAULT_IMAGE_SIZE
) -> str:
    """
    Build the CDN URL of a user avatar.

    Default avatars are fixed-size PNGs and take no size parameter.
    """
    if not avatar_hash:
        index = get_default_avatar_index(user_id)
        return f"{CDN_BASE_URL}/embed/avatars/{index}.png"
    return f"{CDN_BASE_URL}/avatars/{user_id}/{avatar_hash}.webp?size={size}"


def get_guild_icon_url(
    guild_id: str, icon_hash: str, size: int = DEFAULT_IMAGE_SIZE
) -> str:
    """Build the CDN URL of a guild icon. Guilds have no default icon."""
    return f"{CDN_BASE_URL}/icons/{guild_id}/{icon_hash}.webp?size={size}"
