"""Discord objects used by the embedded client."""

from pydantic import BaseModel, ConfigDict, Field


class DiscordUser(BaseModel):
    """User profile returned by the authenticate command."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Snowflake user ID")
    username: str
    discriminator: str = "0"
    avatar: str | None = None
    global_name: str | None = None

    @property
    def display_name(self) -> str:
        """Global display name, falling back to the username."""
        return self.global_name or self.username


class DiscordGuild(BaseModel):
    """Partial guild object from /users/@me/guilds."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    icon: str | None = None
