"""
Server configuration.

Settings are read by pydantic-settings from the process environment, then
from the .env file written by ``miniapp wizard`` / ``miniapp setup``, then
from the defaults below. Field names are snake_case; the variables are
their upper-case form (client_port <- CLIENT_PORT).

CLIENT_ID may also be given as VITE_CLIENT_ID and ENVIRONMENT as NODE_ENV,
so .env files shared with a Vite client keep working.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from miniapp.domain.exceptions import ConfigurationError
from miniapp.infrastructure.providers.discord import DISCORD_TOKEN_URL

REQUIRED_CREDENTIALS: dict[str, str] = {
    "client_id": "CLIENT_ID",
    "client_secret": "CLIENT_SECRET",
}


class Settings(BaseSettings):
    """
    Discord credentials, server and logging options.

    Credentials default to empty strings so the CLI can load settings before
    a .env exists; ensure_credentials() guards everything that needs them.

    Example .env:
        CLIENT_ID=123456789012345678
        CLIENT_SECRET=...
        APP_NAME="My Discord Mini App"
        PORT=3001
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # .env files also hold client-only variables
        populate_by_name=True,
    )

    # ============================================================================
    # DISCORD APPLICATION
    # ============================================================================
    client_id: str = Field(
        default="",
        validation_alias=AliasChoices("client_id", "vite_client_id"),
        description="Discord application client ID (public)",
    )
    client_secret: str = Field(
        default="",
        repr=False,
        description="Discord application client secret (never sent to clients)",
    )
    app_name: str = Field(default="Discord Mini App", description="Display name")

    discord_token_url: str = Field(
        default=DISCORD_TOKEN_URL,
        description="Discord OAuth2 token endpoint",
    )

    # ============================================================================
    # SERVER SETTINGS
    # ============================================================================
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3001, description="Server port")
    client_port: int = Field(
        default=3000, description="Client dev server port (CORS origin)"
    )
    environment: Literal["development", "production", "test"] = Field(
        default="development",
        validation_alias=AliasChoices("environment", "node_env"),
        description="Environment mode",
    )
    client_dist_dir: str = Field(
        default="./client/dist",
        description="Directory with the built client, served in production",
    )

    # ============================================================================
    # LOGGING SETTINGS
    # ============================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(
        default="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | trace_id={extra[trace_id]} | {name}:{function}:{line} - {message}",  # noqa: E501
        description="Log format",
    )
    logger_enqueue: bool = Field(
        default=False, description="Write logs through loguru's queue"
    )

    # ============================================================================
    # HELPER METHODS
    # ============================================================================

    @property
    def is_production(self) -> bool:
        """Whether the server runs in production mode."""
        return self.environment == "production"

    def get_allowed_origins(self) -> list[str]:
        """
        CORS origins: the local client dev server, or none in production
        where the built client is served from the same origin.
        """
        if self.is_production:
            return []
        return [f"http://localhost:{self.client_port}"]

    def get_client_dist_path(self) -> Path:
        """Resolved path of the built client directory."""
        return Path(self.client_dist_dir).resolve()

    def missing_credentials(self) -> list[str]:
        """
        List the required credential variables that are not set.

        Returns:
            list[str]: Environment variable names, empty when complete.
        """
        return [
            env_name
            for field_name, env_name in REQUIRED_CREDENTIALS.items()
            if not getattr(self, field_name)
        ]


def ensure_credentials(settings: Settings) -> None:
    """
    Refuse to continue without Discord credentials.

    Args:
        settings: Application settings

    Raises:
        ConfigurationError: If CLIENT_ID or CLIENT_SECRET is missing.
    """
    missing = settings.missing_credentials()
    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(missing)}",
            missing=missing,
        )


@lru_cache
def get_settings() -> Settings:
    """
    Settings from the environment and ./.env, read once per process.

    create_app() overrides this dependency with its own Settings; tests that
    change the environment call get_settings.cache_clear().
    """
    return Settings()


# Global instance for modules configured at import time (logging)
settings = get_settings()
