"""
Main FastAPI application entry point.

    uvicorn miniapp.main:app

or through the CLI: ``miniapp serve``.
"""

import sys

import uvicorn

from miniapp.application import create_app
from miniapp.config import Settings, ensure_credentials, get_settings
from miniapp.core.logging import intercept_standard_logging, logger
from miniapp.domain.exceptions import ConfigurationError

# Intercept logs from uvicorn and other libraries
intercept_standard_logging()

app = create_app()


def run(settings: Settings | None = None, host: str | None = None, port: int | None = None) -> None:
    """
    Validate credentials and serve the application with uvicorn.

    Exits with status 1, after logging what to set, when CLIENT_ID or
    CLIENT_SECRET is missing.

    Args:
        settings: Settings override (defaults to the environment settings)
        host: Listen host override
        port: Listen port override
    """
    settings = settings or get_settings()
    try:
        ensure_credentials(settings)
    except ConfigurationError as e:
        logger.error(str(e))
        logger.error("Please run: miniapp wizard")
        sys.exit(1)

    uvicorn.run(
        create_app(settings),
        host=host or settings.host,
        port=port or settings.port,
        log_level="warning" if settings.is_production else "info",
        log_config=None,
    )


if __name__ == "__main__":
    run()
