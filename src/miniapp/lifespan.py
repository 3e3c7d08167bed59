"""
Application lifecycle management.

Handles startup and shutdown events for the FastAPI application.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from miniapp.config import Settings, ensure_credentials, get_settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Refuses to start without Discord credentials and prints the startup
    banner.

    Args:
        app: FastAPI application instance
    """
    settings: Settings = getattr(app.state, "settings", None) or get_settings()
    ensure_credentials(settings)

    logger.info("Discord Mini App Server")
    logger.info(f"   App:     {settings.app_name}")
    logger.info(f"   Server:  http://localhost:{settings.port}")
    logger.info(f"   Mode:    {settings.environment}")

    if not settings.is_production:
        logger.info("API Endpoints:")
        logger.info("   POST /api/token  - Exchange OAuth code for token")
        logger.info("   GET  /api/health - Health check")
        logger.info("   GET  /api/config - Get app configuration")

    yield

    logger.info("Shutting down Discord Mini App server...")
