"""
Routes registration for the FastAPI application.

Centralizes all router registrations for clean application setup.
"""

from fastapi import FastAPI

from miniapp.api.config.router import router as config_router
from miniapp.api.health.router import router as health_router
from miniapp.api.token.router import router as token_router


def register_routes(app: FastAPI) -> None:
    """
    Register all API routers.

    Args:
        app: FastAPI application instance
    """
    app.include_router(health_router)
    app.include_router(token_router)
    app.include_router(config_router)
