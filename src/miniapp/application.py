"""
FastAPI application factory.

Creates and configures the FastAPI application with all middleware,
routers, and exception handlers.
"""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from miniapp import __version__
from miniapp.app_setup import add_client_routes
from miniapp.config import Settings, get_settings
from miniapp.core.logging import logger
from miniapp.domain.exceptions import OAuthProviderError
from miniapp.exception_handlers import (
    general_exception_handler,
    http_exception_handler,
    oauth_provider_exception_handler,
    validation_exception_handler,
)
from miniapp.lifespan import lifespan
from miniapp.middleware import RequestLogMiddleware
from miniapp.routes import register_routes


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the cached environment settings

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()

    docs_url = None if settings.is_production else "/docs"

    app = FastAPI(
        title="Discord Mini App Server",
        description="OAuth2 token exchange for Discord Activities",
        version=__version__,
        lifespan=lifespan,
        docs_url=docs_url,
        redoc_url=None,
        openapi_url="/openapi.json" if docs_url else None,
    )
    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(OAuthProviderError, oauth_provider_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.add_middleware(RequestLogMiddleware, log_requests=not settings.is_production)

    # Production serves the client from the same origin
    if not settings.is_production:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.get_allowed_origins(),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_routes(app)

    if settings.is_production:
        add_client_routes(app, settings)

    logger.debug(f"FastAPI application created (v{__version__}, {settings.environment})")
    logger.debug(f"CORS origins: {settings.get_allowed_origins()}")

    return app
