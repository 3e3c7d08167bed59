"""Global exception handlers for standardized error responses.

Every error leaves the server as ``{"error": str, "details"?: object}``.
Internal exception messages are only exposed outside production.
"""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from miniapp.config import get_settings
from miniapp.core.logging import logger
from miniapp.domain.exceptions import OAuthProviderError
from miniapp.models.errors import ErrorResponse

PROVIDER_ERROR_MESSAGE = "Failed to exchange token with Discord"

_STATUS_MESSAGES: dict[int, str] = {
    404: "Not found",
    405: "Method not allowed",
}


def _error_response(
    status_code: int, body: ErrorResponse, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


async def http_exception_handler(  # noqa: ASYNC100
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle HTTPException, including unmatched routes.

    Note: FastAPI requires exception handlers to be async even if they don't
    perform async operations.

    Args:
        request: The FastAPI request object.
        exc: The HTTPException that was raised.

    Returns:
        JSONResponse with ErrorResponse body.
    """
    logger.warning(
        f"HTTPException: {exc.status_code} - {exc.detail} "
        f"({request.method} {request.url.path})"
    )

    message = _STATUS_MESSAGES.get(exc.status_code, str(exc.detail))

    return _error_response(
        exc.status_code,
        ErrorResponse(error=message),
        headers=getattr(exc, "headers", None),
    )


async def oauth_provider_exception_handler(  # noqa: ASYNC100
    request: Request, exc: OAuthProviderError
) -> JSONResponse:
    """Forward a provider rejection with the provider's own status code.

    Args:
        request: The FastAPI request object.
        exc: The rejection raised by the OAuth provider client.

    Returns:
        JSONResponse with the provider status and its error payload as details.
    """
    logger.error(
        f"Discord token exchange failed ({exc.status_code}): {exc.payload}"
    )

    return _error_response(
        exc.status_code,
        ErrorResponse(error=PROVIDER_ERROR_MESSAGE, details=exc.payload),
    )


async def general_exception_handler(  # noqa: ASYNC100
    request: Request, exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions with 500 Internal Server Error.

    Args:
        request: The FastAPI request object.
        exc: The exception that was raised.

    Returns:
        JSONResponse with ErrorResponse body.
    """
    logger.exception(
        f"Unhandled error: {type(exc).__name__} ({request.method} {request.url.path})"
    )

    settings = getattr(request.app.state, "settings", None) or get_settings()
    message = "Internal server error" if settings.is_production else str(exc)

    return _error_response(500, ErrorResponse(error=message))


async def validation_exception_handler(  # noqa: ASYNC100
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle malformed request bodies as client errors.

    Args:
        request: The FastAPI request object.
        exc: The RequestValidationError from Pydantic validation.

    Returns:
        400 JSONResponse listing the validation errors.
    """
    logger.warning(
        f"Validation error: {len(exc.errors())} errors "
        f"({request.method} {request.url.path})"
    )

    errors = [
        {
            "type": error["type"],
            "loc": [str(loc) for loc in error["loc"]],
            "msg": error["msg"],
        }
        for error in exc.errors()
    ]

    return _error_response(
        400,
        ErrorResponse(error="Invalid request body", details={"errors": errors}),
    )
