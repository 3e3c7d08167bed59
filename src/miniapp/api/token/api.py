"""
OAuth2 token exchange endpoint.

Exchanges the authorization code obtained by the embedded client for an
access token, using the client secret held by the server.
"""

from typing import Annotated

from fastapi import APIRouter, Body, HTTPException, status
from fastapi.responses import JSONResponse

from miniapp.api.token.models import TokenRequest, TokenResponse
from miniapp.core.logging import logger
from miniapp.di import DiscordOAuthServiceDep, SettingsDep
from miniapp.domain.exceptions import OAuthProviderError
from miniapp.models import ErrorResponse

router = APIRouter()

CODE_REQUIRED_MESSAGE = "Authorization code is required"
EXCHANGE_FAILED_MESSAGE = "Internal server error during token exchange"


@router.post(
    "/token",
    response_model=TokenResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def exchange_token(
    settings: SettingsDep,
    service: DiscordOAuthServiceDep,
    request: Annotated[TokenRequest | None, Body()] = None,
) -> TokenResponse | JSONResponse:
    """
    Exchanges an authorization code for an access token.

    Provider rejections are raised as OAuthProviderError and answered by the
    registered handler with the provider's status code.

    Args:
        settings: Configuration
        service: Discord OAuth service
        request: Body with the authorization code

    Returns:
        The access token only
    """
    code = request.code if request else None
    if not code:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=CODE_REQUIRED_MESSAGE
        )

    try:
        access_token = await service.exchange_code_for_token(code)
    except OAuthProviderError:
        raise
    except Exception as e:
        logger.exception(f"Token exchange error: {type(e).__name__}")
        error = ErrorResponse(
            error=EXCHANGE_FAILED_MESSAGE,
            details=None if settings.is_production else {"message": str(e)},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error.model_dump(exclude_none=True),
        )

    logger.info("Exchanged authorization code for access token")
    return TokenResponse(access_token=access_token)
