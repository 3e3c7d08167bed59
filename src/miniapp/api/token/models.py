"""Token exchange request and response models."""

from pydantic import BaseModel, ConfigDict, Field


class TokenRequest(BaseModel):
    """Authorization code forwarded by the embedded client."""

    code: str | None = Field(
        default=None, description="Authorization code from the authorize command"
    )


class TokenResponse(BaseModel):
    """
    Token exchange result.

    Carries the access token only; refresh token, scope and expiry from
    the provider response never leave the server.
    """

    model_config = ConfigDict(extra="forbid")

    access_token: str = Field(..., description="Discord access token")
