"""Error response models."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Error body returned by every endpoint.

    Attributes:
        error: Human-readable error message.
        details: Additional context (provider payload, validation errors).

    Example:
        ```python
        ErrorResponse(
            error="Failed to exchange token with Discord",
            details={"error": "invalid_grant"},
        )
        ```
    """

    error: str = Field(
        ...,
        description="Human-readable error message",
        json_schema_extra={"example": "Authorization code is required"},
    )
    details: dict[str, Any] | None = Field(
        default=None,
        description="Additional error details",
        json_schema_extra={"example": {"error": "invalid_grant"}},
    )
