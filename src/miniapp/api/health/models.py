"""Health check response models."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="ok", description="Service status")
    app: str = Field(..., description="Application display name")
    timestamp: str = Field(..., description="Server time (ISO-8601, UTC)")
