"""
Configuration models for API responses.

Only non-sensitive configuration is ever modelled here.
"""

from pydantic import BaseModel, ConfigDict, Field


class PublicConfig(BaseModel):
    """
    Public application configuration for the embedded client.

    Example:
        {"appName": "My Discord Mini App", "clientId": "123456789012345678"}
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "appName": "My Discord Mini App",
                "clientId": "123456789012345678",
            }
        },
    )

    app_name: str = Field(alias="appName", description="Application display name")
    client_id: str = Field(alias="clientId", description="Discord client ID")
