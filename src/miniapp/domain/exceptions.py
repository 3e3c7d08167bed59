"""Domain exceptions shared by the server, the embedded client and the CLI."""

from typing import Any


class MiniAppError(Exception):
    """Base class for framework errors."""


class ConfigurationError(MiniAppError):
    """Required configuration is missing or invalid."""

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing = missing or []


class OAuthProviderError(MiniAppError):
    """
    The identity provider rejected a token exchange.

    Attributes:
        status_code: HTTP status returned by the provider
        payload: Parsed error body, or an empty dict when it was not JSON
    """

    def __init__(self, status_code: int, payload: dict[str, Any]) -> None:
        super().__init__(f"Provider responded with status {status_code}")
        self.status_code = status_code
        self.payload = payload


class InvalidTransitionError(MiniAppError):
    """An authentication state change that the state machine does not allow."""


class AuthenticationError(MiniAppError):
    """
    The client authentication sequence failed.

    Attributes:
        step: State in which the failure happened
    """

    def __init__(self, message: str, step: str | None = None) -> None:
        super().__init__(message)
        self.step = step


class ProjectExistsError(MiniAppError):
    """Target project directory already exists."""
