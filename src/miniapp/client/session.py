"""
Session-scoped state of the embedded client.

One ActivitySession per client session owns the authentication state,
the access token and the authenticated user. Components receive the
session explicitly instead of sharing module-level variables.
"""

from dataclasses import dataclass, field
from enum import Enum

from miniapp.client.models import DiscordUser
from miniapp.core.logging import logger
from miniapp.domain.exceptions import InvalidTransitionError


class AuthState(str, Enum):
    """States of the authentication handshake."""

    IDLE = "idle"
    AWAITING_READY = "awaiting_ready"
    AWAITING_AUTHORIZATION = "awaiting_authorization"
    EXCHANGING_TOKEN = "exchanging_token"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


# Forward-only: each step either advances or fails
TRANSITIONS: dict[AuthState, frozenset[AuthState]] = {
    AuthState.IDLE: frozenset({AuthState.AWAITING_READY}),
    AuthState.AWAITING_READY: frozenset(
        {AuthState.AWAITING_AUTHORIZATION, AuthState.FAILED}
    ),
    AuthState.AWAITING_AUTHORIZATION: frozenset(
        {AuthState.EXCHANGING_TOKEN, AuthState.FAILED}
    ),
    AuthState.EXCHANGING_TOKEN: frozenset({AuthState.AUTHENTICATING, AuthState.FAILED}),
    AuthState.AUTHENTICATING: frozenset({AuthState.AUTHENTICATED, AuthState.FAILED}),
    AuthState.AUTHENTICATED: frozenset(),
    AuthState.FAILED: frozenset(),
}


@dataclass
class ActivitySession:
    """
    State owned by one client session.

    Attributes:
        state: Current authentication state
        access_token: Token returned by the exchange, kept in memory only
        user: Profile captured by the authenticate command
        error: Human-readable message of the failure, if any
        history: States visited, in order
    """

    state: AuthState = AuthState.IDLE
    access_token: str | None = field(default=None, repr=False)
    user: DiscordUser | None = None
    error: str | None = None
    history: list[AuthState] = field(default_factory=lambda: [AuthState.IDLE])

    @property
    def is_authenticated(self) -> bool:
        return self.state is AuthState.AUTHENTICATED

    @property
    def is_terminal(self) -> bool:
        return not TRANSITIONS[self.state]

    def transition(self, target: AuthState) -> None:
        """
        Move to the target state.

        Raises:
            InvalidTransitionError: If the state machine does not allow it
        """
        if target not in TRANSITIONS[self.state]:
            raise InvalidTransitionError(
                f"Cannot move from {self.state.value} to {target.value}"
            )

        logger.debug(f"Auth state: {self.state.value} -> {target.value}")
        self.state = target
        self.history.append(target)

    def fail(self, message: str) -> None:
        """Record a failure and move to FAILED."""
        self.error = message
        self.transition(AuthState.FAILED)
