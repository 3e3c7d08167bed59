"""
Client authentication sequence.

Runs the four-step handshake once per session, strictly in order:

1. wait for the SDK readiness signal
2. authorize command → authorization code
3. POST the code to the token-exchange server → access token
4. authenticate command → user profile

Every step goes through the session state machine. The first failure moves
the session to FAILED and aborts the remaining steps; nothing is retried.
"""

from typing import Any

import httpx

from miniapp.client.models import DiscordUser
from miniapp.client.sdk import AUTHORIZE_SCOPES, EmbeddedAppSDK
from miniapp.client.session import ActivitySession, AuthState
from miniapp.core.logging import logger
from miniapp.domain.exceptions import AuthenticationError

TOKEN_ENDPOINT = "/api/token"

READY_FAILED_MESSAGE = "Discord did not respond. Please reload the activity."
AUTHORIZE_FAILED_MESSAGE = "Authorization with Discord was denied or failed"
EXCHANGE_FAILED_MESSAGE = "Failed to exchange code for token"
AUTHENTICATE_FAILED_MESSAGE = "Failed to authenticate with Discord"


class AuthenticationSequence:
    """
    Drives one session through the authentication handshake.

    Args:
        sdk: Embedded SDK bridge
        session: Session receiving the token, user and state
        http_client: Client whose base URL is the token-exchange server
        client_id: Discord application client ID
        token_endpoint: Path of the token exchange endpoint
    """

    def __init__(
        self,
        sdk: EmbeddedAppSDK,
        session: ActivitySession,
        http_client: httpx.AsyncClient,
        client_id: str,
        token_endpoint: str = TOKEN_ENDPOINT,
    ) -> None:
        self.sdk = sdk
        self.session = session
        self.http_client = http_client
        self.client_id = client_id
        self.token_endpoint = token_endpoint

    async def run(self) -> str:
        """
        Run the handshake.

        Returns:
            The access token

        Raises:
            AuthenticationError: On the first failing step
            InvalidTransitionError: If the session already ran a sequence
        """
        self.session.transition(AuthState.AWAITING_READY)
        await self._step(self._wait_ready(), READY_FAILED_MESSAGE)
        logger.info("Discord SDK is ready")

        self.session.transition(AuthState.AWAITING_AUTHORIZATION)
        code = await self._step(self._authorize(), AUTHORIZE_FAILED_MESSAGE)

        self.session.transition(AuthState.EXCHANGING_TOKEN)
        access_token = await self._step(
            self._exchange_code(code), EXCHANGE_FAILED_MESSAGE
        )
        self.session.access_token = access_token

        self.session.transition(AuthState.AUTHENTICATING)
        user = await self._step(
            self._authenticate(access_token), AUTHENTICATE_FAILED_MESSAGE
        )
        self.session.user = user

        self.session.transition(AuthState.AUTHENTICATED)
        logger.info("Authenticated successfully")
        return access_token

    async def _step(self, awaitable: Any, message: str) -> Any:
        step = self.session.state.value
        try:
            return await awaitable
        except AuthenticationError as e:
            logger.error(f"Authentication step {step} failed: {e}")
            self.session.fail(str(e))
            raise AuthenticationError(str(e), step=step) from e
        except Exception as e:
            logger.error(f"Authentication step {step} failed: {type(e).__name__}: {e}")
            self.session.fail(message)
            raise AuthenticationError(message, step=step) from e

    async def _wait_ready(self) -> None:
        await self.sdk.ready()

    async def _authorize(self) -> str:
        result = await self.sdk.authorize(
            client_id=self.client_id,
            response_type="code",
            state="",
            prompt="none",
            scope=list(AUTHORIZE_SCOPES),
        )
        code = (result or {}).get("code")
        if not code:
            raise AuthenticationError(AUTHORIZE_FAILED_MESSAGE)
        return code

    async def _exchange_code(self, code: str) -> str:
        response = await self.http_client.post(
            self.token_endpoint, json={"code": code}
        )
        if not response.is_success:
            raise AuthenticationError(
                f"{EXCHANGE_FAILED_MESSAGE} (HTTP {response.status_code})"
            )

        access_token = response.json().get("access_token")
        if not access_token:
            raise AuthenticationError(EXCHANGE_FAILED_MESSAGE)
        return access_token

    async def _authenticate(self, access_token: str) -> DiscordUser:
        auth = await self.sdk.authenticate(access_token=access_token)
        if not auth:
            raise AuthenticationError(AUTHENTICATE_FAILED_MESSAGE)
        return DiscordUser.model_validate(auth["user"])
