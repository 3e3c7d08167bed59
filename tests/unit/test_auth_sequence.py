"""
Unit tests for the client authentication sequence.

The SDK is a fake recording its calls; the token-exchange server is mocked
with httpx.MockTransport.
"""

import json
from unittest.mock import patch

import httpx
import pytest

from miniapp.client.auth import (
    AUTHENTICATE_FAILED_MESSAGE,
    AUTHORIZE_FAILED_MESSAGE,
    EXCHANGE_FAILED_MESSAGE,
    READY_FAILED_MESSAGE,
    AuthenticationSequence,
)
from miniapp.client.sdk import EmbeddedAppSDK
from miniapp.client.session import ActivitySession, AuthState
from miniapp.domain.exceptions import AuthenticationError, InvalidTransitionError

CLIENT_ID = "123456789012345678"
USER = {
    "id": "80351110224678912",
    "username": "nelly",
    "discriminator": "0",
    "avatar": None,
    "global_name": "Nelly",
}


class FakeSDK:
    """Records commands and answers with canned results."""

    def __init__(
        self,
        ready_error=None,
        authorize_result=None,
        authenticate_result=None,
        channel=None,
    ):
        self.channel_id = "channel-1"
        self.guild_id = "guild-1"
        self.calls = []
        self.ready_error = ready_error
        self.authorize_result = (
            {"code": "auth-code"} if authorize_result is None else authorize_result
        )
        self.authenticate_result = (
            {"user": USER, "access_token": "access-token"}
            if authenticate_result is None
            else authenticate_result
        )
        self.channel = channel or {"id": "channel-1", "name": "General"}

    async def ready(self):
        self.calls.append(("ready", {}))
        if self.ready_error:
            raise self.ready_error

    async def authorize(self, **kwargs):
        self.calls.append(("authorize", kwargs))
        if isinstance(self.authorize_result, Exception):
            raise self.authorize_result
        return self.authorize_result

    async def authenticate(self, **kwargs):
        self.calls.append(("authenticate", kwargs))
        return self.authenticate_result

    async def get_channel(self, **kwargs):
        self.calls.append(("get_channel", kwargs))
        return self.channel

    @property
    def command_names(self):
        return [name for name, _ in self.calls]


def token_server(status_code=200, body=None, seen=None):
    """HTTP client whose /api/token answers with status_code and body."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(
            status_code,
            json={"access_token": "access-token"} if body is None else body,
        )

    return httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://testserver"
    )


def test_fake_sdk_satisfies_protocol():
    """Test the fake implements the SDK interface."""
    assert isinstance(FakeSDK(), EmbeddedAppSDK)


@pytest.mark.asyncio
async def test_successful_sequence():
    """Test the four steps run in order and populate the session."""
    # Arrange
    sdk = FakeSDK()
    session = ActivitySession()
    requests = []

    # Act
    async with token_server(seen=requests) as http_client:
        token = await AuthenticationSequence(sdk, session, http_client, CLIENT_ID).run()

    # Assert
    assert token == "access-token"
    assert sdk.command_names == ["ready", "authorize", "authenticate"]
    assert session.is_authenticated
    assert session.access_token == "access-token"
    assert session.user.id == USER["id"]
    assert session.history == [
        AuthState.IDLE,
        AuthState.AWAITING_READY,
        AuthState.AWAITING_AUTHORIZATION,
        AuthState.EXCHANGING_TOKEN,
        AuthState.AUTHENTICATING,
        AuthState.AUTHENTICATED,
    ]
    assert requests[0].url.path == "/api/token"
    assert json.loads(requests[0].content) == {"code": "auth-code"}


@pytest.mark.asyncio
async def test_authorize_arguments():
    """Test authorize is called with the client ID, code flow and scopes."""
    sdk = FakeSDK()

    async with token_server() as http_client:
        await AuthenticationSequence(sdk, ActivitySession(), http_client, CLIENT_ID).run()

    _, kwargs = sdk.calls[1]
    assert kwargs == {
        "client_id": CLIENT_ID,
        "response_type": "code",
        "state": "",
        "prompt": "none",
        "scope": ["identify", "guilds", "rpc.voice.read"],
    }


@pytest.mark.asyncio
async def test_authenticate_uses_exchanged_token():
    """Test the token from the server is passed to authenticate."""
    sdk = FakeSDK()

    async with token_server(body={"access_token": "from-server"}) as http_client:
        await AuthenticationSequence(sdk, ActivitySession(), http_client, CLIENT_ID).run()

    assert sdk.calls[-1] == ("authenticate", {"access_token": "from-server"})


# ===========================
# Failure Tests
# ===========================


@pytest.mark.asyncio
async def test_ready_failure_stops_sequence():
    """Test a readiness failure aborts before authorize."""
    sdk = FakeSDK(ready_error=RuntimeError("iframe detached"))
    session = ActivitySession()

    async with token_server() as http_client:
        with pytest.raises(AuthenticationError) as exc_info:
            await AuthenticationSequence(sdk, session, http_client, CLIENT_ID).run()

    assert str(exc_info.value) == READY_FAILED_MESSAGE
    assert exc_info.value.step == AuthState.AWAITING_READY.value
    assert sdk.command_names == ["ready"]
    assert session.state is AuthState.FAILED


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "authorize_result",
    [RuntimeError("user closed the dialog"), {}, {"code": ""}],
    ids=["raises", "no-code", "empty-code"],
)
async def test_authorize_failure_skips_exchange(authorize_result):
    """Test a failed authorization never contacts the server."""
    sdk = FakeSDK(authorize_result=authorize_result)
    session = ActivitySession()
    requests = []

    async with token_server(seen=requests) as http_client:
        with pytest.raises(AuthenticationError) as exc_info:
            await AuthenticationSequence(sdk, session, http_client, CLIENT_ID).run()

    assert str(exc_info.value) == AUTHORIZE_FAILED_MESSAGE
    assert requests == []
    assert "authenticate" not in sdk.command_names
    assert session.error == AUTHORIZE_FAILED_MESSAGE


@pytest.mark.asyncio
async def test_exchange_failure_skips_authenticate():
    """Test a non-success token response stops before authenticate."""
    sdk = FakeSDK()
    session = ActivitySession()

    async with token_server(status_code=401, body={"error": "x"}) as http_client:
        with pytest.raises(AuthenticationError) as exc_info:
            await AuthenticationSequence(sdk, session, http_client, CLIENT_ID).run()

    assert str(exc_info.value) == f"{EXCHANGE_FAILED_MESSAGE} (HTTP 401)"
    assert exc_info.value.step == AuthState.EXCHANGING_TOKEN.value
    assert "authenticate" not in sdk.command_names
    assert session.access_token is None
    assert session.state is AuthState.FAILED


@pytest.mark.asyncio
async def test_exchange_without_token_fails():
    """Test a success response without access_token is a failure."""
    sdk = FakeSDK()
    session = ActivitySession()

    async with token_server(body={}) as http_client:
        with pytest.raises(AuthenticationError) as exc_info:
            await AuthenticationSequence(sdk, session, http_client, CLIENT_ID).run()

    assert str(exc_info.value) == EXCHANGE_FAILED_MESSAGE


@pytest.mark.asyncio
async def test_exchange_network_error_fails():
    """Test a transport error during the exchange fails the session."""

    def handler(request):
        raise httpx.ConnectError("unreachable")

    session = ActivitySession()
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://testserver"
    ) as http_client:
        with pytest.raises(AuthenticationError) as exc_info:
            await AuthenticationSequence(FakeSDK(), session, http_client, CLIENT_ID).run()

    assert str(exc_info.value) == EXCHANGE_FAILED_MESSAGE
    assert session.state is AuthState.FAILED


@pytest.mark.asyncio
async def test_falsy_authenticate_result_fails():
    """Test an empty authenticate result is treated as a failure."""
    sdk = FakeSDK(authenticate_result={})
    session = ActivitySession()

    async with token_server() as http_client:
        with pytest.raises(AuthenticationError) as exc_info:
            await AuthenticationSequence(sdk, session, http_client, CLIENT_ID).run()

    assert str(exc_info.value) == AUTHENTICATE_FAILED_MESSAGE
    assert session.user is None
    assert not session.is_authenticated


@pytest.mark.asyncio
async def test_sequence_runs_once_per_session():
    """Test a session that already ran cannot be reused."""
    session = ActivitySession()

    async with token_server() as http_client:
        await AuthenticationSequence(FakeSDK(), session, http_client, CLIENT_ID).run()

        with pytest.raises(InvalidTransitionError):
            await AuthenticationSequence(FakeSDK(), session, http_client, CLIENT_ID).run()


@pytest.mark.asyncio
async def test_denied_authorization_is_logged():
    """Test a denial raised by a step leaves a log line naming the step."""
    # Arrange
    sdk = FakeSDK(authorize_result={})
    session = ActivitySession()

    # Act
    async with token_server() as http_client:
        with patch("miniapp.client.auth.logger") as mock_logger:
            with pytest.raises(AuthenticationError):
                await AuthenticationSequence(sdk, session, http_client, CLIENT_ID).run()

    # Assert
    messages = [c.args[0] for c in mock_logger.error.call_args_list]
    assert any(
        AuthState.AWAITING_AUTHORIZATION.value in m and AUTHORIZE_FAILED_MESSAGE in m
        for m in messages
    )
