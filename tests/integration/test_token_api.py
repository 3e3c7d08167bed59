"""Integration tests for the OAuth token exchange endpoint."""

from urllib.parse import parse_qs

import httpx
import pytest
import respx
from fastapi import status
from fastapi.testclient import TestClient

from miniapp.application import create_app

DISCORD_TOKEN_URL = "https://discord.com/api/oauth2/token"


@pytest.fixture
def client(test_settings):
    """Create test client."""
    return TestClient(create_app(test_settings))


@pytest.fixture
def production_client(production_settings):
    """Create test client in production mode."""
    return TestClient(create_app(production_settings))


# ===========================
# Validation Tests
# ===========================


@respx.mock(assert_all_called=False)
@pytest.mark.parametrize(
    "kwargs",
    [
        {"json": {}},
        {"json": {"code": ""}},
        {"json": {"code": None}},
        {},
    ],
    ids=["empty-object", "empty-code", "null-code", "no-body"],
)
def test_missing_code_is_rejected_without_calling_discord(client, kwargs):
    """Test a missing or empty code returns 400 and makes no outbound request."""
    # Arrange
    route = respx.post(DISCORD_TOKEN_URL).mock(
        return_value=httpx.Response(200, json={"access_token": "never"})
    )

    # Act
    response = client.post("/api/token", **kwargs)

    # Assert
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "Authorization code is required"}
    assert not route.called


def test_malformed_body_returns_400(client):
    """Test a body that is not JSON is a client error."""
    response = client.post(
        "/api/token",
        content=b"code=abc",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "Invalid request body"


# ===========================
# Successful Exchange Tests
# ===========================


@respx.mock
def test_exchange_returns_only_access_token(client):
    """Test a successful exchange returns the access token and nothing else."""
    # Arrange
    respx.post(DISCORD_TOKEN_URL).mock(
        return_value=httpx.Response(
            200,
            json={
                "access_token": "discord-access-token",
                "token_type": "Bearer",
                "expires_in": 604800,
                "refresh_token": "discord-refresh-token",
                "scope": "identify guilds rpc.voice.read",
            },
        )
    )

    # Act
    response = client.post("/api/token", json={"code": "auth-code-123"})

    # Assert
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"access_token": "discord-access-token"}


@respx.mock
def test_exchange_sends_form_encoded_credentials(client, test_settings):
    """Test the request to Discord carries the credentials as a form body."""
    # Arrange
    route = respx.post(DISCORD_TOKEN_URL).mock(
        return_value=httpx.Response(200, json={"access_token": "token"})
    )

    # Act
    client.post("/api/token", json={"code": "auth-code-123"})

    # Assert
    assert route.call_count == 1
    request = route.calls.last.request
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    form = parse_qs(request.content.decode())
    assert form == {
        "client_id": [test_settings.client_id],
        "client_secret": [test_settings.client_secret],
        "grant_type": ["authorization_code"],
        "code": ["auth-code-123"],
    }


@respx.mock
def test_client_secret_never_returned(client, test_settings):
    """Test the client secret does not appear in any response."""
    respx.post(DISCORD_TOKEN_URL).mock(
        return_value=httpx.Response(401, json={"error": "invalid_client"})
    )

    response = client.post("/api/token", json={"code": "auth-code-123"})

    assert test_settings.client_secret not in response.text


# ===========================
# Provider Rejection Tests
# ===========================


@respx.mock
@pytest.mark.parametrize("provider_status", [400, 401, 429])
def test_provider_status_is_forwarded(client, provider_status):
    """Test Discord's status code and error body are passed through."""
    # Arrange
    payload = {"error": "invalid_grant", "error_description": "Invalid code"}
    respx.post(DISCORD_TOKEN_URL).mock(
        return_value=httpx.Response(provider_status, json=payload)
    )

    # Act
    response = client.post("/api/token", json={"code": "expired-code"})

    # Assert
    assert response.status_code == provider_status
    assert response.json() == {
        "error": "Failed to exchange token with Discord",
        "details": payload,
    }


@respx.mock
def test_provider_non_json_error_has_empty_details(client):
    """Test an unparseable error body becomes empty details."""
    respx.post(DISCORD_TOKEN_URL).mock(
        return_value=httpx.Response(502, text="<html>Bad Gateway</html>")
    )

    response = client.post("/api/token", json={"code": "auth-code-123"})

    assert response.status_code == status.HTTP_502_BAD_GATEWAY
    assert response.json() == {
        "error": "Failed to exchange token with Discord",
        "details": {},
    }


# ===========================
# Transport Failure Tests
# ===========================


@respx.mock
def test_transport_failure_returns_500_with_message(client):
    """Test a network failure returns 500 and exposes the message outside production."""
    # Arrange
    respx.post(DISCORD_TOKEN_URL).mock(
        side_effect=httpx.ConnectError("Connection refused")
    )

    # Act
    response = client.post("/api/token", json={"code": "auth-code-123"})

    # Assert
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {
        "error": "Internal server error during token exchange",
        "details": {"message": "Connection refused"},
    }


@respx.mock
def test_transport_failure_hides_message_in_production(production_client):
    """Test production omits the internal message."""
    respx.post(DISCORD_TOKEN_URL).mock(
        side_effect=httpx.ConnectError("Connection refused")
    )

    response = production_client.post("/api/token", json={"code": "auth-code-123"})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "Internal server error during token exchange"}


@respx.mock
def test_success_without_access_token_is_an_internal_error(client):
    """Test a 200 from Discord without an access token is treated as a failure."""
    respx.post(DISCORD_TOKEN_URL).mock(
        return_value=httpx.Response(200, json={"token_type": "Bearer"})
    )

    response = client.post("/api/token", json={"code": "auth-code-123"})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["error"] == "Internal server error during token exchange"
