"""
Shared fixtures for zoom_registration tests.
"""
import json
import logging

import pytest
from unittest.mock import AsyncMock, MagicMock

import httpx

from zoom_registration.auth.token_provider import TokenProvider
from zoom_registration.config import AccountTable
from zoom_registration.core.base_client import ProviderHttpClient
from zoom_registration.registration.client import RegistrationClient
from zoom_registration.types import AccountCredential, RegistrationRequest

logging.basicConfig(level=logging.DEBUG)

API_BASE_URL = "https://api.zoom.us/v2"
OAUTH_URL = "https://zoom.us/oauth/token"


@pytest.fixture
def primary_credential():
    """Credential for the default account."""
    return AccountCredential(
        name="primary",
        client_id="primary-client-id",
        client_secret="primary-client-secret",
        account_id="primary-account-id",
    )


@pytest.fixture
def secondary_credential():
    """Credential for a second account."""
    return AccountCredential(
        name="secondary",
        client_id="secondary-client-id",
        client_secret="secondary-client-secret",
        account_id="secondary-account-id",
    )


@pytest.fixture
def account_table(primary_credential, secondary_credential):
    """Two accounts, primary is the default."""
    return AccountTable(
        {"primary": primary_credential, "secondary": secondary_credential},
        default_name="primary",
    )


@pytest.fixture
def make_response():
    """Factory for mock httpx.Response objects."""

    def _make(status_code=200, body=None, reason_phrase="OK"):
        response = MagicMock()
        response.status_code = status_code
        response.reason_phrase = reason_phrase
        response.headers = {"content-type": "application/json"}
        if body is None:
            response.text = ""
        elif isinstance(body, str):
            response.text = body
        else:
            response.text = json.dumps(body)
        return response

    return _make


@pytest.fixture
def token_response(make_response):
    """Successful OAuth token response."""
    return make_response(200, {"access_token": "test-access-token", "token_type": "bearer", "expires_in": 3599})


@pytest.fixture
def mock_httpx_async_client():
    """Mock httpx.AsyncClient for testing."""
    client = AsyncMock(spec=httpx.AsyncClient)
    client.aclose = AsyncMock()
    client.request = AsyncMock()
    return client


@pytest.fixture
def http_client(mock_httpx_async_client):
    """ProviderHttpClient over the mock httpx client."""
    return ProviderHttpClient(API_BASE_URL, httpx_client=mock_httpx_async_client)


@pytest.fixture
def token_provider(http_client):
    return TokenProvider(http_client, oauth_url=OAUTH_URL)


@pytest.fixture
def registration_client(http_client, token_provider):
    return RegistrationClient(http_client, token_provider)


@pytest.fixture
def registrant():
    """A valid registrant."""
    return RegistrationRequest(email="a@x.com", first_name="Ann", last_name="Lee")


@pytest.fixture
def registrant_body():
    """Factory for provider registrant response bodies."""

    def _body(email, first_name="Ann", last_name="Lee", **extra):
        body = {
            "id": f"reg-{email}",
            "join_url": f"https://zoom.us/w/abcd1234?tk={email}",
            "registrant_id": f"reg-{email}",
            "topic": "Quarterly Review",
            "status": "approved",
            "email": email,
            "first_name": first_name,
            "last_name": last_name,
        }
        body.update(extra)
        return body

    return _body
