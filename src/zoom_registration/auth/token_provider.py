"""
OAuth access token acquisition for Zoom Server-to-Server apps.

Exchanges an account's client credentials for a short-lived bearer token.
A fresh exchange happens on every call: tokens are neither cached nor
refreshed, and a failed exchange is never retried.
"""
import logging
from typing import Any, Optional

import httpx

from ..console import mask_sensitive
from ..core.base_client import ProviderHttpClient
from ..errors import AuthenticationFailure
from ..types import AccountCredential
from .encoding import encode_client_credentials

logger = logging.getLogger(__name__)

DEFAULT_OAUTH_URL = "https://zoom.us/oauth/token"

GRANT_TYPE = "account_credentials"

AUTH_FAILURE_MESSAGE = "Failed to authenticate with Zoom API"


def _provider_message(data: Any) -> Optional[str]:
    """Pull the error text out of an OAuth error body."""
    if isinstance(data, dict):
        # Zoom uses {code, message}; OAuth errors use {error, reason}
        return data.get("message") or data.get("reason") or data.get("error")
    return None


class TokenProvider:
    """
    Client-credentials token exchange against the Zoom OAuth endpoint.

    Request shape:
        POST {oauth_url}?grant_type=account_credentials&account_id=<account_id>
        Authorization: Basic base64(client_id:client_secret)
    """

    def __init__(self, http_client: ProviderHttpClient, oauth_url: str = DEFAULT_OAUTH_URL):
        self._http = http_client
        self.oauth_url = oauth_url

    async def get_access_token(self, credential: AccountCredential) -> str:
        """
        Get a bearer token for the given account.

        Raises:
            AuthenticationFailure: transport error, non-2xx response, or a
                response without an access_token. Carries the upstream
                status code when there is one, otherwise 500.
        """
        logger.debug(
            f"TokenProvider.get_access_token: Exchanging credentials for "
            f"account={credential.name}, client_id={mask_sensitive(credential.client_id)}"
        )

        try:
            headers = encode_client_credentials(credential.client_id, credential.client_secret)
        except ValueError as e:
            logger.error(f"TokenProvider.get_access_token: Incomplete credentials for '{credential.name}': {e}")
            raise AuthenticationFailure(AUTH_FAILURE_MESSAGE) from e

        try:
            response = await self._http.post(
                self.oauth_url,
                headers=headers,
                query={"grant_type": GRANT_TYPE, "account_id": credential.account_id},
            )
        except httpx.HTTPError as e:
            logger.error(
                f"TokenProvider.get_access_token: Transport error for account "
                f"'{credential.name}': {type(e).__name__}: {e}"
            )
            raise AuthenticationFailure(AUTH_FAILURE_MESSAGE) from e

        if not response["ok"]:
            message = _provider_message(response["data"]) or AUTH_FAILURE_MESSAGE
            logger.error(
                f"TokenProvider.get_access_token: Token exchange rejected for account "
                f"'{credential.name}' status={response['status']} message={message}"
            )
            raise AuthenticationFailure(message, response["status"])

        data = response["data"]
        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            logger.error(
                f"TokenProvider.get_access_token: Response for account '{credential.name}' "
                f"has no access_token"
            )
            raise AuthenticationFailure(AUTH_FAILURE_MESSAGE)

        logger.debug(
            f"TokenProvider.get_access_token: Token acquired for account={credential.name}, "
            f"token={mask_sensitive(token)}"
        )
        return token
