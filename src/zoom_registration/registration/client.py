"""
Single-registrant submission to the Zoom meeting/webinar registrants API.
"""
import logging
from typing import Tuple
from urllib.parse import quote

import httpx

from ..auth.encoding import encode_auth
from ..auth.token_provider import TokenProvider
from ..core.base_client import ProviderHttpClient
from ..errors import (
    ProviderError,
    RegistrationServiceError,
    UnexpectedFailure,
    ValidationError,
)
from ..types import (
    RESOURCE_KINDS,
    AccountCredential,
    RegistrationRequest,
    RegistrationResult,
    ResourceKind,
    ServiceEnvelope,
)

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://api.zoom.us/v2"

FAILURE_MESSAGES = {
    "meeting": "Failed to register participant",
    "webinar": "Failed to register webinar participant",
}


def failure_message(kind: ResourceKind) -> str:
    """Generic failure text for a resource kind."""
    return FAILURE_MESSAGES.get(kind, FAILURE_MESSAGES["meeting"])


def registrants_path(kind: ResourceKind, resource_id: str) -> str:
    """
    Provider path for creating registrants, e.g. /meetings/123/registrants.

    resource_id is percent-encoded as a single segment, so ".." or "?" cannot
    move the request off the registrants endpoint.
    """
    if kind not in RESOURCE_KINDS:
        raise ValidationError(f"Unsupported resource kind: {kind}")
    segment = quote(resource_id, safe='')
    if segment in (".", ".."):
        # quote leaves dots alone; dot segments would be collapsed by URL normalization
        segment = segment.replace(".", "%2E")
    return f"/{kind}s/{segment}/registrants"


class RegistrationClient:
    """
    Registers one person for a meeting or webinar.

    Every outcome comes back as a ServiceEnvelope:
    - 2xx: success with the parsed registrant and the upstream status
    - provider error: the provider's message and status, unchanged
    - token exchange failure: the auth error, no registration attempted
    - anything else: a generic message with status 500

    Required-field validation happens at the HTTP boundary; the request is
    assumed well formed here.
    """

    def __init__(self, http_client: ProviderHttpClient, token_provider: TokenProvider):
        self._http = http_client
        self._tokens = token_provider

    async def register(
        self,
        kind: ResourceKind,
        resource_id: str,
        request: RegistrationRequest,
        credential: AccountCredential,
    ) -> ServiceEnvelope[RegistrationResult]:
        """Submit one registrant using credential's account."""
        logger.info(
            f"RegistrationClient.register: Registering {request.email} for {kind} {resource_id} "
            f"(account={credential.name})"
        )
        try:
            result, status = await self._submit(kind, resource_id, request, credential)
        except RegistrationServiceError as e:
            logger.error(
                f"RegistrationClient.register: {type(e).__name__} for {kind} {resource_id}: "
                f"status={e.status_code} error={e.message}"
            )
            return e.to_envelope()
        except Exception:
            logger.exception(
                f"RegistrationClient.register: Unexpected error for {kind} {resource_id}"
            )
            return UnexpectedFailure(failure_message(kind)).to_envelope()

        logger.info(
            f"RegistrationClient.register: Registered {request.email} for {kind} {resource_id} "
            f"id={result.id} status={result.status}"
        )
        return ServiceEnvelope.ok(result, status)

    async def _submit(
        self,
        kind: ResourceKind,
        resource_id: str,
        request: RegistrationRequest,
        credential: AccountCredential,
    ) -> Tuple[RegistrationResult, int]:
        path = registrants_path(kind, resource_id)

        # Raises AuthenticationFailure; no registration request is made after it
        token = await self._tokens.get_access_token(credential)

        try:
            response = await self._http.post(
                path,
                headers=encode_auth("bearer", token=token),
                json=request.to_payload(),
            )
        except httpx.HTTPError as e:
            logger.error(
                f"RegistrationClient._submit: Transport error calling {path}: {type(e).__name__}: {e}"
            )
            raise UnexpectedFailure(failure_message(kind)) from e

        data = response["data"]
        if not response["ok"]:
            message = failure_message(kind)
            code = None
            if isinstance(data, dict):
                message = data.get("message") or message
                code = data.get("code")
            raise ProviderError(message, response["status"], code=code)

        try:
            result = RegistrationResult.from_dict(data)
        except ValueError as e:
            logger.error(f"RegistrationClient._submit: Malformed response from {path}: {e}")
            raise UnexpectedFailure(failure_message(kind)) from e

        return result, response["status"]
