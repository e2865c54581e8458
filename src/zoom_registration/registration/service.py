"""
Registration service facade used by the HTTP layer.

Resolves the requested account, then delegates to RegistrationClient (one
registrant) or BatchOrchestrator (many). Unknown accounts come back as a
400 envelope before any upstream call is made.
"""
import logging
from typing import Any, Dict, Optional, Sequence

from ..accounts import AccountResolver
from ..auth.token_provider import DEFAULT_OAUTH_URL, TokenProvider
from ..config import AccountTable
from ..core.base_client import ProviderHttpClient
from ..errors import UnknownAccountError
from ..types import (
    BatchReport,
    RegistrationRequest,
    RegistrationResult,
    ResourceKind,
    ServiceEnvelope,
)
from .batch import BatchOrchestrator
from .client import DEFAULT_API_BASE_URL, RegistrationClient

logger = logging.getLogger(__name__)


class RegistrationService:
    """Single and batch registration against a resolved Zoom account."""

    def __init__(
        self,
        resolver: AccountResolver,
        registration_client: RegistrationClient,
        batch_orchestrator: Optional[BatchOrchestrator] = None,
    ):
        self._resolver = resolver
        self._client = registration_client
        self._batch = batch_orchestrator or BatchOrchestrator(registration_client)

    async def register(
        self,
        kind: ResourceKind,
        resource_id: str,
        request: RegistrationRequest,
        account: Optional[str] = None,
    ) -> ServiceEnvelope[RegistrationResult]:
        """Register one person for a meeting or webinar."""
        try:
            credential = self._resolver.resolve(account)
        except UnknownAccountError as e:
            return e.to_envelope()
        return await self._client.register(kind, resource_id, request, credential)

    async def register_batch(
        self,
        kind: ResourceKind,
        resource_id: str,
        registrants: Sequence[RegistrationRequest],
        account: Optional[str] = None,
    ) -> ServiceEnvelope[BatchReport]:
        """Register many people, isolating failures per registrant."""
        try:
            credential = self._resolver.resolve(account)
        except UnknownAccountError as e:
            return e.to_envelope()
        return await self._batch.register_batch(kind, resource_id, registrants, credential)

    def accounts(self) -> Dict[str, Any]:
        """Configured account names and the default."""
        return {"accounts": self._resolver.names(), "default": self._resolver.default_name}


def create_registration_service(
    table: AccountTable,
    http_client: ProviderHttpClient,
    oauth_url: str = DEFAULT_OAUTH_URL,
) -> RegistrationService:
    """
    Wire resolver, token provider, client and orchestrator together.

    The http_client's base_url is the Zoom REST API base
    (DEFAULT_API_BASE_URL unless overridden); the OAuth endpoint is an
    absolute URL on a different host.
    """
    logger.debug(
        f"create_registration_service: base_url={http_client.base_url}, oauth_url={oauth_url}, "
        f"accounts={table.names()}"
    )
    token_provider = TokenProvider(http_client, oauth_url=oauth_url)
    registration_client = RegistrationClient(http_client, token_provider)
    return RegistrationService(AccountResolver(table), registration_client)


__all__ = ["RegistrationService", "create_registration_service", "DEFAULT_API_BASE_URL"]
