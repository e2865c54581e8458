"""
Account resolution: requested account name -> credential set.
"""
import logging
from typing import List, Optional

from .config import AccountTable
from .errors import UnknownAccountError
from .types import AccountCredential

logger = logging.getLogger(__name__)


class AccountResolver:
    """Looks up credentials by account name, falling back to the default."""

    def __init__(self, table: AccountTable):
        self._table = table

    @property
    def default_name(self) -> str:
        return self._table.default_name

    def names(self) -> List[str]:
        return self._table.names()

    def resolve(self, account_name: Optional[str] = None) -> AccountCredential:
        """
        Return the credential for account_name, or the default when absent.

        Raises:
            UnknownAccountError: a name was given but is not configured.
                Callers surface this as a client error and never retry.
        """
        if not account_name:
            logger.debug(
                f"AccountResolver.resolve: No account requested, using default '{self._table.default_name}'"
            )
            return self._table.default

        credential = self._table.get(account_name)
        if credential is None:
            logger.warning(
                f"AccountResolver.resolve: Unknown account '{account_name}' "
                f"(configured: {self._table.names()})"
            )
            raise UnknownAccountError(account_name)

        logger.debug(f"AccountResolver.resolve: Resolved account '{account_name}'")
        return credential
