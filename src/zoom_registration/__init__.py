"""
zoom_registration - Zoom meeting and webinar registration across accounts.

Resolves an account, exchanges its client credentials for a token and
registers one or many participants, reporting every outcome as a
ServiceEnvelope.
"""
from .accounts import AccountResolver
from .auth import TokenProvider
from .config import AccountTable, build_account_table, load_server_config
from .core import ProviderHttpClient
from .errors import (
    AuthenticationFailure,
    ConfigError,
    ProviderError,
    RegistrationServiceError,
    UnexpectedFailure,
    UnknownAccountError,
    ValidationError,
)
from .registration import (
    BatchOrchestrator,
    RegistrationClient,
    RegistrationService,
    create_registration_service,
)
from .types import (
    AccountCredential,
    BatchItem,
    BatchReport,
    CustomQuestion,
    RegistrationRequest,
    RegistrationResult,
    ServiceEnvelope,
)

__version__ = "1.0.0"

__all__ = [
    "AccountResolver",
    "AccountTable",
    "build_account_table",
    "load_server_config",
    "TokenProvider",
    "ProviderHttpClient",
    "RegistrationClient",
    "BatchOrchestrator",
    "RegistrationService",
    "create_registration_service",
    "AccountCredential",
    "CustomQuestion",
    "RegistrationRequest",
    "RegistrationResult",
    "ServiceEnvelope",
    "BatchItem",
    "BatchReport",
    "RegistrationServiceError",
    "ValidationError",
    "UnknownAccountError",
    "AuthenticationFailure",
    "ProviderError",
    "UnexpectedFailure",
    "ConfigError",
]
