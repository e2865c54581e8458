"""
Error taxonomy for zoom_registration.

Components raise these internally; the registration client, batch
orchestrator and service facade recover them into ServiceEnvelope values
so nothing past the orchestration layer sees a raised error.
"""
from typing import Optional

from .types import ServiceEnvelope


class RegistrationServiceError(Exception):
    """Base class for errors that map onto a ServiceEnvelope."""

    default_status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code if status_code is not None else self.default_status_code

    def to_envelope(self) -> ServiceEnvelope:
        return ServiceEnvelope.fail(self.message, self.status_code)


class ValidationError(RegistrationServiceError):
    """Missing or malformed required fields, or an empty batch."""

    default_status_code = 400


class UnknownAccountError(RegistrationServiceError):
    """An account name was supplied but is not configured."""

    default_status_code = 400

    def __init__(self, account_name: str):
        super().__init__(f"Unknown Zoom account: {account_name}")
        self.account_name = account_name


class AuthenticationFailure(RegistrationServiceError):
    """The OAuth token exchange failed. Never retried."""


class ProviderError(RegistrationServiceError):
    """The provider rejected a registration; status and message pass through."""

    def __init__(self, message: str, status_code: int, code: Optional[int] = None):
        super().__init__(message, status_code)
        self.code = code


class UnexpectedFailure(RegistrationServiceError):
    """Network, timeout or parse failure. The message stays generic."""


class ConfigError(Exception):
    """Raised when the account table cannot be built from configuration."""
    pass
