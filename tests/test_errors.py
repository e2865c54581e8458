"""
Tests for errors.py
Logic testing: Decision/Branch
"""
from zoom_registration.errors import (
    AuthenticationFailure,
    ProviderError,
    UnexpectedFailure,
    UnknownAccountError,
    ValidationError,
)


class TestErrorStatusCodes:
    """Default status codes and envelope conversion."""

    def test_validation_error_is_400(self):
        envelope = ValidationError("bad input").to_envelope()
        assert envelope.success is False
        assert envelope.status_code == 400
        assert envelope.error == "bad input"

    def test_unknown_account_message(self):
        error = UnknownAccountError("ghost")
        assert error.account_name == "ghost"
        assert error.status_code == 400
        assert error.message == "Unknown Zoom account: ghost"

    # Decision: auth failure defaults to 500 but keeps an upstream status
    def test_authentication_failure_status(self):
        assert AuthenticationFailure("nope").status_code == 500
        assert AuthenticationFailure("nope", 401).status_code == 401

    def test_provider_error_passes_status_and_code(self):
        error = ProviderError("Registrant already registered", 400, code=3027)
        envelope = error.to_envelope()
        assert envelope.status_code == 400
        assert envelope.error == "Registrant already registered"
        assert error.code == 3027

    def test_unexpected_failure_is_500(self):
        assert UnexpectedFailure("Failed to register participant").status_code == 500
