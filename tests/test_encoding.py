"""
Tests for auth/encoding.py
Logic testing: Decision/Branch, Error handling
"""
import base64

import pytest

from zoom_registration.auth.encoding import encode_auth, encode_client_credentials


class TestEncodeAuth:
    """Tests for encode_auth."""

    # Happy Path: basic
    def test_basic(self):
        headers = encode_auth("basic", username="id", password="secret")
        expected = base64.b64encode(b"id:secret").decode()
        assert headers == {"Authorization": f"Basic {expected}"}

    # Decision: auth type is case-insensitive
    def test_bearer_case_insensitive(self):
        assert encode_auth("Bearer", token="tok") == {"Authorization": "Bearer tok"}

    def test_none(self):
        assert encode_auth("none") == {}

    # Error Path: missing credentials
    def test_basic_missing_password(self):
        with pytest.raises(ValueError, match="Basic auth requires username and password"):
            encode_auth("basic", username="id")

    def test_bearer_missing_token(self):
        with pytest.raises(ValueError, match="requires token"):
            encode_auth("bearer")

    def test_unsupported(self):
        with pytest.raises(ValueError, match="Unsupported auth type"):
            encode_auth("digest")


class TestEncodeClientCredentials:
    """Tests for encode_client_credentials."""

    def test_encodes_client_pair(self):
        headers = encode_client_credentials("client-id", "client-secret")
        token = headers["Authorization"].split(" ", 1)[1]
        assert base64.b64decode(token).decode() == "client-id:client-secret"
