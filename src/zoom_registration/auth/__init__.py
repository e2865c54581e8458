"""
Authentication: header encoding and OAuth token acquisition.
"""
from .encoding import encode_auth, encode_client_credentials
from .token_provider import TokenProvider, DEFAULT_OAUTH_URL

__all__ = [
    "encode_auth",
    "encode_client_credentials",
    "TokenProvider",
    "DEFAULT_OAUTH_URL",
]
