"""
Core HTTP client modules.
"""
from .base_client import ProviderHttpClient
from .request_builder import build_url, build_headers, build_body, parse_body

__all__ = [
    "ProviderHttpClient",
    "build_url",
    "build_headers",
    "build_body",
    "parse_body",
]
