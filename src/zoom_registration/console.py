"""
Console printing helpers built on Rich.

Pretty request/response panels for upstream calls, plus masking helpers so
credentials and tokens never reach the terminal or the logs in clear text.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Optional

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

# Headers whose values are always masked before display
SENSITIVE_HEADERS = frozenset({"authorization", "x-api-key", "cookie", "set-cookie"})

# Body keys whose values are always masked before display
SENSITIVE_BODY_KEYS = frozenset({"access_token", "refresh_token", "id_token", "client_secret"})

# Global console instance
console = Console()


def mask_sensitive(value: Optional[str], show_chars: int = 4) -> str:
    """
    Mask sensitive values for logging.

        mask_sensitive('secretpassword123')  # "secr***"
        mask_sensitive('abc')                # "***"
        mask_sensitive(None)                 # "<none>"
    """
    if not value:
        return "<none>"
    if len(value) <= show_chars:
        return "*" * len(value)
    return value[:show_chars] + "***"


def mask_auth_header(value: Optional[str], show_chars: int = 15) -> str:
    """Mask an Authorization header value, keeping the scheme visible."""
    if not value:
        return "<none>"
    scheme, _, credentials = value.partition(" ")
    if credentials and scheme in ("Basic", "Bearer"):
        return f"{scheme} {mask_sensitive(credentials, show_chars - len(scheme) - 1)}"
    return mask_sensitive(value, show_chars)


def mask_headers(headers: Dict[str, str]) -> Dict[str, str]:
    """Copy of headers with sensitive values masked."""
    masked = dict(headers)
    for key in masked:
        if key.lower() in SENSITIVE_HEADERS:
            masked[key] = mask_auth_header(masked[key])
    return masked


def mask_body(body: Any) -> Any:
    """Copy of a JSON-like body with sensitive keys masked at any depth."""
    if isinstance(body, dict):
        return {
            key: mask_sensitive(str(value)) if key.lower() in SENSITIVE_BODY_KEYS and value else mask_body(value)
            for key, value in body.items()
        }
    if isinstance(body, list):
        return [mask_body(item) for item in body]
    return body


def format_body(body: Any) -> str:
    """Format body for pretty printing."""
    if body is None:
        return ""
    if isinstance(body, (dict, list)):
        return json.dumps(body, indent=2, ensure_ascii=False, default=str)
    if isinstance(body, bytes):
        try:
            return body.decode("utf-8")
        except UnicodeDecodeError:
            return f"<binary data: {len(body)} bytes>"
    return str(body)


def print_panel(content: str, title: Optional[str] = None) -> None:
    """Print content in a bordered box."""
    console.print(Panel(content, title=title))


def print_syntax_panel(
    code: str,
    lexer: str = "json",
    title: Optional[str] = None,
    theme: str = "monokai",
    expand: bool = True,
) -> None:
    """Print syntax-highlighted text in a bordered panel."""
    console.print(Panel(Syntax(code, lexer, theme=theme), title=title, expand=expand))
