"""
Request builder utilities for ProviderHttpClient.
"""
import json
from typing import Any, Dict, Optional, Union
from urllib.parse import urlencode, urljoin, urlparse

QueryParams = Dict[str, Union[str, int, bool]]


def build_url(
    base_url: str,
    path: str,
    query: Optional[QueryParams] = None,
) -> str:
    """Build full URL from base and path."""
    if path.startswith(("http://", "https://")):
        # Absolute URL (e.g. the OAuth endpoint lives on another host)
        url = path
    elif path.startswith("/"):
        # Preserve base_url path and append the new path
        parsed = urlparse(base_url)
        base_path = parsed.path.rstrip("/")
        url = f"{parsed.scheme}://{parsed.netloc}{base_path}{path}"
    elif path:
        # urljoin replaces the last segment if base doesn't end with /
        if not base_url.endswith("/"):
            base_url = base_url + "/"
        url = urljoin(base_url, path)
    else:
        url = base_url

    if query:
        query_str = urlencode({k: str(v) for k, v in query.items()})
        separator = "&" if "?" in url else "?"
        url = f"{url}{separator}{query_str}"

    return url


def build_headers(
    default_headers: Dict[str, str],
    headers: Optional[Dict[str, str]] = None,
    has_body: bool = False,
    content_type: str = "application/json",
) -> Dict[str, str]:
    """Merge default and per-request headers, filling content-type and accept."""
    result = dict(default_headers)

    if headers:
        result.update(headers)

    lower_keys = {k.lower() for k in result}
    if has_body and "content-type" not in lower_keys:
        result["content-type"] = content_type
    if "accept" not in lower_keys:
        result["accept"] = "application/json"

    return result


def build_body(json_data: Optional[Any] = None) -> Optional[str]:
    """Serialize a JSON request body."""
    if json_data is None:
        return None
    return json.dumps(json_data)


def parse_body(text: str) -> Any:
    """Parse a JSON response body, falling back to the raw text."""
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text
