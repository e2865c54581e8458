"""
Async HTTP client for the Zoom API, built on httpx.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from ..console import console, format_body, mask_body, mask_headers, print_panel, print_syntax_panel
from ..types import FetchResponse, HttpMethod
from .request_builder import (
    QueryParams,
    build_body,
    build_headers,
    build_url,
    parse_body,
)

logger = logging.getLogger("zoom_registration.base_client")

DEFAULT_TIMEOUT_SECONDS = 30.0


class ProviderHttpClient:
    """
    Asynchronous HTTP client used for every upstream call.

    Non-2xx responses are returned, not raised; callers decide what an
    error status means. Transport failures (httpx.HTTPError) propagate.
    """

    def __init__(
        self,
        base_url: str,
        httpx_client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        default_headers: Optional[Dict[str, str]] = None,
    ):
        if not base_url:
            raise ValueError("base_url is required")
        self.base_url = base_url
        self._default_headers = dict(default_headers or {})
        self._owns_client = httpx_client is None
        if httpx_client is not None:
            self._client = httpx_client
        else:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(timeout))
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def request(
        self,
        method: HttpMethod = "GET",
        path: str = "/",
        headers: Optional[Dict[str, str]] = None,
        json: Optional[Any] = None,
        query: Optional[QueryParams] = None,
        timeout: Optional[float] = None,
    ) -> FetchResponse:
        """Make a generic HTTP request."""
        if self._closed:
            raise RuntimeError("Client has been closed")

        url = build_url(self.base_url, path, query)
        request_headers = build_headers(self._default_headers, headers, has_body=json is not None)
        request_body = build_body(json)

        logger.debug(f"ProviderHttpClient.request: method={method}, url={url}")

        masked_headers = mask_headers(request_headers)
        print_panel(f"[bold cyan]{method}[/bold cyan] {url}", title="[bold blue]Request[/bold blue]")
        console.print("[bold]Headers:[/bold]", masked_headers)
        if json is not None:
            print_syntax_panel(format_body(mask_body(json)), lexer="json", title="[bold]Request Body[/bold]")

        request_kwargs: Dict[str, Any] = {
            "method": method,
            "url": url,
            "headers": request_headers,
            "content": request_body,
        }
        if timeout is not None:
            request_kwargs["timeout"] = timeout
        response = await self._client.request(**request_kwargs)

        response_headers = dict(response.headers)
        data = parse_body(response.text)
        ok = 200 <= response.status_code < 300

        status_color = "green" if ok else "red"
        print_panel(
            f"[bold {status_color}]{response.status_code}[/bold {status_color}] {response.reason_phrase or ''}",
            title=f"[bold blue]Response[/bold blue] ({url})",
        )
        if data:
            print_syntax_panel(format_body(mask_body(data)), lexer="json", title="[bold]Response Body[/bold]")

        logger.debug(f"ProviderHttpClient.request: status={response.status_code}, ok={ok}")

        return FetchResponse(
            status=response.status_code,
            status_text=response.reason_phrase or "",
            headers=response_headers,
            data=data,
            ok=ok,
        )

    async def get(self, path: str, **kwargs: Any) -> FetchResponse:
        """GET request."""
        return await self.request(method="GET", path=path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> FetchResponse:
        """POST request."""
        return await self.request(method="POST", path=path, **kwargs)

    async def close(self) -> None:
        """Close the client. A shared httpx client is left open for its owner."""
        self._closed = True
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ProviderHttpClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
