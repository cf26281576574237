"""
HTTP Client for CLI.

Provides the async HTTP client that sends every request to the
content-sharing server. All requests carry a keiran-client User-Agent.

The client is the only place that touches the network. Tests inject an
httpx transport (httpx.MockTransport) instead of patching globals.
"""

import asyncio
from types import TracebackType
from typing import Any

import httpx

from keiran_client import __version__
from keiran_client.core.config import get_server_base_url
from keiran_client.core.exceptions import NetworkError
from keiran_client.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

USER_AGENT = f"keiran-client/{__version__}"


class APIClient:
    """
    HTTP client for server communication.

    Features:
    - Base URL from application.yaml unless given explicitly
    - Structured logging of requests/responses
    - Transport failures surfaced as NetworkError, never retried
    - Per-request timeout override (uploads use a longer one)

    Usage:
        async with APIClient() as client:
            response = await client.get("/stats", params={"format": "json"})
            response = await client.post("/shorten", json={"url": url, "long": False})
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Server base URL. If None, reads from config/settings/application.yaml.
            timeout: Default request timeout in seconds. If None, the configured
                value is used, and if that is null too the httpx default applies.
            transport: Optional httpx transport, used by tests.
        """
        if base_url is None:
            base_url, config_timeout = get_server_base_url()
            if timeout is None:
                timeout = config_timeout

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            options: dict[str, Any] = {
                "base_url": self.base_url,
                "headers": {"User-Agent": USER_AGENT},
            }
            if self.timeout is not None:
                options["timeout"] = self.timeout
            if self._transport is not None:
                options["transport"] = self._transport
            self._client = httpx.AsyncClient(**options)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release its connections."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        deadline: float | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make an HTTP request to the server.

        Args:
            method: HTTP method (GET, POST)
            path: API path (e.g., /upload, /shorten)
            deadline: Limit in seconds for the whole exchange, body included.
                The httpx timeout only bounds each phase on its own.
            **kwargs: Additional arguments for httpx

        Returns:
            httpx.Response, whatever its status code

        Raises:
            NetworkError: On connection, DNS, or timeout failure
        """
        client = self._get_client()

        log_with_source(
            logger,
            "cli",
            "debug",
            "API request",
            method=method,
            path=path,
        )

        try:
            async with asyncio.timeout(deadline):
                response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            error = str(e) or type(e).__name__
            log_with_source(
                logger,
                "cli",
                "error",
                "API request failed",
                method=method,
                path=path,
                error=error,
            )
            raise NetworkError(f"error sending request: {error}") from e
        except TimeoutError as e:
            log_with_source(
                logger,
                "cli",
                "error",
                "API request deadline exceeded",
                method=method,
                path=path,
                deadline=deadline,
            )
            raise NetworkError(
                f"error sending request: no complete response within {deadline:g} seconds"
            ) from e

        log_with_source(
            logger,
            "cli",
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )

        return response

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", path, **kwargs)
