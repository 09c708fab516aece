"""
HTTP Client for CLI.

Provides the async HTTP transport used to talk to the provisioning API.
Base URL and timeout come from config/settings/application.yaml.
"""

from typing import Any

import httpx

from provisioner import __version__
from provisioner.core.config import get_api_base_url
from provisioner.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


class APIClient:
    """
    HTTP client for provisioning API communication.

    Features:
    - Automatic base URL and timeout from application.yaml
    - Structured logging of requests/responses
    - Transport errors logged with context and re-raised

    Usage:
        client = APIClient()
        response = await client.post("/client/list", data={...})
        await client.close()
    """

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        """
        Initialize the API client.

        Args:
            base_url: API base URL. If None, reads from config/settings/application.yaml.
            timeout: Request timeout in seconds. If None, reads from config/settings/application.yaml.
        """
        if base_url is None or timeout is None:
            config_base_url, config_timeout = get_api_base_url()
            base_url = base_url or config_base_url
            timeout = timeout if timeout is not None else config_timeout

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={
                    "Accept": "application/json",
                    "User-Agent": f"provisioner-cli/{__version__}",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make an HTTP request to the provisioning API.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API path (e.g., /client/list)
            **kwargs: Additional arguments for httpx

        Returns:
            httpx.Response

        Raises:
            httpx.HTTPError: On request failure
        """
        client = await self._get_client()

        log_with_source(
            logger,
            "cli",
            "debug",
            "API request",
            method=method,
            path=path,
        )

        try:
            response = await client.request(method, path, **kwargs)

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

        except httpx.HTTPError as e:
            log_with_source(
                logger,
                "cli",
                "error",
                "API request failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", path, **kwargs)
