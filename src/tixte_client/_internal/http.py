"""httpx wrapper that signs every request with the Tixte API key."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from tixte_client.config import ClientConfig
from tixte_client.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

USER_AGENT = "tixte-client-python"


class TixteHTTP:
    """Owns (or borrows) an httpx.AsyncClient and sends authorized requests.

    An injected http_client is never closed here; one built from a bare
    transport, or created on demand, is.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if http_client is not None and transport is not None:
            raise ConfigurationError("Pass either http_client or transport, not both")
        self._config = config
        self._transport = transport
        self._client = http_client
        self._owns_client = http_client is None

    def _get_client(self) -> httpx.AsyncClient:
        """Get the underlying client, creating it on first use."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                transport=self._transport,
                timeout=self._config.timeout,
                headers={"User-Agent": USER_AGENT},
            )
        return self._client

    def _headers(self, extra: dict[str, str] | None) -> dict[str, str]:
        headers = {"Authorization": self._config.api_key}
        if extra:
            headers.update(extra)
        return headers

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        files: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Send one request and raise for non-2xx statuses.

        Raises:
            httpx.HTTPStatusError: If the API answered with an error status
            httpx.RequestError: If no response was received
        """
        url = f"{self._config.base_url}{endpoint}"
        logger.debug(f"{method} {url}")

        response = await self._get_client().request(
            method,
            url,
            params=params,
            headers=self._headers(headers),
            files=files,
            timeout=self._config.timeout if timeout is None else timeout,
        )
        response.raise_for_status()
        return response

    async def aclose(self) -> None:
        """Close the owned client; safe to call more than once."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
