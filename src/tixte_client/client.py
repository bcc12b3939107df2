"""Main TixteClient class for interacting with the Tixte API."""

from __future__ import annotations

import asyncio
import logging
import mimetypes
from collections.abc import Sequence
from pathlib import Path
from typing import Any
from urllib.parse import quote

import httpx

from tixte_client._internal.http import TixteHTTP
from tixte_client.config import ClientConfig
from tixte_client.exceptions import ConfigurationError, InvalidArgumentError
from tixte_client.models import (
    ApiResult,
    InvalidArgument,
    Ok,
    RemoteError,
    TransportError,
    UploadOptions,
)
from tixte_client.validation import (
    Source,
    require_domain,
    require_file,
    require_number,
    require_options,
    require_source,
    require_string,
)

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class TixteClient:
    """Async client for the Tixte file-hosting API.

    Every operation returns an ApiResult instead of raising: Ok on success,
    InvalidArgument when a local check fails (no request is sent),
    RemoteError when the API answers with an error body and TransportError
    when no structured answer could be obtained.

    Example (context manager - recommended):
        async with TixteClient("my-api-key") as client:
            result = await client.upload_image("cat.png", "me.tixte.co")
            if result.ok:
                print(result.payload)

    Example (manual lifecycle):
        client = TixteClient(config=ClientConfig.from_env())
        info = await client.get_user_info()
        await client.aclose()
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        config: ClientConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Tixte API key, sent verbatim as the Authorization header
            config: Full configuration, instead of api_key
            http_client: Externally managed httpx.AsyncClient to send requests with
            transport: httpx transport for an internally created client

        Raises:
            ConfigurationError: If no API key is available
        """
        if config is not None and api_key is not None:
            raise ConfigurationError("Pass either api_key or config, not both")
        if config is None:
            config = ClientConfig(api_key=api_key)  # type: ignore[arg-type]

        self._config = config
        self._http = TixteHTTP(config, http_client=http_client, transport=transport)

    async def __aenter__(self) -> TixteClient:
        """Enter async context manager."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Exit async context manager."""
        await self.aclose()

    def __repr__(self) -> str:
        return f"TixteClient({self._config!r})"

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def _call(
        self,
        method: str,
        endpoint: str,
        *,
        unwrap_data: bool = False,
        **kwargs: Any,
    ) -> ApiResult:
        """Send one request and normalize the outcome into an ApiResult."""
        try:
            response = await self._http.request(method, endpoint, **kwargs)
        except httpx.HTTPStatusError as e:
            return _from_error_response(e.response)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"{method} {endpoint} failed: {e!r}")
            return TransportError(cause=f"{type(e).__name__}: {e}")
        except UnicodeEncodeError as e:
            # header values must be ASCII
            return _invalid(InvalidArgumentError("headers", f"non-ASCII header value: {e}"))

        if not response.content:
            return Ok(None)

        try:
            payload = response.json()
        except ValueError:
            logger.error(f"{method} {endpoint} returned a non-JSON body")
            return TransportError(
                cause="Response body is not valid JSON",
                status_code=response.status_code,
            )

        if unwrap_data and isinstance(payload, dict) and "data" in payload:
            payload = payload["data"]
        return Ok(payload)

    async def get_size(self, *, timeout: float | None = None) -> ApiResult:
        """Get the total size of the user's uploads.

        Returns:
            Ok with the full response body
        """
        return await self._call("GET", "/user/uploads/size", timeout=timeout)

    async def get_uploads(
        self,
        amount: Any = None,
        page: Any = None,
        *,
        timeout: float | None = None,
    ) -> ApiResult:
        """List the user's uploads one page at a time.

        Args:
            amount: Number of uploads per page
            page: Page number

        Returns:
            Ok with the response's data field, or InvalidArgument if amount
            or page is not a usable number
        """
        try:
            amount = require_number(amount, "amount")
            page = require_number(page, "page")
        except InvalidArgumentError as e:
            return _invalid(e)

        return await self._call(
            "GET",
            "/user/uploads",
            params={"page": page, "amount": amount},
            unwrap_data=True,
            timeout=timeout,
        )

    async def get_user_info(self, *, timeout: float | None = None) -> ApiResult:
        """Fetch the account the API key belongs to."""
        return await self._call("GET", "/users/@me", unwrap_data=True, timeout=timeout)

    async def get_user_info_by_name(
        self, user: Any, *, timeout: float | None = None
    ) -> ApiResult:
        """Fetch another user's public profile.

        Args:
            user: Username or user ID
        """
        try:
            user = require_string(user, "user")
        except InvalidArgumentError as e:
            return _invalid(e)

        return await self._call(
            "GET", f"/users/{quote(user, safe='')}", unwrap_data=True, timeout=timeout
        )

    async def get_user_domains(self, *, timeout: float | None = None) -> ApiResult:
        """Fetch the domains registered to the account."""
        return await self._call("GET", "/user/domains", timeout=timeout)

    async def upload_image(
        self,
        source: Source,
        domain: str,
        options: UploadOptions | dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> ApiResult:
        """Upload a file to one of the account's domains.

        Args:
            source: Path to a file, or the file's raw bytes
            domain: Domain to upload to (e.g. "me.tixte.co")
            options: Server-side name for the file; fresh defaults
                ("png", "Image-<timestamp>") are used when omitted

        Returns:
            Ok with the full response body
        """
        try:
            resolved = require_source(source)
            if isinstance(resolved, Path):
                await asyncio.to_thread(require_file, resolved)
            domain = require_domain(domain)
            upload_options = require_options(options)
        except InvalidArgumentError as e:
            return _invalid(e)

        if isinstance(resolved, Path):
            try:
                content = await asyncio.to_thread(resolved.read_bytes)
            except OSError as e:
                return _invalid(InvalidArgumentError("source", f"Could not read {resolved}: {e}"))
        else:
            content = resolved

        filename = upload_options.filename
        content_type = mimetypes.guess_type(filename)[0] or DEFAULT_CONTENT_TYPE

        result = await self._call(
            "POST",
            "/upload",
            headers={"domain": domain},
            files={"file": (filename, content, content_type)},
            timeout=timeout,
        )
        if result.ok:
            logger.info(f"Uploaded {filename} to {domain}")
        return result

    async def upload_many(
        self,
        sources: Sequence[Source],
        domain: str,
        *,
        options: Sequence[UploadOptions | dict[str, str] | None] | None = None,
        stop_on_error: bool = False,
        timeout: float | None = None,
    ) -> list[ApiResult]:
        """Upload several files one after another.

        Args:
            sources: Paths or byte buffers to upload
            domain: Domain to upload to
            options: One options entry per source; defaults for each when omitted
            stop_on_error: If True, stop uploading on the first failed upload

        Returns:
            List of ApiResult, one per attempted upload
        """
        if options is not None and len(options) != len(sources):
            reason = f"expected {len(sources)} entries, got {len(options)}"
            return [InvalidArgument(field="options", reason=reason) for _ in sources]

        per_source = options if options is not None else [None] * len(sources)
        results: list[ApiResult] = []

        for source, source_options in zip(sources, per_source):
            result = await self.upload_image(source, domain, source_options, timeout=timeout)
            results.append(result)

            if stop_on_error and not result.ok:
                break

        return results

    async def delete_image(self, image_id: Any, *, timeout: float | None = None) -> ApiResult:
        """Delete an upload by its ID.

        Returns:
            Ok with the full response body
        """
        try:
            image_id = require_string(image_id, "image_id")
        except InvalidArgumentError as e:
            return _invalid(e)

        result = await self._call(
            "DELETE", f"/user/uploads/{quote(image_id, safe='')}", timeout=timeout
        )
        if result.ok:
            logger.info(f"Deleted upload {image_id}")
        return result

    async def aclose(self) -> None:
        """Close the client and clean up resources."""
        await self._http.aclose()


def _invalid(error: InvalidArgumentError) -> InvalidArgument:
    logger.debug(f"Rejected argument {error}")
    return InvalidArgument(field=error.field, reason=error.reason)


def _from_error_response(response: httpx.Response) -> RemoteError | TransportError:
    """Map an error response to RemoteError, or TransportError without a JSON body."""
    try:
        body = response.json()
    except ValueError:
        logger.error(f"HTTP {response.status_code} without a JSON body")
        return TransportError(
            cause=f"HTTP {response.status_code}: {response.text[:200]}",
            status_code=response.status_code,
        )

    logger.warning(f"Tixte API returned HTTP {response.status_code}")
    return RemoteError(status_code=response.status_code, body=body)
