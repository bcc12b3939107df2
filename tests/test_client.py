"""Tests for TixteClient general functionality."""

from __future__ import annotations

import asyncio

import httpx
import pytest
from helpers import RecordingTransport, json_responder

from tixte_client import ClientConfig, ConfigurationError, Ok, TixteClient


class TestClientInitialization:
    """Tests for client initialization."""

    def test_client_without_api_key_raises(self) -> None:
        """Test that a missing API key fails at construction."""
        with pytest.raises(ConfigurationError, match="api_key"):
            TixteClient()

    def test_client_with_empty_api_key_raises(self) -> None:
        """Test that an empty or blank API key fails at construction."""
        with pytest.raises(ConfigurationError):
            TixteClient("")
        with pytest.raises(ConfigurationError):
            TixteClient("   ")

    def test_missing_api_key_sends_nothing(self) -> None:
        """Test that failed construction performs no network access."""
        transport = RecordingTransport(json_responder({}))

        with pytest.raises(ConfigurationError):
            TixteClient(None, transport=transport)

        assert transport.requests == []

    def test_client_accepts_config(self) -> None:
        """Test that a ClientConfig can be passed instead of a key."""
        config = ClientConfig(api_key="key", base_url="https://example.test/v1/")

        client = TixteClient(config=config)

        assert client.config.base_url == "https://example.test/v1"

    def test_api_key_and_config_together_raise(self) -> None:
        """Test that api_key and config are mutually exclusive."""
        with pytest.raises(ConfigurationError, match="either api_key or config"):
            TixteClient("key", config=ClientConfig(api_key="other"))

    def test_http_client_and_transport_together_raise(self) -> None:
        """Test that http_client and transport are mutually exclusive."""
        transport = RecordingTransport(json_responder({}))

        with pytest.raises(ConfigurationError, match="either http_client or transport"):
            TixteClient(
                "key", http_client=httpx.AsyncClient(transport=transport), transport=transport
            )

    def test_repr_masks_api_key(self, client: TixteClient, api_key: str) -> None:
        """Test that the API key never appears in full in the repr."""
        assert api_key not in repr(client)
        assert api_key[:4] in repr(client)


class TestContextManager:
    """Tests for async context manager functionality."""

    def test_context_manager_closes_owned_client(self, transport: RecordingTransport) -> None:
        """Test that the internally created httpx client is closed on exit."""

        async def scenario() -> TixteClient:
            async with TixteClient("key", transport=transport) as client:
                await client.get_size()
                assert client._http._client is not None
            return client

        client = asyncio.run(scenario())

        assert client._http._client is None

    def test_context_manager_leaves_injected_client_open(
        self, transport: RecordingTransport
    ) -> None:
        """Test that an injected httpx client is not closed by the wrapper."""

        async def scenario() -> httpx.AsyncClient:
            http_client = httpx.AsyncClient(transport=transport)
            async with TixteClient("key", http_client=http_client) as client:
                await client.get_size()
            assert not http_client.is_closed
            await http_client.aclose()
            return http_client

        http_client = asyncio.run(scenario())

        assert http_client.is_closed
        assert len(transport.requests) == 1

    def test_aclose_can_be_called_multiple_times(self, client: TixteClient) -> None:
        """Test that aclose is idempotent."""

        async def scenario() -> None:
            await client.get_size()
            await client.aclose()
            await client.aclose()

        asyncio.run(scenario())

    def test_client_is_recreated_after_close(
        self, client: TixteClient, transport: RecordingTransport
    ) -> None:
        """Test that a closed client can still send requests."""

        async def scenario() -> None:
            await client.get_size()
            await client.aclose()
            await client.get_size()
            await client.aclose()

        asyncio.run(scenario())

        assert len(transport.requests) == 2


class TestAuthorization:
    """Tests for the Authorization header on outbound requests."""

    @pytest.mark.parametrize(
        "call",
        [
            lambda c: c.get_size(),
            lambda c: c.get_uploads(10, 1),
            lambda c: c.get_user_info(),
            lambda c: c.get_user_info_by_name("someone"),
            lambda c: c.get_user_domains(),
            lambda c: c.upload_image(b"bytes", "me.tixte.co"),
            lambda c: c.delete_image("abc123"),
        ],
        ids=[
            "get_size",
            "get_uploads",
            "get_user_info",
            "get_user_info_by_name",
            "get_user_domains",
            "upload_image",
            "delete_image",
        ],
    )
    def test_every_operation_sends_api_key(
        self, call, client: TixteClient, transport: RecordingTransport, api_key: str
    ) -> None:
        """Test that every operation carries the exact configured key."""
        result = asyncio.run(call(client))

        assert isinstance(result, Ok)
        assert len(transport.requests) == 1
        assert transport.last_request.headers["Authorization"] == api_key

    def test_api_key_is_sent_verbatim(self) -> None:
        """Test that the key is not prefixed with a scheme such as Bearer."""
        transport = RecordingTransport(json_responder({}))
        client = TixteClient("Zm9vYmFy.abc_123", transport=transport)

        asyncio.run(client.get_size())

        assert transport.last_request.headers["Authorization"] == "Zm9vYmFy.abc_123"

    def test_injected_http_client_still_gets_api_key(self, api_key: str) -> None:
        """Test that requests through an injected client are signed too."""
        transport = RecordingTransport(json_responder({}))

        async def scenario() -> None:
            async with httpx.AsyncClient(transport=transport) as http_client:
                client = TixteClient(api_key, http_client=http_client)
                await client.get_user_domains()

        asyncio.run(scenario())

        assert transport.last_request.headers["Authorization"] == api_key


class TestRequestSettings:
    """Tests for base URL and timeout handling."""

    def test_custom_base_url_is_used(self) -> None:
        """Test that requests go to the configured base URL."""
        transport = RecordingTransport(json_responder({}))
        config = ClientConfig(api_key="key", base_url="https://staging.example.test/v2")
        client = TixteClient(config=config, transport=transport)

        asyncio.run(client.get_size())

        assert str(transport.last_request.url) == "https://staging.example.test/v2/user/uploads/size"

    def test_configured_timeout_is_applied(self) -> None:
        """Test that the config timeout reaches the request."""
        transport = RecordingTransport(json_responder({}))
        client = TixteClient(config=ClientConfig(api_key="key", timeout=12.5), transport=transport)

        asyncio.run(client.get_size())

        assert transport.last_request.extensions["timeout"]["read"] == 12.5

    def test_per_call_timeout_overrides_config(
        self, client: TixteClient, transport: RecordingTransport
    ) -> None:
        """Test that a per-call timeout wins over the configured one."""
        asyncio.run(client.get_user_info(timeout=3.0))

        assert transport.last_request.extensions["timeout"]["read"] == 3.0

    def test_concurrent_calls_are_independent(
        self, client: TixteClient, transport: RecordingTransport
    ) -> None:
        """Test that operations can run concurrently on one client."""

        async def scenario() -> list:
            results = await asyncio.gather(
                client.get_size(),
                client.get_user_info(),
                client.get_user_domains(),
            )
            await client.aclose()
            return results

        results = asyncio.run(scenario())

        assert all(result.ok for result in results)
        assert len(transport.requests) == 3
