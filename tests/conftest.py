"""Pytest fixtures for tixte_client tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from helpers import RecordingTransport, Responder, json_responder

from tixte_client import TixteClient

API_KEY = "tx_test_key_123"


@pytest.fixture
def api_key() -> str:
    """The API key every test client is built with."""
    return API_KEY


@pytest.fixture
def transport() -> RecordingTransport:
    """Recording transport answering 200 with an empty JSON object."""
    return RecordingTransport(json_responder({}))


@pytest.fixture
def client(transport: RecordingTransport) -> TixteClient:
    """Client wired to the default recording transport."""
    return TixteClient(API_KEY, transport=transport)


@pytest.fixture
def make_client() -> Callable[[Responder], tuple[TixteClient, RecordingTransport]]:
    """Factory building a client around a custom responder."""

    def factory(responder: Responder) -> tuple[TixteClient, RecordingTransport]:
        recording = RecordingTransport(responder)
        return TixteClient(API_KEY, transport=recording), recording

    return factory


@pytest.fixture
def temp_png(tmp_path: Path) -> Path:
    """Create a temporary PNG file for testing."""
    png_path = tmp_path / "cat.png"
    png_path.write_bytes(b"\x89PNG\r\n\x1a\n test content")
    return png_path
