"""Exception hierarchy for the tixte_client library."""

from __future__ import annotations

from typing import Any


class TixteError(Exception):
    """Base exception for all tixte_client errors."""

    pass


class ConfigurationError(TixteError):
    """Raised when the client is constructed without usable configuration."""

    pass


class InvalidArgumentError(TixteError):
    """Raised when a caller-supplied argument fails a local check."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class RemoteApiError(TixteError):
    """Raised when the API answered with an error status and a JSON body.

    The body attribute holds the decoded error payload exactly as sent.
    """

    def __init__(self, status_code: int, body: Any) -> None:
        super().__init__(f"Tixte API returned HTTP {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class TransportFailure(TixteError):
    """Raised when no structured response could be obtained."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
