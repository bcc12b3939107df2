"""Data models for the tixte_client library."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, NoReturn

from tixte_client.exceptions import (
    InvalidArgumentError,
    RemoteApiError,
    TransportFailure,
)

DEFAULT_EXTENSION = "png"
DEFAULT_NAME_PREFIX = "Image"


@dataclass(frozen=True)
class UploadOptions:
    """Name given to an uploaded file on the server."""

    extension: str
    file_name: str

    @classmethod
    def default(cls) -> UploadOptions:
        """Fresh defaults: a png named after the current time in milliseconds."""
        return cls(
            extension=DEFAULT_EXTENSION,
            file_name=f"{DEFAULT_NAME_PREFIX}-{int(time.time() * 1000)}",
        )

    @property
    def filename(self) -> str:
        return f"{self.file_name}.{self.extension}"


@dataclass(frozen=True)
class Ok:
    """Successful call; payload is the decoded JSON (or its data field)."""

    payload: Any

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> Any:
        return self.payload


@dataclass(frozen=True)
class InvalidArgument:
    """A caller-supplied argument was rejected before any request was sent."""

    field: str
    reason: str

    @property
    def ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return f"{self.field}: {self.reason}"

    def unwrap(self) -> NoReturn:
        raise InvalidArgumentError(self.field, self.reason)


@dataclass(frozen=True)
class RemoteError:
    """The API answered with an error status and a JSON body."""

    status_code: int
    body: Any

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        raise RemoteApiError(self.status_code, self.body)


@dataclass(frozen=True)
class TransportError:
    """No structured answer: network failure or a body that is not JSON.

    status_code is None when the request never got a response.
    """

    cause: str
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        raise TransportFailure(self.cause, status_code=self.status_code)


ApiResult = Ok | InvalidArgument | RemoteError | TransportError
