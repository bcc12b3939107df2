"""Local argument checks run before any request is sent.

Every check raises InvalidArgumentError naming the offending field; the
client turns that into an InvalidArgument result at the call boundary.
"""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from numbers import Real
from pathlib import Path
from typing import Any

from tixte_client.exceptions import InvalidArgumentError
from tixte_client.models import UploadOptions

MAX_EXTENSION_LENGTH = 18
MAX_FILE_NAME_LENGTH = 128

_UNSAFE_NAME_CHARS = ("/", "\\", "\x00")

Source = str | os.PathLike | bytes | bytearray | memoryview


def require_number(value: Any, field: str) -> Real:
    """Accept any finite real number except bools and zero."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidArgumentError(field, f"{value!r} is not a number")
    if value == 0 or not math.isfinite(value):
        raise InvalidArgumentError(field, f"{value!r} is not a valid value")
    return value


def require_string(value: Any, field: str) -> str:
    """Accept non-empty, non-blank strings."""
    if not isinstance(value, str):
        raise InvalidArgumentError(field, f"expected a string, got {type(value).__name__}")
    if not value.strip():
        raise InvalidArgumentError(field, "cannot be empty")
    return value


def require_domain(value: Any) -> str:
    """Accept a domain name, IDNA-encoding internationalized ones.

    Header values go out as ASCII, so "bücher.tixte.co" is sent as
    "xn--bcher-kva.tixte.co".
    """
    domain = require_string(value, "domain").strip()
    if domain.isascii():
        return domain
    try:
        return domain.encode("idna").decode("ascii")
    except UnicodeError as e:
        raise InvalidArgumentError("domain", f"{domain!r} is not a valid domain name") from e


def require_source(source: Any) -> Path | bytes:
    """Resolve an upload source into a file path or raw bytes.

    Byte-like sources are copied into an immutable bytes object. Paths are
    only type-checked here; require_file checks that they exist.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
        if not data:
            raise InvalidArgumentError("source", "cannot be empty")
        return data

    if isinstance(source, str) and not source.strip():
        raise InvalidArgumentError("source", "cannot be empty")
    if not isinstance(source, (str, os.PathLike)):
        raise InvalidArgumentError(
            "source", f"expected a path or bytes, got {type(source).__name__}"
        )

    return Path(source)


def require_file(path: Path) -> Path:
    """Check that path is an existing regular file.

    Blocks on a stat call; the client runs it in a worker thread.
    """
    if not path.is_file():
        raise InvalidArgumentError("source", f"File not found: {path}")
    return path


def _check_name_part(value: Any, field: str, max_length: int) -> str:
    text = require_string(value, field)
    if len(text) > max_length:
        raise InvalidArgumentError(field, f"must be at most {max_length} characters")
    if any(ch in text for ch in _UNSAFE_NAME_CHARS) or text in (".", ".."):
        raise InvalidArgumentError(field, f"{text!r} is not a path-safe name")
    return text


def require_options(options: Any) -> UploadOptions:
    """Resolve upload options, filling fresh defaults when none are given.

    Accepts an UploadOptions instance or a mapping holding "extension" and
    "file_name" ("fileName" is accepted as an alias).
    """
    if options is None:
        return UploadOptions.default()

    if isinstance(options, UploadOptions):
        extension, file_name = options.extension, options.file_name
    elif isinstance(options, Mapping):
        extension = options.get("extension")
        file_name = options.get("file_name", options.get("fileName"))
        if not extension or not file_name:
            raise InvalidArgumentError(
                "options", 'must provide both "extension" and "file_name"'
            )
    else:
        raise InvalidArgumentError(
            "options", f"expected UploadOptions or a mapping, got {type(options).__name__}"
        )

    extension = _check_name_part(extension, "options.extension", MAX_EXTENSION_LENGTH)
    if extension.startswith("."):
        raise InvalidArgumentError("options.extension", "must not start with '.'")
    file_name = _check_name_part(file_name, "options.file_name", MAX_FILE_NAME_LENGTH)

    return UploadOptions(extension=extension, file_name=file_name)
