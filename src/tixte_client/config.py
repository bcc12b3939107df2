"""Client configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from tixte_client.exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://api.tixte.com/v1"
DEFAULT_TIMEOUT = 30.0

ENV_API_KEY = "TIXTE_API_KEY"
ENV_BASE_URL = "TIXTE_BASE_URL"
ENV_TIMEOUT = "TIXTE_TIMEOUT"


@dataclass(frozen=True)
class ClientConfig:
    """Immutable settings shared by every request a client sends.

    Raises:
        ConfigurationError: If the API key is missing, empty or not ASCII, or the
            timeout is not a positive number.
    """

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if not isinstance(self.api_key, str) or not self.api_key.strip():
            raise ConfigurationError('"api_key" cannot be empty')
        if not self.api_key.isascii():
            raise ConfigurationError('"api_key" must contain only ASCII characters')
        if not isinstance(self.base_url, str) or not self.base_url:
            raise ConfigurationError('"base_url" cannot be empty')
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)):
            raise ConfigurationError(f"Invalid timeout: {self.timeout!r}")
        if self.timeout <= 0:
            raise ConfigurationError(f"Timeout must be positive, got {self.timeout}")

        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        object.__setattr__(self, "timeout", float(self.timeout))

    def __repr__(self) -> str:
        return (
            f"ClientConfig(api_key={self.masked_key!r}, "
            f"base_url={self.base_url!r}, timeout={self.timeout})"
        )

    @property
    def masked_key(self) -> str:
        """The API key with everything past the first four characters hidden."""
        return self.api_key[:4] + "…"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientConfig:
        """Build a config from TIXTE_* environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            A validated ClientConfig

        Raises:
            ConfigurationError: If TIXTE_API_KEY is unset or TIXTE_TIMEOUT
                is not a number
        """
        env = os.environ if environ is None else environ

        api_key = env.get(ENV_API_KEY)
        if not api_key:
            raise ConfigurationError(f"Missing required environment variable: {ENV_API_KEY}")

        raw_timeout = env.get(ENV_TIMEOUT)
        timeout = DEFAULT_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ConfigurationError(
                    f"{ENV_TIMEOUT} must be a number, got {raw_timeout!r}"
                ) from e

        return cls(
            api_key=api_key,
            base_url=env.get(ENV_BASE_URL) or DEFAULT_BASE_URL,
            timeout=timeout,
        )
