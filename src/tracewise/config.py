# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client Configuration for the TraceWise SDK

This module provides the configuration classes for the client, including
connection, authentication and retry/backoff settings. Configurations are
validated on construction so that invalid setups fail before any network
attempt is made.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

import httpx

from . import __version__
from .exceptions import ConfigurationError

TokenProvider = Callable[[], Awaitable[str]]


@dataclass
class RetryConfig:
    """
    Configuration for the retry/backoff controller.

    Transient failures (network, timeout, 5xx) are retried up to
    ``max_retries`` times. Rate-limited responses are retried regardless of
    ``max_retries`` but never past ``call_deadline``.
    """

    max_retries: int = 3
    """Maximum transient retries (total attempts = max_retries + 1)."""

    backoff_base: float = 1.0
    """Base delay in seconds for exponential backoff."""

    backoff_multiplier: float = 2.0
    """Exponential factor applied per transient failure."""

    jitter: float = 1.0
    """
    Upper bound in seconds of the uniform jitter added to each delay. At most
    ``backoff_base * (backoff_multiplier - 1)`` so delays never shrink.
    """

    max_backoff: float = 60.0
    """Maximum delay in seconds between two transient attempts."""

    default_retry_after: int = 60
    """Wait in seconds for a 429 response without a Retry-After header."""

    call_deadline: float | None = 300.0
    """Best-effort ceiling in seconds for one logical call. None disables it."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.max_retries < 0:
            raise ConfigurationError("max_retries must be at least 0")
        if self.backoff_base < 0:
            raise ConfigurationError("backoff_base must not be negative")
        if self.backoff_multiplier < 1.0:
            raise ConfigurationError("backoff_multiplier must be at least 1.0")
        if self.jitter < 0:
            raise ConfigurationError("jitter must not be negative")
        if self.jitter > self.backoff_base * (self.backoff_multiplier - 1):
            # Keeps successive transient delays non-decreasing
            raise ConfigurationError(
                "jitter must not exceed backoff_base * (backoff_multiplier - 1)"
            )
        if self.max_backoff <= 0:
            raise ConfigurationError("max_backoff must be positive")
        if self.default_retry_after < 0:
            raise ConfigurationError("default_retry_after must not be negative")
        if self.call_deadline is not None and self.call_deadline <= 0:
            raise ConfigurationError("call_deadline must be positive or None")


@dataclass
class ClientConfig:
    """
    Configuration for the TraceWise client.

    Example:
        >>> config = ClientConfig(
        ...     base_url="https://api.tracewise.io",
        ...     api_key="tw_live_123",
        ...     retry=RetryConfig(max_retries=5),
        ... )
    """

    # === Connection ===

    base_url: str
    """Absolute http(s) URL of the API. A trailing slash is stripped."""

    timeout: float = 30.0
    """Per-attempt network timeout in seconds."""

    api_version: str = "1"
    """Value sent in the X-API-Version header."""

    user_agent: str = f"tracewise-sdk-python/{__version__}"
    """Value sent in the User-Agent header."""

    # === Authentication ===

    api_key: str | None = None
    """Static API key, sent as x-api-key."""

    token_provider: TokenProvider | None = field(default=None, repr=False)
    """Async callable returning a bearer token. Invoked for every attempt."""

    # === Retry ===

    retry: RetryConfig = field(default_factory=RetryConfig)
    """Retry/backoff settings."""

    # === Logging ===

    log_bodies: bool = False
    """Log request and response bodies at DEBUG level."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.base_url = validate_base_url(self.base_url)
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")
        if not self.api_version:
            raise ConfigurationError("api_version must not be empty")
        if self.api_key is not None and not self.api_key.strip():
            raise ConfigurationError("api_key must not be blank")
        if self.token_provider is not None and not callable(self.token_provider):
            raise ConfigurationError("token_provider must be callable")


def validate_base_url(base_url: str) -> str:
    """
    Validate and normalize the API base URL.

    Args:
        base_url: Candidate base URL

    Returns:
        The URL without a trailing slash

    Raises:
        ConfigurationError: If the URL is empty, relative or not http(s)
    """
    if not isinstance(base_url, str) or not base_url.strip():
        raise ConfigurationError("base_url must not be empty", code="INVALID_URL")
    try:
        url = httpx.URL(base_url.strip())
    except httpx.InvalidURL as e:
        raise ConfigurationError(
            f"Invalid base_url {base_url!r}: {e}", code="INVALID_URL"
        ) from e
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError(
            f"base_url must be an absolute http(s) URL, got {base_url!r}",
            code="INVALID_URL",
        )
    if url.query or url.fragment:
        raise ConfigurationError(
            f"base_url must not carry a query or fragment, got {base_url!r}",
            code="INVALID_URL",
        )
    return str(url).rstrip("/")


__all__ = ["ClientConfig", "RetryConfig", "TokenProvider", "validate_base_url"]
