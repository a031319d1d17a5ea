# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the TraceWise SDK.

This module defines the exception hierarchy used throughout the SDK.
All exceptions inherit from TraceWiseError, making it easy to catch
every failure the SDK can surface with a single except clause.

Each exception class carries an ``ErrorKind`` that classifies the failure.
The retry controller decides what to do with a failed attempt by looking
at that kind, and callers can branch on it without isinstance chains.
"""

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Normalized failure categories derived from raw transport outcomes."""

    CONFIGURATION = "configuration"
    AUTHENTICATION = "authentication"
    NETWORK = "network"
    TIMEOUT = "timeout"
    CLIENT_ERROR = "client_error"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    DECODE = "decode"
    UNKNOWN = "unknown"


class TraceWiseError(Exception):
    """Base exception for all TraceWise SDK errors.

    Attributes:
        kind: Classification of the failure.
        code: Machine-readable error code. Backend errors carry the code from
            the error envelope; SDK-side errors use a fixed code per class.
        message: Human-readable message.
        status_code: HTTP status of the response, when there was one.
        correlation_id: Backend correlation id from the error envelope.
        attempts: Number of network attempts made before the error surfaced.
            Set by the retry controller when it gives up.
        operation: Name of the client operation that failed, if known.
        context: Extra operation context (e.g. the entity being fetched).

    Example:
        try:
            product = await client.get_product("09506000134352")
        except TraceWiseError as e:
            logger.error(f"{e.operation} failed [{e.code}]: {e.message}")
    """

    kind: ErrorKind = ErrorKind.UNKNOWN
    default_code: str = "UNKNOWN_ERROR"

    def __init__(
        self,
        message: str = "",
        *,
        code: str | None = None,
        status_code: int | None = None,
        correlation_id: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.status_code = status_code
        self.correlation_id = correlation_id
        self.attempts: int | None = None
        self.operation: str | None = None
        self.context: dict[str, Any] = {}

    def add_context(self, operation: str, **context: Any) -> "TraceWiseError":
        """Attach operation context without changing the classification.

        Returns the same instance so callers can ``raise err.add_context(...)``.
        """
        self.operation = operation
        self.context.update({k: v for k, v in context.items() if v is not None})
        return self

    @property
    def is_retryable(self) -> bool:
        """Whether the retry controller may issue another attempt."""
        return self.kind in (
            ErrorKind.NETWORK,
            ErrorKind.TIMEOUT,
            ErrorKind.SERVER_ERROR,
            ErrorKind.RATE_LIMITED,
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self.code!r}, message={self.message!r}, "
            f"status_code={self.status_code!r})"
        )


class ConfigurationError(TraceWiseError, ValueError):
    """Raised when the client configuration is invalid.

    This exception is raised synchronously while the configuration is being
    built, before any network attempt is made.

    Common causes include:
    - A base URL that is empty, relative or not http(s)
    - Non-positive timeouts or deadlines
    - Negative retry counts or delays
    """

    kind = ErrorKind.CONFIGURATION
    default_code = "CONFIGURATION_ERROR"


class AuthenticationError(TraceWiseError):
    """Raised when the credential provider cannot produce a usable token.

    Never retried: a token source that failed once is not expected to succeed
    a second later, and the controller has no way to repair it.
    """

    kind = ErrorKind.AUTHENTICATION
    default_code = "AUTH_ERROR"

    def __str__(self) -> str:
        return f"Authentication error: {self.message}"


class ClientError(TraceWiseError):
    """Raised when the backend rejects a request with a 4xx status (not 429).

    The backend's error envelope code and message are passed through
    unchanged. Never retried.

    Example:
        try:
            await client.register_product("user-1", product)
        except ClientError as e:
            if e.code == "VALIDATION_ERROR":
                show_form_error(e.message)
    """

    kind = ErrorKind.CLIENT_ERROR
    default_code = "HTTP_ERROR"


ValidationError = ClientError


class RateLimitedError(TraceWiseError):
    """Raised when the caller is throttled.

    Raised either by the backend (HTTP 429) or by the local usage gate before
    any network call is made.

    Attributes:
        retry_after: Seconds to wait before retrying. None when the window is
            not known (e.g. a monthly quota rejected locally).
    """

    kind = ErrorKind.RATE_LIMITED
    default_code = "RATE_LIMIT_EXCEEDED"

    def __init__(
        self,
        message: str | None = None,
        *,
        retry_after: int | None = None,
        code: str | None = None,
        status_code: int | None = None,
        correlation_id: str | None = None,
    ):
        if message is None:
            if retry_after is not None:
                message = f"Rate limit exceeded. Retry after {retry_after} seconds"
            else:
                message = "Rate limit exceeded"
        super().__init__(
            message,
            code=code,
            status_code=status_code,
            correlation_id=correlation_id,
        )
        self.retry_after = retry_after


class TransientError(TraceWiseError):
    """Base class for failures that may succeed on a later attempt."""


class NetworkError(TransientError):
    """Raised when no HTTP response was received (connection, DNS, reset)."""

    kind = ErrorKind.NETWORK
    default_code = "NETWORK_ERROR"

    def __str__(self) -> str:
        return f"Network error: {self.message}"


class RequestTimeoutError(TransientError):
    """Raised when an attempt exceeds the per-attempt timeout."""

    kind = ErrorKind.TIMEOUT
    default_code = "TIMEOUT"


class ServerError(TransientError):
    """Raised when the backend answers with a 5xx status."""

    kind = ErrorKind.SERVER_ERROR
    default_code = "HTTP_ERROR"


class DecodeError(TraceWiseError):
    """Raised when a successful response does not match the expected shape.

    A decode failure points at client/server contract drift rather than a
    transient condition, so it is never retried.

    Attributes:
        raw_body: The response body text that failed to decode, if available.
    """

    kind = ErrorKind.DECODE
    default_code = "INVALID_RESPONSE"

    def __init__(
        self,
        message: str = "Invalid response from server",
        *,
        raw_body: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, status_code=status_code)
        self.raw_body = raw_body


class UnknownError(TraceWiseError):
    """Raised for outcomes that fit no other category."""

    kind = ErrorKind.UNKNOWN
    default_code = "UNKNOWN_ERROR"

    def __str__(self) -> str:
        return f"Unknown error: {self.message}"


class SnapshotBackendError(TraceWiseError):
    """Raised when a usage snapshot backend cannot be read or written.

    The usage snapshot is an optimization, so the snapshot store logs these
    and carries on; they only surface when a backend is used directly.
    """

    kind = ErrorKind.UNKNOWN
    default_code = "BACKEND_ERROR"


class InvalidDigitalLinkError(TraceWiseError, ValueError):
    """Raised when a GS1 Digital Link cannot be parsed."""

    kind = ErrorKind.CONFIGURATION
    default_code = "INVALID_DIGITAL_LINK"

    def __str__(self) -> str:
        return f"Invalid Digital Link: {self.message}"


class InvalidIdentifierError(TraceWiseError, ValueError):
    """Raised when a product identifier is malformed (e.g. empty GTIN)."""

    kind = ErrorKind.CONFIGURATION
    default_code = "INVALID_IDENTIFIER"


__all__ = [
    "AuthenticationError",
    "ClientError",
    "ConfigurationError",
    "DecodeError",
    "ErrorKind",
    "InvalidDigitalLinkError",
    "InvalidIdentifierError",
    "NetworkError",
    "RateLimitedError",
    "RequestTimeoutError",
    "ServerError",
    "SnapshotBackendError",
    "TraceWiseError",
    "TransientError",
    "UnknownError",
    "ValidationError",
]
