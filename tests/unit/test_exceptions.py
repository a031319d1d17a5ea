"""Unit tests for the exceptions module.

Tests the TraceWiseError hierarchy defined in tracewise.exceptions.
"""

import pytest

from tracewise.exceptions import (
    AuthenticationError,
    ClientError,
    ConfigurationError,
    DecodeError,
    ErrorKind,
    InvalidDigitalLinkError,
    InvalidIdentifierError,
    NetworkError,
    RateLimitedError,
    RequestTimeoutError,
    ServerError,
    SnapshotBackendError,
    TraceWiseError,
    TransientError,
    UnknownError,
    ValidationError,
)


class TestTraceWiseError:
    """Tests for the base TraceWiseError exception."""

    def test_can_be_caught_as_exception(self):
        """TraceWiseError can be caught as a standard Exception."""
        with pytest.raises(Exception):  # noqa: B017
            raise TraceWiseError("test error")

    def test_message_preserved(self):
        error = TraceWiseError("test message")
        assert str(error) == "test message"
        assert error.message == "test message"

    def test_defaults(self):
        """Base error has the unknown kind and no response details."""
        error = TraceWiseError()
        assert error.kind is ErrorKind.UNKNOWN
        assert error.code == "UNKNOWN_ERROR"
        assert error.status_code is None
        assert error.correlation_id is None
        assert error.attempts is None
        assert error.operation is None
        assert error.context == {}

    def test_add_context_keeps_class_and_returns_self(self):
        """add_context enriches the error without reclassifying it."""
        error = ClientError("Not found", code="NOT_FOUND", status_code=404)
        result = error.add_context("get_product", gtin="09506000134352", serial=None)

        assert result is error
        assert type(result) is ClientError
        assert error.operation == "get_product"
        assert error.context == {"gtin": "09506000134352"}
        assert error.code == "NOT_FOUND"

    def test_repr(self):
        error = ServerError("boom", status_code=503)
        assert repr(error) == "ServerError(code='HTTP_ERROR', message='boom', status_code=503)"


class TestClassification:
    """Each subclass carries the expected kind and default code."""

    @pytest.mark.parametrize(
        "error, kind, code",
        [
            (ConfigurationError("bad"), ErrorKind.CONFIGURATION, "CONFIGURATION_ERROR"),
            (AuthenticationError("bad"), ErrorKind.AUTHENTICATION, "AUTH_ERROR"),
            (ClientError("bad"), ErrorKind.CLIENT_ERROR, "HTTP_ERROR"),
            (RateLimitedError(), ErrorKind.RATE_LIMITED, "RATE_LIMIT_EXCEEDED"),
            (NetworkError("bad"), ErrorKind.NETWORK, "NETWORK_ERROR"),
            (RequestTimeoutError("bad"), ErrorKind.TIMEOUT, "TIMEOUT"),
            (ServerError("bad"), ErrorKind.SERVER_ERROR, "HTTP_ERROR"),
            (DecodeError(), ErrorKind.DECODE, "INVALID_RESPONSE"),
            (UnknownError("bad"), ErrorKind.UNKNOWN, "UNKNOWN_ERROR"),
            (SnapshotBackendError("bad"), ErrorKind.UNKNOWN, "BACKEND_ERROR"),
            (InvalidDigitalLinkError("bad"), ErrorKind.CONFIGURATION, "INVALID_DIGITAL_LINK"),
            (InvalidIdentifierError("bad"), ErrorKind.CONFIGURATION, "INVALID_IDENTIFIER"),
        ],
    )
    def test_kind_and_code(self, error, kind, code):
        assert error.kind is kind
        assert error.code == code
        assert isinstance(error, TraceWiseError)

    @pytest.mark.parametrize(
        "error, retryable",
        [
            (NetworkError("x"), True),
            (RequestTimeoutError("x"), True),
            (ServerError("x"), True),
            (RateLimitedError(), True),
            (ClientError("x"), False),
            (DecodeError(), False),
            (AuthenticationError("x"), False),
            (UnknownError("x"), False),
        ],
    )
    def test_is_retryable(self, error, retryable):
        assert error.is_retryable is retryable

    def test_transient_errors_share_base(self):
        for cls in (NetworkError, RequestTimeoutError, ServerError):
            assert issubclass(cls, TransientError)

    def test_envelope_code_overrides_default(self):
        error = ClientError("Invalid GTIN", code="VALIDATION_ERROR", status_code=400)
        assert error.code == "VALIDATION_ERROR"
        assert error.status_code == 400

    def test_validation_error_alias(self):
        assert ValidationError is ClientError


class TestValueErrorCompatibility:
    """Synchronous input errors are also ValueErrors."""

    @pytest.mark.parametrize(
        "cls", [ConfigurationError, InvalidDigitalLinkError, InvalidIdentifierError]
    )
    def test_caught_as_value_error(self, cls):
        with pytest.raises(ValueError):
            raise cls("bad input")

    def test_configuration_error_url_code(self):
        error = ConfigurationError("bad url", code="INVALID_URL")
        assert error.code == "INVALID_URL"


class TestRateLimitedError:
    """Tests for RateLimitedError."""

    def test_default_message_with_retry_after(self):
        error = RateLimitedError(retry_after=30)
        assert error.retry_after == 30
        assert str(error) == "Rate limit exceeded. Retry after 30 seconds"

    def test_default_message_without_retry_after(self):
        error = RateLimitedError()
        assert error.retry_after is None
        assert str(error) == "Rate limit exceeded"

    def test_custom_message(self):
        error = RateLimitedError("Free tier calls quota exhausted (5/5)", retry_after=60)
        assert str(error) == "Free tier calls quota exhausted (5/5)"
        assert error.retry_after == 60


class TestMessageFormatting:
    """Tests for the prefixed string forms."""

    def test_authentication_error(self):
        assert str(AuthenticationError("token expired")) == "Authentication error: token expired"

    def test_network_error(self):
        assert str(NetworkError("connection refused")) == "Network error: connection refused"

    def test_unknown_error(self):
        assert str(UnknownError("weird")) == "Unknown error: weird"

    def test_invalid_digital_link(self):
        error = InvalidDigitalLinkError("GTIN not found in Digital Link")
        assert str(error) == "Invalid Digital Link: GTIN not found in Digital Link"

    def test_decode_error_keeps_raw_body(self):
        error = DecodeError(raw_body="<html>", status_code=200)
        assert error.message == "Invalid response from server"
        assert error.raw_body == "<html>"
        assert error.status_code == 200
