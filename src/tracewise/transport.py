# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request transport for the TraceWise API.

This module performs exactly one network exchange per call to ``send`` and
maps the outcome onto the SDK's error taxonomy:

- no response (connection refused, DNS failure, reset) -> NetworkError
- per-attempt timeout -> RequestTimeoutError
- HTTP 429 -> RateLimitedError, with Retry-After or the configured default
- HTTP 4xx -> ClientError carrying the backend's error envelope
- HTTP 5xx -> ServerError
- 2xx whose body does not decode into the expected shape -> DecodeError

The transport never retries and never touches the usage snapshot.
"""

import asyncio
import json
import logging
import math
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any

import httpx

from .config import ClientConfig
from .exceptions import (
    ClientError,
    DecodeError,
    NetworkError,
    RateLimitedError,
    RequestTimeoutError,
    ServerError,
    TraceWiseError,
    UnknownError,
)
from .protocols.transport import Decoder
from .types.request import RequestDescriptor

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/json; charset=utf-8"
API_VERSION_HEADER = "X-API-Version"
IDEMPOTENCY_HEADER = "Idempotency-Key"
RETRY_AFTER_HEADER = "Retry-After"

# Raw body context attached to decode failures is truncated to this length
MAX_LOGGED_BODY = 512


def parse_retry_after(value: str | None) -> int | None:
    """
    Parse a Retry-After header value into whole seconds.

    Accepts delta-seconds (the form the TraceWise API uses) and, for
    robustness, HTTP-dates. Returns None for missing, unparseable or
    non-finite values.
    """
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        pass
    else:
        if not math.isfinite(seconds):
            return None
        return max(0, int(seconds))
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max(0, int((when - datetime.now(timezone.utc)).total_seconds()))


def parse_error_envelope(response: httpx.Response) -> tuple[str | None, str | None, str | None]:
    """
    Extract ``(code, message, correlationId)`` from a backend error envelope.

    The envelope shape is ``{"error": {"code", "message", "correlationId"}}``.
    Missing or malformed envelopes yield ``(None, None, None)``.
    """
    try:
        body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None, None, None
    if not isinstance(body, dict) or not isinstance(body.get("error"), dict):
        return None, None, None
    error = body["error"]

    def _str(key: str) -> str | None:
        value = error.get(key)
        return value if isinstance(value, str) else None

    return _str("code"), _str("message"), _str("correlationId")


class RequestTransport:
    """
    httpx-based implementation of TransportProtocol.

    Args:
        config: Client configuration (base URL, timeout, version, logging)
        http_client: Optional pre-configured ``httpx.AsyncClient``. Its base URL
            must already point at the API. A client passed in is not closed by
            ``aclose()``.

    Example:
        >>> transport = RequestTransport(config)
        >>> data = await transport.send(descriptor, {"x-api-key": "..."})
        >>> await transport.aclose()
    """

    def __init__(
        self,
        config: ClientConfig,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.config = config
        self._owns_client = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(base_url=config.base_url, timeout=config.timeout)
        else:
            client_base = str(http_client.base_url).rstrip("/")
            if client_base != config.base_url:
                logger.warning(
                    f"Injected http_client base URL {client_base!r} does not match "
                    f"configured base_url {config.base_url!r}; requests use the client's"
                )
            logger.debug("Using injected http_client; its own timeout applies")
        self._client = http_client

    def build_headers(
        self, descriptor: RequestDescriptor, auth_headers: dict[str, str]
    ) -> dict[str, str]:
        """Standard headers, idempotency key and authentication for one attempt."""
        headers = {
            "Content-Type": CONTENT_TYPE,
            "Accept": "application/json",
            "User-Agent": self.config.user_agent,
            API_VERSION_HEADER: self.config.api_version,
        }
        if descriptor.idempotent and descriptor.idempotency_key:
            headers[IDEMPOTENCY_HEADER] = descriptor.idempotency_key
        headers.update(auth_headers)
        return headers

    async def send(
        self,
        descriptor: RequestDescriptor,
        headers: dict[str, str],
        decoder: Decoder | None = None,
    ) -> Any:
        """
        Perform one attempt of a logical call.

        Args:
            descriptor: The logical call
            headers: Authentication headers for this attempt
            decoder: Converts the parsed JSON body into the expected type

        Returns:
            The decoded value (or parsed JSON when no decoder is given)

        Raises:
            TraceWiseError: The classified failure of this attempt
        """
        content = None
        if descriptor.body is not None:
            content = json.dumps(descriptor.body, separators=(",", ":"))

        if self.config.log_bodies and content is not None:
            logger.debug(f"{descriptor.describe()} body: {content}")

        try:
            response = await self._client.request(
                descriptor.method.value,
                descriptor.path,
                params=descriptor.query_params or None,
                content=content,
                headers=self.build_headers(descriptor, headers),
            )
        except asyncio.CancelledError:
            raise
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(
                f"Request timed out: {descriptor.describe()}"
            ) from e
        except httpx.TransportError as e:
            raise NetworkError(f"{type(e).__name__}: {e}") from e
        except httpx.HTTPError as e:
            raise UnknownError(f"{type(e).__name__}: {e}") from e

        if self.config.log_bodies:
            logger.debug(
                f"{descriptor.describe()} -> {response.status_code}: "
                f"{response.text[:MAX_LOGGED_BODY]}"
            )

        self._raise_for_status(response)
        return self._decode(descriptor, response, decoder)

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Classify non-2xx responses."""
        status = response.status_code
        if 200 <= status < 300:
            return

        code, message, correlation_id = parse_error_envelope(response)

        if status == 429:
            retry_after = parse_retry_after(response.headers.get(RETRY_AFTER_HEADER))
            if retry_after is None:
                retry_after = self.config.retry.default_retry_after
            raise RateLimitedError(
                retry_after=retry_after,
                code=code,
                status_code=status,
                correlation_id=correlation_id,
            )

        error_cls: type[TraceWiseError]
        if status >= 500:
            error_cls = ServerError
        elif status >= 400:
            error_cls = ClientError
        else:
            raise UnknownError(
                f"Unexpected HTTP {status}",
                status_code=status,
            )
        raise error_cls(
            message or f"HTTP {status}",
            code=code,
            status_code=status,
            correlation_id=correlation_id,
        )

    def _decode(
        self,
        descriptor: RequestDescriptor,
        response: httpx.Response,
        decoder: Decoder | None,
    ) -> Any:
        """Parse the JSON body and convert it into the caller's expected type."""
        raw = response.text
        try:
            data = json.loads(raw) if raw.strip() else None
        except json.JSONDecodeError as e:
            self._log_decode_failure(descriptor, raw, e)
            raise DecodeError(
                f"Response is not valid JSON: {e}",
                raw_body=raw[:MAX_LOGGED_BODY],
                status_code=response.status_code,
            ) from e

        if decoder is None:
            return data
        try:
            return decoder(data)
        except DecodeError:
            raise
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            self._log_decode_failure(descriptor, raw, e)
            raise DecodeError(
                f"Response does not match the expected shape: {type(e).__name__}: {e}",
                raw_body=raw[:MAX_LOGGED_BODY],
                status_code=response.status_code,
            ) from e

    def _log_decode_failure(
        self, descriptor: RequestDescriptor, raw: str, error: Exception
    ) -> None:
        logger.error(
            f"Decode failure for {descriptor.describe()}: {error}; "
            f"body={raw[:MAX_LOGGED_BODY]!r}"
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()


__all__ = [
    "API_VERSION_HEADER",
    "CONTENT_TYPE",
    "IDEMPOTENCY_HEADER",
    "RETRY_AFTER_HEADER",
    "RequestTransport",
    "parse_error_envelope",
    "parse_retry_after",
]
