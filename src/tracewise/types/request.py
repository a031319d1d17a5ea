# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request descriptor types.

This module defines the immutable description of one logical API call. The
Facade builds a fresh descriptor per call and the retry controller reuses the
same instance for every attempt of that call, which keeps the idempotency key
stable across retries.
"""

import time
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .usage import UsageCounter


class HTTPMethod(Enum):
    """HTTP methods used by the TraceWise API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


def generate_idempotency_key() -> str:
    """Generate a key unique to one logical call.

    Combines the wall-clock timestamp with a random UUID, so two calls with
    identical bodies still get different keys.
    """
    return f"{time.time()}-{uuid.uuid4()}"


@dataclass(frozen=True)
class RequestDescriptor:
    """
    Immutable description of a single logical API call.

    Attributes:
        method: HTTP method
        path: Path relative to the configured base URL (e.g. "/v1/events")
        body: Optional JSON-serializable payload
        params: Optional query parameters; None values are dropped
        idempotent: Whether the backend should deduplicate retried attempts.
            Defaults to True for POST, False otherwise.
        idempotency_key: Key sent as ``Idempotency-Key``. Generated once at
            construction when ``idempotent`` is set and no key was supplied.
        consumes: Extra usage counter this call draws from, checked by the
            local usage gate in addition to the per-minute call counter.
        operation: Name of the Facade operation, for logs and error context.
    """

    method: HTTPMethod
    path: str
    body: Any | None = None
    params: Mapping[str, Any] | None = None
    idempotent: bool | None = None
    idempotency_key: str | None = None
    consumes: UsageCounter | None = None
    operation: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.path.startswith("/"):
            raise ValueError(f"path must start with '/', got {self.path!r}")
        if self.idempotent is None:
            object.__setattr__(self, "idempotent", self.method is HTTPMethod.POST)
        if self.idempotent and self.idempotency_key is None:
            object.__setattr__(self, "idempotency_key", generate_idempotency_key())
        if not self.idempotent:
            object.__setattr__(self, "idempotency_key", None)

    @property
    def query_params(self) -> dict[str, str]:
        """Query parameters with None values removed and values stringified."""
        if not self.params:
            return {}
        return {k: str(v) for k, v in self.params.items() if v is not None}

    def describe(self) -> str:
        """Short human-readable form for logging."""
        return f"{self.method.value} {self.path}"


__all__ = ["HTTPMethod", "RequestDescriptor", "generate_idempotency_key"]
