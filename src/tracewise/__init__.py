# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""TraceWise SDK - Async Python client for the TraceWise traceability API.

Every API call goes through one resilient request pipeline: authentication
headers, idempotency keys for writes, client-side quota checks, failure
classification and retry with exponential backoff.

Key Features:
    - Typed models for products, EPCIS lifecycle events and CIRPASS passports
    - Automatic retries for network failures, timeouts, 5xx and 429 responses
    - Stable idempotency keys across the retries of one write
    - Free-tier quota checks against a cached subscription snapshot
    - Pluggable snapshot persistence (memory, file, Redis)
    - In-process and Prometheus metrics

Quick Start:
    >>> from tracewise import ClientConfig, TraceWiseClient
    >>>
    >>> config = ClientConfig(base_url="https://api.tracewise.io", api_key="...")
    >>> async with TraceWiseClient(config) as client:
    ...     ids = client.parse_digital_link("https://id.gs1.org/01/09506000134352/21/SN-1")
    ...     product = await client.get_product(ids.gtin, ids.serial)

Main Exports:
    - TraceWiseClient, create_client: The API client
    - ClientConfig, RetryConfig: Configuration options
    - TraceWiseError and subclasses: Classified failures
    - Product, LifecycleEvent, DetailValue, CirpassProduct, SubscriptionInfo: Models
    - MemorySnapshotBackend, FileSnapshotBackend, RedisSnapshotBackend: Snapshot storage

Note: RedisSnapshotBackend requires the 'redis' extra. Install with:
    pip install tracewise-sdk[redis]

Version: 1.0.0
"""

__version__ = "1.0.0"

from typing import TYPE_CHECKING

from .backends import (
    FileSnapshotBackend,
    MemorySnapshotBackend,
    SnapshotBackend,
)
from .client import TraceWiseClient, create_client
from .config import ClientConfig, RetryConfig
from .exceptions import (
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
from .models import (
    CirpassProduct,
    DetailKind,
    DetailValue,
    EventResponse,
    HealthResponse,
    LifecycleEvent,
    Page,
    Product,
    ProductIDs,
    RegisterResponse,
    SubscriptionInfo,
)
from .observability import PipelineMetrics, PrometheusPipelineMetrics
from .resilience import RetryController, RetryPolicy
from .types import (
    HTTPMethod,
    RequestDescriptor,
    Tier,
    UsageCounter,
    UsageCounters,
    UsageSnapshot,
)
from .utils import parse_digital_link

if TYPE_CHECKING:
    from .backends.redis import RedisSnapshotBackend


def __getattr__(name: str) -> type:
    """Lazy import for optional dependencies."""
    if name == "RedisSnapshotBackend":
        from .backends import RedisSnapshotBackend

        return RedisSnapshotBackend
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "AuthenticationError",
    "CirpassProduct",
    "ClientConfig",
    "ClientError",
    "ConfigurationError",
    "DecodeError",
    "DetailKind",
    "DetailValue",
    "ErrorKind",
    "EventResponse",
    "FileSnapshotBackend",
    "HTTPMethod",
    "HealthResponse",
    "InvalidDigitalLinkError",
    "InvalidIdentifierError",
    "LifecycleEvent",
    "MemorySnapshotBackend",
    "NetworkError",
    "Page",
    "PipelineMetrics",
    "Product",
    "ProductIDs",
    "PrometheusPipelineMetrics",
    "RateLimitedError",
    "RedisSnapshotBackend",
    "RegisterResponse",
    "RequestDescriptor",
    "RequestTimeoutError",
    "RetryConfig",
    "RetryController",
    "RetryPolicy",
    "ServerError",
    "SnapshotBackend",
    "SnapshotBackendError",
    "SubscriptionInfo",
    "Tier",
    "TraceWiseClient",
    "TraceWiseError",
    "TransientError",
    "UnknownError",
    "UsageCounter",
    "UsageCounters",
    "UsageSnapshot",
    "ValidationError",
    "__version__",
    "create_client",
    "parse_digital_link",
]
