# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Backend implementations for usage snapshot persistence.

Available backends:
- SnapshotBackend: Abstract base class defining the backend interface
- MemorySnapshotBackend: In-process storage (default)
- FileSnapshotBackend: JSON document on local disk
- RedisSnapshotBackend: Shared Redis storage (requires redis extra)

Note: RedisSnapshotBackend is lazily imported to avoid requiring the redis
package when only the memory or file backends are used.
"""

from typing import TYPE_CHECKING, cast

from tracewise.backends.base import (
    DEFAULT_NAMESPACE,
    HealthCheckResult,
    SnapshotBackend,
)
from tracewise.backends.file import FileSnapshotBackend
from tracewise.backends.memory import MemorySnapshotBackend

# Lazy imports for optional redis backend
if TYPE_CHECKING:
    from tracewise.backends.redis import RedisSnapshotBackend

__all__ = [
    "DEFAULT_NAMESPACE",
    "FileSnapshotBackend",
    "HealthCheckResult",
    "MemorySnapshotBackend",
    # Redis backend (lazy loaded)
    "RedisSnapshotBackend",
    # Base classes
    "SnapshotBackend",
]


def __getattr__(name: str) -> type:
    """Lazy import for the optional redis backend."""
    if name == "RedisSnapshotBackend":
        try:
            from tracewise.backends import redis as redis_module

            return cast(type, redis_module.RedisSnapshotBackend)
        except ImportError as e:  # pragma: no cover
            raise ImportError(  # pragma: no cover
                f"'{name}' requires the 'redis' extra. "
                "Install with: pip install tracewise-sdk[redis]"
            ) from e
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
