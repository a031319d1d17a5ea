# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
MemorySnapshotBackend for the TraceWise SDK

This module provides an in-memory snapshot backend. It is the default
backend: the snapshot survives for the lifetime of the process only.
"""

import asyncio
import copy
import logging
import time
from typing import Any

from .base import DEFAULT_NAMESPACE, HealthCheckResult, SnapshotBackend

logger = logging.getLogger(__name__)


class MemorySnapshotBackend(SnapshotBackend):
    """
    An in-memory snapshot backend.

    Key Features:
    - Pure in-memory dict-based storage
    - Optional TTL for automatic expiration
    - Async-safe operations using asyncio.Lock

    Note:
        Not shared between processes. Use FileSnapshotBackend to survive
        restarts or RedisSnapshotBackend to share across processes.
    """

    backend_type = "memory"

    def __init__(
        self,
        namespace: str = DEFAULT_NAMESPACE,
        key_ttl: float | None = None,
    ) -> None:
        """
        Initialize the in-memory backend.

        Args:
            namespace: Namespace for key isolation
            key_ttl: Optional TTL for keys in seconds; None keeps keys forever
        """
        super().__init__(namespace)
        if key_ttl is not None and key_ttl <= 0:
            raise ValueError("key_ttl must be positive or None")
        self.key_ttl = key_ttl

        # Format: Dict[key, Tuple[value, Optional[expiry_timestamp]]]
        self._states: dict[str, tuple[dict[str, Any], float | None]] = {}
        self._lock = asyncio.Lock()

    def _is_expired(self, expiry: float | None) -> bool:
        return expiry is not None and time.time() >= expiry

    async def get_state(self, key: str) -> dict[str, Any] | None:
        """Get the state for a given key."""
        async with self._lock:
            entry = self._states.get(self._key(key))
            if entry is None:
                return None
            data, expiry = entry
            if self._is_expired(expiry):
                del self._states[self._key(key)]
                logger.debug(f"Expired snapshot state for key: {key}")
                return None
            return copy.deepcopy(data)

    async def set_state(self, key: str, state: dict[str, Any]) -> None:
        """Set the state for a given key."""
        async with self._lock:
            expiry = time.time() + self.key_ttl if self.key_ttl else None
            self._states[self._key(key)] = (copy.deepcopy(state), expiry)

    async def delete_state(self, key: str) -> None:
        async with self._lock:
            self._states.pop(self._key(key), None)

    async def clear(self) -> None:
        """Clear all stored states."""
        async with self._lock:
            self._states.clear()
            logger.debug("Cleared all snapshot states")

    async def health_check(self) -> HealthCheckResult:
        """Perform a health check on the backend."""
        async with self._lock:
            return HealthCheckResult(
                healthy=True,
                backend_type=self.backend_type,
                namespace=self.namespace,
                metadata={"states_count": len(self._states)},
            )


__all__ = ["MemorySnapshotBackend"]
