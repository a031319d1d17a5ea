# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Base Backend for usage snapshot persistence

This module provides the SnapshotBackend abstract class that defines the
common interface for every place a usage snapshot can be persisted between
client instances (process memory, a local file, a shared Redis).

Backends store plain JSON-compatible dictionaries. Converting them to and
from UsageSnapshot objects is the job of the UsageSnapshotStore.
"""

import abc
import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "tracewise"


@dataclass
class HealthCheckResult:
    """
    Structured health check result for backend monitoring.

    Attributes:
        healthy: Whether the backend is operational
        backend_type: Type of backend (e.g., 'redis', 'memory', 'file')
        namespace: Backend namespace
        error: Error message if unhealthy
        metadata: Additional backend-specific information
    """

    healthy: bool
    backend_type: str
    namespace: str
    error: str | None = None
    metadata: dict[str, Any] | None = None


class SnapshotBackend(abc.ABC):
    """
    An abstract base class for usage snapshot persistence.

    Implementations must tolerate concurrent readers. Writes replace the
    whole stored value for a key; partial updates are not supported.
    """

    backend_type: str = "base"

    def __init__(self, namespace: str = DEFAULT_NAMESPACE):
        """
        Initialize the backend with a namespace for isolation.

        Args:
            namespace: Namespace for isolating data across different clients
        """
        if not namespace:
            raise ValueError("namespace must not be empty")
        self.namespace = namespace

    def _key(self, key: str) -> str:
        """Prefix a key with the backend namespace."""
        return f"{self.namespace}:{key}"

    @abc.abstractmethod
    async def get_state(self, key: str) -> dict[str, Any] | None:
        """
        Get the stored state for a given key.

        Args:
            key: The key to retrieve state for

        Returns:
            A copy of the state dictionary if it exists, None otherwise
        """
        pass

    @abc.abstractmethod
    async def set_state(self, key: str, state: dict[str, Any]) -> None:
        """
        Replace the stored state for a given key.

        Args:
            key: The key to set state for
            state: JSON-compatible dictionary to store
        """
        pass

    @abc.abstractmethod
    async def delete_state(self, key: str) -> None:
        """Remove the stored state for a key. Missing keys are ignored."""
        pass

    @abc.abstractmethod
    async def clear(self) -> None:
        """Remove every key in this backend's namespace."""
        pass

    @abc.abstractmethod
    async def health_check(self) -> HealthCheckResult:
        """Perform a health check on the backend."""
        pass

    async def cleanup(self) -> None:
        """Release backend resources. The default implementation does nothing."""
        return None

    async def __aenter__(self) -> "SnapshotBackend":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.cleanup()


__all__ = ["DEFAULT_NAMESPACE", "HealthCheckResult", "SnapshotBackend"]
