# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Usage snapshot store.

Holds the current UsageSnapshot behind a single reference. Readers take the
reference without locking; writers build a new immutable snapshot and swap
the reference under an asyncio.Lock, then persist it to the configured
backend. A reader that raced a writer sees either the old or the new
snapshot, never a partially updated one.
"""

import asyncio
import logging

from ..backends.base import SnapshotBackend
from ..backends.memory import MemorySnapshotBackend
from ..exceptions import SnapshotBackendError
from ..types.usage import UsageSnapshot

logger = logging.getLogger(__name__)

SNAPSHOT_KEY = "subscription"


class UsageSnapshotStore:
    """
    Single-writer/multiple-reader holder for the usage snapshot.

    Backend failures are logged and swallowed here: the snapshot only lets the
    client fail fast, so losing it degrades the gate to a no-op rather than
    failing API calls.

    Args:
        backend: Where snapshots are persisted. Defaults to process memory.
        key: Key under which the snapshot is stored in the backend
    """

    def __init__(
        self,
        backend: SnapshotBackend | None = None,
        key: str = SNAPSHOT_KEY,
    ):
        self.backend = backend or MemorySnapshotBackend()
        self.key = key
        self._snapshot: UsageSnapshot | None = None
        self._write_lock = asyncio.Lock()

    def current(self) -> UsageSnapshot | None:
        """Return the current snapshot, or None if none was ever loaded."""
        return self._snapshot

    async def replace(self, snapshot: UsageSnapshot) -> None:
        """Swap in a new snapshot and persist it."""
        async with self._write_lock:
            self._snapshot = snapshot
            logger.debug(
                f"Usage snapshot replaced: tier={snapshot.tier.value}, "
                f"calls={snapshot.used.calls}/{snapshot.limits.calls}"
            )
            try:
                await self.backend.set_state(self.key, snapshot.to_dict())
            except (SnapshotBackendError, OSError) as e:
                logger.warning(f"Failed to persist usage snapshot: {e}")

    async def restore(self) -> UsageSnapshot | None:
        """
        Load the persisted snapshot into memory.

        A snapshot already held in memory is newer than anything persisted, so
        it is kept as is.

        Returns:
            The current snapshot after restoring, or None
        """
        async with self._write_lock:
            if self._snapshot is not None:
                return self._snapshot
            try:
                state = await self.backend.get_state(self.key)
            except (SnapshotBackendError, OSError) as e:
                logger.warning(f"Failed to restore usage snapshot: {e}")
                return None
            if state is None:
                return None
            try:
                self._snapshot = UsageSnapshot.from_dict(state)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Ignoring malformed persisted usage snapshot: {e}")
                return None
            logger.info(
                f"Restored usage snapshot from {self.backend.backend_type} backend "
                f"(tier={self._snapshot.tier.value})"
            )
            return self._snapshot

    async def clear(self) -> None:
        """Forget the snapshot in memory and in the backend."""
        async with self._write_lock:
            self._snapshot = None
            try:
                await self.backend.delete_state(self.key)
            except (SnapshotBackendError, OSError) as e:
                logger.warning(f"Failed to delete persisted usage snapshot: {e}")


__all__ = ["SNAPSHOT_KEY", "UsageSnapshotStore"]
