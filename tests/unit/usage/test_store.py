"""Unit tests for the usage snapshot store."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from tracewise.backends.memory import MemorySnapshotBackend
from tracewise.exceptions import SnapshotBackendError
from tracewise.types.usage import Tier, UsageSnapshot
from tracewise.usage.store import SNAPSHOT_KEY, UsageSnapshotStore


class TestUsageSnapshotStore:
    @pytest.fixture
    def backend(self):
        return MemorySnapshotBackend(namespace="test")

    @pytest.fixture
    def store(self, backend):
        return UsageSnapshotStore(backend)

    def test_defaults_to_memory_backend(self):
        store = UsageSnapshotStore()
        assert isinstance(store.backend, MemorySnapshotBackend)
        assert store.current() is None

    @pytest.mark.asyncio
    async def test_replace_swaps_and_persists(self, store, backend, make_snapshot):
        snapshot = make_snapshot(calls=4)
        await store.replace(snapshot)

        assert store.current() is snapshot
        assert await backend.get_state(SNAPSHOT_KEY) == snapshot.to_dict()

    @pytest.mark.asyncio
    async def test_restore_loads_persisted_snapshot(self, backend, make_snapshot):
        snapshot = make_snapshot(tier=Tier.PREMIUM, fetched_at=100.0)
        await backend.set_state(SNAPSHOT_KEY, snapshot.to_dict())

        store = UsageSnapshotStore(backend)
        assert await store.restore() == snapshot
        assert store.current() == snapshot

    @pytest.mark.asyncio
    async def test_restore_keeps_newer_in_memory_snapshot(self, store, backend, make_snapshot):
        newer = make_snapshot(calls=9)
        await store.replace(newer)
        await backend.set_state(SNAPSHOT_KEY, make_snapshot(calls=1).to_dict())

        assert await store.restore() is newer

    @pytest.mark.asyncio
    async def test_restore_with_nothing_persisted(self, store):
        assert await store.restore() is None

    @pytest.mark.asyncio
    async def test_restore_ignores_malformed_state(self, store, backend):
        await backend.set_state(SNAPSHOT_KEY, {"tier": "gold"})
        assert await store.restore() is None
        assert store.current() is None

    @pytest.mark.asyncio
    async def test_backend_failures_are_not_raised(self, make_snapshot):
        backend = AsyncMock(spec=MemorySnapshotBackend)
        backend.set_state.side_effect = SnapshotBackendError("down")
        backend.get_state.side_effect = SnapshotBackendError("down")
        backend.delete_state.side_effect = OSError("disk gone")
        store = UsageSnapshotStore(backend)

        snapshot = make_snapshot()
        await store.replace(snapshot)
        assert store.current() is snapshot

        await store.clear()
        assert store.current() is None
        assert await store.restore() is None

    @pytest.mark.asyncio
    async def test_clear(self, store, backend, make_snapshot):
        await store.replace(make_snapshot())
        await store.clear()

        assert store.current() is None
        assert await backend.get_state(SNAPSHOT_KEY) is None

    @pytest.mark.asyncio
    async def test_concurrent_readers_see_whole_snapshots(self, store, make_snapshot):
        """Readers racing writers only ever see complete snapshots."""
        snapshots = [make_snapshot(calls=i, products=i, events=i) for i in range(20)]
        seen: list[UsageSnapshot] = []

        async def reader():
            for _ in range(50):
                current = store.current()
                if current is not None:
                    seen.append(current)
                await asyncio.sleep(0)

        async def writer():
            for snapshot in snapshots:
                await store.replace(snapshot)
                await asyncio.sleep(0)

        await asyncio.gather(reader(), reader(), writer())

        assert seen
        for snapshot in seen:
            assert snapshot.used.calls == snapshot.used.products == snapshot.used.events
