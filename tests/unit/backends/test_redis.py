import json
from unittest.mock import AsyncMock, Mock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from tracewise.backends.redis import DEFAULT_REDIS_URL, RedisSnapshotBackend
from tracewise.exceptions import SnapshotBackendError


async def _scan(*keys):
    for key in keys:
        yield key


class TestRedisSnapshotBackend:
    @pytest.fixture
    def mock_redis(self):
        mock = AsyncMock()
        mock.get.return_value = None
        mock.ping.return_value = True
        return mock

    @pytest.fixture
    def backend(self, mock_redis):
        return RedisSnapshotBackend(redis_client=mock_redis, namespace="test", key_ttl=600)

    def test_init_defaults(self, monkeypatch):
        monkeypatch.delenv("REDIS_URL", raising=False)
        backend = RedisSnapshotBackend()
        assert backend.redis_url == DEFAULT_REDIS_URL
        assert backend.backend_type == "redis"
        assert backend.key_ttl is None

    def test_init_from_environment(self, monkeypatch):
        monkeypatch.setenv("REDIS_URL", "redis://cache:6380/1")
        assert RedisSnapshotBackend().redis_url == "redis://cache:6380/1"

    def test_client_created_lazily_from_url(self, mock_redis):
        with patch(
            "tracewise.backends.redis.Redis.from_url", return_value=mock_redis
        ) as from_url:
            backend = RedisSnapshotBackend(redis_url="redis://cache:6379")
            from_url.assert_not_called()
            assert backend._client() is mock_redis
            from_url.assert_called_once_with("redis://cache:6379", decode_responses=True)

    @pytest.mark.asyncio
    async def test_set_state(self, backend, mock_redis):
        await backend.set_state("subscription", {"tier": "free"})
        mock_redis.set.assert_awaited_once_with(
            "test:subscription", json.dumps({"tier": "free"}), ex=600
        )

    @pytest.mark.asyncio
    async def test_get_state(self, backend, mock_redis):
        mock_redis.get.return_value = json.dumps({"tier": "premium"})
        assert await backend.get_state("subscription") == {"tier": "premium"}
        mock_redis.get.assert_awaited_once_with("test:subscription")

    @pytest.mark.asyncio
    async def test_get_state_missing(self, backend):
        assert await backend.get_state("subscription") is None

    @pytest.mark.asyncio
    async def test_get_state_malformed(self, backend, mock_redis):
        mock_redis.get.return_value = "{oops"
        assert await backend.get_state("subscription") is None

    @pytest.mark.asyncio
    async def test_redis_errors_wrapped(self, backend, mock_redis):
        mock_redis.get.side_effect = RedisConnectionError("refused")
        with pytest.raises(SnapshotBackendError, match="Redis read failed"):
            await backend.get_state("subscription")

    @pytest.mark.asyncio
    async def test_delete_state(self, backend, mock_redis):
        await backend.delete_state("subscription")
        mock_redis.delete.assert_awaited_once_with("test:subscription")

    @pytest.mark.asyncio
    async def test_clear_scans_namespace(self, backend, mock_redis):
        mock_redis.scan_iter = Mock(return_value=_scan("test:a", "test:b"))
        await backend.clear()
        mock_redis.scan_iter.assert_called_once_with(match="test:*")
        mock_redis.delete.assert_awaited_once_with("test:a", "test:b")

    @pytest.mark.asyncio
    async def test_clear_empty_namespace(self, backend, mock_redis):
        mock_redis.scan_iter = Mock(return_value=_scan())
        await backend.clear()
        mock_redis.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_health_check(self, backend, mock_redis):
        result = await backend.health_check()
        assert result.healthy is True

        mock_redis.ping.side_effect = RedisConnectionError("down")
        result = await backend.health_check()
        assert result.healthy is False
        assert "down" in result.error

    @pytest.mark.asyncio
    async def test_cleanup_leaves_injected_client_open(self, backend, mock_redis):
        await backend.cleanup()
        mock_redis.aclose.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cleanup_closes_owned_client(self, mock_redis):
        with patch("tracewise.backends.redis.Redis.from_url", return_value=mock_redis):
            backend = RedisSnapshotBackend()
            await backend.set_state("k", {"a": 1})
            await backend.cleanup()
        mock_redis.aclose.assert_awaited_once()
        assert backend._redis is None
