# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
RedisSnapshotBackend for the TraceWise SDK

Stores usage snapshots in Redis so several processes (workers behind one
API key, for instance) share the same view of the subscription quota.
Requires the ``redis`` extra.
"""

import json
import logging
import os
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import RedisError

from ..exceptions import SnapshotBackendError
from .base import DEFAULT_NAMESPACE, HealthCheckResult, SnapshotBackend

logger = logging.getLogger(__name__)

DEFAULT_REDIS_URL = "redis://localhost:6379"


class RedisSnapshotBackend(SnapshotBackend):
    """
    A Redis snapshot backend.

    Values are stored as JSON strings under ``<namespace>:<key>``.

    Args:
        redis_url: Redis connection URL. If not provided, falls back to the
            REDIS_URL environment variable, then to "redis://localhost:6379".
        redis_client: Optional pre-configured ``redis.asyncio.Redis`` client.
            A client passed in is not closed by ``cleanup()``.
        namespace: Namespace prefix for keys
        key_ttl: Optional TTL in seconds applied on every write

    Example:
        >>> backend = RedisSnapshotBackend(redis_url="redis://cache:6379/2")
        >>> client = TraceWiseClient(config, snapshot_backend=backend)
    """

    backend_type = "redis"

    def __init__(
        self,
        redis_url: str | None = None,
        redis_client: Any | None = None,
        namespace: str = DEFAULT_NAMESPACE,
        key_ttl: int | None = None,
    ) -> None:
        super().__init__(namespace)
        if key_ttl is not None and key_ttl <= 0:
            raise ValueError("key_ttl must be positive or None")
        self.key_ttl = key_ttl
        self.redis_url = redis_url or os.environ.get("REDIS_URL", DEFAULT_REDIS_URL)
        self._owned_redis = redis_client is None
        self._redis: Any | None = redis_client

    def _client(self) -> Any:
        if self._redis is None:
            self._redis = Redis.from_url(self.redis_url, decode_responses=True)
        return self._redis

    async def get_state(self, key: str) -> dict[str, Any] | None:
        try:
            raw = await self._client().get(self._key(key))
        except RedisError as e:
            raise SnapshotBackendError(f"Redis read failed for {key}: {e}") from e
        if raw is None:
            return None
        try:
            state = json.loads(raw)
        except (TypeError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring malformed snapshot state for {key}: {e}")
            return None
        return state if isinstance(state, dict) else None

    async def set_state(self, key: str, state: dict[str, Any]) -> None:
        try:
            await self._client().set(self._key(key), json.dumps(state), ex=self.key_ttl)
        except RedisError as e:
            raise SnapshotBackendError(f"Redis write failed for {key}: {e}") from e

    async def delete_state(self, key: str) -> None:
        try:
            await self._client().delete(self._key(key))
        except RedisError as e:
            raise SnapshotBackendError(f"Redis delete failed for {key}: {e}") from e

    async def clear(self) -> None:
        client = self._client()
        try:
            keys = [k async for k in client.scan_iter(match=f"{self.namespace}:*")]
            if keys:
                await client.delete(*keys)
        except RedisError as e:
            raise SnapshotBackendError(f"Redis clear failed: {e}") from e
        logger.debug(f"Cleared {len(keys)} snapshot keys from {self.namespace}")

    async def health_check(self) -> HealthCheckResult:
        """Perform health check on the backend."""
        try:
            await self._client().ping()
            return HealthCheckResult(
                healthy=True,
                backend_type=self.backend_type,
                namespace=self.namespace,
                metadata={"redis_url": self.redis_url},
            )
        except RedisError as e:
            return HealthCheckResult(
                healthy=False,
                backend_type=self.backend_type,
                namespace=self.namespace,
                error=str(e),
            )

    async def cleanup(self) -> None:
        """Close the connection if this backend created it."""
        if self._redis is not None and self._owned_redis:
            try:
                await self._redis.aclose()
            except RedisError as e:
                logger.error(f"Error during cleanup: {e}")
            finally:
                self._redis = None


__all__ = ["DEFAULT_REDIS_URL", "RedisSnapshotBackend"]
