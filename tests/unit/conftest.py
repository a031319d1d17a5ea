# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures for the TraceWise unit tests."""

from collections.abc import Callable

import httpx
import pytest

from tracewise.config import ClientConfig, RetryConfig
from tracewise.types.usage import Tier, UsageCounters, UsageSnapshot

BASE_URL = "https://api.tracewise.test"


class RecordingSleep:
    """Stand-in for asyncio.sleep that records delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def retry_config() -> RetryConfig:
    """Retry settings without jitter so delays are deterministic."""
    return RetryConfig(jitter=0.0)


@pytest.fixture
def config(retry_config: RetryConfig) -> ClientConfig:
    return ClientConfig(base_url=BASE_URL, api_key="test-key", retry=retry_config)


@pytest.fixture
def make_http_client() -> Callable[..., httpx.AsyncClient]:
    """Build an httpx.AsyncClient whose requests are answered by ``handler``."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def make_snapshot() -> Callable[..., UsageSnapshot]:
    """Build a usage snapshot with generous limits unless overridden."""

    def _make(
        tier: Tier = Tier.FREE,
        calls: int = 0,
        products: int = 0,
        events: int = 0,
        limit: int = 100,
        **kwargs: float,
    ) -> UsageSnapshot:
        return UsageSnapshot(
            tier=tier,
            limits=UsageCounters(calls=limit, products=limit, events=limit),
            used=UsageCounters(calls=calls, products=products, events=events),
            **kwargs,
        )

    return _make
