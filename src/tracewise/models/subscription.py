# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Subscription and service status models.

SubscriptionInfo is the backend's canonical view of the caller's tier, quota
limits and current usage. ``to_snapshot()`` turns it into the UsageSnapshot
the local usage gate consults.
"""

import time

from pydantic import StrictInt

from ..types.usage import Tier, UsageCounters, UsageSnapshot
from .base import WireModel


class SubscriptionLimits(WireModel):
    products_per_month: StrictInt
    events_per_month: StrictInt
    api_calls_per_minute: StrictInt


class SubscriptionUsage(WireModel):
    products_this_month: StrictInt
    events_this_month: StrictInt
    api_calls_this_minute: StrictInt


class SubscriptionInfo(WireModel):
    """
    Tier, limits and usage reported by ``GET /v1/auth/me``.

    Unknown tiers fail validation rather than being treated as free.
    """

    tier: Tier
    limits: SubscriptionLimits
    usage: SubscriptionUsage

    def to_snapshot(self, fetched_at: float | None = None) -> UsageSnapshot:
        """Build the immutable snapshot consulted by the local usage gate."""
        return UsageSnapshot(
            tier=self.tier,
            limits=UsageCounters(
                calls=self.limits.api_calls_per_minute,
                products=self.limits.products_per_month,
                events=self.limits.events_per_month,
            ),
            used=UsageCounters(
                calls=self.usage.api_calls_this_minute,
                products=self.usage.products_this_month,
                events=self.usage.events_this_month,
            ),
            fetched_at=time.time() if fetched_at is None else fetched_at,
        )


class HealthResponse(WireModel):
    status: str
    timestamp: str
    version: str | None = None


__all__ = [
    "HealthResponse",
    "SubscriptionInfo",
    "SubscriptionLimits",
    "SubscriptionUsage",
]
