# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Usage snapshot types for client-side admission control.

A UsageSnapshot is an immutable copy of the subscription tier, quota limits
and current usage reported by the backend. It is never mutated in place:
refreshing it produces a new instance that replaces the old one.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Tier(Enum):
    """
    Subscription tiers.

    Only the FREE tier is gated client-side. Paid tiers rely on the backend's
    own enforcement to avoid false rejections from stale local snapshots.
    """

    FREE = "free"
    PREMIUM = "premium"
    ENTERPRISE = "enterprise"

    @classmethod
    def parse(cls, value: str) -> "Tier":
        """Parse a wire value, raising ValueError for unknown tiers."""
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown subscription tier: {value!r}") from None


class UsageCounter(Enum):
    """
    Quota dimensions tracked by the backend.

    Window Lengths:
        * **CALLS**: API calls per minute
        * **PRODUCTS**: product registrations per month
        * **EVENTS**: lifecycle events per month
    """

    CALLS = "calls"
    PRODUCTS = "products"
    EVENTS = "events"


# Seconds until a rejected counter's window is expected to reopen.
# None means the window is too long for a meaningful hint.
COUNTER_WINDOW_SECONDS: dict[UsageCounter, int | None] = {
    UsageCounter.CALLS: 60,
    UsageCounter.PRODUCTS: None,
    UsageCounter.EVENTS: None,
}


@dataclass(frozen=True)
class UsageCounters:
    """One value per quota dimension (used for both limits and usage)."""

    calls: int = 0
    products: int = 0
    events: int = 0

    def get(self, counter: UsageCounter) -> int:
        return int(getattr(self, counter.value))

    def to_dict(self) -> dict[str, int]:
        return {"calls": self.calls, "products": self.products, "events": self.events}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UsageCounters":
        values = {}
        for name in ("calls", "products", "events"):
            value = data[name]
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an integer, got {value!r}")
            values[name] = value
        return cls(**values)


@dataclass(frozen=True)
class UsageSnapshot:
    """
    Locally cached subscription and usage state.

    Not authoritative: the backend remains the source of truth. The snapshot
    only lets the client fail fast when a call is certain to be rejected.

    Attributes:
        tier: Subscription tier
        limits: Quota per window for each dimension
        used: Consumption in the current window for each dimension
        fetched_at: Unix timestamp of the backend response this came from
    """

    tier: Tier
    limits: UsageCounters
    used: UsageCounters
    fetched_at: float = field(default_factory=time.time)

    def is_exhausted(self, counter: UsageCounter) -> bool:
        """Whether the given dimension has no capacity left in its window."""
        return self.used.get(counter) >= self.limits.get(counter)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tier": self.tier.value,
            "limits": self.limits.to_dict(),
            "used": self.used.to_dict(),
            "fetched_at": self.fetched_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UsageSnapshot":
        return cls(
            tier=Tier.parse(data["tier"]),
            limits=UsageCounters.from_dict(data["limits"]),
            used=UsageCounters.from_dict(data["used"]),
            fetched_at=float(data.get("fetched_at", time.time())),
        )


__all__ = [
    "COUNTER_WINDOW_SECONDS",
    "Tier",
    "UsageCounter",
    "UsageCounters",
    "UsageSnapshot",
]
