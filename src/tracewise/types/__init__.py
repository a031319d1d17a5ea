# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Type definitions and constants."""

from .request import HTTPMethod, RequestDescriptor, generate_idempotency_key
from .retry import CallPhase, RetryState
from .usage import (
    COUNTER_WINDOW_SECONDS,
    Tier,
    UsageCounter,
    UsageCounters,
    UsageSnapshot,
)

__all__ = [
    "COUNTER_WINDOW_SECONDS",
    "CallPhase",
    # Request types
    "HTTPMethod",
    "RequestDescriptor",
    # Retry types
    "RetryState",
    # Usage types
    "Tier",
    "UsageCounter",
    "UsageCounters",
    "UsageSnapshot",
    "generate_idempotency_key",
]
