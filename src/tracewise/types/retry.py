# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Retry state for one logical call.

A RetryState lives only for the duration of a single logical call and is
discarded once the call resolves, whether it succeeded or failed.
"""

import time
from dataclasses import dataclass, field
from enum import Enum

from ..exceptions import TraceWiseError


class CallPhase(Enum):
    """
    Phases of the per-call retry state machine.

    Transitions:
        ATTEMPTING -> SUCCEEDED | DECIDING
        DECIDING -> ATTEMPTING (after a delay) | FAILED
    """

    ATTEMPTING = "attempting"
    DECIDING = "deciding"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class RetryState:
    """
    Mutable bookkeeping for one logical call's attempt loop.

    Attributes:
        max_attempts: Maximum transient retries (attempts = max_attempts + 1)
        attempt: Number of attempts started so far, starting at 0
        transient_failures: Network/timeout/server failures seen so far.
            Rate-limited attempts are not counted here.
        rate_limited: Number of 429 responses seen so far
        last_error: Classification of the most recent failed attempt
        delays: Every delay slept between attempts, in order
        phase: Current state machine phase
        started_at: Monotonic clock reading when the call started
    """

    max_attempts: int
    attempt: int = 0
    transient_failures: int = 0
    rate_limited: int = 0
    last_error: TraceWiseError | None = None
    delays: list[float] = field(default_factory=list)
    phase: CallPhase = CallPhase.ATTEMPTING
    started_at: float = field(default_factory=time.monotonic)

    @property
    def elapsed(self) -> float:
        """Seconds since the call started."""
        return time.monotonic() - self.started_at

    @property
    def retries_exhausted(self) -> bool:
        """Whether no transient retry budget remains."""
        return self.transient_failures > self.max_attempts


__all__ = ["CallPhase", "RetryState"]
