# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Retry decision policy.

Decides, for one classified failure, whether the logical call gets another
attempt and how long to wait before it:

- ClientError, DecodeError, AuthenticationError, UnknownError: never retried
- RateLimitedError: retried after the server's Retry-After (or the configured
  default), without consuming the transient retry budget
- NetworkError, RequestTimeoutError, ServerError: retried while the transient
  retry budget lasts, with exponential backoff plus jitter

Every retry is also bounded by the optional per-call deadline.
"""

import logging
import random
from dataclasses import dataclass

from ..config import RetryConfig
from ..exceptions import ErrorKind, RateLimitedError, TraceWiseError
from ..types.retry import RetryState

logger = logging.getLogger(__name__)

TRANSIENT_KINDS = frozenset(
    {ErrorKind.NETWORK, ErrorKind.TIMEOUT, ErrorKind.SERVER_ERROR}
)


@dataclass(frozen=True)
class RetryDecision:
    """
    Outcome of the policy for one failed attempt.

    Attributes:
        retry: Whether another attempt should be made
        delay: Seconds to wait before that attempt
        reason: Short explanation, used in logs
    """

    retry: bool
    delay: float = 0.0
    reason: str = ""


class RetryPolicy:
    """
    Pure retry decisions driven by RetryConfig.

    Args:
        config: Retry settings
        rng: Random source for jitter. Pass a seeded ``random.Random`` for
            reproducible delays.
    """

    def __init__(self, config: RetryConfig, rng: random.Random | None = None):
        self.config = config
        self._rng = rng or random.Random()  # nosec B311 - jitter, not security

    def compute_backoff(self, retry_index: int) -> float:
        """
        Exponential backoff with jitter for the n-th transient retry (0-based).

        ``min(base * multiplier**n + uniform(0, jitter), max_backoff)``
        """
        delay = self.config.backoff_base * (self.config.backoff_multiplier**retry_index)
        if self.config.jitter > 0:
            delay += self._rng.uniform(0, self.config.jitter)
        return min(delay, self.config.max_backoff)

    def rate_limit_delay(self, error: RateLimitedError) -> float:
        """Server-specified wait, or the configured default."""
        if error.retry_after is not None:
            return float(error.retry_after)
        return float(self.config.default_retry_after)

    def decide(self, error: TraceWiseError, state: RetryState) -> RetryDecision:
        """
        Decide what happens after a failed attempt.

        ``state`` must already account for ``error`` (its transient failure
        and rate-limit counters include this attempt).
        """
        if error.kind is ErrorKind.RATE_LIMITED and isinstance(error, RateLimitedError):
            delay = self.rate_limit_delay(error)
            reason = f"rate limited, waiting {delay:.0f}s"
        elif error.kind in TRANSIENT_KINDS:
            if state.transient_failures > self.config.max_retries:
                return RetryDecision(
                    retry=False,
                    reason=f"retries exhausted after {state.attempt} attempts",
                )
            delay = self.compute_backoff(state.transient_failures - 1)
            reason = f"{error.kind.value}, backing off {delay:.2f}s"
        else:
            return RetryDecision(retry=False, reason=f"{error.kind.value} is not retryable")

        deadline = self.config.call_deadline
        if deadline is not None and state.elapsed + delay > deadline:
            return RetryDecision(
                retry=False,
                delay=delay,
                reason=(
                    f"waiting {delay:.2f}s would exceed the {deadline:.0f}s call deadline"
                ),
            )
        return RetryDecision(retry=True, delay=delay, reason=reason)


__all__ = ["TRANSIENT_KINDS", "RetryDecision", "RetryPolicy"]
