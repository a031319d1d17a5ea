# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Local usage gate.

Client-side admission control that rejects a call the backend is certain to
throttle, without making a network request. Only the free tier is gated:
paid tiers are left to the backend's own enforcement so that a stale local
snapshot never produces a false rejection.
"""

import logging
import time
from dataclasses import dataclass

from ..exceptions import RateLimitedError
from ..types.usage import COUNTER_WINDOW_SECONDS, Tier, UsageCounter, UsageSnapshot
from .store import UsageSnapshotStore

logger = logging.getLogger(__name__)


@dataclass
class AdmissionResult:
    """
    Result of an admission check.

    Attributes:
        admitted: Whether the call may proceed
        counter: The exhausted counter when rejected
        retry_after: Suggested wait in seconds when rejected, if known
        reason: Human-readable reason when rejected
    """

    admitted: bool
    counter: UsageCounter | None = None
    retry_after: int | None = None
    reason: str | None = None

    def raise_for_rejection(self) -> None:
        """Raise RateLimitedError if the call was not admitted."""
        if not self.admitted:
            raise RateLimitedError(self.reason, retry_after=self.retry_after)


ADMITTED = AdmissionResult(admitted=True)


class LocalUsageGate:
    """
    Admission control against the cached usage snapshot.

    Example:
        >>> gate = LocalUsageGate(store)
        >>> gate.check(UsageCounter.PRODUCTS).raise_for_rejection()
    """

    def __init__(self, store: UsageSnapshotStore):
        self.store = store

    def check(self, consumes: UsageCounter | None = None) -> AdmissionResult:
        """
        Check whether a call may proceed against the current snapshot.

        Args:
            consumes: Extra counter the call draws from, in addition to the
                per-minute call counter every call draws from

        Returns:
            ADMITTED, or a rejection naming the exhausted counter
        """
        return check_admission(self.store.current(), consumes)


def check_admission(
    snapshot: UsageSnapshot | None,
    consumes: UsageCounter | None = None,
    now: float | None = None,
) -> AdmissionResult:
    """
    Pure admission decision for a snapshot.

    With no snapshot the gate degrades to a no-op and always admits. A
    counter with a finite window is only trusted while the snapshot is younger
    than that window; once the window has rolled over the backend has reset
    the counter and the stale value is ignored.
    """
    now = time.time() if now is None else now
    if snapshot is None or snapshot.tier is not Tier.FREE:
        return ADMITTED

    counters = [UsageCounter.CALLS]
    if consumes is not None and consumes is not UsageCounter.CALLS:
        counters.append(consumes)

    for counter in counters:
        window = COUNTER_WINDOW_SECONDS[counter]
        if window is not None and now - snapshot.fetched_at >= window:
            continue
        if snapshot.is_exhausted(counter):
            used = snapshot.used.get(counter)
            limit = snapshot.limits.get(counter)
            logger.debug(f"Local usage gate rejected call: {counter.value} {used}/{limit}")
            return AdmissionResult(
                admitted=False,
                counter=counter,
                retry_after=window,
                reason=(
                    f"Free tier {counter.value} quota exhausted ({used}/{limit})"
                ),
            )
    return ADMITTED


__all__ = ["ADMITTED", "AdmissionResult", "LocalUsageGate", "check_admission"]
