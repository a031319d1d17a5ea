# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Pipeline metrics for the TraceWise SDK.

This module provides:
1. PipelineMetrics - Dataclass counting logical calls, attempts and retries
2. PrometheusPipelineMetrics - Prometheus counters/histograms for the same events

Usage:
    metrics = PipelineMetrics()
    client = TraceWiseClient(config, metrics=metrics)

    await client.get_product("09506000134352")

    stats = metrics.get_stats()
    print(stats["attempts"], stats["retries"])
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any

from prometheus_client import CollectorRegistry, Counter, Histogram

from ..exceptions import ErrorKind

logger = logging.getLogger(__name__)


@dataclass
class PipelineMetrics:
    """
    In-process counters for the request pipeline.

    Thread Safety:
        Simple counter increments rely on the GIL. The per-kind failure
        dictionary is updated under a threading.Lock.

    Example:
        >>> metrics = PipelineMetrics()
        >>> metrics.record_retry(ErrorKind.SERVER_ERROR, 1.4)
        >>> metrics.retries
        1
    """

    # Logical call lifecycle
    calls_started: int = 0
    calls_succeeded: int = 0
    calls_failed: int = 0
    calls_cancelled: int = 0

    # Attempt accounting
    attempts: int = 0
    retries: int = 0
    rate_limit_waits: int = 0
    total_backoff_seconds: float = 0.0

    # Local usage gate
    gate_rejections: int = 0

    _failures_by_kind: dict[str, int] = field(default_factory=dict, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def record_call_started(self) -> None:
        self.calls_started += 1

    def record_attempt(self) -> None:
        self.attempts += 1

    def record_success(self) -> None:
        self.calls_succeeded += 1

    def record_failure(self, kind: ErrorKind) -> None:
        """Record a logical call that ended in a terminal failure."""
        self.calls_failed += 1
        with self._lock:
            self._failures_by_kind[kind.value] = (
                self._failures_by_kind.get(kind.value, 0) + 1
            )

    def record_cancelled(self) -> None:
        self.calls_cancelled += 1

    def record_retry(self, kind: ErrorKind, delay: float) -> None:
        """Record a scheduled retry and the delay slept before it."""
        self.retries += 1
        self.total_backoff_seconds += delay
        if kind is ErrorKind.RATE_LIMITED:
            self.rate_limit_waits += 1

    def record_gate_rejection(self) -> None:
        self.gate_rejections += 1

    def get_success_rate(self) -> float:
        """
        Proportion of finished logical calls that succeeded.

        Returns 1.0 when no call has finished yet.
        """
        finished = self.calls_succeeded + self.calls_failed
        return self.calls_succeeded / finished if finished > 0 else 1.0

    def get_stats(self) -> dict[str, Any]:
        """Return metrics as a JSON-serializable dictionary."""
        with self._lock:
            failures_by_kind = dict(self._failures_by_kind)
        return {
            "calls_started": self.calls_started,
            "calls_succeeded": self.calls_succeeded,
            "calls_failed": self.calls_failed,
            "calls_cancelled": self.calls_cancelled,
            "attempts": self.attempts,
            "retries": self.retries,
            "rate_limit_waits": self.rate_limit_waits,
            "total_backoff_seconds": self.total_backoff_seconds,
            "gate_rejections": self.gate_rejections,
            "success_rate": self.get_success_rate(),
            "failures_by_kind": failures_by_kind,
        }

    def reset(self) -> None:
        """Reset all metrics to zero."""
        self.calls_started = 0
        self.calls_succeeded = 0
        self.calls_failed = 0
        self.calls_cancelled = 0
        self.attempts = 0
        self.retries = 0
        self.rate_limit_waits = 0
        self.total_backoff_seconds = 0.0
        self.gate_rejections = 0
        with self._lock:
            self._failures_by_kind.clear()


class PrometheusPipelineMetrics:
    """
    Prometheus metrics for the request pipeline.

    Metrics:
        - tracewise_attempts_total{method,outcome}: Counter of network attempts
        - tracewise_retries_total{kind}: Counter of scheduled retries
        - tracewise_backoff_seconds{kind}: Histogram of delays between attempts
        - tracewise_gate_rejections_total: Counter of local usage gate rejections

    Pass a dedicated ``CollectorRegistry`` when creating more than one
    instance in a process; the default registry rejects duplicate names.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        kwargs: dict[str, Any] = {}
        if registry is not None:
            kwargs["registry"] = registry

        self.attempts = Counter(
            "tracewise_attempts_total",
            "Network attempts made by the TraceWise SDK",
            ["method", "outcome"],  # outcome: success or an ErrorKind value
            **kwargs,
        )
        self.retries = Counter(
            "tracewise_retries_total",
            "Retries scheduled by the TraceWise SDK",
            ["kind"],
            **kwargs,
        )
        self.backoff_seconds = Histogram(
            "tracewise_backoff_seconds",
            "Delay slept between attempts of one logical call",
            ["kind"],
            buckets=[0.5, 1, 2, 4, 8, 16, 30, 60, 120, 300],
            **kwargs,
        )
        self.gate_rejections = Counter(
            "tracewise_gate_rejections_total",
            "Calls rejected by the local usage gate before any network attempt",
            **kwargs,
        )
        logger.info("Prometheus pipeline metrics initialized")

    def observe_attempt(self, method: str, outcome: str) -> None:
        self.attempts.labels(method=method, outcome=outcome).inc()

    def observe_retry(self, kind: ErrorKind, delay: float) -> None:
        self.retries.labels(kind=kind.value).inc()
        self.backoff_seconds.labels(kind=kind.value).observe(delay)

    def observe_gate_rejection(self) -> None:
        self.gate_rejections.inc()


__all__ = ["PipelineMetrics", "PrometheusPipelineMetrics"]
