# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Retry/backoff controller for the TraceWise SDK.

Drives one logical call through its attempt loop:

    local usage gate -> [credentials -> transport -> classify -> decide -> sleep]*

Attempts of one call are strictly sequential. The same RequestDescriptor is
reused for every attempt, so an idempotent call keeps one idempotency key
for its whole lifetime. When the call fails for good, the error of the
*last* attempt is raised unchanged.

Both suspension points, the network exchange and the backoff sleep, are
cancellable: cancelling the awaiting task raises asyncio.CancelledError out
of ``execute`` and no further attempt is issued.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from ..config import RetryConfig
from ..credentials import CredentialProvider
from ..exceptions import ErrorKind, TraceWiseError, UnknownError
from ..observability.metrics import PipelineMetrics, PrometheusPipelineMetrics
from ..protocols.transport import Decoder, TransportProtocol
from ..types.request import RequestDescriptor
from ..types.retry import CallPhase, RetryState
from ..usage.gate import LocalUsageGate
from .policy import TRANSIENT_KINDS, RetryPolicy

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[Any]]


class RetryController:
    """
    Bounded retry loop around a transport.

    Args:
        transport: Performs one network exchange per attempt
        credentials: Supplies authentication headers for every attempt
        gate: Optional local usage gate checked once before the first attempt
        config: Retry settings
        policy: Retry decisions; built from ``config`` when omitted
        metrics: Optional in-process metrics
        prometheus: Optional Prometheus metrics
        sleep: Coroutine function used to wait between attempts

    Example:
        >>> controller = RetryController(transport, credentials, gate, RetryConfig())
        >>> product = await controller.execute(descriptor, Product.from_dict)
    """

    def __init__(
        self,
        transport: TransportProtocol,
        credentials: CredentialProvider,
        gate: LocalUsageGate | None = None,
        config: RetryConfig | None = None,
        policy: RetryPolicy | None = None,
        metrics: PipelineMetrics | None = None,
        prometheus: PrometheusPipelineMetrics | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ):
        self.transport = transport
        self.credentials = credentials
        self.gate = gate
        self.config = config or RetryConfig()
        self.policy = policy or RetryPolicy(self.config)
        self.metrics = metrics
        self.prometheus = prometheus
        self._sleep = sleep

    async def execute(
        self,
        descriptor: RequestDescriptor,
        decoder: Decoder | None = None,
    ) -> Any:
        """
        Run one logical call to completion.

        Args:
            descriptor: The call; reused unchanged for every attempt
            decoder: Converts the JSON body of a successful response

        Returns:
            The decoded result of the first successful attempt

        Raises:
            RateLimitedError: If the local usage gate rejects the call (no
                network attempt is made) or rate limiting outlasts the deadline
            TraceWiseError: The classified error of the last attempt
            asyncio.CancelledError: If the call is cancelled while suspended
        """
        self._admit(descriptor)

        state = RetryState(max_attempts=self.config.max_retries)
        if self.metrics:
            self.metrics.record_call_started()

        while True:
            state.phase = CallPhase.ATTEMPTING
            state.attempt += 1
            logger.debug(f"{descriptor.describe()} attempt {state.attempt}")
            if self.metrics:
                self.metrics.record_attempt()

            try:
                headers = await self.credentials.get_headers()
                result = await self.transport.send(descriptor, headers, decoder)
            except asyncio.CancelledError:
                self._on_cancelled(descriptor, state)
                raise
            except TraceWiseError as e:
                error = e
            except Exception as e:
                logger.error(
                    f"Unexpected error from transport for {descriptor.describe()}: {e}",
                    exc_info=True,
                )
                error = UnknownError(f"{type(e).__name__}: {e}")
                error.__cause__ = e
            else:
                state.phase = CallPhase.SUCCEEDED
                self._observe_attempt(descriptor, "success")
                if self.metrics:
                    self.metrics.record_success()
                return result

            self._observe_attempt(descriptor, error.kind.value)
            delay = self._decide(descriptor, state, error)

            try:
                await self._sleep(delay)
            except asyncio.CancelledError:
                self._on_cancelled(descriptor, state)
                raise

    def _admit(self, descriptor: RequestDescriptor) -> None:
        """Fail fast when the local usage gate rejects the call."""
        if self.gate is None:
            return
        admission = self.gate.check(descriptor.consumes)
        if admission.admitted:
            return
        logger.info(f"{descriptor.describe()} rejected locally: {admission.reason}")
        if self.metrics:
            self.metrics.record_gate_rejection()
        if self.prometheus:
            self.prometheus.observe_gate_rejection()
        admission.raise_for_rejection()

    def _decide(
        self, descriptor: RequestDescriptor, state: RetryState, error: TraceWiseError
    ) -> float:
        """
        Record a failed attempt and return the delay before the next one.

        Raises the error when the call must not be retried.
        """
        state.phase = CallPhase.DECIDING
        state.last_error = error
        if error.kind is ErrorKind.RATE_LIMITED:
            state.rate_limited += 1
        elif error.kind in TRANSIENT_KINDS:
            state.transient_failures += 1

        decision = self.policy.decide(error, state)
        if not decision.retry:
            state.phase = CallPhase.FAILED
            error.attempts = state.attempt
            if self.metrics:
                self.metrics.record_failure(error.kind)
            # deadline give-ups carry the delay that was refused
            log = logger.warning if decision.delay else logger.error
            log(
                f"{descriptor.describe()} failed after {state.attempt} attempt(s) "
                f"[{error.code}]: {error.message} ({decision.reason})"
            )
            raise error

        logger.warning(
            f"{descriptor.describe()} attempt {state.attempt} failed "
            f"[{error.code}]: {decision.reason}"
        )
        state.delays.append(decision.delay)
        if self.metrics:
            self.metrics.record_retry(error.kind, decision.delay)
        if self.prometheus:
            self.prometheus.observe_retry(error.kind, decision.delay)
        return decision.delay

    def _observe_attempt(self, descriptor: RequestDescriptor, outcome: str) -> None:
        if self.prometheus:
            self.prometheus.observe_attempt(descriptor.method.value, outcome)

    def _on_cancelled(self, descriptor: RequestDescriptor, state: RetryState) -> None:
        state.phase = CallPhase.FAILED
        logger.debug(f"{descriptor.describe()} cancelled during attempt {state.attempt}")
        if self.metrics:
            self.metrics.record_cancelled()


__all__ = ["RetryController", "SleepFunc"]
