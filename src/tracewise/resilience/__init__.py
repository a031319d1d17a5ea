# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Retry decisions and the per-call retry/backoff controller."""

from .controller import RetryController, SleepFunc
from .policy import TRANSIENT_KINDS, RetryDecision, RetryPolicy

__all__ = [
    "TRANSIENT_KINDS",
    "RetryController",
    "RetryDecision",
    "RetryPolicy",
    "SleepFunc",
]
