# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Usage snapshot caching and client-side admission control."""

from .gate import ADMITTED, AdmissionResult, LocalUsageGate, check_admission
from .store import SNAPSHOT_KEY, UsageSnapshotStore

__all__ = [
    "ADMITTED",
    "SNAPSHOT_KEY",
    "AdmissionResult",
    "LocalUsageGate",
    "UsageSnapshotStore",
    "check_admission",
]
