# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for bearer token sources."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class TokenSource(Protocol):
    """
    Async callable returning a fresh bearer token.

    The SDK has no visibility into token lifetime, so the source is invoked
    for every attempt; caching, if any, belongs to the source itself.
    """

    async def __call__(self) -> str:
        """Return a bearer token (without the "Bearer " prefix)."""
        ...
