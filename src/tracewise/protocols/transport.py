# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for request transports."""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from ..types.request import RequestDescriptor

Decoder = Callable[[Any], Any]


@runtime_checkable
class TransportProtocol(Protocol):
    """
    Protocol for performing exactly one network exchange.

    Implementations never retry. They either return the decoded value or
    raise a classified TraceWiseError subclass.
    """

    async def send(
        self,
        descriptor: RequestDescriptor,
        headers: dict[str, str],
        decoder: Decoder | None = None,
    ) -> Any:
        """
        Send one attempt of a logical call.

        Args:
            descriptor: The logical call being attempted
            headers: Per-attempt headers (authentication)
            decoder: Converts the parsed JSON body into the expected type

        Returns:
            The decoded value, or the parsed JSON when no decoder is given

        Raises:
            TraceWiseError: A classified failure
        """
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...
