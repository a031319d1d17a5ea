# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol definitions for pluggable pipeline components.

This module provides Protocol classes that define the interfaces between the
retry controller and the components it drives, so each can be replaced in
tests or by embedding applications.

Available protocols:
- TransportProtocol: Performs one network exchange for a request descriptor
- TokenSource: Async callable producing a bearer token
"""

from .auth import TokenSource
from .transport import Decoder, TransportProtocol

__all__ = [
    "Decoder",
    "TokenSource",
    "TransportProtocol",
]
