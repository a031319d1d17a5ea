# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Parsing helpers that need no network access."""

from .digital_link import parse_digital_link
from .identifiers import split_product_id

__all__ = ["parse_digital_link", "split_product_id"]
