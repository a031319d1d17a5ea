# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Composite product identifiers of the form ``gtin:serial``."""

from ..exceptions import InvalidIdentifierError


def split_product_id(product_id: str) -> tuple[str, str | None]:
    """
    Split a composite product id at the first colon.

    Everything after the first colon is the serial, so serials may contain
    colons themselves. An id without a colon has no serial.

    Raises:
        InvalidIdentifierError: If the GTIN part is empty
    """
    gtin, sep, serial = product_id.partition(":")
    if not gtin:
        raise InvalidIdentifierError(f"Invalid product ID format: {product_id!r}")
    return gtin, serial if sep else None


__all__ = ["split_product_id"]
