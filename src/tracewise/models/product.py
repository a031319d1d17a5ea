# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Product models."""

from .base import WireModel


class Product(WireModel):
    """A product identified by its GTIN and, optionally, a serial number."""

    gtin: str
    serial: str | None = None
    name: str
    description: str | None = None
    manufacturer: str | None = None
    category: str | None = None


class ProductIDs(WireModel):
    """
    Identifiers extracted from a GS1 Digital Link.

    Attributes:
        gtin: 14-digit GTIN (AI 01)
        serial: Serial number (AI 21)
        batch: Batch or lot number (AI 10)
        expiry: Expiry date as YYMMDD (AI 17)
    """

    gtin: str
    serial: str | None = None
    batch: str | None = None
    expiry: str | None = None


class RegisterProductRequest(WireModel):
    """Body of a product registration (``userId`` on the wire)."""

    gtin: str
    serial: str | None = None
    user_id: str


class RegisterResponse(WireModel):
    """Acknowledgement of a product registration."""

    status: str


__all__ = ["Product", "ProductIDs", "RegisterProductRequest", "RegisterResponse"]
