# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Simulated CIRPASS digital product passport models."""

from typing import Any

from pydantic import field_serializer, field_validator

from .base import WireModel
from .values import DetailValue, decode_details, encode_details


class Manufacturer(WireModel):
    name: str
    country: str


class LifecycleInfo(WireModel):
    """A passport lifecycle entry."""

    event_type: str
    timestamp: str
    details: dict[str, DetailValue] | None = None

    @field_validator("details", mode="before")
    @classmethod
    def _decode_details(cls, value: Any) -> dict[str, DetailValue] | None:
        return decode_details(value)

    @field_serializer("details")
    def _encode_details(
        self, details: dict[str, DetailValue] | None
    ) -> dict[str, Any] | None:
        return encode_details(details)


class Warranty(WireModel):
    ends: str


class Repairability(WireModel):
    score: float


class CirpassProduct(WireModel):
    """
    Digital product passport returned by the CIRPASS simulator.

    Only ``id`` and ``name`` are guaranteed; everything else depends on how
    much of the passport the simulator has filled in.
    """

    id: str
    gtin: str | None = None
    serial: str | None = None
    name: str
    manufacturer: Manufacturer | None = None
    materials: list[str] | None = None
    origin: str | None = None
    lifecycle: list[LifecycleInfo] | None = None
    warranty: Warranty | None = None
    repairability: Repairability | None = None


__all__ = [
    "CirpassProduct",
    "LifecycleInfo",
    "Manufacturer",
    "Repairability",
    "Warranty",
]
