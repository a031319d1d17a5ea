# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
EPCIS 2.0 lifecycle event models.

A LifecycleEvent records something that happened to a product (shipping,
receiving, repair, recycling...). Its timestamp travels as ``when`` on the
wire, following EPCIS naming.
"""

from typing import Any, Generic, TypeVar

from pydantic import Field, field_serializer, field_validator

from .base import WireModel
from .values import DetailValue, decode_details, encode_details

T = TypeVar("T")


class LifecycleEvent(WireModel):
    """
    One EPCIS event for a product.

    Example:
        >>> event = LifecycleEvent(
        ...     gtin="09506000134352",
        ...     serial="SN-1",
        ...     biz_step="shipping",
        ...     timestamp="2026-01-15T10:00:00Z",
        ...     details={"carrier": "DHL", "temperature": 4.5},
        ... )
        >>> event.to_dict()["when"]
        '2026-01-15T10:00:00Z'
    """

    gtin: str
    serial: str | None = None
    type: str = "ObjectEvent"
    action: str = "OBSERVE"
    biz_step: str
    disposition: str = "active"
    timestamp: str = Field(alias="when")
    read_point: str | None = None
    biz_location: str | None = None
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


class EventResponse(WireModel):
    """Acknowledgement of a submitted event."""

    id: str
    status: str
    epcis_urn: str | None = None


class Page(WireModel, Generic[T]):
    """
    One page of a paginated listing.

    Attributes:
        items: Entries on this page
        next_page_token: Token for the following page; None on the last page
        total_count: Total number of entries, when the backend reports it
    """

    items: list[T]
    next_page_token: str | None = None
    total_count: int | None = None

    @property
    def has_more(self) -> bool:
        return bool(self.next_page_token)


__all__ = ["EventResponse", "LifecycleEvent", "Page"]
