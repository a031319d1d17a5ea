# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Models exchanged with the TraceWise API.

Classes:
    Product, ProductIDs, RegisterProductRequest, RegisterResponse
    LifecycleEvent, EventResponse, Page
    CirpassProduct and its nested passport sections
    SubscriptionInfo, HealthResponse
    DetailValue, DetailKind: typed values for free-form event details
"""

from .base import WireModel
from .cirpass import (
    CirpassProduct,
    LifecycleInfo,
    Manufacturer,
    Repairability,
    Warranty,
)
from .event import EventResponse, LifecycleEvent, Page
from .product import Product, ProductIDs, RegisterProductRequest, RegisterResponse
from .subscription import (
    HealthResponse,
    SubscriptionInfo,
    SubscriptionLimits,
    SubscriptionUsage,
)
from .values import DetailKind, DetailValue

__all__ = [
    "CirpassProduct",
    "DetailKind",
    "DetailValue",
    "EventResponse",
    "HealthResponse",
    "LifecycleEvent",
    "LifecycleInfo",
    "Manufacturer",
    "Page",
    "Product",
    "ProductIDs",
    "RegisterProductRequest",
    "RegisterResponse",
    "Repairability",
    "SubscriptionInfo",
    "SubscriptionLimits",
    "SubscriptionUsage",
    "Warranty",
    "WireModel",
]
