# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
TraceWise API client.

TraceWiseClient is the facade applications use. Each method translates one
typed operation into a RequestDescriptor, hands it to the RetryController and
returns the decoded model. No retry, backoff or classification logic lives
here: a terminal failure is re-raised unchanged, enriched only with the name
of the operation and the entity it concerned.

Example:
    >>> config = ClientConfig(base_url="https://api.tracewise.io", api_key="...")
    >>> async with TraceWiseClient(config) as client:
    ...     await client.get_subscription_info()
    ...     product = await client.get_product("09506000134352", "SN-1")
    ...     async for event in client.iter_product_events("09506000134352:SN-1"):
    ...         print(event.biz_step)
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import quote

import httpx
from typing_extensions import Self

from .backends.base import SnapshotBackend
from .config import ClientConfig, TokenProvider
from .credentials import CredentialProvider
from .exceptions import TraceWiseError
from .models import (
    CirpassProduct,
    EventResponse,
    HealthResponse,
    LifecycleEvent,
    Page,
    Product,
    ProductIDs,
    RegisterProductRequest,
    RegisterResponse,
    SubscriptionInfo,
)
from .observability.metrics import PipelineMetrics, PrometheusPipelineMetrics
from .protocols.transport import Decoder, TransportProtocol
from .resilience.controller import RetryController, SleepFunc
from .transport import RequestTransport
from .types.request import HTTPMethod, RequestDescriptor
from .types.usage import UsageCounter
from .usage.gate import LocalUsageGate
from .usage.store import UsageSnapshotStore
from .utils.digital_link import parse_digital_link
from .utils.identifiers import split_product_id

logger = logging.getLogger(__name__)


def _segment(value: str) -> str:
    """Percent-encode one path segment."""
    return quote(value, safe="")


class TraceWiseClient:
    """
    Async client for the TraceWise API.

    Each instance owns its transport, usage snapshot and metrics; there is no
    process-wide state, so independent clients can run side by side.

    Args:
        config: Client configuration
        transport: Custom transport. Defaults to an httpx-based RequestTransport.
        http_client: Pre-configured ``httpx.AsyncClient`` for the default
            transport (ignored when ``transport`` is given)
        snapshot_backend: Where the usage snapshot is persisted. Defaults to
            process memory.
        metrics: In-process pipeline metrics. A fresh PipelineMetrics is
            created when omitted.
        prometheus_metrics: Optional Prometheus metrics
        sleep: Coroutine function used to wait between attempts
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: TransportProtocol | None = None,
        http_client: httpx.AsyncClient | None = None,
        snapshot_backend: SnapshotBackend | None = None,
        metrics: PipelineMetrics | None = None,
        prometheus_metrics: PrometheusPipelineMetrics | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ):
        self.config = config
        self.transport = transport or RequestTransport(config, http_client=http_client)
        self.credentials = CredentialProvider.from_config(config)
        self.usage_store = UsageSnapshotStore(snapshot_backend)
        self.gate = LocalUsageGate(self.usage_store)
        self.metrics = metrics if metrics is not None else PipelineMetrics()
        self._controller = RetryController(
            self.transport,
            self.credentials,
            gate=self.gate,
            config=config.retry,
            metrics=self.metrics,
            prometheus=prometheus_metrics,
            sleep=sleep,
        )
        self._closed = False

        if not self.credentials.has_credentials:
            logger.warning("TraceWiseClient created without an API key or token provider")

    async def __aenter__(self) -> Self:
        """Restore the persisted usage snapshot and return the client."""
        await self.usage_store.restore()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the transport and the snapshot backend."""
        if self._closed:
            return
        self._closed = True
        await self.transport.aclose()
        await self.usage_store.backend.cleanup()

    # ------------------------------------------------------------------
    # Pipeline entry point
    # ------------------------------------------------------------------

    async def _call(
        self,
        descriptor: RequestDescriptor,
        decoder: Decoder | None = None,
        **context: Any,
    ) -> Any:
        try:
            return await self._controller.execute(descriptor, decoder)
        except TraceWiseError as e:
            e.add_context(descriptor.operation or descriptor.describe(), **context)
            raise

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    @staticmethod
    def parse_digital_link(url: str) -> ProductIDs:
        """Parse a GS1 Digital Link URL. See ``tracewise.utils.parse_digital_link``."""
        return parse_digital_link(url)

    async def get_product(self, gtin: str, serial: str | None = None) -> Product:
        """Fetch a product by GTIN and optional serial number."""
        descriptor = RequestDescriptor(
            HTTPMethod.GET,
            "/v1/products",
            params={"gtin": gtin, "serial": serial},
            operation="get_product",
        )
        return await self._call(descriptor, Product.from_dict, gtin=gtin, serial=serial)

    async def register_product(self, user_id: str, product: Product) -> RegisterResponse:
        """
        Register a product to a user.

        Draws from the monthly products quota; a free-tier client whose local
        snapshot shows that quota exhausted fails without a network call.
        """
        body = RegisterProductRequest(
            gtin=product.gtin, serial=product.serial, user_id=user_id
        )
        descriptor = RequestDescriptor(
            HTTPMethod.POST,
            "/v1/products/register",
            body=body.to_dict(),
            consumes=UsageCounter.PRODUCTS,
            operation="register_product",
        )
        return await self._call(
            descriptor,
            RegisterResponse.from_dict,
            gtin=product.gtin,
            serial=product.serial,
        )

    # ------------------------------------------------------------------
    # Lifecycle events
    # ------------------------------------------------------------------

    async def add_lifecycle_event(self, event: LifecycleEvent) -> EventResponse:
        """Submit an EPCIS lifecycle event. Draws from the monthly events quota."""
        descriptor = RequestDescriptor(
            HTTPMethod.POST,
            "/v1/events",
            body=event.to_dict(),
            consumes=UsageCounter.EVENTS,
            operation="add_lifecycle_event",
        )
        return await self._call(
            descriptor,
            EventResponse.from_dict,
            gtin=event.gtin,
            biz_step=event.biz_step,
        )

    async def list_product_events(
        self,
        product_id: str,
        limit: int | None = None,
        page_token: str | None = None,
    ) -> Page[LifecycleEvent]:
        """
        Fetch one page of events for a product.

        Args:
            product_id: Composite id ``gtin:serial``. Everything after the first
                colon is the serial.
            limit: Page size
            page_token: Token from a previous page's ``next_page_token``

        Raises:
            InvalidIdentifierError: If the GTIN part of ``product_id`` is empty
        """
        gtin, serial = split_product_id(product_id)
        descriptor = RequestDescriptor(
            HTTPMethod.GET,
            f"/v1/events/{_segment(gtin)}/{_segment(serial or '')}",
            params={"pageSize": limit, "pageToken": page_token},
            operation="list_product_events",
        )
        return await self._call(
            descriptor,
            Page[LifecycleEvent].from_dict,
            product_id=product_id,
            page_token=page_token,
        )

    async def get_product_events(
        self,
        product_id: str,
        limit: int | None = None,
        page_token: str | None = None,
    ) -> list[LifecycleEvent]:
        """Fetch the events on one page, without pagination metadata."""
        page = await self.list_product_events(product_id, limit, page_token)
        return list(page.items)

    async def iter_product_events(
        self,
        product_id: str,
        page_size: int | None = None,
    ) -> AsyncIterator[LifecycleEvent]:
        """
        Iterate over all events of a product, following page tokens.

        Each page is a separate logical call with its own retry budget.
        """
        page_token: str | None = None
        while True:
            page = await self.list_product_events(product_id, page_size, page_token)
            for event in page.items:
                yield event
            if not page.next_page_token or page.next_page_token == page_token:
                return
            page_token = page.next_page_token

    # ------------------------------------------------------------------
    # CIRPASS simulator
    # ------------------------------------------------------------------

    async def get_cirpass_product(self, product_id: str) -> CirpassProduct:
        """Fetch a simulated CIRPASS digital product passport."""
        descriptor = RequestDescriptor(
            HTTPMethod.GET,
            f"/v1/cirpass-sim/product/{_segment(product_id)}",
            operation="get_cirpass_product",
        )
        return await self._call(
            descriptor, CirpassProduct.from_dict, product_id=product_id
        )

    # ------------------------------------------------------------------
    # Account and service
    # ------------------------------------------------------------------

    async def get_subscription_info(self) -> SubscriptionInfo:
        """
        Fetch tier, limits and usage, and refresh the local usage snapshot.

        The snapshot is what the local usage gate consults before each call.
        """
        descriptor = RequestDescriptor(
            HTTPMethod.GET, "/v1/auth/me", operation="get_subscription_info"
        )
        info: SubscriptionInfo = await self._call(descriptor, SubscriptionInfo.from_dict)
        await self.usage_store.replace(info.to_snapshot())
        logger.info(f"Subscription info refreshed: tier={info.tier.value}")
        return info

    async def health_check(self) -> HealthResponse:
        """Check that the API is reachable."""
        descriptor = RequestDescriptor(
            HTTPMethod.GET, "/v1/health", operation="health_check"
        )
        return await self._call(descriptor, HealthResponse.from_dict)

    def get_metrics(self) -> dict[str, Any]:
        """Pipeline metrics as a JSON-serializable dictionary."""
        return self.metrics.get_stats()


def create_client(
    base_url: str,
    *,
    api_key: str | None = None,
    token_provider: TokenProvider | None = None,
    snapshot_backend: SnapshotBackend | None = None,
    **config_options: Any,
) -> TraceWiseClient:
    """
    Build a TraceWiseClient from keyword options.

    Args:
        base_url: API base URL
        api_key: Static API key
        token_provider: Async callable returning a bearer token
        snapshot_backend: Where the usage snapshot is persisted
        **config_options: Any other ClientConfig field (timeout, retry, ...)

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    config = ClientConfig(
        base_url=base_url,
        api_key=api_key,
        token_provider=token_provider,
        **config_options,
    )
    return TraceWiseClient(config, snapshot_backend=snapshot_backend)


__all__ = ["TraceWiseClient", "create_client"]
