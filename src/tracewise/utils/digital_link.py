# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
GS1 Digital Link parsing.

Extracts product identifiers from Digital Link URLs such as
``https://id.gs1.org/01/09506000134352/21/ABC123``.

Application Identifiers:
    * **01**: GTIN, exactly 14 digits (required)
    * **21**: serial number
    * **10**: batch or lot number
    * **17**: expiry date, YYMMDD
"""

import re

from ..exceptions import InvalidDigitalLinkError
from ..models.product import ProductIDs

_GTIN = re.compile(r"/01/(\d{14})")
_SERIAL = re.compile(r"/21/([^/?]+)")
_BATCH = re.compile(r"/10/([^/?]+)")
_EXPIRY = re.compile(r"/17/(\d{6})")


def _first_group(pattern: re.Pattern[str], url: str) -> str | None:
    match = pattern.search(url)
    return match.group(1) if match else None


def parse_digital_link(url: str) -> ProductIDs:
    """
    Parse a GS1 Digital Link URL.

    Args:
        url: Digital Link URL or path

    Returns:
        The identifiers found in the URL

    Raises:
        InvalidDigitalLinkError: If the URL has no 14-digit GTIN
    """
    gtin = _first_group(_GTIN, url)
    if gtin is None:
        raise InvalidDigitalLinkError("GTIN not found in Digital Link")
    return ProductIDs(
        gtin=gtin,
        serial=_first_group(_SERIAL, url),
        batch=_first_group(_BATCH, url),
        expiry=_first_group(_EXPIRY, url),
    )


__all__ = ["parse_digital_link"]
