# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Typed values for free-form event details.

Lifecycle events carry a ``details`` map whose values are arbitrary JSON
scalars or nested objects. DetailValue keeps the JSON type of each value
explicit so that decoding and re-encoding gives back exactly what was
received: ``1`` stays an integer, ``1.0`` stays a float and ``true`` never
turns into ``1``.

Supported shapes:
    * **INTEGER**: JSON integers
    * **FLOAT**: JSON numbers with a fractional part or exponent
    * **STRING**: JSON strings
    * **BOOLEAN**: ``true`` / ``false``
    * **MAP**: JSON objects whose values are themselves DetailValues

Arrays and ``null`` are rejected.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class DetailKind(Enum):
    """Variants of DetailValue."""

    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"
    MAP = "map"


@dataclass(frozen=True)
class DetailValue:
    """
    One JSON value in an event's details.

    Build values with the named constructors or ``from_json``; the
    constructor does not check that ``value`` matches ``kind``.

    Example:
        >>> DetailValue.from_json({"celsius": 4.5, "sealed": True})
        DetailValue(kind=<DetailKind.MAP: 'map'>, value={...})
        >>> DetailValue.integer(3).to_json()
        3
    """

    kind: DetailKind
    value: Any

    @classmethod
    def integer(cls, value: int) -> "DetailValue":
        return cls(DetailKind.INTEGER, value)

    @classmethod
    def floating(cls, value: float) -> "DetailValue":
        return cls(DetailKind.FLOAT, value)

    @classmethod
    def string(cls, value: str) -> "DetailValue":
        return cls(DetailKind.STRING, value)

    @classmethod
    def boolean(cls, value: bool) -> "DetailValue":
        return cls(DetailKind.BOOLEAN, value)

    @classmethod
    def mapping(cls, value: dict[str, "DetailValue"]) -> "DetailValue":
        return cls(DetailKind.MAP, dict(value))

    @classmethod
    def from_json(cls, raw: Any) -> "DetailValue":
        """
        Convert a decoded JSON value.

        Raises:
            ValueError: For arrays, null, non-string object keys or any
                other unsupported value
        """
        # bool is a subclass of int and must be checked first
        if isinstance(raw, bool):
            return cls(DetailKind.BOOLEAN, raw)
        if isinstance(raw, int):
            return cls(DetailKind.INTEGER, raw)
        if isinstance(raw, float):
            return cls(DetailKind.FLOAT, raw)
        if isinstance(raw, str):
            return cls(DetailKind.STRING, raw)
        if isinstance(raw, dict):
            entries = {}
            for key, item in raw.items():
                if not isinstance(key, str):
                    raise ValueError(f"Detail map keys must be strings, got {key!r}")
                entries[key] = item if isinstance(item, DetailValue) else cls.from_json(item)
            return cls(DetailKind.MAP, entries)
        raise ValueError(f"Unsupported detail value type: {type(raw).__name__}")

    def to_json(self) -> Any:
        """Convert back to a JSON-serializable value."""
        if self.kind is DetailKind.MAP:
            return {key: item.to_json() for key, item in self.value.items()}
        if self.kind is DetailKind.FLOAT:
            return float(self.value)
        return self.value


def decode_details(raw: Any) -> dict[str, DetailValue] | None:
    """Convert a JSON object into a details map, passing DetailValues through."""
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"details must be an object, got {type(raw).__name__}")
    return DetailValue.from_json(raw).value


def encode_details(details: dict[str, DetailValue] | None) -> dict[str, Any] | None:
    if details is None:
        return None
    return {key: value.to_json() for key, value in details.items()}


__all__ = ["DetailKind", "DetailValue", "decode_details", "encode_details"]
