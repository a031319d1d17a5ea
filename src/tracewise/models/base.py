# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Common base for models exchanged with the TraceWise API."""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

M = TypeVar("M", bound="WireModel")


class WireModel(BaseModel):
    """
    Immutable API model.

    Attributes use snake_case in Python and camelCase on the wire. Unknown
    keys in responses are ignored; missing required keys or values of the
    wrong JSON type raise ``pydantic.ValidationError``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    def to_dict(self) -> dict[str, Any]:
        """Encode to a JSON-ready dict with wire keys, omitting unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_dict(cls: type[M], data: Any) -> M:
        """Decode a parsed JSON body."""
        return cls.model_validate(data)


__all__ = ["WireModel"]
