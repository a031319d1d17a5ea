"""Unit tests for DetailValue and the details codec."""

import json

import pytest

from tracewise.models.values import DetailKind, DetailValue, decode_details, encode_details


class TestDetailValueFromJson:
    @pytest.mark.parametrize(
        "raw, kind",
        [
            (3, DetailKind.INTEGER),
            (4.5, DetailKind.FLOAT),
            ("DHL", DetailKind.STRING),
            (True, DetailKind.BOOLEAN),
            (False, DetailKind.BOOLEAN),
            ({"a": 1}, DetailKind.MAP),
        ],
    )
    def test_kinds(self, raw, kind):
        assert DetailValue.from_json(raw).kind is kind

    def test_bool_is_not_integer(self):
        """True must never decode as the integer 1."""
        value = DetailValue.from_json(True)
        assert value == DetailValue.boolean(True)
        assert value != DetailValue.integer(1)

    def test_integer_and_float_stay_distinct(self):
        assert DetailValue.from_json(1).kind is DetailKind.INTEGER
        assert DetailValue.from_json(1.0).kind is DetailKind.FLOAT
        assert json.dumps(DetailValue.from_json(1.0).to_json()) == "1.0"
        assert json.dumps(DetailValue.from_json(1).to_json()) == "1"

    def test_nested_map(self):
        value = DetailValue.from_json({"sensor": {"celsius": 4.5, "ok": True}})
        inner = value.value["sensor"]
        assert inner.kind is DetailKind.MAP
        assert inner.value["celsius"] == DetailValue.floating(4.5)
        assert inner.value["ok"] == DetailValue.boolean(True)

    @pytest.mark.parametrize("raw", [None, [1, 2], {"a": [1]}, {"a": None}, {1: "x"}, object()])
    def test_unsupported_values_rejected(self, raw):
        with pytest.raises(ValueError):
            DetailValue.from_json(raw)


class TestDetailValueToJson:
    def test_constructors(self):
        assert DetailValue.integer(2).to_json() == 2
        assert DetailValue.string("x").to_json() == "x"
        assert DetailValue.boolean(False).to_json() is False
        assert DetailValue.mapping({"n": DetailValue.integer(1)}).to_json() == {"n": 1}

    def test_float_kind_encodes_as_float(self):
        assert isinstance(DetailValue.floating(2).to_json(), float)

    def test_round_trip_preserves_types(self):
        raw = {"count": 1, "weight": 1.0, "sealed": True, "carrier": "DHL", "dims": {"h": 2}}
        encoded = DetailValue.from_json(raw).to_json()

        assert encoded == raw
        assert type(encoded["count"]) is int
        assert type(encoded["weight"]) is float
        assert type(encoded["sealed"]) is bool


class TestDetailsCodec:
    def test_none_passes_through(self):
        assert decode_details(None) is None
        assert encode_details(None) is None

    def test_decode_accepts_existing_values(self):
        details = decode_details({"a": DetailValue.integer(1), "b": "x"})
        assert details == {"a": DetailValue.integer(1), "b": DetailValue.string("x")}

    def test_decode_requires_object(self):
        with pytest.raises(ValueError):
            decode_details(["a"])

    def test_encode(self):
        assert encode_details({"t": DetailValue.floating(4.5)}) == {"t": 4.5}
