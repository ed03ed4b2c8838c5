import dataclasses
import json
from decimal import Decimal

import pytest

from merchlib.util.jsonutil import json_to_map, read_json, to_json


@dataclasses.dataclass
class _Item:
    name: str
    count: int


def test_to_json_sorted_compact_and_escaped():
    assert to_json({"b": 1, "a": "<x>"}) == '{"a":"\\u003cx\\u003e","b":1}'


def test_to_json_keeps_non_ascii():
    text = to_json({"name": "商户"})
    assert "商户" in text
    assert json.loads(text) == {"name": "商户"}


def test_to_json_unencodable_returns_empty():
    assert to_json({"v": float("nan")}) == ""
    assert to_json(object()) == ""


def test_to_json_dataclass_round_trip():
    text = to_json(_Item(name="tea", count=3))
    assert json_to_map(text) == {"name": "tea", "count": 3}


def test_json_to_map_uses_exact_numbers():
    result = json_to_map('{"a": 1, "b": 2.50}')
    assert result == {"a": 1, "b": Decimal("2.50")}
    assert str(result["b"]) == "2.50"


def test_json_to_map_null_is_empty():
    assert json_to_map("null") == {}


def test_json_to_map_rejects_array():
    with pytest.raises(ValueError):
        json_to_map("[1, 2]")


def test_read_json_ignores_trailing_data():
    assert read_json(b'  {"k": [1, 2]} trailing') == {"k": [1, 2]}


def test_read_json_empty_raises():
    with pytest.raises(ValueError):
        read_json(b"")


def test_round_trip_nested():
    data = {"list": [1, "two", {"three": True}], "none": None}
    assert read_json(to_json(data)) == data