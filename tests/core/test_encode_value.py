"""Value Encoder tests — shape classification and JSON output.

Tests cover:
    - Mapping order and stringified keys
    - Sequences, finite iterables, iterators (single traversal, drained -> [])
    - Instants keep the day-of-year pattern verbatim
    - Fallback to str() / null
    - Cycle detection and the iterator cap
"""

import io
import json
from collections import OrderedDict, deque
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

import pytest

from console_api.core.encode_value import (
    EncodableShape, classify_value, encode_value, format_instant,
)
from console_api.core.errors import EncodingCycleError, EncodingLimitError
from console_api.core.json_writer import JsonWriter


def _encode(value, **kwargs) -> str:
    out = io.StringIO()
    encode_value(JsonWriter(out), value, **kwargs)
    return out.getvalue()


class _Color(str, Enum):
    RED = "red"


class _Opaque:
    def __str__(self) -> str:
        return "opaque!"


# --- Classification -----------------------------------------------------------


@pytest.mark.parametrize("value, shape", [
    ("text", EncodableShape.STRING),
    (_Color.RED, EncodableShape.STRING),
    ({"a": 1}, EncodableShape.MAPPING),
    ([1, 2], EncodableShape.SEQUENCE),
    ((1, 2), EncodableShape.SEQUENCE),
    ({1, 2}, EncodableShape.ITERABLE),
    (range(3), EncodableShape.ITERABLE),
    (iter([1]), EncodableShape.ITERATOR),
    ((x for x in [1]), EncodableShape.ITERATOR),
    (datetime(2024, 1, 1), EncodableShape.INSTANT),
    (date(2024, 1, 1), EncodableShape.INSTANT),
    (b"raw", EncodableShape.FALLBACK),
    (None, EncodableShape.FALLBACK),
    (42, EncodableShape.FALLBACK),
    (_Opaque(), EncodableShape.FALLBACK),
])
def test_classify_value(value, shape):
    assert classify_value(value) is shape


# --- Mappings -----------------------------------------------------------------


def test_mapping_keeps_insertion_order():
    value = {"zeta": "1", "alpha": "2", "mid": "3"}
    assert _encode(value) == '{"zeta":"1","alpha":"2","mid":"3"}'


def test_mapping_keys_are_stringified():
    result = json.loads(_encode(OrderedDict([(1, "one"), (None, "none"), (2.5, "x")])))
    assert list(result) == ["1", "None", "2.5"]


def test_nested_mapping_values_encoded_recursively():
    value = {"node": {"children": ["a", {"leaf": None}]}}
    assert json.loads(_encode(value)) == {"node": {"children": ["a", {"leaf": None}]}}


# --- Sequences and lazy sequences ---------------------------------------------


def test_list_and_tuple_become_arrays():
    assert _encode(["a", ("b", "c")]) == '["a",["b","c"]]'


def test_finite_iterable_becomes_array_in_order():
    assert _encode(deque(["x", "y"])) == '["x","y"]'
    assert _encode(range(3)) == '["0","1","2"]'


def test_iterator_is_drained():
    items = iter(["a", "b", "c"])
    assert _encode(items) == '["a","b","c"]'
    assert list(items) == []


def test_drained_iterator_encodes_as_empty_array():
    items = iter(["a"])
    _encode(items)
    assert _encode(items) == "[]"


def test_generator_consumed_once():
    pulls = []

    def produce():
        for item in ("p", "q"):
            pulls.append(item)
            yield item

    assert _encode(produce()) == '["p","q"]'
    assert pulls == ["p", "q"]


def test_empty_containers():
    assert _encode({}) == "{}"
    assert _encode([]) == "[]"
    assert _encode(set()) == "[]"


# --- Instants -----------------------------------------------------------------


def test_instant_uses_day_of_year_field():
    # 5 March 2024 is day 65 of a leap year
    assert _encode(datetime(2024, 3, 5, 14, 7, 9)) == '"2024-03-65 14:07:09"'


def test_instant_day_of_year_padded_to_two_digits():
    assert format_instant(datetime(2023, 1, 5, 1, 2, 3)) == "2023-01-05 01:02:03"


def test_instant_end_of_year():
    assert format_instant(datetime(2023, 12, 31, 23, 59, 59)) == "2023-12-365 23:59:59"


def test_plain_date_has_midnight_time():
    assert format_instant(date(2021, 2, 1)) == "2021-02-32 00:00:00"


# --- Fallback -----------------------------------------------------------------


def test_none_becomes_null():
    assert _encode(None) == "null"
    assert _encode({"a": None}) == '{"a":null}'


@pytest.mark.parametrize("value, expected", [
    (42, '"42"'),
    (True, '"true"'),
    (False, '"false"'),
    (Decimal("1.50"), '"1.50"'),
    (b"ab", '"b\'ab\'"'),
])
def test_scalars_fall_back_to_text(value, expected):
    assert _encode(value) == expected


def test_booleans_use_lowercase_text():
    assert _encode({"success": True, "done": False}) == '{"success":"true","done":"false"}'


def test_opaque_object_uses_str():
    assert _encode([_Opaque()]) == '["opaque!"]'


def test_str_enum_encodes_its_value():
    assert _encode(_Color.RED) == '"red"'


# --- Safety rails -------------------------------------------------------------


def test_cyclic_list_raises():
    value: list = ["a"]
    value.append(value)
    with pytest.raises(EncodingCycleError):
        _encode(value)


def test_cyclic_mapping_raises():
    value: dict = {}
    value["self"] = value
    with pytest.raises(EncodingCycleError) as exc_info:
        _encode(value)
    assert exc_info.value.http_status == 500


def test_shared_non_cyclic_value_is_encoded_twice():
    shared = ["s"]
    assert _encode({"a": shared, "b": shared}) == '{"a":["s"],"b":["s"]}'


def test_iterator_cap_raises():
    def endless():
        while True:
            yield "x"

    with pytest.raises(EncodingLimitError) as exc_info:
        _encode(endless(), max_iterator_items=5)
    assert exc_info.value.max_items == 5


def test_iterator_at_cap_is_accepted():
    assert _encode(iter(["a", "b"]), max_iterator_items=2) == '["a","b"]'


def test_lists_are_not_capped():
    assert _encode(["a", "b", "c"], max_iterator_items=1) == '["a","b","c"]'


def test_writer_failure_propagates():
    class _BrokenStream(io.StringIO):
        def write(self, text):
            raise OSError("connection reset")

    with pytest.raises(OSError, match="connection reset"):
        encode_value(JsonWriter(_BrokenStream()), {"a": "b"})
