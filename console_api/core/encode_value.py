"""Value Encoder — writes arbitrary in-memory values as JSON tokens.

Invariants:
    - Total: every value encodes (unknown types fall back to str(), None to null,
      booleans to "true"/"false")
    - Shapes tested in a fixed order: string, mapping, sequence, iterable,
      iterator, instant, fallback (str is iterable, so it must come first)
    - Mapping keys emitted in the mapping's own iteration order, as str(key)
    - Iterables and iterators are traversed exactly once; a drained iterator encodes as []
    - Instants use DATE_FORMAT where DD is the day of the YEAR (kept verbatim,
      existing console clients parse this output)
    - A container reached again while being encoded raises EncodingCycleError
    - Lazy sequences longer than max_iterator_items raise EncodingLimitError

Design Decisions:
    - classify_value() normalizes a value to one EncodableShape tag at the boundary;
      the encoder switches on the tag only (closed set, no ad hoc type tests)
    - bytes/bytearray/memoryview fall back to text: iterating them would
      produce arrays of integers
    - Errors raised mid-stream leave a partial document in the writer; the
      endpoint discards the buffered answer when the exception propagates
"""

from collections.abc import Iterable, Iterator, Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any

from console_api.core.errors import EncodingCycleError, EncodingLimitError
from console_api.core.json_writer import JsonWriter

DATE_FORMAT = "yyyy-MM-DD HH:mm:ss"
DEFAULT_MAX_ITERATOR_ITEMS = 100_000


class EncodableShape(str, Enum):
    """The closed set of value shapes the encoder knows."""
    STRING = "string"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    ITERABLE = "iterable"
    ITERATOR = "iterator"
    INSTANT = "instant"
    FALLBACK = "fallback"


_LAZY_SHAPES = frozenset({EncodableShape.ITERABLE, EncodableShape.ITERATOR})


def classify_value(value: Any) -> EncodableShape:
    """Map a runtime value to its encodable shape."""
    if isinstance(value, str):
        return EncodableShape.STRING
    if isinstance(value, Mapping):
        return EncodableShape.MAPPING
    if isinstance(value, (list, tuple)):
        return EncodableShape.SEQUENCE
    if isinstance(value, (bytes, bytearray, memoryview)):
        return EncodableShape.FALLBACK
    if isinstance(value, Iterator):
        return EncodableShape.ITERATOR
    if isinstance(value, Iterable):
        return EncodableShape.ITERABLE
    if isinstance(value, date):
        return EncodableShape.INSTANT
    return EncodableShape.FALLBACK


def format_instant(value: date) -> str:
    """Render `value` with DATE_FORMAT (yyyy-MM-DD HH:mm:ss, DD = day of year).

    A plain date renders with 00:00:00. Wall-clock fields are used as they are,
    no timezone conversion happens.
    """
    if isinstance(value, datetime):
        hour, minute, second = value.hour, value.minute, value.second
    else:
        hour = minute = second = 0
    day_of_year = value.timetuple().tm_yday
    return (
        f"{value.year:04d}-{value.month:02d}-{day_of_year:02d} "
        f"{hour:02d}:{minute:02d}:{second:02d}"
    )


def encode_value(
    writer: JsonWriter, value: Any,
    max_iterator_items: int = DEFAULT_MAX_ITERATOR_ITEMS,
) -> None:
    """Write `value` as JSON to `writer`. Writer errors propagate."""
    _ValueEncoder(writer, max_iterator_items).encode(value)


class _ValueEncoder:
    """One encoding pass; tracks the containers currently on the stack."""

    def __init__(self, writer: JsonWriter, max_items: int):
        self._writer = writer
        self._max_items = max_items
        self._active: set[int] = set()

    def encode(self, value: Any) -> None:
        shape = classify_value(value)
        if shape is EncodableShape.STRING:
            self._writer.value(value)
        elif shape is EncodableShape.INSTANT:
            self._writer.value(format_instant(value))
        elif shape is EncodableShape.FALLBACK:
            self._writer.value(_fallback_text(value))
        else:
            self._encode_container(shape, value)

    def _encode_container(self, shape: EncodableShape, value: Any) -> None:
        marker = id(value)
        if marker in self._active:
            raise EncodingCycleError(type(value).__name__)
        self._active.add(marker)
        try:
            if shape is EncodableShape.MAPPING:
                self._encode_mapping(value)
            else:
                self._encode_items(value, limited=shape in _LAZY_SHAPES)
        finally:
            self._active.discard(marker)

    def _encode_mapping(self, mapping: Mapping) -> None:
        self._writer.begin_object()
        for key, item in mapping.items():
            self._writer.name(str(key))
            self.encode(item)
        self._writer.end_object()

    def _encode_items(self, items: Iterable, limited: bool) -> None:
        self._writer.begin_array()
        for count, item in enumerate(items, start=1):
            if limited and count > self._max_items:
                raise EncodingLimitError(self._max_items)
            self.encode(item)
        self._writer.end_array()


def _fallback_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
