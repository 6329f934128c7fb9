"""JSON Writer — streaming token writer for JSON answers.

Invariants:
    - Output is compact JSON (no whitespace between tokens)
    - Member names only inside objects, exactly one value per name
    - Every begin_* is closed by the matching end_*
    - Strings escaped by json.dumps (non-ASCII kept as-is)

Design Decisions:
    - Token API (begin/name/value/end) instead of building a dict first: answers
      are written while lazy sequences are drained, nothing is materialized twice
    - NaN/Infinity rejected (allow_nan=False): they are not JSON
"""

import json
from typing import TextIO

_ARRAY = "array"
_OBJECT = "object"

JsonScalar = str | int | float | bool | None


class JsonWriterStateError(ValueError):
    """Token emitted where the JSON grammar does not allow it."""


class JsonWriter:
    """Writes JSON tokens to a text stream. Write errors propagate."""

    def __init__(self, out: TextIO):
        self._out = out
        self._scopes: list[list] = []  # [kind, members written]
        self._name_pending = False

    def begin_object(self) -> "JsonWriter":
        self._before_value()
        self._out.write("{")
        self._scopes.append([_OBJECT, 0])
        return self

    def end_object(self) -> "JsonWriter":
        return self._close(_OBJECT, "}")

    def begin_array(self) -> "JsonWriter":
        self._before_value()
        self._out.write("[")
        self._scopes.append([_ARRAY, 0])
        return self

    def end_array(self) -> "JsonWriter":
        return self._close(_ARRAY, "]")

    def name(self, name: str) -> "JsonWriter":
        if not self._scopes or self._scopes[-1][0] != _OBJECT:
            raise JsonWriterStateError("name() outside of an object")
        if self._name_pending:
            raise JsonWriterStateError(f"name '{name}' follows a name without value")
        scope = self._scopes[-1]
        if scope[1]:
            self._out.write(",")
        scope[1] += 1
        self._out.write(json.dumps(name, ensure_ascii=False))
        self._out.write(":")
        self._name_pending = True
        return self

    def value(self, value: JsonScalar) -> "JsonWriter":
        self._before_value()
        self._out.write(_literal(value))
        return self

    @property
    def depth(self) -> int:
        return len(self._scopes)

    def _before_value(self) -> None:
        if not self._scopes:
            return
        scope = self._scopes[-1]
        if scope[0] == _OBJECT:
            if not self._name_pending:
                raise JsonWriterStateError("value inside an object requires a name")
            self._name_pending = False
            return
        if scope[1]:
            self._out.write(",")
        scope[1] += 1

    def _close(self, kind: str, token: str) -> "JsonWriter":
        if not self._scopes or self._scopes[-1][0] != kind:
            raise JsonWriterStateError(f"end of {kind} without matching begin")
        if self._name_pending:
            raise JsonWriterStateError(f"end of {kind} after a dangling name")
        self._scopes.pop()
        self._out.write(token)
        return self


def _literal(value: JsonScalar) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, (int, float)):
        return json.dumps(value, allow_nan=False)
    raise TypeError(f"not a JSON scalar: {type(value).__name__}")
