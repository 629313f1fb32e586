"""Event-driven traversal of a parsed JSON tree."""

from __future__ import annotations

import math
from typing import Any

from jsondom.jsontype import I64_MIN, U64_MAX


class JsonVisitor:
    """Receives one call per JSON event.

    Every method returns True to continue; the defaults return False, so a
    visitor only accepts the events it overrides.
    """

    def visit_null(self) -> bool:
        return False

    def visit_bool(self, val: bool) -> bool:
        return False

    def visit_u64(self, val: int) -> bool:
        return False

    def visit_i64(self, val: int) -> bool:
        return False

    def visit_f64(self, val: float) -> bool:
        return False

    def visit_str(self, value: str) -> bool:
        return False

    def visit_object_start(self, hint: int) -> bool:
        return False

    def visit_object_end(self, length: int) -> bool:
        return False

    def visit_array_start(self, hint: int) -> bool:
        return False

    def visit_array_end(self, length: int) -> bool:
        return False

    def visit_key(self, key: str) -> bool:
        return False


def _emit(accepted: bool, event: str) -> None:
    if not accepted:
        raise ValueError(f"visitor rejected {event}")


def _visit_float(val: float, visitor: JsonVisitor) -> None:
    if not math.isfinite(val):
        raise ValueError(f"JSON does not allow the number {val!r}")
    _emit(visitor.visit_f64(val), "a float")


def _walk(data: Any, visitor: JsonVisitor) -> None:
    if data is None:
        _emit(visitor.visit_null(), "null")
    elif isinstance(data, bool):
        _emit(visitor.visit_bool(data), "a boolean")
    elif isinstance(data, int):
        if 0 <= data <= U64_MAX:
            _emit(visitor.visit_u64(data), "an unsigned integer")
        elif I64_MIN <= data < 0:
            _emit(visitor.visit_i64(data), "a signed integer")
        else:
            _visit_float(float(data), visitor)
    elif isinstance(data, float):
        _visit_float(data, visitor)
    elif isinstance(data, str):
        _emit(visitor.visit_str(data), "a string")
    elif isinstance(data, dict):
        _emit(visitor.visit_object_start(len(data)), "an object")
        for key, item in data.items():
            if not isinstance(key, str):
                raise TypeError(
                    f"object keys must be str, not {type(key).__name__}"
                )
            _emit(visitor.visit_key(key), "a key")
            _walk(item, visitor)
        _emit(visitor.visit_object_end(len(data)), "the end of an object")
    elif isinstance(data, (list, tuple)):
        _emit(visitor.visit_array_start(len(data)), "an array")
        for item in data:
            _walk(item, visitor)
        _emit(visitor.visit_array_end(len(data)), "the end of an array")
    else:
        raise TypeError(f"cannot visit a value of type {type(data).__name__}")


def walk(data: Any, visitor: JsonVisitor) -> None:
    """Feed a tree of dicts, lists and scalars to ``visitor`` in document order.

    Raises ValueError when the visitor rejects an event or a number is not
    finite, and TypeError for values JSON cannot hold.
    """
    _walk(data, visitor)