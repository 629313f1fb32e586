"""Parsed JSON documents and mutable views into their values."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, Optional, Union

import json

from jsondom.jsontype import Index, JsonType, JsonValue, Number
from jsondom.value import Value, _require_int, _TreeBuilder, to_string
from jsondom.visitor import JsonVisitor, walk


class _Pairs(list):
    """An object as parsed: its ``(key, value)`` entries in document order."""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"JSON does not allow the number {name}")


def _accept(accepted: bool, event: str) -> None:
    if not accepted:
        raise ValueError(f"visitor rejected {event}")


def _feed(node: Any, visitor: JsonVisitor) -> None:
    """Emit traversal events for a parsed tree whose objects keep every entry."""
    if isinstance(node, _Pairs):
        _accept(visitor.visit_object_start(len(node)), "an object")
        for key, item in node:
            _accept(visitor.visit_key(key), "a key")
            _feed(item, visitor)
        _accept(visitor.visit_object_end(len(node)), "the end of an object")
    elif isinstance(node, list):
        _accept(visitor.visit_array_start(len(node)), "an array")
        for item in node:
            _feed(item, visitor)
        _accept(visitor.visit_array_end(len(node)), "the end of an array")
    else:
        walk(node, visitor)


def _parse(text: str) -> Value:
    parsed = json.loads(
        text, object_pairs_hook=_Pairs, parse_constant=_reject_constant
    )
    builder = _TreeBuilder()
    _feed(parsed, builder)
    if builder.root is None:
        raise ValueError("no value was produced")
    return builder.root


class ValueMut(JsonValue):
    """Mutable handle on a value inside a document."""

    __slots__ = ("_value",)

    def __init__(self, value: Value) -> None:
        if not isinstance(value, Value):
            raise TypeError(f"expected a Value, not {type(value).__name__}")
        self._value = value

    @property
    def value(self) -> Value:
        """The value this handle points at."""
        return self._value

    def get_type(self) -> JsonType:
        return self._value.get_type()

    def as_number(self) -> Optional[Number]:
        return self._value.as_number()

    def as_i64(self) -> Optional[int]:
        return self._value.as_i64()

    def as_u64(self) -> Optional[int]:
        return self._value.as_u64()

    def as_f64(self) -> Optional[float]:
        return self._value.as_f64()

    def as_bool(self) -> Optional[bool]:
        return self._value.as_bool()

    def as_str(self) -> Optional[str]:
        return self._value.as_str()

    def get(self, index: Index) -> Optional[Value]:
        return self._value.get(index)

    def pointer(self, path: Iterable[Index]) -> Optional[Value]:
        return self._value.pointer(path)

    def into_object_mut(self) -> Optional["ObjectMut"]:
        return ObjectMut(self) if self.is_object() else None

    def into_array_mut(self) -> Optional["ArrayMut"]:
        return ArrayMut(self) if self.is_array() else None

    def pointer_mut(self, path: Iterable[Index]) -> Optional["ValueMut"]:
        found = self._value.pointer(path)
        return None if found is None else ValueMut(found)

    def get_mut(self, index: Index) -> Optional["ValueMut"]:
        found = self._value.get(index)
        return None if found is None else ValueMut(found)

    def take(self) -> Value:
        """Move the value out, leaving null in its place."""
        return self._value.take()

    def __repr__(self) -> str:
        return f"ValueMut({self._value!r})"


def _unwrap(target: Union[ValueMut, Value]) -> Value:
    if isinstance(target, ValueMut):
        return target.value
    if isinstance(target, Value):
        return target
    raise TypeError(f"expected a Value, not {type(target).__name__}")


class ObjectMut:
    """Mutable view of an object value."""

    __slots__ = ("_value",)

    def __init__(self, target: Union[ValueMut, Value]) -> None:
        value = _unwrap(target)
        if not value.is_object():
            raise TypeError("expected a JSON object")
        self._value = value

    def is_empty(self) -> bool:
        return len(self) == 0

    def capacity(self) -> int:
        return self._value.capacity()

    def contains_key(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._value)

    def get(self, key: str) -> Optional[Value]:
        if not isinstance(key, str):
            raise TypeError(f"object keys must be str, not {type(key).__name__}")
        return self._value.get(key)

    def get_mut(self, key: str) -> Optional[ValueMut]:
        found = self.get(key)
        return None if found is None else ValueMut(found)

    def insert(self, key: str, value: Value) -> Optional[Value]:
        """Set ``key``; return the value it replaced, or None if it is new."""
        return self._value._insert(key, value)

    def remove(self, key: str) -> Optional[Value]:
        """Remove the first entry under ``key`` and return its value."""
        if not isinstance(key, str):
            raise TypeError(f"object keys must be str, not {type(key).__name__}")
        return self._value._remove(key)

    def pop(self) -> Optional[Value]:
        """Remove the last entry and return its value, or None if empty."""
        return self._value._pop()

    def reserve(self, additional: int) -> None:
        self._value._reserve(additional)

    def __iter__(self) -> Iterator[tuple[str, Value]]:
        return iter(list(self._value._data))

    def __repr__(self) -> str:
        return f"ObjectMut({self._value!r})"


class ArrayMut:
    """Mutable view of an array value, indexed like a list."""

    __slots__ = ("_value",)

    def __init__(self, target: Union[ValueMut, Value]) -> None:
        value = _unwrap(target)
        if not value.is_array():
            raise TypeError("expected a JSON array")
        self._value = value

    def push(self, node: Value) -> None:
        self._value._append(node)

    def pop(self) -> Optional[Value]:
        """Remove and return the last element, or None if empty."""
        return self._value._pop()

    def is_empty(self) -> bool:
        return len(self) == 0

    def __len__(self) -> int:
        return len(self._value)

    def capacity(self) -> int:
        return self._value.capacity()

    def reserve(self, additional: int) -> None:
        self._value._reserve(additional)

    def get_mut(self, index: int) -> Optional[ValueMut]:
        found = self._value.get(_require_int(index))
        return None if found is None else ValueMut(found)

    def __getitem__(self, index: Union[int, slice]) -> Union[Value, list[Value]]:
        return self._value._data[index]

    def __setitem__(self, index: int, value: Value) -> None:
        self._value._set_item(index, value)

    def __iter__(self) -> Iterator[Value]:
        return iter(list(self._value._data))

    def __repr__(self) -> str:
        return f"ArrayMut({self._value!r})"


class Document(JsonValue):
    """Owner of a parsed JSON tree; an empty document holds null."""

    __slots__ = ("_root",)

    def __init__(self, root: Optional[Value] = None) -> None:
        self._root = Value.new_null() if root is None else _unwrap(root)

    def as_value(self) -> Value:
        return self._root

    def as_value_mut(self) -> ValueMut:
        return ValueMut(self._root)

    def as_array_mut(self) -> Optional[ArrayMut]:
        return ArrayMut(self._root) if self._root.is_array() else None

    def as_object_mut(self) -> Optional[ObjectMut]:
        return ObjectMut(self._root) if self._root.is_object() else None

    def get_type(self) -> JsonType:
        return self._root.get_type()

    def as_number(self) -> Optional[Number]:
        return self._root.as_number()

    def as_i64(self) -> Optional[int]:
        return self._root.as_i64()

    def as_u64(self) -> Optional[int]:
        return self._root.as_u64()

    def as_f64(self) -> Optional[float]:
        return self._root.as_f64()

    def as_bool(self) -> Optional[bool]:
        return self._root.as_bool()

    def as_str(self) -> Optional[str]:
        return self._root.as_str()

    def get(self, index: Index) -> Optional[Value]:
        return self._root.get(index)

    def pointer(self, path: Iterable[Index]) -> Optional[Value]:
        return self._root.pointer(path)

    def to_string(self) -> str:
        """Serialize the document as compact JSON text."""
        return to_string(self._root)

    def __repr__(self) -> str:
        return self.to_string()


def dom_from_str(json: str) -> Document:
    """Parse JSON text into a document; raises ValueError on invalid input."""
    if not isinstance(json, str):
        raise TypeError(f"expected a str, not {type(json).__name__}")
    return Document(_parse(json))


def dom_from_slice(json: Union[bytes, bytearray, memoryview]) -> Document:
    """Parse UTF-8 encoded JSON into a document; raises ValueError on invalid input."""
    if not isinstance(json, (bytes, bytearray, memoryview)):
        raise TypeError(f"expected bytes, not {type(json).__name__}")
    return Document(_parse(bytes(json).decode("utf-8")))