"""DOM nodes for JSON documents: scalar and container values with read-only views."""

from __future__ import annotations

import enum
import json
import math
from collections.abc import Iterable, Iterator
from typing import Any, Optional, Union

from jsondom.jsontype import (
    I64_MAX,
    I64_MIN,
    U64_MAX,
    Index,
    JsonType,
    JsonValue,
    Number,
    _check_index,
)
from jsondom.visitor import JsonVisitor, walk


class _Tag(enum.Enum):
    """Exact kind of a node, finer than JsonType."""

    NULL = "null"
    FALSE = "false"
    TRUE = "true"
    UNSIGNED = "unsigned"
    SIGNED = "signed"
    FLOAT = "float"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


_TYPE_OF_TAG = {
    _Tag.NULL: JsonType.Null,
    _Tag.FALSE: JsonType.Boolean,
    _Tag.TRUE: JsonType.Boolean,
    _Tag.UNSIGNED: JsonType.Number,
    _Tag.SIGNED: JsonType.Number,
    _Tag.FLOAT: JsonType.Number,
    _Tag.STRING: JsonType.String,
    _Tag.ARRAY: JsonType.Array,
    _Tag.OBJECT: JsonType.Object,
}

_INTEGER_TAGS = (_Tag.UNSIGNED, _Tag.SIGNED)
_CONTAINER_TAGS = (_Tag.ARRAY, _Tag.OBJECT)


def _require_int(val: object) -> int:
    if isinstance(val, bool) or not isinstance(val, int):
        raise TypeError(f"expected an int, not {type(val).__name__}")
    return val


class Value(JsonValue):
    """A node in a JSON DOM tree.

    Arrays hold a list of child values; objects hold an ordered list of
    ``(key, value)`` entries, so duplicate keys are kept and lookups return
    the first match. Containers track a capacity that only grows.
    """

    __slots__ = ("_tag", "_data", "_cap")

    def __init__(self) -> None:
        self._tag = _Tag.NULL
        self._data: Any = None
        self._cap = 0

    @classmethod
    def _make(cls, tag: _Tag, data: Any) -> "Value":
        node = cls()
        node._tag = tag
        node._data = data
        return node

    @classmethod
    def new_null(cls) -> "Value":
        return cls()

    @classmethod
    def new_i64(cls, val: int) -> "Value":
        """Create a signed integer; raises ValueError outside the 64-bit range."""
        val = _require_int(val)
        if not I64_MIN <= val <= I64_MAX:
            raise ValueError(f"{val} does not fit in a signed 64-bit integer")
        return cls._make(_Tag.SIGNED, val)

    @classmethod
    def new_u64(cls, val: int) -> "Value":
        """Create an unsigned integer; raises ValueError outside the 64-bit range."""
        val = _require_int(val)
        if not 0 <= val <= U64_MAX:
            raise ValueError(f"{val} does not fit in an unsigned 64-bit integer")
        return cls._make(_Tag.UNSIGNED, val)

    @classmethod
    def new_f64(cls, val: float) -> Optional["Value"]:
        """Create a float, or return None if it is NaN or infinite."""
        if isinstance(val, bool) or not isinstance(val, (int, float)):
            raise TypeError(f"expected a float, not {type(val).__name__}")
        val = float(val)
        if not math.isfinite(val):
            return None
        return cls._make(_Tag.FLOAT, val)

    @classmethod
    def new_bool(cls, val: bool) -> "Value":
        return cls._make(_Tag.TRUE if val else _Tag.FALSE, None)

    @classmethod
    def new_str(cls, val: str) -> "Value":
        if not isinstance(val, str):
            raise TypeError(f"expected a str, not {type(val).__name__}")
        return cls._make(_Tag.STRING, val)

    @classmethod
    def new_object(cls) -> "Value":
        return cls._make(_Tag.OBJECT, [])

    @classmethod
    def new_array(cls) -> "Value":
        return cls._make(_Tag.ARRAY, [])

    # -- reading -----------------------------------------------------------

    def get_type(self) -> JsonType:
        return _TYPE_OF_TAG[self._tag]

    def as_number(self) -> Optional[Number]:
        if self._tag in _INTEGER_TAGS or self._tag is _Tag.FLOAT:
            return self._data
        return None

    def as_i64(self) -> Optional[int]:
        if self._tag is _Tag.SIGNED:
            return self._data
        if self._tag is _Tag.UNSIGNED and self._data <= I64_MAX:
            return self._data
        return None

    def as_u64(self) -> Optional[int]:
        if self._tag is _Tag.UNSIGNED:
            return self._data
        if self._tag is _Tag.SIGNED and self._data >= 0:
            return self._data
        return None

    def as_f64(self) -> Optional[float]:
        number = self.as_number()
        return None if number is None else float(number)

    def as_bool(self) -> Optional[bool]:
        if self._tag is _Tag.TRUE:
            return True
        if self._tag is _Tag.FALSE:
            return False
        return None

    def as_str(self) -> Optional[str]:
        return self._data if self._tag is _Tag.STRING else None

    def get(self, index: Index) -> Optional["Value"]:
        """Return the element at an int position or the first entry under a str key."""
        _check_index(index)
        if isinstance(index, int):
            if self._tag is _Tag.ARRAY and 0 <= index < len(self._data):
                return self._data[index]
            return None
        if self._tag is _Tag.OBJECT:
            for key, item in self._data:
                if key == index:
                    return item
        return None

    def pointer(self, path: Iterable[Index]) -> Optional["Value"]:
        """Follow keys and positions from this node; None if any step misses."""
        if isinstance(path, (str, bytes)):
            raise TypeError("path must be a sequence of keys and positions")
        node: Optional[Value] = self
        for step in path:
            node = node.get(step)
            if node is None:
                return None
        return node

    def as_array(self) -> Optional["Array"]:
        return Array(self) if self._tag is _Tag.ARRAY else None

    def as_object(self) -> Optional["Object"]:
        return Object(self) if self._tag is _Tag.OBJECT else None

    def take(self) -> "Value":
        """Move the contents out into a new value and leave this one null."""
        moved = Value._make(self._tag, self._data)
        moved._cap = self._cap
        self._tag = _Tag.NULL
        self._data = None
        self._cap = 0
        return moved

    def capacity(self) -> int:
        self._require_container()
        return self._cap

    def __len__(self) -> int:
        if self._tag in _CONTAINER_TAGS or self._tag is _Tag.STRING:
            return len(self._data)
        raise TypeError(f"a JSON {self.get_type().name.lower()} has no length")

    def __bool__(self) -> bool:
        return True

    def __getitem__(self, index: Index) -> "Value":
        found = self.get(index)
        if found is None:
            if isinstance(index, int):
                raise IndexError(index)
            raise KeyError(index)
        return found

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return _equal(self, other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return to_string(self)

    def to_python(self) -> Any:
        """Convert to plain dicts, lists and scalars; later duplicate keys win."""
        if self._tag is _Tag.ARRAY:
            return [item.to_python() for item in self._data]
        if self._tag is _Tag.OBJECT:
            return {key: item.to_python() for key, item in self._data}
        if self._tag is _Tag.NULL:
            return None
        if self._tag is _Tag.TRUE:
            return True
        if self._tag is _Tag.FALSE:
            return False
        return self._data

    # -- mutation helpers used by the mutable views ------------------------

    def _require_container(self) -> None:
        if self._tag not in _CONTAINER_TAGS:
            raise TypeError("only arrays and objects have a capacity")

    def _require(self, tag: _Tag) -> None:
        if self._tag is not tag:
            raise TypeError(f"expected a JSON {tag.value}")

    def _reserve(self, additional: int) -> None:
        self._require_container()
        if _require_int(additional) < 0:
            raise ValueError("cannot reserve a negative amount")
        new_cap = len(self._data) + additional
        if new_cap > self._cap:
            self._cap = new_cap

    def _append(self, node: "Value") -> None:
        self._require(_Tag.ARRAY)
        _require_value(node)
        self._reserve(1)
        self._data.append(node)

    def _set_item(self, index: int, node: "Value") -> None:
        self._require(_Tag.ARRAY)
        _require_value(node)
        self._data[_require_int(index)] = node

    def _key_offset(self, key: str) -> Optional[int]:
        self._require(_Tag.OBJECT)
        for offset, (existing, _) in enumerate(self._data):
            if existing == key:
                return offset
        return None

    def _insert(self, key: str, node: "Value") -> Optional["Value"]:
        if not isinstance(key, str):
            raise TypeError(f"object keys must be str, not {type(key).__name__}")
        _require_value(node)
        offset = self._key_offset(key)
        if offset is not None:
            old = self._data[offset][1]
            self._data[offset] = (key, node)
            return old
        self._reserve(1)
        self._data.append((key, node))
        return None

    def _remove(self, key: str) -> Optional["Value"]:
        offset = self._key_offset(key)
        if offset is None:
            return None
        return self._data.pop(offset)[1]

    def _pop(self) -> Optional["Value"]:
        self._require_container()
        if not self._data:
            return None
        last = self._data.pop()
        return last[1] if self._tag is _Tag.OBJECT else last


def _require_value(node: object) -> None:
    if not isinstance(node, Value):
        raise TypeError(f"expected a Value, not {type(node).__name__}")


def _equal(a: Value, b: Value) -> bool:
    if a._tag in _INTEGER_TAGS and b._tag in _INTEGER_TAGS:
        return a._data == b._data
    if a._tag is not b._tag:
        return False
    if a._tag is _Tag.ARRAY:
        return len(a._data) == len(b._data) and all(
            _equal(x, y) for x, y in zip(a._data, b._data)
        )
    if a._tag is _Tag.OBJECT:
        return dict(a._data) == dict(b._data)
    return a._data == b._data


class Object:
    """Live read-only view of an object value."""

    __slots__ = ("_value",)

    def __init__(self, value: Value) -> None:
        _require_value(value)
        value._require(_Tag.OBJECT)
        self._value = value

    def capacity(self) -> int:
        return self._value.capacity()

    def is_empty(self) -> bool:
        return len(self) == 0

    def contains_key(self, key: str) -> bool:
        return self.get(key) is not None

    def get(self, key: str) -> Optional[Value]:
        if not isinstance(key, str):
            raise TypeError(f"object keys must be str, not {type(key).__name__}")
        return self._value.get(key)

    def __len__(self) -> int:
        return len(self._value)

    def __iter__(self) -> Iterator[tuple[str, Value]]:
        """Yield ``(key, value)`` entries in document order."""
        return iter(list(self._value._data))

    def __repr__(self) -> str:
        return f"Object({self._value!r})"


class Array:
    """Live read-only view of an array value, indexed like a list."""

    __slots__ = ("_value",)

    def __init__(self, value: Value) -> None:
        _require_value(value)
        value._require(_Tag.ARRAY)
        self._value = value

    def capacity(self) -> int:
        return self._value.capacity()

    def is_empty(self) -> bool:
        return len(self) == 0

    def __len__(self) -> int:
        return len(self._value)

    def __getitem__(self, index: Union[int, slice]) -> Union[Value, list[Value]]:
        return self._value._data[index]

    def __iter__(self) -> Iterator[Value]:
        return iter(list(self._value._data))

    def __repr__(self) -> str:
        return f"Array({self._value!r})"


def _chunks(value: Value) -> Iterator[str]:
    tag = value._tag
    if tag is _Tag.NULL:
        yield "null"
    elif tag is _Tag.TRUE:
        yield "true"
    elif tag is _Tag.FALSE:
        yield "false"
    elif tag in _INTEGER_TAGS:
        yield str(value._data)
    elif tag is _Tag.FLOAT:
        yield repr(value._data)
    elif tag is _Tag.STRING:
        yield json.dumps(value._data, ensure_ascii=False)
    elif tag is _Tag.ARRAY:
        yield "["
        for position, item in enumerate(value._data):
            if position:
                yield ","
            yield from _chunks(item)
        yield "]"
    else:
        yield "{"
        for position, (key, item) in enumerate(value._data):
            if position:
                yield ","
            yield json.dumps(key, ensure_ascii=False)
            yield ":"
            yield from _chunks(item)
        yield "}"


def to_string(value: Value) -> str:
    """Serialize a value as compact JSON text."""
    _require_value(value)
    return "".join(_chunks(value))


class _TreeBuilder(JsonVisitor):
    """Visitor that assembles a Value tree from traversal events."""

    def __init__(self) -> None:
        self.root: Optional[Value] = None
        self._open: list[Value] = []
        self._key: Optional[str] = None

    def _add(self, node: Value) -> bool:
        if not self._open:
            if self.root is not None:
                return False
            self.root = node
            return True
        parent = self._open[-1]
        if parent._tag is _Tag.OBJECT:
            if self._key is None:
                return False
            parent._data.append((self._key, node))
            self._key = None
        else:
            parent._data.append(node)
        return True

    def visit_null(self) -> bool:
        return self._add(Value.new_null())

    def visit_bool(self, val: bool) -> bool:
        return self._add(Value.new_bool(val))

    def visit_u64(self, val: int) -> bool:
        return self._add(Value.new_u64(val))

    def visit_i64(self, val: int) -> bool:
        return self._add(Value.new_i64(val))

    def visit_f64(self, val: float) -> bool:
        node = Value.new_f64(val)
        return node is not None and self._add(node)

    def visit_str(self, value: str) -> bool:
        return self._add(Value.new_str(value))

    def _start(self, node: Value) -> bool:
        accepted = self._add(node)
        self._open.append(node)
        return accepted

    def _end(self, length: int) -> bool:
        node = self._open.pop()
        if len(node._data) != length:
            return False
        node._cap = length
        return True

    def visit_object_start(self, hint: int) -> bool:
        return self._start(Value.new_object())

    def visit_object_end(self, length: int) -> bool:
        return self._end(length)

    def visit_array_start(self, hint: int) -> bool:
        return self._start(Value.new_array())

    def visit_array_end(self, length: int) -> bool:
        return self._end(length)

    def visit_key(self, key: str) -> bool:
        if self._key is not None or not self._open:
            return False
        if self._open[-1]._tag is not _Tag.OBJECT:
            return False
        self._key = key
        return True


def _build(data: Any) -> Value:
    """Build a Value tree from dicts, lists and scalars."""
    builder = _TreeBuilder()
    walk(data, builder)
    if builder.root is None:
        raise ValueError("no value was produced")
    return builder.root