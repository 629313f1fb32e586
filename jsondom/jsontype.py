"""JSON value kinds and the read-only interface shared by every JSON value."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Optional, Union

Number = Union[int, float]
Index = Union[int, str]

I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1
U64_MAX = (1 << 64) - 1


class JsonType(enum.IntEnum):
    """The kind of a JSON value."""

    Null = 0
    Boolean = 1
    Number = 2
    String = 3
    Object = 4
    Array = 5
    Raw = 6


def _check_index(index: object) -> None:
    """Accept only array positions (int) and object keys (str)."""
    if isinstance(index, bool) or not isinstance(index, (int, str)):
        raise TypeError(
            f"index must be an int or a str, not {type(index).__name__}"
        )


class JsonValue(ABC):
    """Read-only view of a JSON value.

    Subclasses supply the type, the scalar accessors and ``get``; the
    predicates, the numeric conversions and pointer lookup follow from them.
    """

    @abstractmethod
    def get_type(self) -> JsonType:
        """Return the kind of this value."""

    @abstractmethod
    def as_number(self) -> Optional[Number]:
        """Return the number held, or None if this is not a number."""

    @abstractmethod
    def as_str(self) -> Optional[str]:
        """Return the string held, or None if this is not a string."""

    @abstractmethod
    def as_bool(self) -> Optional[bool]:
        """Return the boolean held, or None if this is not a boolean."""

    @abstractmethod
    def get(self, index: Index) -> Optional["JsonValue"]:
        """Return the element at an int position or a str key, or None."""

    def is_boolean(self) -> bool:
        return self.get_type() is JsonType.Boolean

    def is_true(self) -> bool:
        return bool(self.as_bool())

    def is_false(self) -> bool:
        return not self.is_true()

    def is_null(self) -> bool:
        return self.get_type() is JsonType.Null

    def is_number(self) -> bool:
        return self.get_type() is JsonType.Number

    def is_str(self) -> bool:
        return self.get_type() is JsonType.String

    def is_array(self) -> bool:
        return self.get_type() is JsonType.Array

    def is_object(self) -> bool:
        return self.get_type() is JsonType.Object

    def is_f64(self) -> bool:
        return self.as_f64() is not None

    def is_i64(self) -> bool:
        return self.as_i64() is not None

    def is_u64(self) -> bool:
        return self.as_u64() is not None

    def as_i64(self) -> Optional[int]:
        """Return the number as a signed 64-bit integer if it fits exactly."""
        number = self.as_number()
        if isinstance(number, int) and not isinstance(number, bool):
            if I64_MIN <= number <= I64_MAX:
                return number
        return None

    def as_u64(self) -> Optional[int]:
        """Return the number as an unsigned 64-bit integer if it fits exactly."""
        number = self.as_number()
        if isinstance(number, int) and not isinstance(number, bool):
            if 0 <= number <= U64_MAX:
                return number
        return None

    def as_f64(self) -> Optional[float]:
        """Return any number as a float."""
        number = self.as_number()
        if number is None:
            return None
        return float(number)

    def pointer(self, path: Iterable[Index]) -> Optional["JsonValue"]:
        """Follow a sequence of keys and positions; None if any step misses."""
        if isinstance(path, (str, bytes)):
            raise TypeError("path must be a sequence of keys and positions")
        node: Optional[JsonValue] = self
        for step in path:
            _check_index(step)
            node = node.get(step)
            if node is None:
                return None
        return node