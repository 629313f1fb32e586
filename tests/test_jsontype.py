import pytest
from hypothesis import given, strategies as st

from jsondom.jsontype import I64_MAX, I64_MIN, U64_MAX, JsonType, JsonValue


class Plain(JsonValue):
    def __init__(self, data):
        self.data = data

    def get_type(self):
        if self.data is None:
            return JsonType.Null
        if isinstance(self.data, bool):
            return JsonType.Boolean
        if isinstance(self.data, (int, float)):
            return JsonType.Number
        if isinstance(self.data, str):
            return JsonType.String
        if isinstance(self.data, dict):
            return JsonType.Object
        return JsonType.Array

    def as_number(self):
        if isinstance(self.data, (int, float)) and not isinstance(self.data, bool):
            return self.data
        return None

    def as_str(self):
        return self.data if isinstance(self.data, str) else None

    def as_bool(self):
        return self.data if isinstance(self.data, bool) else None

    def get(self, index):
        if isinstance(self.data, dict) and isinstance(index, str):
            if index in self.data:
                return Plain(self.data[index])
        if isinstance(self.data, list) and isinstance(index, int):
            if 0 <= index < len(self.data):
                return Plain(self.data[index])
        return None


DOC = {
    "bool": True,
    "int": -1,
    "uint": 0,
    "float": 1.1,
    "string": "hello",
    "array": [1, 2, 3],
    "object": {"a": "aaa"},
    "strempty": "",
    "objempty": {},
    "arrempty": [],
}


def test_jsontype_codes_are_fixed():
    assert [t.value for t in JsonType] == [0, 1, 2, 3, 4, 5, 6]
    assert JsonType(4) is JsonType.Object
    assert JsonType(6) is JsonType.Raw


def test_jsontype_rejects_unknown_code():
    with pytest.raises(ValueError):
        JsonType(7)


def test_abstract_interface_cannot_be_instantiated():
    with pytest.raises(TypeError):
        JsonValue()


def test_predicates_on_document():
    root = Plain(DOC)
    assert JsonValue.is_object(root)
    assert JsonValue.is_boolean(root.get("bool"))
    assert JsonValue.is_true(root.get("bool"))
    assert JsonValue.is_u64(root.get("uint"))
    assert JsonValue.is_number(root.get("uint"))
    assert JsonValue.is_i64(root.get("int"))
    assert JsonValue.is_f64(root.get("float"))
    assert JsonValue.is_str(root.get("string"))
    assert JsonValue.is_array(root.get("array"))
    assert JsonValue.is_object(root.get("object"))
    assert JsonValue.is_str(root.get("strempty"))
    assert JsonValue.is_object(root.get("objempty"))
    assert JsonValue.is_array(root.get("arrempty"))


def test_is_false_is_negation_of_is_true():
    assert JsonValue.is_false(Plain(False))
    assert not JsonValue.is_false(Plain(True))
    assert JsonValue.is_false(Plain("hello"))
    assert JsonValue.is_null(Plain(None))


def test_numeric_conversions():
    root = Plain(DOC)
    assert JsonValue.as_i64(root.get("int")) == -1
    assert JsonValue.as_u64(root.get("int")) is None
    assert JsonValue.as_i64(root.get("float")) is None
    assert JsonValue.as_f64(root.get("float")) == 1.1
    assert JsonValue.as_f64(root.get("string")) is None
    assert not JsonValue.is_number(root.get("string"))


def test_integer_limits():
    assert JsonValue.as_i64(Plain(I64_MAX)) == I64_MAX
    assert JsonValue.as_i64(Plain(I64_MAX + 1)) is None
    assert JsonValue.as_u64(Plain(I64_MAX + 1)) == I64_MAX + 1
    assert JsonValue.as_u64(Plain(U64_MAX + 1)) is None
    assert JsonValue.as_i64(Plain(I64_MIN)) == I64_MIN
    assert JsonValue.as_i64(Plain(I64_MIN - 1)) is None


def test_pointer_walks_keys_and_positions():
    root = Plain(DOC)
    assert JsonValue.as_i64(JsonValue.pointer(root, ["array", 2])) == 3
    assert JsonValue.pointer(root, ["object", "a"]).as_str() == "aaa"
    assert JsonValue.pointer(root, ["objempty", "a"]) is None
    assert JsonValue.pointer(root, ["arrempty", 1]) is None
    assert JsonValue.pointer(root, ["unknown"]) is None
    assert JsonValue.pointer(root, []) is root


def test_pointer_rejects_bad_steps():
    root = Plain(DOC)
    with pytest.raises(TypeError):
        JsonValue.pointer(root, ["array", 1.5])
    with pytest.raises(TypeError):
        JsonValue.pointer(root, ["array", True])
    with pytest.raises(TypeError):
        JsonValue.pointer(root, "array")


@given(st.integers(min_value=I64_MIN, max_value=I64_MAX))
def test_i64_range_round_trips(n):
    value = Plain(n)
    assert JsonValue.as_i64(value) == n
    assert JsonValue.as_f64(value) == float(n)
    assert JsonValue.is_u64(value) == (n >= 0)


@given(st.floats(allow_nan=False, allow_infinity=False))
def test_floats_are_never_integers(x):
    value = Plain(x)
    assert JsonValue.as_f64(value) == x
    assert JsonValue.as_i64(value) is None
    assert JsonValue.as_u64(value) is None