import json

import pytest
from hypothesis import given
from hypothesis import strategies as st

from jsondom.jsontype import I64_MAX, I64_MIN, U64_MAX, JsonType
from jsondom.value import Array, Object, Value, _build, to_string

TEST_JSON = """{
    "bool": true,
    "int": -1,
    "uint": 0,
    "float": 1.1,
    "string": "hello",
    "array": [1,2,3],
    "object": {"a":"aaa"},
    "strempty": "",
    "objempty": {},
    "arrempty": []
}"""


def make_doc():
    return _build(json.loads(TEST_JSON))


json_scalars = (
    st.none()
    | st.booleans()
    | st.integers(min_value=I64_MIN, max_value=U64_MAX)
    | st.floats(allow_nan=False, allow_infinity=False)
    | st.text()
)
json_values = st.recursive(
    json_scalars,
    lambda children: st.lists(children, max_size=5)
    | st.dictionaries(st.text(), children, max_size=5),
    max_leaves=20,
)


def test_value_is():
    value = make_doc()
    assert value.get("bool").is_true()
    assert value.get("bool").is_boolean()
    assert value.get("uint").is_u64()
    assert value.get("uint").is_number()
    assert value.get("int").is_i64()
    assert value.get("float").is_f64()
    assert value.get("string").is_str()
    assert value.get("array").is_array()
    assert value.get("object").is_object()
    assert value.get("strempty").is_str()
    assert value.get("objempty").is_object()
    assert value.get("arrempty").is_array()


def test_value_get():
    value = make_doc()
    assert value.get("int").as_i64() == -1
    assert value["array"].get(0).as_i64() == 1
    assert value.pointer(["array", 2]).as_i64() == 3
    assert value.pointer(["array", 2]).as_u64() == 3
    assert value.pointer(["object", "a"]).as_str() == "aaa"
    assert value.pointer(["objempty", "a"]) is None
    assert value.pointer(["arrempty", 1]) is None
    assert value.pointer(["unknown"]) is None


def test_get_on_wrong_container_returns_none():
    value = make_doc()
    assert value["array"].get("a") is None
    assert value["object"].get(0) is None
    assert value["array"].get(-1) is None
    assert Value.new_i64(1).get(0) is None


def test_get_rejects_bad_index_type():
    with pytest.raises(TypeError):
        make_doc().get(1.5)


def test_getitem_errors():
    value = make_doc()
    with pytest.raises(KeyError):
        value["missing"]
    with pytest.raises(IndexError):
        value["array"][3]
    assert value.get("missing") is None
    assert value["array"].get(3) is None
    assert len(value["array"]) == 3


def test_object_view():
    value = make_doc()
    obj = value.as_object()
    assert isinstance(obj, Object)
    assert len(obj) == 10
    assert obj.get("bool").as_bool() is True
    assert obj.contains_key("string")
    assert not obj.contains_key("inserted")
    assert obj.capacity() == len(obj)
    assert not obj.is_empty()
    assert value["objempty"].as_object().is_empty()
    assert [key for key, _ in obj] == list(json.loads(TEST_JSON))


def test_array_view():
    arr = make_doc()["array"].as_array()
    assert isinstance(arr, Array)
    assert [item.as_u64() for item in arr] == [1, 2, 3]
    assert arr[1].as_u64() == 2
    assert arr[-1] is arr[2]
    assert len(arr[:2]) == 2
    assert arr.capacity() == len(arr)
    assert make_doc()["arrempty"].as_array().is_empty()


def test_views_of_wrong_kind():
    value = make_doc()
    assert value["int"].as_array() is None
    assert value["array"].as_object() is None
    with pytest.raises(TypeError):
        Array(value)


def test_numeric_conversions():
    big = Value.new_u64(I64_MAX + 1)
    assert big.as_i64() is None
    assert big.as_u64() == I64_MAX + 1
    assert Value.new_i64(-1).as_u64() is None
    assert Value.new_i64(3).as_u64() == 3
    assert Value.new_u64(3).as_f64() == 3
    assert Value.new_f64(1.1).as_i64() is None
    assert Value.new_f64(1.1).is_f64()
    assert Value.new_str("hello").as_number() is None


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
def test_new_f64_rejects_non_finite(bad):
    assert Value.new_f64(bad) is None


def test_constructor_range_errors():
    with pytest.raises(ValueError):
        Value.new_i64(I64_MAX + 1)
    with pytest.raises(ValueError):
        Value.new_u64(-1)
    with pytest.raises(ValueError):
        Value.new_u64(U64_MAX + 1)
    with pytest.raises(TypeError):
        Value.new_i64(True)
    with pytest.raises(TypeError):
        Value.new_str(1)


def test_bool_and_null():
    assert Value.new_bool(True).is_true()
    assert Value.new_bool(False).is_false()
    assert Value.new_bool(False).as_bool() is False
    assert Value.new_null().is_null()
    assert Value.new_null().is_false()
    assert Value().get_type() is JsonType.Null


def test_get_type():
    value = make_doc()
    assert value.get_type() is JsonType.Object
    assert value["array"].get_type() is JsonType.Array
    assert value["float"].get_type() is JsonType.Number
    assert value["string"].get_type() is JsonType.String


def test_take_leaves_null():
    value = make_doc()
    node = value.get("string")
    taken = node.take()
    assert taken.as_str() == "hello"
    assert node.is_null()
    assert value["string"].is_null()


def test_len_and_capacity():
    assert len(Value.new_str("hello")) == len("hello")
    assert len(make_doc()["array"]) == 3
    assert Value.new_array().capacity() == 0
    with pytest.raises(TypeError):
        len(Value.new_i64(1))
    with pytest.raises(TypeError):
        Value.new_str("hello").capacity()


def test_equality():
    data = json.loads(TEST_JSON)
    assert _build(data) == _build(data)
    assert Value.new_u64(1) == Value.new_i64(1)
    assert (Value.new_u64(1) == Value.new_f64(1.0)) is False
    assert _build({"a": 1, "b": 2}) == _build({"b": 2, "a": 1})
    assert (_build([1, 2]) == _build([2, 1])) is False


def test_to_string_pinned():
    assert to_string(_build([1, 2, 3])) == "[1,2,3]"
    assert to_string(Value.new_null()) == "null"
    assert to_string(Value.new_bool(True)) == "true"
    assert repr(Value.new_bool(False)) == "false"


def test_to_string_round_trip():
    value = make_doc()
    assert json.loads(to_string(value)) == json.loads(TEST_JSON)


def test_to_string_escapes():
    text = "He said, \"I'm coming home.\""
    assert json.loads(to_string(Value.new_str(text))) == text


def test_to_string_rejects_non_value():
    with pytest.raises(TypeError):
        to_string(5)


def test_build_rejects_non_string_keys():
    with pytest.raises(TypeError):
        _build({1: "x"})


def test_to_python():
    data = json.loads(TEST_JSON)
    assert make_doc().to_python() == data


@given(json_values)
def test_round_trip_through_text(data):
    value = _build(data)
    assert json.loads(to_string(value)) == data
    assert value.to_python() == data
    assert _build(json.loads(to_string(value))) == value