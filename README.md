# jsondom

`jsondom` parses JSON into a tree of typed nodes. You can read the tree, look values up by key, by position or by a pointer path, change it in place, and write it back out as compact JSON text. It uses only the standard library.

## Installing

```
pip install .
```

To install the test tools as well:

```
pip install ".[test]"
```

## Modules

- `jsondom.jsontype`: the `JsonType` enum and `JsonValue`, the read-only interface that all values share.
- `jsondom.visitor`: `JsonVisitor` and `walk`, which feed a tree of Python data to a visitor one event at a time.
- `jsondom.value`: `Value`, the node type, with the read-only views `Object` and `Array`, and `to_string`.
- `jsondom.document`: `Document`, the mutable handles `ValueMut`, `ObjectMut` and `ArrayMut`, and the parsers `dom_from_str` and `dom_from_slice`.

## Parsing

`dom_from_str` parses text and `dom_from_slice` parses UTF-8 bytes (`bytes`, `bytearray` or `memoryview`). Both return a `Document`. Invalid JSON, invalid UTF-8 and the literals `NaN` and `Infinity` raise `ValueError`. An argument of the wrong type raises `TypeError`.

```python
from jsondom.document import dom_from_str

doc = dom_from_str('{"name": "John", "age": 30, "cars": ["Ford", "BMW"]}')

doc.get("age").as_i64()             # 30
doc.pointer(["cars", 1]).as_str()   # 'BMW'
doc.to_string()                     # '{"name":"John","age":30,"cars":["Ford","BMW"]}'
```

Objects keep all of their entries in document order, duplicate keys included. A key lookup returns the first entry with that key.

## Reading values

Every value reports its `JsonType`: `Null`, `Boolean`, `Number`, `String`, `Object` or `Array`. The checks `is_null()`, `is_boolean()`, `is_true()`, `is_false()`, `is_number()`, `is_str()`, `is_array()` and `is_object()` test the type of a value.

A number is stored as an unsigned integer, a signed integer or a float. Parsed integers from 0 to 2**64-1 are stored as unsigned. Negative integers down to -2**63 are stored as signed. Any other number is stored as a float. The readers below return `None` when the value is not a number or does not fit:

- `as_u64()`: an integer from 0 to 2**64-1.
- `as_i64()`: an integer from -2**63 to 2**63-1.
- `as_f64()`: any number, converted to a float.
- `as_number()`: the stored `int` or `float`.

`is_u64()`, `is_i64()` and `is_f64()` report whether the matching reader succeeds. `as_str()` and `as_bool()` behave the same way for strings and booleans.

`get(index)` takes an `int` for an array position or a `str` for an object key. It returns `None` when nothing is there. Any other index type raises `TypeError`. `pointer(path)` follows a list of keys and positions from the value and returns `None` if any step misses. Indexing with `value[...]` raises `IndexError` or `KeyError` instead of returning `None`.

`Value.as_object()` and `Value.as_array()` return the read-only views `Object` and `Array`, or `None` if the value has a different type. Both views support `len()`, `is_empty()`, `capacity()` and iteration. Iterating an `Object` yields `(key, value)` pairs. An `Array` can be indexed and sliced like a list.

```python
value = doc.as_value()
obj = value.as_object()
len(obj)                   # 3
obj.contains_key("name")   # True
value["cars"][0].as_str()  # 'Ford'
value.to_python()          # {'name': 'John', 'age': 30, 'cars': ['Ford', 'BMW']}
```

`to_python()` returns plain dicts, lists, `str`, `int`, `float`, `bool` and `None`. When an object has duplicate keys, the last one wins.

Two values are equal when they hold the same JSON. Signed and unsigned integers compare by their numeric value, and objects compare as dicts. `len()` works on strings, arrays and objects. `capacity()` works on arrays and objects.

## Building values

`Value` has the following constructors:

- `new_null()`, `new_bool(val)`, `new_str(val)`, `new_object()` and `new_array()`.
- `new_i64(val)` and `new_u64(val)`. These raise `ValueError` when the integer is out of range.
- `new_f64(val)`. This returns `None` for NaN or infinity.

`jsondom.value.to_string(value)` writes any value as compact JSON text. Non-ASCII characters are written as they are, not escaped.

## Changing a document

`Document.as_value_mut()` returns a `ValueMut`. `as_object_mut()` and `as_array_mut()` return an `ObjectMut` or an `ArrayMut` for the root, or `None` if the root has a different type. On a `ValueMut`:

- `get_mut(index)` and `pointer_mut(path)` reach deeper values.
- `into_object_mut()` and `into_array_mut()` switch to a container view.
- `take()` moves a value out and leaves `null` in its place.

```python
from jsondom.document import dom_from_str
from jsondom.value import Value

doc = dom_from_str('{"list": [1, 2, 3], "empty": {}}')

items = doc.as_value_mut().get_mut("list").into_array_mut()
items.push(Value.new_str("pushed"))
items.pop()                    # the pushed string
items[0] = Value.new_u64(10)

obj = doc.as_object_mut()
obj.insert("flag", Value.new_bool(True))  # returns the replaced value, or None
obj.remove("flag")                        # returns the removed value, or None
obj.reserve(10)
obj.capacity()                            # 12
```

`ObjectMut` also has `pop()`, which removes the last entry, and `get()` and `get_mut()`. `ArrayMut` has `get_mut(index)`, `reserve()` and `capacity()`. Capacity only grows. It is raised by `reserve()` and by inserts that go beyond it.

A `Document()` made with no arguments holds `null`.

## Walking with a visitor

Subclass `JsonVisitor` from `jsondom.visitor` and override the `visit_*` callbacks you need:

- `visit_null`, `visit_bool`, `visit_u64`, `visit_i64`, `visit_f64` and `visit_str`
- `visit_key`
- `visit_object_start` and `visit_object_end`
- `visit_array_start` and `visit_array_end`

Then call `walk(data, visitor)` on a tree of dicts, lists, tuples and scalars. Events arrive in document order.

A callback returns `True` to accept an event. The defaults return `False`. When a callback returns `False`, `walk` stops and raises `ValueError`. `walk` also raises `ValueError` for a non-finite float. It raises `TypeError` for non-string object keys and for values that JSON cannot hold.

## What it does not do

- There is no command-line tool.
- There is no pretty-printed output: all text output is compact.
- Parsing reads the whole input at once. There is no streaming or lazy access to parts of a document.

## Tests

```
pytest
```