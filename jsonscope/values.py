"""
Values - The document tree.

A Value is a tagged union over null, boolean, number, string, array and
object. Containers own their children through a GrowableBuffer: arrays
hold Values, objects hold Pairs. Children are moved in on append and are
never shared between two parents.
"""

from enum import Enum
from typing import Any, Optional

from .buffers import GrowableBuffer


class ValueKind(Enum):
    """The six variants of a document value."""

    NULL = "null"
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


class Value:
    """
    A node in the document tree.

    The payload depends on the kind: None for null, bool, float, str, or a
    GrowableBuffer of Values (array) or Pairs (object).
    """

    __slots__ = ('kind', 'payload', 'released')

    def __init__(self, kind: ValueKind, payload: Any = None):
        self.kind = kind
        self.payload = payload
        self.released = False

    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    def is_object(self) -> bool:
        return self.kind is ValueKind.OBJECT

    def is_array(self) -> bool:
        return self.kind is ValueKind.ARRAY

    def is_string(self) -> bool:
        return self.kind is ValueKind.STRING

    def is_number(self) -> bool:
        return self.kind is ValueKind.NUMBER

    def is_boolean(self) -> bool:
        return self.kind is ValueKind.BOOLEAN

    def is_container(self) -> bool:
        return self.kind in (ValueKind.OBJECT, ValueKind.ARRAY)

    def __len__(self) -> int:
        if self.is_container() and self.payload is not None:
            return len(self.payload)
        return 0

    def __eq__(self, other) -> bool:
        """
        Structural equality.

        Arrays compare element by element in order. Objects compare as
        key/value mappings; pair order does not affect equality.
        """
        if not isinstance(other, Value):
            return NotImplemented
        if self.kind is not other.kind or self.released != other.released:
            return False
        if self.kind is ValueKind.ARRAY:
            if len(self) != len(other):
                return False
            return all(a == b for a, b in zip(self.payload, other.payload))
        if self.kind is ValueKind.OBJECT:
            if len(self) != len(other):
                return False
            theirs = {pair.key: pair.value for pair in other.payload}
            for pair in self.payload:
                if pair.key not in theirs or pair.value != theirs[pair.key]:
                    return False
            return True
        return self.payload == other.payload

    __hash__ = None

    def __repr__(self) -> str:
        return f"Value({describe(self)})"


class Pair:
    """A value with its key; key is None for array elements."""

    __slots__ = ('key', 'value')

    def __init__(self, key: Optional[str], value: Value):
        self.key = key
        self.value = value

    def __eq__(self, other) -> bool:
        if not isinstance(other, Pair):
            return NotImplemented
        return self.key == other.key and self.value == other.value

    __hash__ = None

    def __repr__(self) -> str:
        return f"Pair({self.key!r}, {self.value!r})"


# ========================================================================
# CONSTRUCTORS
# ========================================================================

def make_null() -> Value:
    return Value(ValueKind.NULL)


def make_boolean(value: bool) -> Value:
    return Value(ValueKind.BOOLEAN, bool(value))


def make_number(value: float) -> Value:
    return Value(ValueKind.NUMBER, float(value))


def make_string(value: str) -> Value:
    return Value(ValueKind.STRING, value)


def make_array() -> Value:
    return Value(ValueKind.ARRAY, GrowableBuffer())


def make_object() -> Value:
    return Value(ValueKind.OBJECT, GrowableBuffer())


def make_container(kind: ValueKind) -> Value:
    """Create an empty array or object of the given kind."""
    if kind is ValueKind.OBJECT:
        return make_object()
    if kind is ValueKind.ARRAY:
        return make_array()
    raise ValueError(f"{kind.value} is not a container kind")


# ========================================================================
# DESTRUCTION
# ========================================================================

def destroy(value: Optional[Value]) -> None:
    """
    Release a value and everything it owns.

    Walks the tree with an explicit stack, so depth is bounded only by
    memory. Containers hand their children to the stack and then free
    their buffer. Strings drop their text. A released value keeps its kind
    but has no payload. Each value is released exactly once.
    """
    pending = [value]
    while pending:
        current = pending.pop()
        if current is None or current.released:
            continue
        if current.kind is ValueKind.OBJECT:
            pending.extend(pair.value for pair in current.payload)
            current.payload.free()
        elif current.kind is ValueKind.ARRAY:
            pending.extend(current.payload)
            current.payload.free()
        current.payload = None
        current.released = True


# ========================================================================
# INSPECTION
# ========================================================================

def describe(value: Value) -> str:
    """One-line summary of a value's kind and content."""
    if value.released:
        return f"type: {value.kind.value}, released"
    if value.kind is ValueKind.NULL:
        return "type: null, value: null"
    if value.kind is ValueKind.OBJECT:
        return "type: object, value: {...}"
    if value.kind is ValueKind.ARRAY:
        return "type: array, value: [...]"
    if value.kind is ValueKind.STRING:
        return f"type: string, value: '{value.payload}'"
    if value.kind is ValueKind.NUMBER:
        return f"type: number, value: '{value.payload:.15g}'"
    return f"type: boolean, value: '{'true' if value.payload else 'false'}'"


def _shell(value: Value) -> Any:
    if value.released:
        return None
    if value.kind is ValueKind.OBJECT:
        return {}
    if value.kind is ValueKind.ARRAY:
        return []
    return value.payload


def to_python(value: Value) -> Any:
    """
    Convert a tree into plain Python objects.

    Objects become dicts (pair order kept), arrays become lists. Numbers
    that hold an integral value stay floats. Containers are filled from an
    explicit stack, so deep trees do not hit the recursion limit.
    """
    result = _shell(value)
    pending = [(value, result)] if value.is_container() and not value.released else []
    while pending:
        source, target = pending.pop()
        if source.kind is ValueKind.OBJECT:
            for pair in source.payload:
                child = _shell(pair.value)
                target[pair.key] = child
                if pair.value.is_container() and not pair.value.released:
                    pending.append((pair.value, child))
        else:
            for item in source.payload:
                child = _shell(item)
                target.append(child)
                if item.is_container() and not item.released:
                    pending.append((item, child))
    return result
