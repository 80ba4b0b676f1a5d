"""
Stack Tracker - Manages the stack of open scopes while a document is built.

Each entry is a Pair: the half-built object or array together with the
key it will be filed under once it is closed. The first entry is the
root and stays on the stack for the life of the document.
"""

from typing import Iterator, Optional

from .buffers import GrowableBuffer
from .values import Pair, Value, ValueKind


class StackTracker:
    """
    Manages the open-scope stack, outermost first.

    Every reference into the tree that the builder needs is derived from
    the top of this stack at the time of the call.
    """

    def __init__(self):
        self._scopes: GrowableBuffer[Pair] = GrowableBuffer()

    @property
    def depth(self) -> int:
        """Number of open scopes."""
        return self._scopes.size()

    @property
    def root(self) -> Optional[Value]:
        """The outermost open scope, if any."""
        first = self._scopes.get(0)
        return first.value if first is not None else None

    def push_scope(self, key: Optional[str], scope: Value) -> None:
        """Open a new scope filed under key."""
        self._scopes.push(Pair(key, scope))

    def pop_scope(self) -> Pair:
        """Close and return the innermost scope."""
        return self._scopes.pop()

    def current(self) -> Optional[Pair]:
        """Return the innermost scope without removing it."""
        return self._scopes.peek()

    def current_kind(self) -> Optional[ValueKind]:
        """Kind of the innermost scope, or None when nothing is open."""
        top = self._scopes.peek()
        return top.value.kind if top is not None else None

    def in_array(self) -> bool:
        """Check if the innermost scope is an array."""
        return self.current_kind() is ValueKind.ARRAY

    def in_object(self) -> bool:
        """Check if the innermost scope is an object."""
        return self.current_kind() is ValueKind.OBJECT

    def at_root(self) -> bool:
        """Check if only the root scope is open."""
        return self._scopes.size() == 1

    def append(self, key: Optional[str], value: Value) -> None:
        """
        Move a finished value into the innermost scope.

        Objects store it as a Pair under key; arrays store the bare value
        and drop the key.
        """
        top = self._scopes.peek()
        if top.value.kind is ValueKind.OBJECT:
            top.value.payload.push(Pair(key, value))
        else:
            top.value.payload.push(value)

    def has_key(self, key: str) -> bool:
        """Linear scan of the innermost object's keys."""
        top = self._scopes.peek()
        if top is None or top.value.kind is not ValueKind.OBJECT:
            return False
        return any(pair.key == key for pair in top.value.payload)

    def clear(self) -> None:
        """Forget all open scopes and release the stack's storage."""
        self._scopes.free()

    def __len__(self) -> int:
        return self._scopes.size()

    def __iter__(self) -> Iterator[Pair]:
        return iter(self._scopes)
