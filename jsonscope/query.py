"""
Query - Read-only lookups over a finished tree.

Every accessor returns None (or 0 for sizes) when the value has the wrong
kind, the key or index is absent, or the value was released by
Context.finalize().
"""

from typing import Optional

from .values import Pair, Value


def _live(value: Optional[Value]) -> bool:
    return value is not None and not value.released


def object_get(root: Optional[Value], key: str) -> Optional[Value]:
    """Value stored under key, by linear scan."""
    if not _live(root) or not root.is_object() or key is None:
        return None
    for pair in root.payload:
        if pair.key == key:
            return pair.value
    return None


def object_get_at(root: Optional[Value], index: int) -> Optional[Pair]:
    """Pair at position index in insertion order."""
    if not _live(root) or not root.is_object():
        return None
    return root.payload.get(index)


def object_size(root: Optional[Value]) -> int:
    if not _live(root) or not root.is_object():
        return 0
    return root.payload.size()


def array_get(root: Optional[Value], index: int) -> Optional[Value]:
    """Element at position index."""
    if not _live(root) or not root.is_array():
        return None
    return root.payload.get(index)


def array_size(root: Optional[Value]) -> int:
    if not _live(root) or not root.is_array():
        return 0
    return root.payload.size()
