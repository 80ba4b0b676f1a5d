"""
Buffers - Growable storage used by arrays, objects and the scope stack.

Every ordered collection in a document tree is mutated only by appending
or popping at the tail, so one primitive covers all of them.
"""

from typing import Generic, Iterator, List, Optional, TypeVar

T = TypeVar('T')

SEED_CAPACITY = 16


class GrowableBuffer(Generic[T]):
    """
    Amortized-doubling dynamic array.

    Capacity starts at zero, jumps to 16 on the first push and doubles
    whenever the buffer is full. Unused slots hold None.
    """

    def __init__(self):
        self._items: List[Optional[T]] = []
        self._size: int = 0

    @property
    def capacity(self) -> int:
        """Number of slots currently allocated."""
        return len(self._items)

    def size(self) -> int:
        """Number of items stored."""
        return self._size

    def push(self, item: T) -> None:
        """Append an item, growing the backing storage if needed."""
        if self._size >= len(self._items):
            self._grow()
        self._items[self._size] = item
        self._size += 1

    def pop(self) -> T:
        """Remove and return the last item."""
        if self._size == 0:
            raise IndexError("pop from empty buffer")
        self._size -= 1
        item = self._items[self._size]
        self._items[self._size] = None
        return item

    def peek(self) -> Optional[T]:
        """Return the last item, or None when empty."""
        if self._size == 0:
            return None
        return self._items[self._size - 1]

    def get(self, index: int) -> Optional[T]:
        """Bounds-checked access; None when index is negative or past the end."""
        if index < 0 or index >= self._size:
            return None
        return self._items[index]

    def free(self) -> None:
        """Release the backing storage and reset to the empty state."""
        self._items = []
        self._size = 0

    def _grow(self) -> None:
        new_capacity = SEED_CAPACITY if not self._items else 2 * len(self._items)
        self._items.extend([None] * (new_capacity - len(self._items)))

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        for i in range(self._size):
            yield self._items[i]

    def __getitem__(self, index: int) -> T:
        """
        Sequence-style access: negative indexes count from the tail and a
        miss raises IndexError. get() is the bounds-checked form that
        rejects negatives and returns None instead.
        """
        if index < 0:
            index += self._size
        if index < 0 or index >= self._size:
            raise IndexError("buffer index out of range")
        return self._items[index]

    def __repr__(self) -> str:
        return f"GrowableBuffer({self._size}/{self.capacity})"
