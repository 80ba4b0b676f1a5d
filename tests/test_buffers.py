"""Test the growable buffer behind arrays, objects and the scope stack."""

import pytest

from jsonscope.buffers import SEED_CAPACITY, GrowableBuffer


def test_new_buffer_is_empty():
    """A fresh buffer has no items and no storage."""
    buf = GrowableBuffer()

    assert buf.size() == 0
    assert buf.capacity == 0
    assert buf.peek() is None


def test_first_push_allocates_seed_capacity():
    """The first push allocates 16 slots."""
    buf = GrowableBuffer()
    buf.push("a")

    assert buf.size() == 1
    assert buf.capacity == SEED_CAPACITY == 16


def test_capacity_doubles_when_full():
    """Pushing past capacity doubles it and keeps every item in order."""
    buf = GrowableBuffer()
    for i in range(17):
        buf.push(i)

    assert buf.capacity == 32
    assert list(buf) == list(range(17))

    for i in range(17, 33):
        buf.push(i)

    assert buf.capacity == 64
    assert list(buf) == list(range(33))


def test_pop_returns_last_item():
    """Pop removes from the tail without shrinking capacity."""
    buf = GrowableBuffer()
    buf.push("x")
    buf.push("y")

    assert buf.pop() == "y"
    assert buf.size() == 1
    assert buf.capacity == 16
    assert buf.peek() == "x"


def test_pop_empty_raises():
    """Popping an empty buffer is a programming error."""
    with pytest.raises(IndexError):
        GrowableBuffer().pop()


def test_get_is_bounds_checked():
    """get() returns None outside [0, size)."""
    buf = GrowableBuffer()
    buf.push("only")

    assert buf.get(0) == "only"
    assert buf.get(1) is None
    assert buf.get(-1) is None
    # unused capacity slots are not visible
    assert buf.get(5) is None


def test_free_resets_to_empty():
    """free() drops storage and items."""
    buf = GrowableBuffer()
    for i in range(20):
        buf.push(i)
    buf.free()

    assert buf.size() == 0
    assert buf.capacity == 0
    assert list(buf) == []

    buf.push("again")
    assert buf.capacity == 16


def test_indexing_and_len():
    """Supports len() and negative indexing over stored items only."""
    buf = GrowableBuffer()
    buf.push(1)
    buf.push(2)

    assert len(buf) == 2
    assert buf[0] == 1
    assert buf[-1] == 2
    with pytest.raises(IndexError):
        buf[2]


def test_get_and_indexing_differ_on_negatives():
    """Indexing counts negatives from the tail; get() treats them as misses."""
    buf = GrowableBuffer()
    buf.push("a")
    buf.push("b")

    assert buf[-2] == "a"
    assert buf.get(-2) is None
    with pytest.raises(IndexError):
        buf[-3]
