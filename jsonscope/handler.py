"""
Output Sinks - Destinations for rendered text.

A sink is borrowed by a Context: the context writes through it but never
opens, closes or owns the underlying file or buffer. Clients can subclass
OutputSink and override write() to send text anywhere else.
"""

import sys
from typing import Callable, List, Optional, TextIO

from loguru import logger


class OutputSink:
    """
    Base sink. Receives rendered text chunk by chunk.
    Clients should subclass this and override write().
    """

    def write(self, text: str) -> None:
        """Called for each chunk of rendered output."""
        pass


def default_write_to_file(text: str, file: TextIO) -> None:
    """Write a chunk to a file-like object."""
    file.write(text)


def default_write_to_buffer(text: str, sink: 'BufferSink') -> None:
    """
    Append a chunk to a bounded buffer.

    The chunk is kept only when it fits strictly inside the remaining
    capacity, leaving room for a terminator. A chunk that does not fit is
    dropped whole.
    """
    if sink.size + len(text) < sink.capacity:
        sink.chunks.append(text)
        sink.size += len(text)
    else:
        if not sink.overflowed:
            logger.warning(f"Output buffer full ({sink.capacity} chars), dropping output")
        sink.overflowed = True


class FileSink(OutputSink):
    """Writes to a borrowed file-like object, standard output by default."""

    def __init__(self, file: Optional[TextIO] = None,
                 writer: Optional[Callable[[str, TextIO], None]] = None):
        self.file = file if file is not None else sys.stdout
        self._writer = writer or default_write_to_file

    def write(self, text: str) -> None:
        self._writer(text, self.file)


class BufferSink(OutputSink):
    """
    Writes into a fixed-capacity in-memory buffer.

    Attributes:
        capacity: Maximum number of characters, including one reserved slot.
        size: Characters stored so far.
        overflowed: True once any chunk was dropped for lack of room.
    """

    def __init__(self, capacity: int,
                 writer: Optional[Callable[[str, 'BufferSink'], None]] = None):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self.size = 0
        self.overflowed = False
        self.chunks: List[str] = []
        self._writer = writer or default_write_to_buffer

    def write(self, text: str) -> None:
        self._writer(text, self)

    def getvalue(self) -> str:
        """Return everything written so far."""
        return "".join(self.chunks)

    def clear(self) -> None:
        """Empty the buffer so it can be reused."""
        self.chunks = []
        self.size = 0
        self.overflowed = False
