"""
Renderer - Writes a value tree as indented JSON text.

Objects and arrays put one member per line, indented by the configured
indent string once per nesting level. Strings are written verbatim
between quotes with no escaping, so the caller supplies text that is
already safe to embed. The output is exactly what the parser reads back.
"""

import io
import math
from typing import List

from .handler import FileSink, OutputSink
from .values import Value, ValueKind


def format_number(number: float) -> str:
    """
    Shortest decimal text that reads back as the same double.

    Fifteen significant digits cover most values; seventeen are always
    enough. Non-finite numbers have no JSON literal and become null.
    """
    if not math.isfinite(number):
        return "null"
    text = "%.15g" % number
    if float(text) != number:
        text = "%.17g" % number
    return text


class Renderer:
    """
    Pretty-printer for value trees.

    Open containers are tracked on an explicit stack of frames rather than
    by recursion, so any tree the builder can produce can be rendered.
    """

    def __init__(self, indent: str = "\t"):
        self.indent = indent

    def render(self, value: Value, sink: OutputSink, level: int = 0) -> None:
        """Write value to sink, starting at the given nesting level."""
        self._dump_indent(sink, level)

        # each frame is [container, level, index of the next member]
        frames: List[list] = []
        self._dump_value(value, sink, level, frames)

        while frames:
            frame = frames[-1]
            container, frame_level, index = frame
            members = container.payload

            if index == len(members):
                frames.pop()
                sink.write("\n")
                self._dump_indent(sink, frame_level)
                sink.write("}" if container.kind is ValueKind.OBJECT else "]")
                continue

            if index > 0:
                sink.write(",\n")
            frame[2] = index + 1

            member = members[index]
            self._dump_indent(sink, frame_level + 1)
            if container.kind is ValueKind.OBJECT:
                sink.write(f'"{member.key}": ')
                member = member.value
            self._dump_value(member, sink, frame_level + 1, frames)

    def _dump_indent(self, sink: OutputSink, level: int) -> None:
        if self.indent and level > 0:
            sink.write(self.indent * level)

    def _dump_value(self, value: Value, sink: OutputSink, level: int, frames: List[list]) -> None:
        """Write a scalar or empty container whole; open a frame for the rest."""
        kind = value.kind
        if value.released:
            sink.write("null")
        elif kind is ValueKind.OBJECT or kind is ValueKind.ARRAY:
            opening, closing = ("{", "}") if kind is ValueKind.OBJECT else ("[", "]")
            if len(value.payload) == 0:
                sink.write(opening + closing)
            else:
                sink.write(opening + "\n")
                frames.append([value, level, 0])
        elif kind is ValueKind.STRING:
            sink.write('"')
            sink.write(value.payload)
            sink.write('"')
        elif kind is ValueKind.NUMBER:
            sink.write(format_number(value.payload))
        elif kind is ValueKind.BOOLEAN:
            sink.write("true" if value.payload else "false")
        else:
            sink.write("null")


def render_to_string(value: Value, indent: str = "\t") -> str:
    """Render a value tree and return the text."""
    out = io.StringIO()
    Renderer(indent).render(value, FileSink(out))
    return out.getvalue()
