"""
jsonscope - Build, render and parse JSON documents through scope calls.
"""

from .config import ContextOptions
from .context import Context
from .errors import ErrorCode, ParseError
from .handler import BufferSink, FileSink, OutputSink
from .query import array_get, array_size, object_get, object_get_at, object_size
from .renderer import format_number, render_to_string
from .values import Pair, Value, ValueKind, describe, to_python

__all__ = [
    'BufferSink',
    'Context',
    'ContextOptions',
    'ErrorCode',
    'FileSink',
    'OutputSink',
    'Pair',
    'ParseError',
    'Value',
    'ValueKind',
    'array_get',
    'array_size',
    'describe',
    'format_number',
    'object_get',
    'object_get_at',
    'object_size',
    'render_to_string',
    'to_python',
]
__version__ = '0.1.0'
