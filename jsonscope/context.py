"""
Context - Owns a document under construction and the builder API.

A Context is driven by a flat sequence of calls: object_begin/array_begin
open scopes, key() names the next member of an object, string/number/
boolean/null add scalars, and object_end/array_end close scopes. The
first scope opened is the root and is never closed, so matching end
calls can be made uniformly without tracking depth.

Every call returns True on success. The first failing call records an
ErrorCode and a message and poisons the context: all later builder calls
return False and leave the tree untouched.
"""

import dataclasses
import numbers
from typing import Optional

from loguru import logger

from .config import ContextOptions
from .errors import ErrorCode, ParseError, format_error
from .handler import FileSink, OutputSink
from .parser import Parser
from .renderer import Renderer, render_to_string
from .stack_tracker import StackTracker
from .states import BuilderState, ErroredState, NoScopeState
from .values import (
    Value,
    ValueKind,
    destroy,
    make_boolean,
    make_null,
    make_number,
    make_string,
)


class Context:
    """
    Builds one JSON document, renders it, and parses text into it.

    Args:
        options: A ContextOptions instance. Keyword arguments override
            individual fields, e.g. Context(indent="  ").
    """

    def __init__(self, options: Optional[ContextOptions] = None, **overrides):
        if options is None:
            options = ContextOptions(**overrides)
        elif overrides:
            options = dataclasses.replace(options, **overrides)

        self.options = options
        self.sink: OutputSink = options.sink if options.sink is not None else FileSink()
        self.tracker = StackTracker()
        self._renderer = Renderer(options.indent)

        self._state: BuilderState = None
        self._reset()
        logger.debug(f"Context created (indent={options.indent!r}, sink={type(self.sink).__name__})")

    def _reset(self) -> None:
        self._code = ErrorCode.OK
        self._error = ""
        self._pending_key: Optional[str] = None
        self._root: Optional[Value] = None
        self.parse_error: Optional[ParseError] = None
        self._state = NoScopeState(self)

    # ========================================================================
    # INSPECTION
    # ========================================================================

    @property
    def state(self) -> BuilderState:
        """Current builder state object."""
        return self._state

    @property
    def state_name(self) -> str:
        """Name of current state for debugging."""
        return self._state.name

    @property
    def code(self) -> ErrorCode:
        """Sticky error code; OK until a builder call fails."""
        return self._code

    @property
    def error(self) -> str:
        """Diagnostic for the recorded error, empty when code is OK."""
        return self._error

    @property
    def ok(self) -> bool:
        return self._code is ErrorCode.OK

    @property
    def root(self) -> Optional[Value]:
        """The first scope opened, or None before any scope exists."""
        return self._root

    @property
    def pending_key(self) -> Optional[str]:
        """Key recorded by key() and not yet used by a value."""
        return self._pending_key

    @property
    def depth(self) -> int:
        """Number of open scopes, the root included."""
        return self.tracker.depth

    # ========================================================================
    # BUILDER API
    # ========================================================================

    def key(self, name: Optional[str]) -> bool:
        """Name the next value added to the current object."""
        return self._state.key(name)

    def string(self, value: Optional[str]) -> bool:
        """Add a string. None adds null; anything else that is not a str fails."""
        if value is None:
            return self._state.emit(make_null())
        if not isinstance(value, str):
            return self._reject(ValueKind.STRING)
        return self._state.emit(make_string(value))

    def number(self, value: float) -> bool:
        if not isinstance(value, numbers.Real):
            return self._reject(ValueKind.NUMBER)
        return self._state.emit(make_number(value))

    def boolean(self, value: bool) -> bool:
        return self._state.emit(make_boolean(value))

    def null(self) -> bool:
        return self._state.emit(make_null())

    def object_begin(self) -> bool:
        return self._state.begin(ValueKind.OBJECT)

    def object_end(self) -> bool:
        return self._state.end(ValueKind.OBJECT)

    def array_begin(self) -> bool:
        return self._state.begin(ValueKind.ARRAY)

    def array_end(self) -> bool:
        return self._state.end(ValueKind.ARRAY)

    # ========================================================================
    # PARSING AND OUTPUT
    # ========================================================================

    def parse(self, text: str) -> bool:
        """
        Parse a JSON document into this context.

        With nothing open the document becomes the root. Inside an open
        scope it is added as a nested value, under the pending key when
        the scope is an object. On failure parse_error describes the
        problem and the context should be finalized.
        """
        parser = Parser(self)
        ok = parser.parse(text)
        self.parse_error = parser.error
        return ok

    def dump(self) -> bool:
        """Render the root to the configured sink."""
        if self._code is not ErrorCode.OK or self._root is None:
            return False
        self._renderer.render(self._root, self.sink)
        return True

    def dumps(self) -> Optional[str]:
        """Render the root and return the text, or None if dump() would fail."""
        if self._code is not ErrorCode.OK or self._root is None:
            return None
        return render_to_string(self._root, self.options.indent)

    def finalize(self) -> None:
        """
        Release the whole tree and return to the initial state.

        Scopes still open below the root are not yet attached to it, so
        each one is released on its own. The sink is left open.
        """
        for scope in self.tracker:
            destroy(scope.value)
        self.tracker.clear()
        self._reset()
        logger.debug("Context finalized")

    def __enter__(self) -> 'Context':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.finalize()

    # ========================================================================
    # STATE MACHINE HOOKS
    # ========================================================================

    def _transition(self, new_state: BuilderState) -> None:
        """Transition to a new state."""
        self._state = new_state

    def _open_root(self) -> None:
        self._root = self.tracker.root
        logger.debug(f"Opened root {self._root.kind.value}")

    def _fail(self, code: ErrorCode, key: Optional[str] = None) -> bool:
        """Record a sticky error and refuse every later call."""
        self._code = code
        self._error = format_error(code, key, self.options.max_key_length)
        self._transition(ErroredState(self))
        logger.warning(f"Builder error: {self._error}")
        return False

    def _reject(self, kind: ValueKind) -> bool:
        """Refuse a payload of the wrong type; an earlier error takes precedence."""
        if self._code is not ErrorCode.OK:
            return False
        return self._fail(ErrorCode.INVALID_VALUE, kind.value)

    def __repr__(self) -> str:
        return f"Context(state={self.state_name}, depth={self.depth}, code={self._code.name})"
