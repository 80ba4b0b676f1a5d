"""
Builder State Classes - Each state decides what a builder call does.

The context delegates every mutating call to its current state object.
States validate the call, mutate the tree through the stack tracker and
pick the next state. ErroredState absorbs everything once a call fails.
"""

from typing import TYPE_CHECKING, Optional

from .errors import ErrorCode
from .values import Value, ValueKind, make_container

if TYPE_CHECKING:
    from .context import Context


# ========================================================================
# SHARED HELPER FUNCTIONS
# ========================================================================

def state_for_scope(context: 'Context') -> 'BuilderState':
    """Pick the state matching the innermost open scope."""
    kind = context.tracker.current_kind()
    if kind is ValueKind.OBJECT:
        return InObjectState(context)
    if kind is ValueKind.ARRAY:
        return InArrayState(context)
    return NoScopeState(context)


def close_scope(context: 'Context', kind: ValueKind) -> bool:
    """
    Handle object_end/array_end - used by both open-scope states.

    Ending the root while it is the only open scope does nothing, so the
    finished document stays available. Otherwise the innermost scope is
    popped and appended to its parent under the key it was opened with.
    """
    tracker = context.tracker
    if context.options.strict_scopes and tracker.current_kind() is not kind:
        return context._fail(ErrorCode.SCOPE_MISMATCH)

    if tracker.at_root():
        return True

    scope = tracker.pop_scope()
    context._pending_key = None
    tracker.append(scope.key, scope.value)
    context._transition(state_for_scope(context))
    return True


# ========================================================================
# BASE STATE CLASS
# ========================================================================

class BuilderState:
    """Base class for builder states."""

    name = "base"

    def __init__(self, context: 'Context'):
        self.context = context
        self.tracker = context.tracker

    def key(self, name: Optional[str]) -> bool:
        """Record the key for the next value. Subclasses must implement."""
        raise NotImplementedError

    def emit(self, value: Value) -> bool:
        """Append a finished scalar value. Subclasses must implement."""
        raise NotImplementedError

    def begin(self, kind: ValueKind) -> bool:
        """Open a new object or array scope. Subclasses must implement."""
        raise NotImplementedError

    def end(self, kind: ValueKind) -> bool:
        """Close the innermost scope. Subclasses must implement."""
        raise NotImplementedError

    def _check_key(self, name: Optional[str]) -> bool:
        """Validate a key independent of the scope it is used in."""
        if name is None or not isinstance(name, str):
            return self.context._fail(ErrorCode.NULL_KEY)
        if len(name) > self.context.options.max_key_length:
            return self.context._fail(ErrorCode.KEY_TOO_LONG, name)
        return True

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


# ========================================================================
# CONCRETE STATE CLASSES
# ========================================================================

class NoScopeState(BuilderState):
    """Nothing is open yet. Only object_begin/array_begin are legal."""

    name = "NO_SCOPE"

    def key(self, name: Optional[str]) -> bool:
        if not self._check_key(name):
            return False
        return self.context._fail(ErrorCode.NO_SCOPE, name)

    def emit(self, value: Value) -> bool:
        return self.context._fail(ErrorCode.NO_SCOPE)

    def begin(self, kind: ValueKind) -> bool:
        self.tracker.push_scope(None, make_container(kind))
        self.context._open_root()
        self.context._transition(state_for_scope(self.context))
        return True

    def end(self, kind: ValueKind) -> bool:
        return self.context._fail(ErrorCode.SCOPE_UNDERFLOW)


class InObjectState(BuilderState):
    """Innermost scope is an object. Every value needs a pending key."""

    name = "IN_OBJECT"

    def key(self, name: Optional[str]) -> bool:
        if not self._check_key(name):
            return False
        if self.tracker.has_key(name) or self.context._pending_key == name:
            return self.context._fail(ErrorCode.DUPLICATE_KEY, name)
        self.context._pending_key = name
        return True

    def emit(self, value: Value) -> bool:
        name = self._take_key()
        if name is None:
            return self.context._fail(ErrorCode.NULL_KEY)
        self.tracker.append(name, value)
        return True

    def begin(self, kind: ValueKind) -> bool:
        name = self._take_key()
        if name is None:
            return self.context._fail(ErrorCode.NULL_KEY)
        self.tracker.push_scope(name, make_container(kind))
        self.context._transition(state_for_scope(self.context))
        return True

    def end(self, kind: ValueKind) -> bool:
        return close_scope(self.context, kind)

    def _take_key(self) -> Optional[str]:
        name = self.context._pending_key
        self.context._pending_key = None
        return name


class InArrayState(BuilderState):
    """Innermost scope is an array. Elements never carry a key."""

    name = "IN_ARRAY"

    def key(self, name: Optional[str]) -> bool:
        if not self._check_key(name):
            return False
        return self.context._fail(ErrorCode.WRONG_SCOPE, name)

    def emit(self, value: Value) -> bool:
        self.tracker.append(None, value)
        return True

    def begin(self, kind: ValueKind) -> bool:
        self.tracker.push_scope(None, make_container(kind))
        self.context._transition(state_for_scope(self.context))
        return True

    def end(self, kind: ValueKind) -> bool:
        return close_scope(self.context, kind)


class ErroredState(BuilderState):
    """A call has failed. Every later call is refused without side effects."""

    name = "ERRORED"

    def key(self, name: Optional[str]) -> bool:
        return False

    def emit(self, value: Value) -> bool:
        return False

    def begin(self, kind: ValueKind) -> bool:
        return False

    def end(self, kind: ValueKind) -> bool:
        return False
