"""ContextOptions: validated, immutable configuration for a Context."""

from dataclasses import dataclass
from typing import Optional

from .handler import OutputSink

DEFAULT_INDENT = "\t"
DEFAULT_MAX_KEY_LENGTH = 256
DEFAULT_MAX_DEPTH = 256


@dataclass(frozen=True)
class ContextOptions:
    """
    Configuration for a Context.

    Attributes:
        indent: Text written once per nesting level when rendering.
        sink: Where dump() writes. None means standard output.
        max_key_length: Longest key accepted by key().
        strict_scopes: When True, object_end/array_end must match the kind
            of the innermost open scope.
        max_depth: Deepest nesting parse() accepts within one document.
            Each level costs two Python stack frames, so limits near
            sys.getrecursionlimit() / 2 are not reachable.
    """

    indent: str = DEFAULT_INDENT
    sink: Optional[OutputSink] = None
    max_key_length: int = DEFAULT_MAX_KEY_LENGTH
    strict_scopes: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if not isinstance(self.indent, str):
            msg = f"indent must be a string, got {type(self.indent).__name__}"
            raise ValueError(msg)
        if self.max_key_length < 1:
            msg = f"max_key_length must be >= 1, got {self.max_key_length}"
            raise ValueError(msg)
        if self.max_depth < 1:
            msg = f"max_depth must be >= 1, got {self.max_depth}"
            raise ValueError(msg)
        if self.sink is not None and not isinstance(self.sink, OutputSink):
            msg = f"sink must be an OutputSink, got {type(self.sink).__name__}"
            raise ValueError(msg)
