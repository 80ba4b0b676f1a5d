"""
Errors - Error codes and diagnostics for building and parsing.

Nothing here is raised. Builder calls record an ErrorCode on the context
and return False; parse failures are described by a ParseError record.
"""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """Outcome of the most recent failing call on a context."""

    OK = "ok"
    DUPLICATE_KEY = "duplicate_key"
    NULL_KEY = "null_key"
    KEY_TOO_LONG = "key_too_long"
    NO_SCOPE = "no_scope"
    WRONG_SCOPE = "wrong_scope"
    SCOPE_UNDERFLOW = "scope_underflow"
    SCOPE_MISMATCH = "scope_mismatch"
    INVALID_VALUE = "invalid_value"
    DEPTH_EXCEEDED = "depth_exceeded"
    UNEXPECTED_TOKEN = "unexpected_token"


def format_error(code: ErrorCode, key: Optional[str] = None, max_key_length: int = 0) -> str:
    """Build the diagnostic string stored alongside an error code."""
    if code is ErrorCode.OK:
        return ""
    if code is ErrorCode.DUPLICATE_KEY:
        return f"double key '{key}'"
    if code is ErrorCode.NULL_KEY:
        return "null key"
    if code is ErrorCode.KEY_TOO_LONG:
        return f"key overflow '{key}' (maxsize = {max_key_length})"
    if code is ErrorCode.NO_SCOPE:
        return "what was done without a scope"
    if code is ErrorCode.WRONG_SCOPE:
        return "what was done within incorrect scope"
    if code is ErrorCode.SCOPE_UNDERFLOW:
        return "scope underflow"
    if code is ErrorCode.SCOPE_MISMATCH:
        return "scope end does not match the open scope"
    if code is ErrorCode.INVALID_VALUE:
        return f"invalid {key} value"
    return "unexpected token"


class ParseError:
    """
    Describes why a parse stopped.

    expected and found are short token descriptions; line and column are
    1-based and point at the first character of the offending token. code is
    UNEXPECTED_TOKEN for syntax errors, DEPTH_EXCEEDED when the document nests
    deeper than the configured limit, and the builder's sticky code when a
    builder call refused the token.
    """

    def __init__(self, message: str, expected: str = "", found: str = "",
                 line: int = 0, column: int = 0,
                 code: ErrorCode = ErrorCode.UNEXPECTED_TOKEN):
        self.message = message
        self.code = code
        self.expected = expected
        self.found = found
        self.line = line
        self.column = column

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"ParseError({self.message!r})"
