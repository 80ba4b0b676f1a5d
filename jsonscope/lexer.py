"""
Lexer - Classifies JSON text into tokens.

Tokens are identifiers, double-quoted strings, integer and float
literals, and single characters. String tokens keep their content raw:
backslash sequences are not decoded, they only stop a backslash-quote
from ending the string.

A token records only its character offset. Line and column are worked
out from the offset when a diagnostic needs them.
"""

import re
from enum import Enum
from typing import Iterator, Optional, Tuple

_WHITESPACE = r"\s+"
_STRING     = r'"(?:[^"\\]|\\.)*"'
_FLOAT      = r"-?\d+(?:\.\d+(?:[eE][+-]?\d+)?|[eE][+-]?\d+)"
_INTEGER    = r"-?\d+"
_IDENTIFIER = r"[A-Za-z_][A-Za-z0-9_]*"

_WHITESPACE_RE = re.compile(_WHITESPACE)

# Anything not matched by an earlier group is a single-character token.
_TOKEN_RE = re.compile(
    rf"(?P<STRING>{_STRING})|"
    rf"(?P<FLOAT>{_FLOAT})|"
    rf"(?P<INTEGER>{_INTEGER})|"
    rf"(?P<IDENTIFIER>{_IDENTIFIER})|"
    r"(?P<CHAR>.)",
    re.DOTALL,
)


class TokenKind(Enum):
    IDENTIFIER = "identifier"
    STRING = "double quote string"
    INTEGER = "integer"
    FLOAT = "float"
    CHAR = "character"
    EOF = "end of input"


class Token:
    """
    A classified slice of the input.

    text is the exact source slice; value is the string content for
    STRING tokens and the text itself for everything else.
    """

    __slots__ = ('kind', 'text', 'offset')

    def __init__(self, kind: TokenKind, text: str, offset: int):
        self.kind = kind
        self.text = text
        self.offset = offset

    @property
    def value(self) -> str:
        if self.kind is TokenKind.STRING:
            return self.text[1:-1]
        return self.text

    @property
    def end(self) -> int:
        return self.offset + len(self.text)

    def is_char(self, char: str) -> bool:
        """Check if this is the single-character token char."""
        return self.kind is TokenKind.CHAR and self.text == char

    def describe(self) -> str:
        """Short name used in diagnostics."""
        if self.kind is TokenKind.CHAR:
            return self.text
        return self.kind.value

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, @{self.offset})"


class TokenStream:
    """
    Cursor over the tokens of a text.

    peek() reads the next token and keeps it for the following advance();
    advance() consumes it; put_back() moves the cursor back to the start
    of a consumed token.
    """

    def __init__(self, text: str):
        self._text = text
        self._pos = 0
        self._lookahead: Optional[Token] = None

    @property
    def position(self) -> int:
        return self._pos

    def peek(self) -> Token:
        """Return the next token without consuming it."""
        if self._lookahead is None:
            self._lookahead = self._scan(self._pos)
        return self._lookahead

    def advance(self) -> Token:
        """Consume and return the next token."""
        token = self.peek()
        self._lookahead = None
        self._pos = token.end
        return token

    def put_back(self, token: Token) -> None:
        """Rewind so that token is read again by the next advance()."""
        self._pos = token.offset
        self._lookahead = token

    def location(self, offset: int) -> Tuple[int, int]:
        """1-based (line, column) of a character offset."""
        line = self._text.count("\n", 0, offset) + 1
        line_start = self._text.rfind("\n", 0, offset) + 1
        return line, offset - line_start + 1

    def _scan(self, pos: int) -> Token:
        ws = _WHITESPACE_RE.match(self._text, pos)
        if ws:
            pos = ws.end()

        if pos >= len(self._text):
            return Token(TokenKind.EOF, "", pos)

        m = _TOKEN_RE.match(self._text, pos)
        return Token(TokenKind[m.lastgroup], m.group(), pos)


def tokenize(text: str) -> Iterator[Token]:
    """Yield every token in text up to and including EOF."""
    stream = TokenStream(text)
    while True:
        token = stream.advance()
        yield token
        if token.kind is TokenKind.EOF:
            return
