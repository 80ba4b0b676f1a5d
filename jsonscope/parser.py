"""
Parser - Recursive descent over a token stream that drives the builder.

The parser never builds values itself. parse_object and parse_array call
the same object_begin/key/array_end methods a client would, so a parsed
document lands in the context's tree exactly as if it had been built by
hand, including inside a scope the client already has open.

Grammar, with trailing commas allowed before a closing bracket:

    value  := string | number | true | false | null | object | array
    object := '{' (pair (',' pair)* ','?)? '}'
    pair   := string ':' value
    array  := '[' (value (',' value)* ','?)? ']'
"""

from typing import TYPE_CHECKING, Optional

from loguru import logger

from .errors import ErrorCode, ParseError
from .lexer import Token, TokenKind, TokenStream

if TYPE_CHECKING:
    from .context import Context

_LITERALS = ("null", "true", "false")


class Parser:
    """
    Parse JSON text into a context.

    One Parser serves one parse() call. On failure the tree keeps whatever
    the builder received before the bad token; the context should then be
    finalized rather than used.

    Documents nesting deeper than the context's max_depth option are
    refused with DEPTH_EXCEEDED before the recursion gets near the
    interpreter's limit.
    """

    def __init__(self, context: 'Context'):
        self.context = context
        self.tokens: Optional[TokenStream] = None
        self.error: Optional[ParseError] = None
        self.depth = 0

    def parse(self, text: str) -> bool:
        """Parse one document (object or array) followed by end of input."""
        self.tokens = TokenStream(text)
        self.error = None
        self.depth = 0

        first = self.tokens.peek()
        if first.is_char('{'):
            ok = self.parse_object()
        elif first.is_char('['):
            ok = self.parse_array()
        else:
            ok = self._fail("document should be an object or array", first, "{", "[")

        if ok:
            trailing = self.tokens.peek()
            if trailing.kind is not TokenKind.EOF:
                ok = self._fail("extra data after document", trailing, TokenKind.EOF.value)

        if not ok:
            logger.warning(f"Parse failed: {self.error.message}")
        return ok

    # ========================================================================
    # GRAMMAR RULES
    # ========================================================================

    def parse_value(self) -> bool:
        token = self.tokens.advance()

        if token.kind is TokenKind.STRING:
            return self._build(self.context.string(token.value), token)
        if token.kind in (TokenKind.INTEGER, TokenKind.FLOAT):
            return self._build(self.context.number(float(token.text)), token)
        if token.kind is TokenKind.IDENTIFIER:
            if token.text == "null":
                return self._build(self.context.null(), token)
            if token.text == "true":
                return self._build(self.context.boolean(True), token)
            if token.text == "false":
                return self._build(self.context.boolean(False), token)
            return self._fail("unknown literal", token, *_LITERALS)
        if token.is_char('{'):
            # put back the token for parse_object to consume
            self.tokens.put_back(token)
            return self.parse_object()
        if token.is_char('['):
            self.tokens.put_back(token)
            return self.parse_array()

        return self._fail("value expected", token, "value")

    def parse_array(self) -> bool:
        token = self._consume('[', "array should start with '['")
        if token is None:
            return False
        if not self._enter(token):
            return False
        if not self._build(self.context.array_begin(), token):
            return False

        # empty array
        if self.tokens.peek().is_char(']'):
            closing = self.tokens.advance()
            return self._leave(self.context.array_end(), closing)

        while True:
            if not self.parse_value():
                return False
            if not self.tokens.peek().is_char(','):
                break
            self.tokens.advance()
            # trailing comma
            if self.tokens.peek().is_char(']'):
                break

        closing = self._consume(']', "array should end with ']'")
        if closing is None:
            return False
        return self._leave(self.context.array_end(), closing)

    def parse_object(self) -> bool:
        token = self._consume('{', "object should start with '{'")
        if token is None:
            return False
        if not self._enter(token):
            return False
        if not self._build(self.context.object_begin(), token):
            return False

        # empty object
        if self.tokens.peek().is_char('}'):
            closing = self.tokens.advance()
            return self._leave(self.context.object_end(), closing)

        while True:
            key = self.tokens.advance()
            if key.kind is not TokenKind.STRING:
                return self._fail("key should be a string", key, TokenKind.STRING.value)
            if not self._build(self.context.key(key.value), key):
                return False

            if self._consume(':', "lack of ':' in a pair") is None:
                return False
            if not self.parse_value():
                return False

            if not self.tokens.peek().is_char(','):
                break
            self.tokens.advance()
            # trailing comma
            if self.tokens.peek().is_char('}'):
                break

        closing = self._consume('}', "object should end with '}'")
        if closing is None:
            return False
        return self._leave(self.context.object_end(), closing)

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _consume(self, expected: str, what: str) -> Optional[Token]:
        """Consume the single-character token expected, or record an error."""
        token = self.tokens.advance()
        if not token.is_char(expected):
            self._fail(what, token, expected)
            return None
        return token

    def _enter(self, token: Token) -> bool:
        """Count one more level of nesting, refusing to go past max_depth."""
        self.depth += 1
        limit = self.context.options.max_depth
        if self.depth <= limit:
            return True
        line, column = self.tokens.location(token.offset)
        self.error = ParseError(
            f"nesting too deep (maxdepth = {limit}) at {line}:{column}",
            found=token.describe(),
            line=line,
            column=column,
            code=ErrorCode.DEPTH_EXCEEDED,
        )
        return False

    def _leave(self, ok: bool, token: Token) -> bool:
        self.depth -= 1
        return self._build(ok, token)

    def _build(self, ok: bool, token: Token) -> bool:
        """Turn a failed builder call into a parse error at token."""
        if ok:
            return True
        line, column = self.tokens.location(token.offset)
        self.error = ParseError(
            f"{self.context.error} at {line}:{column}",
            found=token.describe(),
            line=line,
            column=column,
            code=self.context.code,
        )
        return False

    def _fail(self, what: str, token: Token, *expected: str) -> bool:
        found = token.describe()
        wanted = " or ".join(f"'{item}'" for item in expected)
        line, column = self.tokens.location(token.offset)
        self.error = ParseError(
            f"{what} (expected {wanted} but found '{found}') at {line}:{column}",
            expected=" or ".join(expected),
            found=found,
            line=line,
            column=column,
        )
        return False
