"""Test parsing JSON text into a context."""

from jsonscope import Context, ErrorCode, array_get, array_size, object_get, to_python
from jsonscope.lexer import TokenStream


def _parse(text):
    ctx = Context()
    ok = ctx.parse(text)
    return ctx, ok


def test_parse_object():
    """A plain object becomes the root."""
    ctx, ok = _parse('{"name": "Alice", "age": 30, "admin": false, "boss": null}')

    assert ok
    assert ctx.parse_error is None
    assert to_python(ctx.root) == {
        "name": "Alice",
        "age": 30.0,
        "admin": False,
        "boss": None,
    }


def test_parse_nested():
    """Nested objects and arrays keep their structure and order."""
    ctx, ok = _parse('{"a": {"b": [1, [2, 3], {"c": true}]}, "d": []}')

    assert ok
    assert to_python(ctx.root) == {
        "a": {"b": [1.0, [2.0, 3.0], {"c": True}]},
        "d": [],
    }


def test_parse_root_array():
    ctx, ok = _parse('[ "x" , 1 ]')

    assert ok
    assert ctx.root.is_array()
    assert array_size(ctx.root) == 2


def test_parse_numbers():
    """Negative, fractional and exponent forms all parse as doubles."""
    ctx, ok = _parse('[-5, 0.25, 1e3, -2.5E-2, 10]')

    assert ok
    assert to_python(ctx.root) == [-5.0, 0.25, 1000.0, -0.025, 10.0]


def test_parse_empty_containers():
    ctx, ok = _parse('{"o": {}, "a": []}')

    assert ok
    assert to_python(ctx.root) == {"o": {}, "a": []}


def test_trailing_commas_accepted():
    """A comma before a closing bracket is tolerated."""
    ctx, ok = _parse('{"a": [1, 2,], "b": {"c": 3,},}')

    assert ok
    assert to_python(ctx.root) == {"a": [1.0, 2.0], "b": {"c": 3.0}}


def test_escapes_kept_raw():
    """Backslash sequences are stored as written, not decoded."""
    ctx, ok = _parse(r'["a\"b", "tab\there", "\u00e9"]')

    assert ok
    assert array_get(ctx.root, 0).payload == 'a\\"b'
    assert array_get(ctx.root, 1).payload == "tab\\there"
    assert array_get(ctx.root, 2).payload == "\\u00e9"


def test_missing_closing_bracket():
    """Two values without a comma report the expected ']'."""
    ctx, ok = _parse('[1 2]')

    assert not ok
    err = ctx.parse_error
    assert err.message == "array should end with ']' (expected ']' but found 'integer') at 1:4"
    assert err.expected == "]"
    assert err.found == "integer"
    assert (err.line, err.column) == (1, 4)
    assert err.code is ErrorCode.UNEXPECTED_TOKEN


def test_missing_colon():
    ctx, ok = _parse('{"a" 1}')

    assert not ok
    assert ctx.parse_error.message == "lack of ':' in a pair (expected ':' but found 'integer') at 1:6"


def test_key_must_be_string():
    ctx, ok = _parse('{a: 1}')

    assert not ok
    assert ctx.parse_error.message == (
        "key should be a string (expected 'double quote string' but found 'identifier') at 1:2"
    )


def test_unknown_literal_position_on_later_line():
    """Line and column are 1-based and follow newlines."""
    ctx, ok = _parse('{\n  "a": tru\n}')

    assert not ok
    assert ctx.parse_error.message == (
        "unknown literal (expected 'null' or 'true' or 'false' but found 'identifier') at 2:8"
    )
    assert (ctx.parse_error.line, ctx.parse_error.column) == (2, 8)


def test_value_expected():
    ctx, ok = _parse('[1, :]')

    assert not ok
    assert ctx.parse_error.message == "value expected (expected 'value' but found ':') at 1:5"


def test_unterminated_array_reports_end_of_input():
    ctx, ok = _parse('[1, 2')

    assert not ok
    assert ctx.parse_error.found == "end of input"


def test_empty_input_rejected():
    ctx, ok = _parse("")

    assert not ok
    assert ctx.parse_error.message == (
        "document should be an object or array (expected '{' or '[' but found 'end of input') at 1:1"
    )
    assert ctx.root is None


def test_scalar_document_rejected():
    ctx, ok = _parse('"just a string"')

    assert not ok
    assert ctx.parse_error.found == "double quote string"


def test_trailing_data_rejected():
    ctx, ok = _parse("[] x")

    assert not ok
    assert ctx.parse_error.message == (
        "extra data after document (expected 'end of input' but found 'identifier') at 1:4"
    )


def test_duplicate_key_reported_with_builder_code():
    """A key the builder refuses stops the parse with the builder's code."""
    ctx, ok = _parse('{"a": 1, "a": 2}')

    assert not ok
    assert ctx.parse_error.message == "double key 'a' at 1:10"
    assert ctx.parse_error.code is ErrorCode.DUPLICATE_KEY
    assert ctx.code is ErrorCode.DUPLICATE_KEY


def test_syntax_error_is_not_sticky():
    """A syntax error leaves the builder usable but keeps the partial tree."""
    ctx, ok = _parse('{"a": 1, "b": [1, 2 }')

    assert not ok
    assert ctx.code is ErrorCode.OK
    assert ctx.depth == 2
    # the unfinished array is still open, not yet attached
    assert to_python(ctx.root) == {"a": 1.0}


def test_parse_into_open_object():
    """Inside an open object the document lands under the pending key."""
    ctx = Context()
    ctx.object_begin()
    ctx.key("first")
    ctx.number(1)
    ctx.key("doc")

    assert ctx.parse('{"nested": [true, null]}')

    ctx.key("last")
    ctx.string("end")
    ctx.object_end()

    assert to_python(ctx.root) == {
        "first": 1.0,
        "doc": {"nested": [True, None]},
        "last": "end",
    }


def test_parse_into_open_array():
    """Inside an open array the document becomes the next element."""
    ctx = Context()
    ctx.array_begin()
    ctx.string("before")

    assert ctx.parse("[1, 2]")
    assert ctx.parse('{"k": "v"}')

    assert to_python(ctx.root) == ["before", [1.0, 2.0], {"k": "v"}]


def test_parse_into_object_without_key_fails():
    ctx = Context()
    ctx.object_begin()

    assert not ctx.parse("[]")
    assert ctx.code is ErrorCode.NULL_KEY
    assert ctx.parse_error.code is ErrorCode.NULL_KEY
    assert ctx.parse_error.message == "null key at 1:1"


def test_parse_into_errored_context_fails():
    ctx = Context()
    ctx.null()

    assert not ctx.parse("{}")
    assert ctx.parse_error.code is ErrorCode.NO_SCOPE


def test_parse_error_cleared_on_success():
    ctx = Context()
    ctx.array_begin()

    assert not ctx.parse("[")
    assert ctx.parse_error is not None

    ctx.finalize()
    assert ctx.parse("[]")
    assert ctx.parse_error is None


def test_lookup_after_parse():
    ctx, ok = _parse('{"list": [10, 20, 30]}')

    assert ok
    assert array_get(object_get(ctx.root, "list"), 2).payload == 30.0


def test_large_document_never_computes_positions(monkeypatch):
    """A successful parse only looks up line and column for diagnostics."""
    def no_location(self, offset):
        raise AssertionError("location computed during a clean parse")

    monkeypatch.setattr(TokenStream, "location", no_location)
    text = "[\n" + ",\n".join("1" for _ in range(20000)) + "\n]"

    ctx, ok = _parse(text)

    assert ok
    assert array_size(ctx.root) == 20000


def test_error_position_in_large_document():
    text = "[\n" + ",\n".join("1" for _ in range(5000)) + "\n}"

    ctx, ok = _parse(text)

    assert not ok
    assert (ctx.parse_error.line, ctx.parse_error.column) == (5002, 1)


def test_nesting_within_limit():
    ctx = Context(max_depth=50)

    assert ctx.parse("[" * 50 + "]" * 50)
    assert ctx.parse_error is None


def test_nesting_past_limit_fails_without_raising():
    """Deep input is refused through the return value, not RecursionError."""
    ctx, ok = _parse("[" * 600 + "]" * 600)

    assert not ok
    err = ctx.parse_error
    assert err.code is ErrorCode.DEPTH_EXCEEDED
    assert err.message == "nesting too deep (maxdepth = 256) at 1:257"
    assert ctx.code is ErrorCode.OK


def test_nesting_limit_counts_objects_and_arrays():
    ctx = Context(max_depth=2)

    assert ctx.parse('{"a": [1]}')
    ctx.finalize()
    assert not ctx.parse('{"a": [{}]}')
    assert ctx.parse_error.code is ErrorCode.DEPTH_EXCEEDED
    assert (ctx.parse_error.line, ctx.parse_error.column) == (1, 8)


def test_nesting_limit_resets_between_siblings():
    """Closing a container gives its depth back."""
    ctx = Context(max_depth=2)

    assert ctx.parse("[[1], [2], [[]]]") is False
    ctx.finalize()
    assert ctx.parse("[[1], [2], [3]]")
