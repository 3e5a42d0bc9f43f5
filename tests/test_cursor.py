import pytest

from hypothesis import given
from hypothesis.strategies import integers, text

from pegcut import ErrorKind, ParseError, StringCursor
from pegcut.core.outcome import caret_snippet


def test_read_consumes_exactly_n():
    c = StringCursor("abcdef")
    assert c.read(2) == "ab"
    assert c.tell() == 2
    assert c.read(0) == ""
    assert c.read(4) == "cdef"
    assert c.eof()


def test_read_past_end_raises_and_clamps():
    c = StringCursor("abc")
    c.read(1)
    with pytest.raises(ParseError) as ei:
        c.read(5)
    assert ei.value.kind is ErrorKind.END_OF_INPUT
    assert c.tell() == 3
    assert c.eof()


def test_peek_never_fails():
    c = StringCursor("xy")
    assert c.peek(5) == "xy"
    assert c.tell() == 0
    c.read(2)
    assert c.peek(1) == ""


def test_pattern_match_is_anchored():
    c = StringCursor("deabc")
    assert c.supports_patterns()
    assert c.peek_pattern(r"[abc]+") is None
    assert c.read_pattern(r"[abc]+") is None
    assert c.tell() == 0
    assert c.read_pattern(r"[de]+") == "de"
    assert c.tell() == 2
    assert c.peek_pattern(r"[abc]+") == "abc"
    assert c.tell() == 2


def test_bookmark_restore():
    c = StringCursor("hello world")
    c.read(3)
    bm = c.bookmark()
    c.read(5)
    assert c.remainder() == "ld"
    c.restore(bm)
    assert c.tell() == 3
    assert c.remainder() == "lo world"


def test_line_col():
    c = StringCursor("ab\ncd\n\nef")
    assert c.line_col(0) == (1, 1)
    assert c.line_col(1) == (1, 2)
    assert c.line_col(3) == (2, 1)
    assert c.line_col(6) == (3, 1)
    assert c.line_col(8) == (4, 2)


def test_error_position_and_excerpt():
    c = StringCursor("abc\ndefghij")
    c.read(5)
    err = ParseError.at(c, "boom")
    assert err.pos == 5
    assert (err.line, err.col) == (2, 2)
    assert err.excerpt == "efghi"
    assert str(err) == "boom at 2:2 ('efghi')"
    assert err.snippet() == "defghij\n ^"


def test_caret_snippet_first_line():
    assert caret_snippet("xyz\nabc", 2) == "xyz\n  ^"


@given(text(max_size=40), integers(min_value=0, max_value=40), integers(min_value=0, max_value=40))
def test_bookmark_round_trip(s, first, second):
    c = StringCursor(s)
    c.skip(first)
    start = c.tell()
    assert start == min(first, len(s))
    bm = c.bookmark()
    try:
        c.read(second)
    except ParseError:
        assert start + second > len(s)
    assert c.tell() <= len(s)
    c.restore(bm)
    assert c.tell() == start
    assert c.remainder() == s[start:]
