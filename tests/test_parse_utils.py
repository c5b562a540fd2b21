import io

import pytest

from satkit.parse_utils import (
    CharStream,
    ParseError,
    eager_match,
    match,
    parse_double,
    parse_int,
    skip_line,
    skip_whitespace,
)


def test_peek_and_advance_walk_the_string():
    stream = CharStream("ab")
    assert stream.peek() == "a"
    stream.advance()
    assert stream.peek() == "b"
    stream.advance()
    assert stream.peek() is None
    assert stream.at_eof()


def test_binary_file_source():
    stream = CharStream(io.BytesIO(b"12 34"))
    assert parse_int(stream) == 12
    assert parse_int(stream) == 34
    skip_whitespace(stream)
    assert stream.at_eof()


def test_text_file_source():
    stream = CharStream(io.StringIO("-5\n"))
    assert parse_int(stream) == -5
    assert stream.peek() == "\n"


def test_skip_whitespace_covers_control_characters():
    stream = CharStream("\t\n\v\f\r x")
    skip_whitespace(stream)
    assert stream.peek() == "x"


def test_skip_line():
    stream = CharStream("c comment\np cnf")
    skip_line(stream)
    assert stream.peek() == "p"


def test_skip_line_at_end_of_input():
    stream = CharStream("no newline")
    skip_line(stream)
    assert stream.at_eof()


@pytest.mark.parametrize("text,expected", [("+7", 7), ("-42", -42), ("  19", 19)])
def test_parse_int_values(text, expected):
    assert parse_int(CharStream(text)) == expected


def test_parse_int_stops_at_non_digit():
    stream = CharStream("12x")
    assert parse_int(stream) == 12
    assert stream.peek() == "x"


def test_parse_int_rejects_letters():
    with pytest.raises(ParseError):
        parse_int(CharStream("abc"))


def test_parse_int_rejects_empty():
    with pytest.raises(ParseError):
        parse_int(CharStream(""))


def test_parse_double_simple():
    assert parse_double(CharStream("1.5e0")) == pytest.approx(1.5)
    assert parse_double(CharStream("-2.5e0")) == pytest.approx(-2.5)


def test_parse_double_with_exponent():
    assert parse_double(CharStream("1.25e2")) == pytest.approx(125.0)


def test_parse_double_at_end_of_input_is_zero():
    assert parse_double(CharStream("   ")) == 0.0


@pytest.mark.parametrize("text", ["0.5e1", "15e1", "1.5", "x"])
def test_parse_double_rejects_other_shapes(text):
    with pytest.raises(ParseError):
        parse_double(CharStream(text))


def test_match():
    assert match("--help", "--") == "help"
    assert match("-x", "--") is None
    assert match("abc", "") == "abc"


def test_eager_match_success_consumes_prefix():
    stream = CharStream("p cnf")
    assert eager_match(stream, "p c") is True
    assert stream.peek() == "n"


def test_eager_match_failure_consumes_matched_part():
    stream = CharStream("px")
    assert eager_match(stream, "pq") is False
    assert stream.peek() == "x"