"""Character-stream helpers for reading numbers and keywords from text input."""

from __future__ import annotations

_DIGITS = frozenset("0123456789")
_NONZERO_DIGITS = frozenset("123456789")
_WHITESPACE = frozenset("\t\n\v\f\r ")


class ParseError(ValueError):
    """Raised when the input does not have the expected shape."""


class CharStream:
    """A one-character-lookahead stream over a string, bytes or a readable file."""

    _CHUNK = 1 << 20

    def __init__(self, source):
        if isinstance(source, str):
            self._reader = None
            self._buf = source
        elif isinstance(source, (bytes, bytearray)):
            self._reader = None
            self._buf = bytes(source).decode("latin-1")
        else:
            self._reader = source
            self._buf = ""
        self._pos = 0
        self._fill()

    def _fill(self) -> None:
        if self._pos < len(self._buf) or self._reader is None:
            return
        chunk = self._reader.read(self._CHUNK)
        if isinstance(chunk, (bytes, bytearray)):
            chunk = bytes(chunk).decode("latin-1")
        if not chunk:
            self._reader = None
            chunk = ""
        self._buf = chunk
        self._pos = 0

    def peek(self) -> str | None:
        """Return the current character, or None at end of input."""
        if self._pos < len(self._buf):
            return self._buf[self._pos]
        return None

    def advance(self) -> None:
        """Move past the current character."""
        self._pos += 1
        self._fill()

    def at_eof(self) -> bool:
        """Tell whether the whole input has been consumed."""
        return self.peek() is None


def _unexpected(ch: str | None) -> ParseError:
    shown = "EOF" if ch is None else ch
    return ParseError(f"PARSE ERROR! Unexpected char: {shown}")


def skip_whitespace(stream: CharStream) -> None:
    """Skip spaces and the control characters 9 to 13."""
    while (ch := stream.peek()) is not None and ch in _WHITESPACE:
        stream.advance()


def skip_line(stream: CharStream) -> None:
    """Skip up to and including the next newline, or to end of input."""
    while (ch := stream.peek()) is not None:
        stream.advance()
        if ch == "\n":
            return


def _read_sign(stream: CharStream) -> bool:
    ch = stream.peek()
    if ch == "-":
        stream.advance()
        return True
    if ch == "+":
        stream.advance()
    return False


def parse_int(stream: CharStream) -> int:
    """Read an optionally signed decimal integer after optional whitespace."""
    skip_whitespace(stream)
    negative = _read_sign(stream)
    ch = stream.peek()
    if ch is None or ch not in _DIGITS:
        raise _unexpected(ch)
    value = 0
    while (ch := stream.peek()) is not None and ch in _DIGITS:
        value = value * 10 + int(ch)
        stream.advance()
    return -value if negative else value


def parse_double(stream: CharStream) -> float:
    """Read a number written as D.DDDDe[+-]XX; returns 0 at end of input."""
    skip_whitespace(stream)
    if stream.at_eof():
        return 0.0
    negative = _read_sign(stream)
    ch = stream.peek()
    if ch is None or ch not in _NONZERO_DIGITS:
        raise _unexpected(ch)
    accu = float(int(ch))
    stream.advance()
    ch = stream.peek()
    if ch != ".":
        raise _unexpected(ch)
    stream.advance()
    scale = 0.1
    while (ch := stream.peek()) is not None and ch in _DIGITS:
        accu += scale * int(ch)
        scale /= 10
        stream.advance()
    ch = stream.peek()
    if ch != "e":
        raise _unexpected(ch)
    stream.advance()
    exponent = parse_int(stream)
    accu *= 10.0 ** exponent
    return -accu if negative else accu


def match(text: str, prefix: str) -> str | None:
    """Return what follows prefix in text, or None if text does not start with it."""
    if text.startswith(prefix):
        return text[len(prefix):]
    return None


def eager_match(stream: CharStream, prefix: str) -> bool:
    """Consume characters while they agree with prefix; True if all of it matched."""
    for expected in prefix:
        if stream.peek() != expected:
            return False
        stream.advance()
    return True