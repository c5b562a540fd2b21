"""A lenient DIMACS CNF reader with embedded options in comments."""

from __future__ import annotations

import string
from collections.abc import Callable, MutableMapping
from dataclasses import dataclass, field

from .dimacs_loader import _CharReader, _isdigit

_BLANKS = frozenset(" \t\n\r")
_OPTCHARS = frozenset(string.ascii_letters + string.digits + "-_")


class DimacsParseError(Exception):
    """Raised for malformed input; ``lineno`` is the line where it was found."""

    def __init__(self, message: str, lineno: int):
        super().__init__(message)
        self.message = message
        self.lineno = lineno


@dataclass
class ParseSummary:
    """What was read: maximum variable, clauses, literals and options."""

    variables: int = 0
    clauses: int = 0
    literals: int = 0
    header: tuple[int, int] | None = None
    embedded: list[tuple[str, int]] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    lineno: int = 1


def _comment_options(reader: _CharReader, options, summary: ParseSummary) -> None:
    ch = reader.next()
    while ch != "\n":
        if ch is None:
            raise DimacsParseError("end of file in comment", reader.lineno)
        prev = ch
        ch = reader.next()
        if prev != "-" or ch != "-":
            continue
        name_chars = []
        ch = reader.next()
        while ch is not None and ch in _OPTCHARS:
            name_chars.append(ch)
            ch = reader.next()
        if ch != "=":
            continue
        ch = reader.next()
        sign = 1
        if ch == "-":
            sign = -1
            ch = reader.next()
        if not _isdigit(ch):
            continue
        value = int(ch)
        while _isdigit(ch := reader.next()):
            value = 10 * value + int(ch)
        name = "".join(name_chars)
        if options is None or name not in options:
            summary.warnings.append(f"parsed invalid embedded option '--{name}'")
            continue
        value *= sign
        options[name] = value
        summary.embedded.append((name, value))


def _unsigned(reader: _CharReader, ch: str) -> tuple[int, str | None]:
    value = int(ch)
    while _isdigit(ch := reader.next()):
        value = 10 * value + int(ch)
    return value, ch


def _header(reader: _CharReader, ch: str | None) -> tuple[int, int]:
    def fail(message: str) -> DimacsParseError:
        return DimacsParseError(message, reader.lineno)

    if ch != "p":
        raise fail("missing 'p ...' header")
    if reader.next() != " ":
        raise fail("invalid header: expected ' ' after 'p'")
    while (ch := reader.next()) == " ":
        pass
    if ch != "c":
        raise fail("invalid header: expected 'c' after ' '")
    if reader.next() != "n":
        raise fail("invalid header: expected 'n' after 'c'")
    if reader.next() != "f":
        raise fail("invalid header: expected 'f' after 'n'")
    if reader.next() != " ":
        raise fail("invalid header: expected ' ' after 'f'")
    while (ch := reader.next()) == " ":
        pass
    if not _isdigit(ch):
        raise fail("invalid header: expected digit after 'p cnf '")
    max_var, ch = _unsigned(reader, ch)
    if ch != " ":
        raise fail("invalid header: expected ' ' after 'p cnf <m>'")
    while (ch := reader.next()) == " ":
        pass
    if not _isdigit(ch):
        raise fail("invalid header: expected digit after 'p cnf <m> '")
    num_clauses, ch = _unsigned(reader, ch)
    while ch == " ":
        ch = reader.next()
    if ch != "\n":
        raise fail("invalid header: expected new line after header")
    return max_var, num_clauses


def parse_dimacs(
    stream,
    add: Callable[[int], None] | None = None,
    options: MutableMapping[str, int] | None = None,
    force: bool = False,
    ignore_extra: bool = False,
) -> ParseSummary:
    """Read DIMACS text, passing each literal (0 ends a clause) to ``add``.

    Comments before the header may carry ``--name=value`` settings, which are
    stored in ``options`` when it already has that name. With ``force`` the
    header is optional and not checked; with ``ignore_extra`` reading stops
    once the declared number of clauses has been seen.
    """
    reader = _CharReader(stream, lineno=1)
    summary = ParseSummary()

    while True:
        ch = reader.next()
        if ch in _BLANKS:
            continue
        if ch != "c":
            break
        _comment_options(reader, options, summary)

    max_var = num_clauses = 0
    has_header = False
    if force:
        if ch == "p":
            while (ch := reader.next()) not in ("\n", None):
                pass
    else:
        max_var, num_clauses = _header(reader, ch)
        summary.header = (max_var, num_clauses)
        has_header = True
        ch = reader.next()

    def fail(message: str) -> DimacsParseError:
        return DimacsParseError(message, reader.lineno)

    while True:
        if ch in _BLANKS:
            ch = reader.next()
            continue
        if ch == "c":
            while (ch := reader.next()) != "\n":
                if ch is None:
                    raise fail("end of file in comment")
            ch = reader.next()
            continue
        if ch is None:
            if has_header and summary.clauses + 1 == num_clauses:
                raise fail("clause missing")
            if has_header and summary.clauses < num_clauses:
                raise fail("clauses missing")
            break
        sign = 1
        if ch == "-":
            ch = reader.next()
            if ch == "0":
                raise fail("expected positive digit after '-'")
            sign = -1
        if not _isdigit(ch):
            raise fail("expected digit")
        if has_header and summary.clauses == num_clauses:
            raise fail("too many clauses")
        lit, ch = _unsigned(reader, ch)
        if has_header and lit > max_var:
            raise fail("maxium variable index exceeded")
        summary.variables = max(summary.variables, lit)
        if lit:
            summary.literals += 1
        else:
            summary.clauses += 1
        lit *= sign
        if add is not None:
            add(lit)
        if not lit and ignore_extra and summary.clauses == num_clauses:
            break
        ch = reader.next()

    summary.lineno = reader.lineno
    return summary