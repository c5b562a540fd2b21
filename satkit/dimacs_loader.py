"""A strict DIMACS CNF loader that reports the header and every literal."""

from __future__ import annotations

import bz2
import gzip
import lzma
import os
import subprocess
from collections.abc import Callable

from .parse_utils import CharStream

INT_MAX = 2**31 - 1
UNSPECIFIED_PATH = "<unspecified-path>"


class DimacsError(Exception):
    """Raised when a DIMACS input cannot be opened or is malformed."""

    def __init__(self, message: str, path: str | None = None, lineno: int | None = None):
        self.message = message
        self.path = path
        self.lineno = lineno
        text = message if path is None else f"{path}:{lineno}: {message}"
        super().__init__(text)


def _isdigit(ch: str | None) -> bool:
    return ch is not None and "0" <= ch <= "9"


class _CharReader:
    """Hands out characters one at a time and counts the newlines read."""

    def __init__(self, source, lineno: int = 0):
        self._stream = source if isinstance(source, CharStream) else CharStream(source)
        self.lineno = lineno

    def next(self) -> str | None:
        ch = self._stream.peek()
        if ch is None:
            return None
        self._stream.advance()
        if ch == "\n":
            self.lineno += 1
        return ch


class DimacsLoader:
    """Parse a DIMACS CNF file, calling ``header(vars, clauses)`` and ``add(lit)``."""

    def __init__(
        self,
        header: Callable[[int, int], None] | None = None,
        add: Callable[[int], None] | None = None,
    ):
        self.header = header
        self.add = add
        self.path: str | None = None
        self.error: DimacsError | None = None
        self._file = None
        self._owned = False
        self._process: subprocess.Popen | None = None
        self._reader: _CharReader | None = None

    def _check_unset(self) -> None:
        if self._file is not None or self.path is not None:
            raise DimacsError("input already set")

    def _record(self, message: str) -> DimacsError:
        lineno = self._reader.lineno if self._reader is not None else 0
        self.error = DimacsError(message, self.path, lineno)
        return self.error

    def open_path(self, path) -> None:
        """Open a file by name; .gz, .bz2, .lzma and .7z inputs are decompressed."""
        self._check_unset()
        path = os.fspath(path)
        self.path = path
        if not os.path.exists(path):
            raise self._record("file does not exist")
        try:
            if path.endswith(".gz"):
                self._file = gzip.open(path, "rb")
            elif path.endswith(".bz2"):
                self._file = bz2.open(path, "rb")
            elif path.endswith(".7z"):
                self._process = subprocess.Popen(
                    ["7z", "x", "-so", path],
                    stdout=subprocess.PIPE,
                    stderr=subprocess.DEVNULL,
                )
                self._file = self._process.stdout
            elif path.endswith(".lzma"):
                self._file = lzma.open(path, "rb")
            else:
                self._file = open(path, "rb")
        except OSError as exc:
            self._file = None
            self._process = None
            raise self._record("can not open file") from exc
        self._owned = True

    def set_file(self, file, path=None) -> None:
        """Read from an already open file; the loader does not close it."""
        self._check_unset()
        self._file = file
        self._owned = False
        self.path = UNSPECIFIED_PATH if path is None else os.fspath(path)

    def _number(self, reader: _CharReader, ch: str) -> tuple[int, str | None]:
        value = int(ch)
        while _isdigit(ch := reader.next()):
            if INT_MAX // 10 < value:
                raise self._record("number too large")
            value *= 10
            digit = int(ch)
            if INT_MAX - digit < value:
                raise self._record("number too large")
            value += digit
        return value, ch

    def parse(self) -> tuple[int, int]:
        """Parse the whole input; return the declared variable and clause counts."""
        if self.error is not None:
            raise self.error
        if self._file is None:
            raise DimacsError("no input set")
        if self._reader is None:
            self._reader = _CharReader(self._file)
        reader = self._reader
        fail = self._record

        while (ch := reader.next()) == "c":
            while (ch := reader.next()) != "\n":
                if ch is None:
                    raise fail("end-of-file in comment before header")
        if ch != "p":
            raise fail("expected 'p' or 'c'")
        for expected, message in (
            (" ", "expected space after 'p'"),
            ("c", "expected 'c' after 'p '"),
            ("n", "expected 'n' after 'p c'"),
            ("f", "expected 'f' after 'p cn'"),
            (" ", "expected space after 'p cnf'"),
        ):
            if reader.next() != expected:
                raise fail(message)
        ch = reader.next()
        if not _isdigit(ch):
            raise fail("expected digit after 'p cnf '")
        vars_specified, ch = self._number(reader, ch)
        if ch != " ":
            raise fail("expected space after maximum variable index")
        ch = reader.next()
        if not _isdigit(ch):
            raise fail("expected digit after space after variable index")
        clauses_specified, ch = self._number(reader, ch)
        while ch in (" ", "\t", "\r"):
            ch = reader.next()
        if ch != "\n":
            raise fail("expected new line after header")
        if self.header is not None:
            self.header(vars_specified, clauses_specified)

        clauses_parsed = 0
        lit = 0
        while True:
            ch = reader.next()
            if ch in (" ", "\t", "\r", "\n"):
                continue
            if ch == "c":
                while (ch := reader.next()) != "\n":
                    if ch is None:
                        raise fail("end-of-file in comment after header")
                continue
            if ch is None:
                if lit:
                    raise fail("zero sentinel missing at end-of-file")
                if clauses_parsed + 1 == clauses_specified:
                    raise fail("one clause is missing")
                if clauses_parsed < clauses_specified:
                    raise fail("clauses are missing")
                break
            if ch == "-":
                ch = reader.next()
                if not _isdigit(ch):
                    raise fail("expected digit after '-'")
                sign = -1
            elif not _isdigit(ch):
                raise fail("expected digit or '-'")
            else:
                sign = 1
            if clauses_specified == clauses_parsed:
                raise fail("too many clauses")
            lit, ch = self._number(reader, ch)
            if lit > vars_specified:
                raise fail("maximum variable index exceeded")
            lit *= sign
            if self.add is not None:
                self.add(lit)
            if lit:
                continue
            clauses_parsed += 1
        return vars_specified, clauses_specified

    def close(self) -> None:
        """Release the input; files opened by path are closed."""
        if self._file is not None and self._owned:
            self._file.close()
            if self._process is not None:
                self._process.wait()
        self._file = None
        self._owned = False
        self._process = None
        self._reader = None
        self.path = None
        self.error = None

    def __enter__(self) -> DimacsLoader:
        return self

    def __exit__(self, *args) -> None:
        self.close()