"""Opening compressed inputs and outputs, witness lines and seeds for the solver front end."""

from __future__ import annotations

import bz2
import contextlib
import gzip
import lzma
import os
import subprocess
import sys
from collections.abc import Iterable, Iterator

INT_MAX = 2**31 - 1
_PRIMES = (200000033, 200000039, 200000051, 200000069, 200000081)
_LINE_LIMIT = 79


class _ProcessReader:
    """Read the standard output of a decompressing child process."""

    def __init__(self, args: list[str]):
        self._process = subprocess.Popen(
            args, stdout=subprocess.PIPE, stderr=subprocess.DEVNULL
        )

    def read(self, size: int = -1) -> bytes:
        return self._process.stdout.read(size)

    def close(self) -> None:
        self._process.stdout.close()
        self._process.wait()

    def __enter__(self) -> _ProcessReader:
        return self

    def __exit__(self, *args) -> None:
        self.close()


def open_input(path=None):
    """Open a CNF input for binary reading; None means standard input.

    Files ending in .gz, .lzma, .bz2 and .7z are decompressed on the fly.
    """
    if path is None:
        return sys.stdin.buffer
    name = os.fspath(path)
    try:
        if name.endswith(".gz"):
            handle = gzip.open(name, "rb")
        elif name.endswith(".lzma"):
            handle = lzma.open(name, "rb")
        elif name.endswith(".bz2"):
            handle = bz2.open(name, "rb")
        elif name.endswith(".7z"):
            if not os.path.exists(name):
                raise FileNotFoundError(name)
            return _ProcessReader(["7z", "x", "-so", name])
        else:
            return open(name, "rb")
        handle.peek(1)
        return handle
    except OSError as exc:
        raise OSError(f"can not read input file {name}") from exc


def open_output(path):
    """Open an output file for text writing; '-' means standard output.

    A name ending in .gz is replaced by a gzip-compressed file.
    """
    name = os.fspath(path)
    if name == "-":
        return sys.stdout
    try:
        if name.endswith(".gz"):
            with contextlib.suppress(FileNotFoundError):
                os.unlink(name)
            return gzip.open(name, "wt")
        return open(name, "w")
    except OSError as exc:
        raise OSError(f"can not write {name}") from exc


def witness_lines(assignment: Iterable, simplify_only: bool = False) -> Iterator[str]:
    """Yield 'v' lines for a model; item k gives the value of variable k + 1.

    A value greater than zero makes the variable true. Lines end with the
    terminating 0 and are prefixed with 'c ' when only simplifying.
    """
    prefix = "c v" if simplify_only else "v"
    line = ""
    lits = [
        index if value > 0 else -index
        for index, value in enumerate(assignment, start=1)
    ]
    lits.append(0)
    for lit in lits:
        token = f" {lit}"
        if len(line) + len(token) > _LINE_LIMIT:
            yield f"{prefix}{line}\n"
            line = ""
        line += token
    if line:
        yield f"{prefix}{line}\n"


def thanks_seed(text: str) -> int:
    """Derive a non-negative random seed from a name."""
    data = text.encode("utf-8").split(b"\x00", 1)[0]
    seed = 0
    for position, byte in enumerate(data):
        ch = byte - 256 if byte >= 128 else byte
        seed = (seed + _PRIMES[position % len(_PRIMES)] * (ch & 0xFFFFFFFF)) & 0xFFFFFFFF
    if seed >= INT_MAX:
        seed >>= 1
    return seed