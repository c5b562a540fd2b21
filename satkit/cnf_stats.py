"""Statistics of a DIMACS CNF file: declared versus actual sizes."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from dataclasses import dataclass, field

from .cnf_reader import CnfError, _scan

MAX_LINE_LENGTH = 256000


@dataclass
class CnfStats:
    """Declared and observed clause and variable counts."""

    claimed_clauses: int = 0
    claimed_variables: int = 0
    actual_clauses: int = 0
    actual_variables: int = 0
    skipped_lines: list[int] = field(default_factory=list)


def compute_stats(lines: Iterable[str]) -> CnfStats:
    """Count the clauses and variables that a CNF text really uses."""
    stats = CnfStats()
    used: set[int] = set()
    for kind, line_num, payload in _scan(lines, MAX_LINE_LENGTH):
        if kind == "header":
            stats.claimed_variables, stats.claimed_clauses = payload
            used.clear()
        elif kind == "clause":
            used.update(lit >> 1 for lit in payload)
            stats.actual_clauses += 1
        elif kind == "skipped":
            stats.skipped_lines.append(line_num)
        else:
            raise CnfError(f"Clause at line {line_num} is not terminated by 0", 4)
    stats.actual_variables = len(used)
    return stats


def format_stats(filename: str, stats: CnfStats) -> str:
    """Render the statistics report."""
    return (
        f"Statistics of CNF file:\t\t{filename}\n"
        f" Claim:\t\t Cl: {stats.claimed_clauses}\t Var: {stats.claimed_variables}\n"
        f" Actual:\t Cl: {stats.actual_clauses}\t Var: {stats.actual_variables}\n"
    )


def main(argv=None) -> int:
    """Print statistics for the CNF file named on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("usage: cnf_stats <cnf_file>", file=sys.stderr)
        return 2
    filename = args[0]
    try:
        with open(filename, encoding="latin-1") as handle:
            stats = compute_stats(handle)
    except OSError:
        print("Can't open input file", file=sys.stderr)
        return 1
    except CnfError as exc:
        print(exc, file=sys.stderr)
        return exc.exit_code
    for line_num in stats.skipped_lines:
        print(f"Literals of both polarity at line {line_num}, clause skipped ")
    sys.stdout.write(format_stats(filename, stats))
    return 0