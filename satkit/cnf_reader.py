"""Reading DIMACS CNF files into clause lists and checking assignments."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

MAX_LINE_LENGTH = 65536

_HEADER = re.compile(r"p\s*cnf\s*([+-]?\d+)\s*([+-]?\d+)")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_SEPARATORS = re.compile(r"[ \t\n]+")


class CnfError(Exception):
    """Raised when a CNF file cannot be read; carries the process exit code."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


@dataclass
class CnfFormula:
    """A CNF formula; each literal is encoded as 2 * variable + sign."""

    num_variables: int = 0
    num_clauses: int = 0
    clauses: list[tuple[int, ...]] = field(default_factory=list)


def _atoi(word: str) -> int:
    found = _LEADING_INT.match(word)
    return int(found.group(1)) if found else 0


def _scan(lines: Iterable[str], limit: int) -> Iterator[tuple[str, int, object]]:
    """Yield header, accepted-clause, skipped-clause and trailing-clause events."""
    clause_vars: set[int] = set()
    clause_lits: set[int] = set()
    line_num = 0
    for raw in lines:
        line = raw[:-1] if raw.endswith("\n") else raw
        if len(line) >= limit:
            raise CnfError(
                f"Input line {line_num} too long. Unable to continue...", 2
            )
        line_num += 1
        if line.startswith("c"):
            continue
        if line.startswith("p"):
            header = _HEADER.match(line)
            if header is None:
                raise CnfError(
                    "Unable to read number of variables and clauses "
                    f"at line {line_num}",
                    3,
                )
            yield "header", line_num, (int(header.group(1)), int(header.group(2)))
            continue
        for word in _SEPARATORS.split(line):
            if not word:
                continue
            var_idx = _atoi(word)
            if var_idx != 0:
                sign = 1 if var_idx < 0 else 0
                var_idx = abs(var_idx)
                clause_vars.add(var_idx)
                clause_lits.add((var_idx << 1) + sign)
                continue
            if clause_vars and len(clause_vars) == len(clause_lits):
                yield "clause", line_num, tuple(sorted(clause_lits))
            else:
                yield "skipped", line_num, None
            clause_vars = set()
            clause_lits = set()
    if clause_lits:
        yield "pending", line_num, (clause_vars, clause_lits)


def parse_cnf_lines(lines: Iterable[str]) -> CnfFormula:
    """Parse DIMACS lines; clauses holding both phases of a variable are dropped."""
    formula = CnfFormula()
    for kind, _, payload in _scan(lines, MAX_LINE_LENGTH):
        if kind == "header":
            formula.num_variables, formula.num_clauses = payload
        elif kind == "clause":
            formula.clauses.append(payload)
        elif kind == "pending":
            clause_vars, clause_lits = payload
            if len(clause_vars) == len(clause_lits):
                formula.clauses.append(tuple(sorted(clause_lits)))
    return formula


def read_cnf(path) -> CnfFormula:
    """Read a DIMACS CNF file from disk."""
    path = os.fspath(path)
    if os.path.isdir(path):
        raise CnfError("Can't open input file, it's a directory", 1)
    try:
        with open(path, encoding="latin-1") as handle:
            return parse_cnf_lines(handle)
    except OSError as exc:
        raise CnfError("Can't open input file", 1) from exc


def _value_of(assignment, var: int) -> int:
    try:
        return int(assignment[var])
    except (KeyError, IndexError):
        return -1


def verify_solution(formula: CnfFormula, assignment) -> int:
    """Check that every clause has a true literal; return the number checked.

    ``assignment`` is indexed by variable and holds 1 (true), 0 (false) or
    any other value for unassigned.
    """
    verified = 0
    for clause in formula.clauses:
        satisfied = any(
            (value := _value_of(assignment, lit >> 1)) == 1 and not lit & 1
            or value == 0 and lit & 1
            for lit in clause
        )
        if not satisfied:
            raise CnfError("Verify Satisfiable solution failed", 6)
        verified += 1
    return verified