import io

import pytest

from satkit.dimacs_parser import DimacsParseError, parse_dimacs


def run(text, **kwargs):
    lits = []
    summary = parse_dimacs(io.StringIO(text), lits.append, **kwargs)
    return summary, lits


def test_basic_formula():
    summary, lits = run("p cnf 3 2\n1 -2 0\n3 -1 0\n")
    assert lits == [1, -2, 0, 3, -1, 0]
    assert summary.header == (3, 2)
    assert summary.clauses == 2
    assert summary.literals == 4
    assert summary.variables == 3


def test_literal_count_matches_nonzero_literals():
    summary, lits = run("p cnf 4 3\n1 2 3 0\n-4 0\n2 -3 0\n")
    assert summary.literals == sum(1 for lit in lits if lit)
    assert summary.clauses == lits.count(0)


def test_accepts_string_input_and_extra_spaces():
    summary = parse_dimacs("c hello\n\np  cnf  2  1 \n 1  2 0\n")
    assert summary.header == (2, 1)
    assert summary.clauses == 1


def test_embedded_options_are_set():
    options = {"verbose": 0, "seed": 0}
    summary, _ = run("c --verbose=2 and --seed=-3\np cnf 1 1\n1 0\n", options=options)
    assert options == {"verbose": 2, "seed": -3}
    assert summary.embedded == [("verbose", 2), ("seed", -3)]
    assert summary.warnings == []


def test_unknown_embedded_option_warns():
    options = {"seed": 7}
    summary, _ = run("c --bogus=1\np cnf 1 1\n1 0\n", options=options)
    assert options == {"seed": 7}
    assert summary.warnings == ["parsed invalid embedded option '--bogus'"]


def test_option_without_value_is_ignored():
    options = {"seed": 7}
    summary, _ = run("c --seed and --seed=x\np cnf 1 1\n1 0\n", options=options)
    assert options == {"seed": 7}
    assert summary.embedded == []


def test_force_without_header():
    summary, lits = run("1 2 0\n-2 0\n", force=True)
    assert summary.header is None
    assert lits == [1, 2, 0, -2, 0]


def test_force_skips_header_checks():
    summary, lits = run("p cnf 1 1\n5 0 6 0\n", force=True)
    assert summary.header is None
    assert summary.clauses == 2
    assert summary.variables == 6


def test_ignore_extra_stops_after_declared_clauses():
    summary, lits = run("p cnf 2 1\n1 0\n2 0\n", ignore_extra=True)
    assert lits == [1, 0]
    assert summary.clauses == 1


def test_too_many_clauses_without_ignore():
    with pytest.raises(DimacsParseError) as info:
        run("p cnf 2 1\n1 0\n2 0\n")
    assert info.value.message == "too many clauses"


@pytest.mark.parametrize(
    "text, message",
    [
        ("1 0\n", "missing 'p ...' header"),
        ("p cnf 2 1\n-0\n", "expected positive digit after '-'"),
        ("p cnf 2 2\n1 0\n", "clause missing"),
        ("p cnf 2 3\n1 0\n", "clauses missing"),
        ("p cnf 2 1\n3 0\n", "maxium variable index exceeded"),
        ("p cnf 2 1\nx 0\n", "expected digit"),
        ("c open", "end of file in comment"),
        ("p cnf 2 1\n1 0\nc open", "end of file in comment"),
        ("p xnf 2 1\n", "invalid header: expected 'c' after ' '"),
        ("p cnf 2 1 x\n", "invalid header: expected new line after header"),
        ("p cnf 2\n", "invalid header: expected ' ' after 'p cnf <m>'"),
        ("pcnf 2 1\n", "invalid header: expected ' ' after 'p'"),
    ],
)
def test_errors(text, message):
    with pytest.raises(DimacsParseError) as info:
        run(text)
    assert info.value.message == message


def test_error_line_number():
    with pytest.raises(DimacsParseError) as info:
        run("p cnf 1 1\n\n2 0\n")
    assert info.value.lineno == 3


def test_without_callback():
    summary = parse_dimacs(io.BytesIO(b"p cnf 2 1\n-1 -2 0\n"))
    assert summary.clauses == 1
    assert summary.variables == 2