import pytest

from satkit.cnf_reader import (
    CnfError,
    CnfFormula,
    parse_cnf_lines,
    read_cnf,
    verify_solution,
)


def decode(clause):
    return {-(lit >> 1) if lit & 1 else lit >> 1 for lit in clause}


SAMPLE = ["c example\n", "p cnf 3 2\n", "1 -2 0\n", "2 3 0\n"]


def test_header_and_clauses():
    formula = parse_cnf_lines(SAMPLE)
    assert formula.num_variables == 3
    assert formula.num_clauses == 2
    assert [decode(c) for c in formula.clauses] == [{1, -2}, {2, 3}]


def test_clause_literals_are_sorted():
    formula = parse_cnf_lines(["p cnf 4 1\n", "4 -1 3 0\n"])
    clause = formula.clauses[0]
    assert clause == tuple(sorted(clause))
    assert decode(clause) == {4, -1, 3}


def test_clause_spanning_lines():
    formula = parse_cnf_lines(["p cnf 3 1\n", "1\n", "-3 0\n"])
    assert [decode(c) for c in formula.clauses] == [{1, -3}]


def test_tautology_is_skipped():
    formula = parse_cnf_lines(["p cnf 2 1\n", "1 -1 2 0\n"])
    assert formula.clauses == []


def test_duplicate_literal_is_merged():
    formula = parse_cnf_lines(["p cnf 2 1\n", "2 2 0\n"])
    assert [decode(c) for c in formula.clauses] == [{2}]
    assert len(formula.clauses[0]) == 1


def test_last_clause_without_zero_is_kept():
    formula = parse_cnf_lines(["p cnf 2 1\n", "1 2"])
    assert [decode(c) for c in formula.clauses] == [{1, 2}]


def test_tabs_and_carriage_returns():
    formula = parse_cnf_lines(["p cnf 3 1\r\n", "1\t-3\t0\r\n"])
    assert formula.num_variables == 3
    assert [decode(c) for c in formula.clauses] == [{1, -3}]


def test_bad_header():
    with pytest.raises(CnfError) as info:
        parse_cnf_lines(["p cnf x\n"])
    assert info.value.exit_code == 3


def test_line_too_long():
    with pytest.raises(CnfError) as info:
        parse_cnf_lines(["1" * 65536 + "\n"])
    assert info.value.exit_code == 2


def test_read_cnf_from_file(tmp_path):
    path = tmp_path / "f.cnf"
    path.write_text("".join(SAMPLE))
    formula = read_cnf(path)
    assert formula == parse_cnf_lines(SAMPLE)


def test_read_cnf_directory(tmp_path):
    with pytest.raises(CnfError) as info:
        read_cnf(tmp_path)
    assert "directory" in str(info.value)
    assert info.value.exit_code == 1


def test_read_cnf_missing_file(tmp_path):
    with pytest.raises(CnfError) as info:
        read_cnf(tmp_path / "missing.cnf")
    assert info.value.exit_code == 1


def test_verify_solution_counts_clauses():
    formula = parse_cnf_lines(SAMPLE)
    assert verify_solution(formula, {1: 1, 2: 0, 3: 1}) == len(formula.clauses)


def test_verify_solution_accepts_sequence():
    formula = parse_cnf_lines(SAMPLE)
    assert verify_solution(formula, [0, True, False, True]) == len(formula.clauses)


def test_verify_solution_failure():
    formula = parse_cnf_lines(SAMPLE)
    with pytest.raises(CnfError):
        verify_solution(formula, {1: 0, 2: 1, 3: 0})


def test_verify_solution_unassigned_does_not_satisfy():
    formula = CnfFormula(num_variables=1, num_clauses=1, clauses=[(2,)])
    with pytest.raises(CnfError):
        verify_solution(formula, {1: -1})