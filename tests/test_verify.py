import pytest

from sudoku_verify import (count_solutions, is_valid_solution, keeps_givens, sat_solutions,
                           smt_solutions, sudoku_cnf)

from puzzles import EASY_9, EASY_9_SOLUTION, EMPTY_4, HARD_9, SINGLES_4, pattern_solution


def test_valid_solution():
    assert is_valid_solution(EASY_9_SOLUTION, 3)
    assert is_valid_solution(pattern_solution(4), 4)


def test_invalid_solutions():
    broken = [row[:] for row in EASY_9_SOLUTION]
    broken[0][0], broken[0][1] = broken[0][1], broken[0][0]
    assert not is_valid_solution(broken, 3)
    assert not is_valid_solution(EASY_9, 3)
    assert not is_valid_solution(EASY_9_SOLUTION[:8], 3)


def test_keeps_givens():
    assert keeps_givens(EASY_9, EASY_9_SOLUTION)
    assert not keeps_givens(EASY_9, pattern_solution(3))


@pytest.mark.parametrize("encoding", ["pairwise", "seq", "cardnet"])
def test_sat_finds_unique_solution(encoding):
    assert sat_solutions(EASY_9, 3, max_solutions=2, encoding=encoding) == [EASY_9_SOLUTION]


def test_smt_finds_unique_solution():
    assert smt_solutions(EASY_9, 3, max_solutions=2) == [EASY_9_SOLUTION]


def test_backends_agree_on_hard_puzzle():
    sat_found = sat_solutions(HARD_9, 3)
    assert len(sat_found) == 1
    assert is_valid_solution(sat_found[0], 3)
    assert smt_solutions(HARD_9, 3) == sat_found


@pytest.mark.parametrize("backend", ["sat", "smt"])
def test_count_is_capped(backend):
    assert count_solutions(EMPTY_4, 2, backend=backend, limit=3) == 3
    assert count_solutions(SINGLES_4, 2, backend=backend) == 1


def test_unknown_backend():
    with pytest.raises(ValueError):
        count_solutions(EMPTY_4, 2, backend="dlx")


def test_unknown_encoding():
    with pytest.raises(ValueError):
        sudoku_cnf(EMPTY_4, 2, encoding="ladder")


def test_cnf_has_clue_units():
    cnf = sudoku_cnf(SINGLES_4, 2)
    units = [cl for cl in cnf.clauses if len(cl) == 1]
    assert len(units) == 8
