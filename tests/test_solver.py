import random
import sys

import pytest

from Sudoku import Difficulty, SolveError, SolveTimeout, Solver, Sudoku
from Sudoku.solver import DIFFICULTY_THRESHOLDS, score_scale


def test_solves_classic_puzzle(puzzle, solution):
    assert puzzle.solution() == solution
    assert puzzle.is_uniquely_solvable()


def test_solution_leaves_puzzle_untouched(puzzle):
    before = puzzle.copy()
    puzzle.solution()
    assert puzzle == before


def test_score_counts_original_empty_cells(puzzle):
    score = puzzle.score()
    assert score is not None
    assert score % 100 == 51
    assert puzzle.difficulty() == Difficulty.from_score(score)


def test_solved_grid_scores_zero(solution):
    assert solution.score() == 0
    assert solution.solution() == solution
    assert solution.difficulty() == Difficulty.UNPLAYABLE


def test_single_gap_solves_without_branching(solution):
    puzzle = solution.copy()
    puzzle.substitute((4, 4), None)
    assert puzzle.solution() == solution
    assert puzzle.score() == 1


def test_empty_grid_is_not_unique():
    empty = Sudoku(3)
    assert not empty.is_uniquely_solvable()
    assert empty.score() is None
    assert empty.difficulty() is None
    result = Solver(empty).solve()
    assert result.solutions_found == 2
    assert result.solution.is_complete()
    assert result.solution.is_valid()
    with pytest.raises(SolveError):
        empty.solution()


def test_first_solution_mode_stops_at_one():
    result = Solver(Sudoku(2), max_solutions=1).solve()
    assert result.solutions_found == 1
    assert result.solution.is_complete()


def test_conflicting_givens_have_no_solution():
    s = Sudoku(3)
    s.substitute((0, 0), 1)
    s.substitute((1, 1), 1)
    result = Solver(s).solve()
    assert result.solutions_found == 0
    assert result.score is None
    assert not s.is_uniquely_solvable()


def test_contradiction_backtracks_instead_of_crashing():
    s = Sudoku.from_str("_ 1 2 _\n_ _ _ _\n3 _ _ _\n4 _ _ _\n")
    result = Solver(s).solve()
    assert result.solutions_found == 0
    assert result.stats['dead_ends'] >= 1
    with pytest.raises(SolveError):
        s.solution()


def test_order_four(make_grid):
    solved = make_grid(4)
    puzzle = solved.copy()
    # One hole per row: each is forced by its row alone.
    for y in range(16):
        puzzle.substitute((y * 5 % 16, y), None)
    assert puzzle.solution() == solved
    assert puzzle.score() == 16


def test_candidate_order_does_not_change_the_outcome(puzzle):
    plain = Solver(puzzle).solve()
    shuffled = Solver(puzzle, rng=random.Random(7)).solve()
    assert shuffled.solution == plain.solution
    assert shuffled.score == plain.score


def test_forced_cells_add_no_branch_difficulty(solution):
    puzzle = solution.copy()
    for point in solution.points():
        if point.y == 0 and point.x < 4:
            puzzle.substitute(point, None)
    result = Solver(puzzle).solve()
    assert result.unique
    assert result.branch_difficulty == 0
    assert result.score == 4


def test_branching_accumulates_per_decision():
    # The first decision on an empty order-2 grid has four candidates.
    result = Solver(Sudoku(2)).solve()
    assert result.stats['guesses'] >= 1
    assert result.branch_difficulty >= (4 - 1) ** 2


def test_timeout_raises():
    with pytest.raises(SolveTimeout):
        Solver(Sudoku(3), timeout_seconds=-1).solve()


def test_one_cell_grid():
    s = Sudoku(1)
    assert s.solution()[(0, 0)] == 1
    assert s.score() == 1


def test_verbose_prints_stats(puzzle, capsys):
    Solver(puzzle, verbose=True).solve()
    out = capsys.readouterr().out
    assert "Solving Statistics" in out
    assert "Unique solution" in out


# -----------------------------------------------------------------------------
# Scoring helpers
# -----------------------------------------------------------------------------
def test_score_scale():
    assert score_scale(1) == 1
    assert score_scale(16) == 100
    assert score_scale(81) == 100
    assert score_scale(100) == 100
    assert score_scale(256) == 1000


def test_difficulty_thresholds():
    assert Difficulty.from_score(0) == Difficulty.UNPLAYABLE
    for upper, difficulty in DIFFICULTY_THRESHOLDS:
        assert Difficulty.from_score(upper) == difficulty
        assert Difficulty.from_score(upper + 1) > difficulty
    assert Difficulty.from_score(10 ** 6) == Difficulty.ADVANCED


def test_difficulty_ordering_and_parsing():
    assert Difficulty.UNPLAYABLE < Difficulty.BEGINNER < Difficulty.EASY \
        < Difficulty.INTERMEDIATE < Difficulty.DIFFICULT < Difficulty.ADVANCED
    assert Difficulty.parse("Easy") == Difficulty.EASY
    assert str(Difficulty.ADVANCED) == "advanced"
    with pytest.raises(ValueError):
        Difficulty.parse("impossible")


@pytest.mark.parametrize("timeout", [None, -1])
def test_recursion_limit_is_restored(puzzle, monkeypatch, timeout):
    calls = []
    monkeypatch.setattr(sys, "getrecursionlimit", lambda: 50)
    monkeypatch.setattr(sys, "setrecursionlimit", calls.append)
    try:
        Solver(puzzle, timeout_seconds=timeout).solve()
    except SolveTimeout:
        pass
    assert calls == [51 + 200, 50]
