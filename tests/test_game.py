import pytest

from Sudoku import Behavior, Difficulty, Game, Preferences, SolveError, Sudoku


@pytest.fixture
def game(puzzle):
    return Game.from_puzzle(puzzle)


def test_game_holds_problem_current_and_solution(game, puzzle, solution):
    assert game.problem == puzzle
    assert game.current == puzzle
    assert game.solution == solution
    assert game.moves == 0


def test_correct_insert_counts_a_move(game):
    assert game.insertion_is_correct((2, 0), 4)
    assert game.insert((2, 0), 4)
    assert game.current[(2, 0)] == 4
    assert game.moves == 1


def test_incorrect_insert_is_refused_by_default(game):
    assert not game.insertion_is_correct((2, 0), 1)
    assert not game.insert((2, 0), 1)
    assert game.current[(2, 0)] is None
    assert game.moves == 0


def test_incorrect_insert_allowed_by_preferences(puzzle):
    prefs = Preferences(behavior=Behavior(allow_incorrect_answers=True))
    game = Game.from_puzzle(puzzle, preferences=prefs)
    assert game.insert((2, 0), 1)
    assert game.current[(2, 0)] == 1


def test_givens_are_immutable(game):
    assert not game.is_mutable((0, 0))
    assert game.is_mutable((2, 0))
    assert not game.insert((0, 0), 5)
    assert game.remove((0, 0)) is None
    assert game.current[(0, 0)] == 5


def test_remove_returns_old_value(game):
    game.insert((2, 0), 4)
    assert game.remove((2, 0)) == 4
    assert game.current[(2, 0)] is None
    assert game.moves == 2


def test_insertion_is_valid_checks_groups(game):
    # 5 already sits in row 0
    assert not game.insertion_is_valid((2, 0), 5)
    assert game.insertion_is_valid((2, 0), 4)


def test_relevant_points(game):
    points = game.relevant_points((4, 4))
    assert len(points) == 21
    assert len(game.points()) == 81


def test_filling_every_cell_wins(game):
    assert not game.is_won()
    for point in game.points():
        if game.is_mutable(point):
            game.insert(point, game.solution[point])
    assert game.is_won()
    assert game.moves == 51


def test_ambiguous_puzzle_cannot_start_a_game():
    with pytest.raises(SolveError):
        Game.from_puzzle(Sudoku(3))


def test_generated_game():
    game = Game(order=2, difficulty=Difficulty.UNPLAYABLE, rng=4)
    assert game.problem.order == 2
    assert game.solution.is_complete()
    assert game.current == game.problem
