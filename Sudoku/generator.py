"""
Random puzzle generation with difficulty targeting.

A fully solved grid is built first (random seed row, then a randomised
completion), after which pairs of cells are cleared ("hardening") until the
puzzle's difficulty reaches the requested grade. Every committed removal keeps
the puzzle uniquely solvable, since a trial without a unique solution has no
score and is rejected.
"""
from __future__ import annotations

import random
from typing import List, Optional, TypeVar, Union

from .point import Point
from .puzzle import Sudoku
from .solver import Difficulty, Solver

# The maximum number of times the hardening loop tries to make a harder
# puzzle in a single pass.
MAX_HARDEN_ITERATIONS = 20

T = TypeVar("T")
RandomSource = Union[random.Random, int, None]


class GenerateError(RuntimeError):
    """No complete grid exists for the requested shape."""


class HardenError(RuntimeError):
    """A hardening pass ran out of attempts before reaching the target."""


def make_rng(rng: RandomSource = None) -> random.Random:
    """Accept a Random instance, a seed, or None (fresh unseeded source)."""
    if isinstance(rng, random.Random):
        return rng
    return random.Random(rng)


def take_random(values: List[T], rng: random.Random) -> Optional[T]:
    """Remove and return a random item, or None once the list is empty."""
    if not values:
        return None
    return values.pop(rng.randrange(len(values)))


def seed_points(order: int, dimensions: int = 2) -> List[Point]:
    """
    Where the seed permutation goes: value i lands in row i // order, column
    (i % order) * order + i // order, so the seed touches every box of the
    first row of boxes instead of filling one block.
    """
    points = []
    for i in range(order ** 2):
        x = (i % order) * order + i // order
        y = i // order
        points.append(Point((x, y) + (0,) * (dimensions - 2)))
    return points


def complete(puzzle: Sudoku, rng: RandomSource = None) -> Optional[Sudoku]:
    """Any valid completion of `puzzle`, trying candidates in random order."""
    result = Solver(puzzle, rng=make_rng(rng), max_solutions=1).solve()
    return result.solution


def grid(order: int, dimensions: int = 2, rng: RandomSource = None) -> Sudoku:
    """A random, fully solved grid."""
    rng = make_rng(rng)
    puzzle = Sudoku(order, dimensions)

    seed = list(range(1, order ** 2 + 1))
    rng.shuffle(seed)
    for point, value in zip(seed_points(order, dimensions), seed):
        puzzle.substitute(point, value)

    solved = complete(puzzle, rng)
    if solved is None:
        raise GenerateError(f"no complete {dimensions}D grid of order {order} exists")
    return solved


def harden(sudoku: Sudoku, target: Difficulty, rng: RandomSource = None,
           verbose: bool = False) -> None:
    """
    Clear cell pairs from `sudoku` in place until it grades as `target`.

    Raises HardenError when a pass uses up MAX_HARDEN_ITERATIONS without an
    acceptable removal; cells committed before that stay cleared. No
    validation is performed on the passed puzzle beyond requiring a score.
    """
    rng = make_rng(rng)
    current = sudoku.score()
    if current is None:
        raise ValueError("only a uniquely solvable puzzle can be hardened")

    level = 0
    while True:
        points = sudoku.points()
        for _ in range(MAX_HARDEN_ITERATIONS):
            one, two = take_random(points, rng), take_random(points, rng)
            if one is None or two is None:
                break

            trial = sudoku.copy()
            trial.substitute(one, None)
            trial.substitute(two, None)
            score = trial.score()
            if score is None or score <= current:
                continue

            difficulty = Difficulty.from_score(score)
            if difficulty > target:
                # Overshot the target difficulty
                continue

            sudoku.substitute(one, None)
            sudoku.substitute(two, None)
            current = score
            level += 1
            if verbose:
                print(f"  Harden level {level}: score {score} ({difficulty})")
            if difficulty == target:
                return
            break
        else:
            raise HardenError(f"stuck at score {current} after {MAX_HARDEN_ITERATIONS} attempts")

        if one is None or two is None:
            raise HardenError(f"ran out of cells at score {current}")


def generate(order: int, difficulty: Difficulty, dimensions: int = 2,
             rng: RandomSource = None, verbose: bool = False) -> Sudoku:
    """
    A uniquely solvable puzzle graded as close to `difficulty` as the
    hardening budget allows.
    """
    rng = make_rng(rng)
    puzzle = grid(order, dimensions, rng)

    if verbose:
        print(f"Generating order-{order} {dimensions}D puzzle, target {difficulty}")
    try:
        harden(puzzle, difficulty, rng, verbose=verbose)
    except HardenError as e:
        # Keep the best puzzle reached so far.
        if verbose:
            print(f"  ⚠ {e}; settling for {puzzle.difficulty()}")
    return puzzle
