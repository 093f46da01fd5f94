"""
Game state for playing a generated puzzle.
"""
from __future__ import annotations

from typing import List, Optional

from .config import Preferences
from .generator import RandomSource, generate
from .point import Point
from .puzzle import Sudoku
from .solver import Difficulty


class Game:
    """An in-progress game: the generated problem, the player's grid and the solution."""

    def __init__(self, order: Optional[int] = None, difficulty: Optional[Difficulty] = None,
                 rng: RandomSource = None, preferences: Optional[Preferences] = None,
                 problem: Optional[Sudoku] = None):
        self.preferences = preferences or Preferences()
        defaults = self.preferences.generation
        if problem is None:
            problem = generate(
                order or defaults.default_order,
                defaults.default_difficulty if difficulty is None else difficulty,
                dimensions=defaults.default_dimensions,
                rng=rng,
            )
        self.problem = problem
        self.current = problem.copy()
        self.solution = problem.solution()
        self.moves = 0

    @classmethod
    def from_puzzle(cls, problem: Sudoku, preferences: Optional[Preferences] = None) -> "Game":
        """Start a game on an existing puzzle (raises SolveError if not unique)."""
        return cls(problem=problem, preferences=preferences)

    def relevant_points(self, point) -> List[Point]:
        """Points sharing a group with `point`, e.g. for highlighting."""
        return self.problem.group_indices(point)

    def insertion_is_correct(self, point, value: int) -> bool:
        return self.solution[point] == value

    def insertion_is_valid(self, point, value: int) -> bool:
        """Whether `value` clashes with nothing else in the point's groups."""
        point = Point(point)
        for other in self.current.group_indices(point):
            if other != point and self.current[other] == value:
                return False
        return True

    def insert(self, point, value: int) -> bool:
        """
        Place a value, returning whether the move was applied.

        Given cells are never overwritten; wrong values are refused unless
        the preferences allow incorrect answers.
        """
        if not self.is_mutable(point):
            return False
        if not self.preferences.behavior.allow_incorrect_answers and \
                not self.insertion_is_correct(point, value):
            return False
        self.current.substitute(point, value)
        self.moves += 1
        return True

    def remove(self, point) -> Optional[int]:
        """Clear a player-entered value, returning the old one."""
        if not self.is_mutable(point):
            return None
        value = self.current[point]
        self.current.substitute(point, None)
        self.moves += 1
        return value

    def points(self) -> List[Point]:
        return self.current.points()

    def is_mutable(self, point) -> bool:
        """True when the generated puzzle left this cell empty."""
        return self.problem[point] is None

    def is_won(self) -> bool:
        return self.current == self.solution
