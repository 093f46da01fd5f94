"""
Backtracking solver and difficulty scorer for n-dimensional sudoku.

Approach:
1. Build a possibility map from the current grid (one elimination pass)
2. Pick the empty cell with the fewest candidates (MRV, first wins ties)
3. Try each candidate in turn, recursing; undo the cell afterwards
4. Stop as soon as a second solution turns up (puzzle is not unique)

Scoring:
Every decision point adds (B - 1)^D to a branch-difficulty total S, where B
is the number of candidates at that cell. If no guessing is ever needed, S is
0. The final score is S * C + E, with C the smallest power of ten not below
the number of cells and E the number of empty cells in the original puzzle.
"""
from __future__ import annotations

import sys
import time
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Optional

from .constraints import PossibilityMap
from .puzzle import Sudoku


class SolveError(Exception):
    """The puzzle has no solution, or more than one."""


class SolveTimeout(SolveError):
    """The search ran past its time budget."""


class Difficulty(IntEnum):
    UNPLAYABLE = 0
    BEGINNER = 1
    EASY = 2
    INTERMEDIATE = 3
    DIFFICULT = 4
    ADVANCED = 5

    @classmethod
    def from_score(cls, score: int) -> "Difficulty":
        for upper, difficulty in DIFFICULTY_THRESHOLDS:
            if score <= upper:
                return difficulty
        return cls.ADVANCED

    @classmethod
    def parse(cls, name: str) -> "Difficulty":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown difficulty: {name!r}") from None

    def __str__(self):
        return self.name.lower()


# Inclusive upper score bound for each grade; anything above is ADVANCED.
DIFFICULTY_THRESHOLDS = (
    (49, Difficulty.UNPLAYABLE),
    (150, Difficulty.BEGINNER),
    (250, Difficulty.EASY),
    (400, Difficulty.INTERMEDIATE),
    (550, Difficulty.DIFFICULT),
)


def score_scale(cells: int) -> int:
    """Smallest power of ten not less than `cells`."""
    scale = 1
    while scale < cells:
        scale *= 10
    return scale


@dataclass
class SolveResult:
    solution: Optional[Sudoku]
    solutions_found: int
    branch_difficulty: int
    empty_cells: int
    scale: int
    duration_ms: int = 0
    stats: Dict[str, int] = field(default_factory=dict)

    @property
    def unique(self) -> bool:
        return self.solutions_found == 1

    @property
    def score(self) -> Optional[int]:
        if not self.unique:
            return None
        return self.branch_difficulty * self.scale + self.empty_cells

    @property
    def difficulty(self) -> Optional[Difficulty]:
        score = self.score
        return None if score is None else Difficulty.from_score(score)


class Solver:
    """
    Search context for one puzzle.

    The puzzle is copied once; the search then assigns and unassigns cells on
    that copy. `rng` (a random.Random) shuffles candidate order, which changes
    how fast the search finishes but not what it finds. `max_solutions` is the
    count at which the search stops early: 2 to prove uniqueness, 1 to accept
    the first completion.
    """

    def __init__(self, puzzle: Sudoku, rng=None, max_solutions: int = 2,
                 verbose: bool = False, timeout_seconds: Optional[float] = None):
        self.puzzle = puzzle.copy()
        self.rng = rng
        self.max_solutions = max_solutions
        self.verbose = verbose
        self.timeout = timeout_seconds
        self.empty_cells = puzzle.empty_count()

        self.solution: Optional[Sudoku] = None
        self.solutions_found = 0
        self.branch_difficulty = 0
        self.stats = {
            'nodes': 0,
            'guesses': 0,
            'backtracks': 0,
            'dead_ends': 0,
            'max_depth': 0,
        }

    # -------------------------------------------------------------------------
    # Main solving driver
    # -------------------------------------------------------------------------
    def solve(self) -> SolveResult:
        self.start_time = time.time()

        if self.verbose:
            print(f"Starting solver: {self.puzzle!r}")
            print(f"Strategy: MRV backtracking, stop at {self.max_solutions} solution(s)\n")

        if not self.puzzle.is_valid():
            if self.verbose:
                print("✗ Givens already break a group")
        else:
            # Each decision point is one frame; leave room for every empty cell.
            previous_limit = sys.getrecursionlimit()
            limit = self.empty_cells + 200
            if previous_limit < limit:
                sys.setrecursionlimit(limit)
            try:
                self._search(0)
            finally:
                sys.setrecursionlimit(previous_limit)

        result = SolveResult(
            solution=self.solution,
            solutions_found=self.solutions_found,
            branch_difficulty=self.branch_difficulty,
            empty_cells=self.empty_cells,
            scale=score_scale(self.puzzle.size),
            duration_ms=int((time.time() - self.start_time) * 1000),
            stats=dict(self.stats),
        )

        if self.verbose:
            if result.unique:
                print(f"\n✓ Unique solution, score {result.score}")
            elif result.solutions_found:
                print(f"\n✗ Stopped after {result.solutions_found} solutions")
            else:
                print("\n✗ No solution found")
            self._print_stats()

        return result

    # -------------------------------------------------------------------------
    # Backtracking
    # -------------------------------------------------------------------------
    def _search(self, depth: int) -> None:
        if self.timeout is not None and time.time() - self.start_time > self.timeout:
            raise SolveTimeout(f"gave up after {self.timeout}s")

        self.stats['nodes'] += 1
        self.stats['max_depth'] = max(self.stats['max_depth'], depth)

        if self.verbose and self.stats['nodes'] % 1000 == 0:
            print(f"  Progress: nodes {self.stats['nodes']} | "
                  f"backtracks {self.stats['backtracks']} | depth {depth}")

        index, candidates = PossibilityMap(self.puzzle).next_index()

        if index is None:
            if self.puzzle.is_complete():
                self.solutions_found += 1
                if self.solution is None:
                    self.solution = self.puzzle.copy()
            return

        freedom = candidates.freedom()
        if freedom == 0:
            self.stats['dead_ends'] += 1
            return

        self.branch_difficulty += (freedom - 1) ** self.puzzle.dimensions
        if freedom > 1:
            self.stats['guesses'] += 1

        values = candidates.values()
        if self.rng is not None:
            self.rng.shuffle(values)

        cells = self.puzzle.elements
        for value in values:
            cells[index] = value
            self._search(depth + 1)
            if self.solutions_found >= self.max_solutions:
                break
            self.stats['backtracks'] += 1

        cells[index] = 0

    # -------------------------------------------------------------------------
    # Stats
    # -------------------------------------------------------------------------
    def _print_stats(self) -> None:
        """Print solving statistics."""
        print("\nSolving Statistics:")
        print(f"  Nodes: {self.stats['nodes']}")
        print(f"  Guesses: {self.stats['guesses']}")
        print(f"  Backtracks: {self.stats['backtracks']}")
        print(f"  Dead ends: {self.stats['dead_ends']}")
        print(f"  Max depth: {self.stats['max_depth']}")
        print(f"  Branch difficulty: {self.branch_difficulty}")


def solve(puzzle: Sudoku, **kwargs) -> SolveResult:
    """Run a fresh search over `puzzle`."""
    return Solver(puzzle, **kwargs).solve()
