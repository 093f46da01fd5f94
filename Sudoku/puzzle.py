"""
Core data structures for n-dimensional sudoku representation.

A grid of order N has N² cells along each of its D axes and holds values
1..N². Cells are stored flat (numpy uint8, 0 = empty) and addressed through
Point.fold. Every cell belongs to D + 1 groups: its box, its stack (the line
along dimension 0) and one band per remaining dimension.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from math import isqrt
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

import numpy as np

from .point import Point, unfold_all

if TYPE_CHECKING:
    from .solver import Difficulty

# Candidate bitsets are single uint64 words.
MAX_AXIS = 64
EMPTY_TOKEN = "_"


# -----------------------------------------------------------------------------
# Parse errors
# -----------------------------------------------------------------------------
class ParseError(ValueError):
    """Raised when text cannot be read as a sudoku grid."""


class UnequalDimensions(ParseError):
    def __init__(self, row: int, expected: int, actual: int):
        self.row = row
        self.expected = expected
        self.actual = actual
        super().__init__(f"row {row} has {actual} cells, expected {expected}")


class NonSquareAxis(ParseError):
    def __init__(self, rows: int):
        self.rows = rows
        super().__init__(f"{rows} rows is not a perfect square")


class LargeAxis(ParseError):
    def __init__(self, rows: int):
        self.rows = rows
        super().__init__(f"{rows} rows is more than the {MAX_AXIS} a grid can hold")


class LargeValue(ParseError):
    def __init__(self, value: int, point: Point):
        self.value = value
        self.point = point
        super().__init__(f"value {value} at {tuple(point)} exceeds the grid axis")


# -----------------------------------------------------------------------------
# Groups
# -----------------------------------------------------------------------------
class GroupKind(Enum):
    BOX = "box"
    STACK = "stack"
    BAND = "band"


@dataclass
class Group:
    """A set of cells that must hold distinct values."""
    kind: GroupKind
    elements: List[Optional[int]]
    points: List[Point] = field(default_factory=list)
    dimension: Optional[int] = None  # axis the line runs along (stack: 0)

    def is_valid(self) -> bool:
        """No duplicate values, ignoring empty cells."""
        filled = [e for e in list(self.elements) if e is not None]
        return len(filled) == len(set(filled))

    def is_complete(self) -> bool:
        """Valid and fully populated."""
        elements = list(self.elements)
        if any(e is None for e in elements):
            return False
        return len(elements) == len(set(elements))

    def __len__(self):
        return len(self.elements)

    def __repr__(self):
        return f"Group({self.kind.value}, size={len(self.elements)})"


@dataclass(frozen=True)
class Layout:
    """
    Precomputed index tables for one (order, dimensions) shape.

    tables[k] has one row per group of kind k, listing member cell indices in
    fold order; membership[k][cell] is the row of tables[k] containing cell.
    Kind 0 is the box, kind 1 the stack, kind d + 1 the band along dimension d.
    """
    order: int
    dimensions: int
    axis: int
    size: int
    points: Tuple[Point, ...]
    tables: Tuple[np.ndarray, ...]
    membership: Tuple[np.ndarray, ...]

    def kind(self, k: int) -> GroupKind:
        if k == 0:
            return GroupKind.BOX
        return GroupKind.STACK if k == 1 else GroupKind.BAND


def _group_table(keys: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    # A stable sort keeps each group's members in fold order.
    ordering = np.argsort(keys, kind="stable")
    _, membership = np.unique(keys, return_inverse=True)
    groups = int(membership.max()) + 1
    return ordering.reshape(groups, -1), membership.astype(np.intp)


@lru_cache(maxsize=None)
def layout(order: int, dimensions: int = 2) -> Layout:
    axis = order ** 2
    size = axis ** dimensions
    index = np.arange(size, dtype=np.int64)
    # coords[i] is coordinate i of every cell (dimension 0 varies fastest).
    coords = np.stack([(index // axis ** i) % axis for i in range(dimensions)])

    box_keys = sum((coords[i] // order) * order ** i for i in range(dimensions))
    line_keys = []
    for along in range(dimensions):
        others = [i for i in range(dimensions) if i != along]
        line_keys.append(sum(coords[i] * axis ** j for j, i in enumerate(others)))

    tables, membership = [], []
    for keys in [box_keys] + line_keys:
        table, member = _group_table(np.asarray(keys))
        tables.append(table)
        membership.append(member)

    return Layout(order, dimensions, axis, size, unfold_all(order, dimensions),
                  tuple(tables), tuple(membership))


# -----------------------------------------------------------------------------
# Sudoku
# -----------------------------------------------------------------------------
class Sudoku:
    """A (partial) grid of elements."""

    def __init__(self, order: int, dimensions: int = 2, elements=None):
        if order < 1 or order ** 2 > MAX_AXIS:
            raise ValueError(f"order must be between 1 and {isqrt(MAX_AXIS)}, got {order}")
        if dimensions < 2:
            raise ValueError(f"dimensions must be at least 2, got {dimensions}")
        self.order = order
        self.dimensions = dimensions
        self.layout = layout(order, dimensions)
        if elements is None:
            self.elements = np.zeros(self.layout.size, dtype=np.uint8)
        else:
            self.elements = np.array(elements, dtype=np.uint8).reshape(-1)
            if self.elements.size != self.layout.size:
                raise ValueError(f"expected {self.layout.size} elements, got {self.elements.size}")
            if int(self.elements.max(initial=0)) > self.axis:
                raise ValueError(f"elements must be at most {self.axis}")

    # ---------- shape ----------

    @property
    def axis(self) -> int:
        return self.layout.axis

    @property
    def size(self) -> int:
        return self.layout.size

    def points(self) -> List[Point]:
        return list(self.layout.points)

    def _index(self, point) -> int:
        point = Point(point)
        if point.dimensions != self.dimensions or not point.in_bounds(self.order):
            raise IndexError(f"{tuple(point)} is outside a {self.dimensions}D grid of order {self.order}")
        return point.fold(self.order)

    # ---------- cell access ----------

    def __getitem__(self, point) -> Optional[int]:
        value = int(self.elements[self._index(point)])
        return value or None

    def substitute(self, point, value: Optional[int]) -> None:
        """Overwrite one cell; None empties it."""
        if value is not None and not 1 <= value <= self.axis:
            raise ValueError(f"element {value} is outside 1..{self.axis}")
        self.elements[self._index(point)] = value or 0

    def is_complete(self) -> bool:
        return bool(self.elements.all())

    def empty_count(self) -> int:
        return int(self.size - np.count_nonzero(self.elements))

    # ---------- groups ----------

    def groups(self, point) -> List[Group]:
        """Box, stack, then one band per dimension 1..D-1 (D + 1 groups)."""
        index = self._index(point)
        groups = []
        for k, (table, member) in enumerate(zip(self.layout.tables, self.layout.membership)):
            cells = table[member[index]]
            groups.append(Group(
                kind=self.layout.kind(k),
                elements=[int(v) or None for v in self.elements[cells]],
                points=[self.layout.points[i] for i in cells],
                dimension=None if k == 0 else k - 1,
            ))
        return groups

    def group_indices(self, point) -> List[Point]:
        """Every point sharing a group with `point` (itself included)."""
        index = self._index(point)
        cells = set()
        for table, member in zip(self.layout.tables, self.layout.membership):
            cells.update(int(i) for i in table[member[index]])
        return [self.layout.points[i] for i in sorted(cells)]

    def invalid_groups(self) -> List[Tuple[GroupKind, int]]:
        """(kind, row of the layout table) for every group holding a duplicate."""
        bad = []
        for k, table in enumerate(self.layout.tables):
            values = np.sort(self.elements[table], axis=1)
            dup = (values[:, 1:] == values[:, :-1]) & (values[:, 1:] != 0)
            for row in np.flatnonzero(dup.any(axis=1)):
                bad.append((self.layout.kind(k), int(row)))
        return bad

    def is_valid(self) -> bool:
        return not self.invalid_groups()

    # ---------- copying / comparison ----------

    def copy(self) -> "Sudoku":
        return Sudoku(self.order, self.dimensions, self.elements.copy())

    __copy__ = copy

    def __eq__(self, other):
        if not isinstance(other, Sudoku):
            return NotImplemented
        return (self.order == other.order and self.dimensions == other.dimensions
                and bool(np.array_equal(self.elements, other.elements)))

    __hash__ = None

    def __iter__(self) -> Iterator[Optional[int]]:
        return (int(v) or None for v in self.elements)

    def __repr__(self):
        return (f"Sudoku(order={self.order}, dimensions={self.dimensions}, "
                f"empty={self.empty_count()}/{self.size})")

    # ---------- text format ----------

    @classmethod
    def from_str(cls, text: str) -> "Sudoku":
        """
        Parse the row/column text format.

        Rows are separated by newlines and cells by single spaces. A cell is a
        decimal value or a placeholder for empty; one trailing empty line is
        allowed.
        """
        lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
        if lines and lines[-1] == "":
            lines.pop()

        axis = len(lines)
        order = isqrt(axis)
        if axis == 0 or order * order != axis:
            raise NonSquareAxis(axis)
        if axis > MAX_AXIS:
            raise LargeAxis(axis)

        values = []
        for y, line in enumerate(lines):
            cells = line.split(" ")
            if len(cells) != axis:
                raise UnequalDimensions(y, axis, len(cells))
            for x, token in enumerate(cells):
                if not token.isdecimal():
                    values.append(0)
                    continue
                value = int(token)
                if value > axis:
                    raise LargeValue(value, Point((x, y)))
                values.append(value)

        return cls(order, 2, values)

    def __str__(self):
        rows = self.elements.reshape(-1, self.axis)
        lines = []
        for row in rows:
            lines.append(" ".join(str(int(v)) if v else EMPTY_TOKEN for v in row) + "\n")
        return "".join(lines)

    # ---------- solving / scoring / generation ----------

    def solution(self) -> "Sudoku":
        """The unique solution; raises SolveError when there is none or several."""
        from .solver import Solver, SolveError

        result = Solver(self).solve()
        if not result.unique:
            raise SolveError(f"no unique solution ({result.solutions_found} found)")
        return result.solution

    def is_uniquely_solvable(self) -> bool:
        from .solver import SolveError

        try:
            self.solution()
        except SolveError:
            return False
        return True

    def score(self) -> Optional[int]:
        from .solver import Solver, SolveError

        try:
            return Solver(self).solve().score
        except SolveError:
            return None

    def difficulty(self) -> Optional["Difficulty"]:
        from .solver import Difficulty

        score = self.score()
        return None if score is None else Difficulty.from_score(score)

    @classmethod
    def generate(cls, order: int, difficulty: "Difficulty", dimensions: int = 2,
                 rng=None, verbose: bool = False) -> "Sudoku":
        from .generator import generate

        return generate(order, difficulty, dimensions=dimensions, rng=rng, verbose=verbose)
