"""
Candidate tracking for the sudoku solver.

Key points:
 - PossibilitySet is a single-word bitset; value v lives at bit v - 1
 - PossibilityMap is rebuilt from a grid snapshot in one elimination pass
   (vectorised over the layout's group tables, not iterated to a fixpoint)
 - An empty cell with every value eliminated keeps a zero-freedom set so the
   solver can see the contradiction and backtrack
"""
from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

import numpy as np

from .point import Point
from .puzzle import Sudoku


# -----------------------------------------------------------------------------
# Possibility set
# -----------------------------------------------------------------------------
class PossibilitySet:
    """Remaining candidate values 1..order² for one cell."""

    __slots__ = ("order", "bits")

    def __init__(self, order: int, bits: Optional[int] = None):
        self.order = order
        self.bits = full_mask(order) if bits is None else bits

    def eliminate(self, value: int) -> Optional["PossibilitySet"]:
        """The set without `value`, or None if nothing would remain."""
        bits = self.bits & ~(1 << (value - 1))
        if not bits:
            return None
        return PossibilitySet(self.order, bits)

    def contains(self, value: int) -> bool:
        return 1 <= value <= self.order ** 2 and bool(self.bits >> (value - 1) & 1)

    __contains__ = contains

    def freedom(self) -> int:
        return self.bits.bit_count()

    __len__ = freedom

    def values(self) -> List[int]:
        return [v for v in range(1, self.order ** 2 + 1) if self.bits >> (v - 1) & 1]

    def __iter__(self) -> Iterator[int]:
        return iter(self.values())

    def __eq__(self, other):
        if not isinstance(other, PossibilitySet):
            return NotImplemented
        return self.order == other.order and self.bits == other.bits

    __hash__ = None

    def __repr__(self):
        return f"PossibilitySet({self.values()})"


def full_mask(order: int) -> int:
    return (1 << order ** 2) - 1


# -----------------------------------------------------------------------------
# Possibility map
# -----------------------------------------------------------------------------
class PossibilityMap:
    """
    One candidate set per empty cell of a grid snapshot (None for filled cells).

    For every empty cell: start from the full set and drop each value already
    present in any of the cell's groups.
    """

    def __init__(self, sudoku: Sudoku):
        self.order = sudoku.order
        self.dimensions = sudoku.dimensions
        layout = sudoku.layout

        values = sudoku.elements.astype(np.uint64)
        self.open = values == 0
        shifts = np.maximum(values, np.uint64(1)) - np.uint64(1)
        present = np.where(self.open, np.uint64(0), np.left_shift(np.uint64(1), shifts))

        used = np.zeros(layout.size, dtype=np.uint64)
        for table, member in zip(layout.tables, layout.membership):
            group_used = np.bitwise_or.reduce(present[table], axis=1)
            used |= group_used[member]

        full = np.uint64(full_mask(self.order))
        self.bits = np.where(self.open, full & ~used, np.uint64(0))
        self.freedoms = np.bitwise_count(self.bits).astype(np.int64)

    def __len__(self):
        return int(self.bits.size)

    def __getitem__(self, point) -> Optional[PossibilitySet]:
        point = Point(point)
        if point.dimensions != self.dimensions or not point.in_bounds(self.order):
            raise IndexError(f"{tuple(point)} is outside a {self.dimensions}D grid of order {self.order}")
        return self.at(point.fold(self.order))

    def at(self, index: int) -> Optional[PossibilitySet]:
        if not self.open[index]:
            return None
        return PossibilitySet(self.order, int(self.bits[index]))

    def __iter__(self) -> Iterator[Optional[PossibilitySet]]:
        return (self.at(i) for i in range(len(self)))

    def contradictions(self) -> List[int]:
        """Indices of empty cells with no candidate left."""
        return [int(i) for i in np.flatnonzero(self.open & (self.freedoms == 0))]

    def next_index(self) -> Tuple[Optional[int], Optional[PossibilitySet]]:
        """Like next(), but returns the flat index instead of a Point."""
        if not self.open.any():
            return None, None
        # Filled cells can never win; argmin returns the first minimum.
        freedoms = np.where(self.open, self.freedoms, np.iinfo(np.int64).max)
        index = int(np.argmin(freedoms))
        return index, PossibilitySet(self.order, int(self.bits[index]))

    def next(self) -> Tuple[Optional[Point], Optional[PossibilitySet]]:
        """The most constrained open cell and its candidates, or (None, None)."""
        index, candidates = self.next_index()
        if index is None:
            return None, None
        return Point.unfold(index, self.order, self.dimensions), candidates
