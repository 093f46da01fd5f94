"""
Coordinate system for n-dimensional sudoku grids.

Origin is the top-left corner: x increases to the right, y downward, and any
further axes follow. Each axis is order² cells long.
"""
from typing import Iterable, Tuple


class Point(tuple):
    """A D-dimensional cell address; (x, y, ...)."""

    def __new__(cls, coordinates: Iterable[int]):
        return super().__new__(cls, (int(c) for c in coordinates))

    @classmethod
    def origin(cls, dimensions: int = 2) -> "Point":
        return cls([0] * dimensions)

    @classmethod
    def unfold(cls, index: int, order: int, dimensions: int = 2) -> "Point":
        """Inverse of fold: peel coordinates off from the most significant dimension down."""
        axis = order ** 2
        coordinates = [0] * dimensions
        for i in reversed(range(dimensions)):
            place = axis ** i
            coordinates[i], index = divmod(index, place)
        return cls(coordinates)

    @property
    def dimensions(self) -> int:
        return len(self)

    @property
    def x(self) -> int:
        return self[0]

    @property
    def y(self) -> int:
        return self[1]

    def fold(self, order: int) -> int:
        """Flat index of this point: sum of p[i] * (order²)^i."""
        axis = order ** 2
        return sum(c * axis ** i for i, c in enumerate(self))

    def snap(self, order: int) -> "Point":
        """Origin of the box containing this point."""
        return Point(c - c % order for c in self)

    def with_x(self, x: int) -> "Point":
        return Point((x,) + tuple(self[1:]))

    def with_y(self, y: int) -> "Point":
        return Point((self[0], y) + tuple(self[2:]))

    def in_bounds(self, order: int) -> bool:
        axis = order ** 2
        return all(0 <= c < axis for c in self)

    def __repr__(self):
        return f"Point{tuple(self)!r}"


def unfold_all(order: int, dimensions: int = 2) -> Tuple[Point, ...]:
    """Every point of a grid, in fold order."""
    return tuple(Point.unfold(i, order, dimensions) for i in range(order ** (2 * dimensions)))
