"""
Dense taxicab map with origin translation and per-axis wrap.

Absolute coordinates are unbounded ints; relative indices address the dense
storage. The two are related by the origin offset and, on wrapping axes, by
a Euclidean modulo of the axis extent.
"""

from __future__ import annotations

import copy
import itertools
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, Iterator, TypeVar, Union

from taxicab_types import Direction, Point

if TYPE_CHECKING:
    from action_field import ActionFieldSolver, FieldRules
    from path_finder import PathFinder

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Keys accepted by the [] operators and `in`
PointKey = Union[Point, tuple[int, int]]


# =============================================================================
# Coordinate Transform
# =============================================================================


def absolute_to_relative(
    x: int,
    y: int,
    origin_x: int,
    origin_y: int,
    width: int,
    height: int,
    cycle_x: bool,
    cycle_y: bool,
) -> tuple[int, int] | None:
    """
    Map an absolute coordinate to a storage index.

    Returns None when an axis does not wrap and the coordinate falls outside
    [origin, origin + extent) on that axis. Wrapping axes reduce modulo the
    extent, which must be positive.
    """
    i = x - origin_x
    j = y - origin_y
    if cycle_x:
        i %= width  # Python's % is Euclidean for a positive divisor
    elif i < 0 or i >= width:
        return None
    if cycle_y:
        j %= height
    elif j < 0 or j >= height:
        return None
    return (i, j)


def relative_to_absolute(i: int, j: int, origin_x: int, origin_y: int) -> tuple[int, int]:
    """The canonical absolute coordinate of storage index (i, j)."""
    return (i + origin_x, j + origin_y)


def _key_to_xy(key: PointKey) -> tuple[int, int]:
    if isinstance(key, Point):
        return (key.x, key.y)
    x, y = key
    return (x, y)


# =============================================================================
# Cell Handles
# =============================================================================


class MapCell(Generic[T]):
    """
    Writable handle on a single storage cell.

    Handles are bound to a storage index, not to an absolute coordinate, so
    later origin or wrap changes do not retarget them. extend may shift
    storage indices; a handle taken before an extend is invalid after it.
    """

    __slots__ = ("_column", "_j", "x", "y")

    def __init__(self, column: list[T], j: int, x: int, y: int) -> None:
        self._column = column
        self._j = j
        self.x = x
        self.y = y

    @property
    def value(self) -> T:
        return self._column[self._j]

    @value.setter
    def value(self, value: T) -> None:
        self._column[self._j] = value

    def __repr__(self) -> str:
        return f"MapCell(x={self.x}, y={self.y}, value={self.value!r})"


# =============================================================================
# Diamond Rings
# =============================================================================


class DiamondPoints:
    """
    The ring of points at taxicab distance n from (x, y).

    Yields the center alone for n == 0, otherwise 4n points in rotational
    order starting at (x + n, y):

        0      (x + n, y)
        n      (x, y + n)
        2n     (x - n, y)
        3n     (x, y - n)
        4n - 1 (x + 1, y - n + 1) ... (x + n - 1, y - 1)

    One-shot iterator; build a new instance to enumerate again.
    """

    def __init__(self, x: int, y: int, n: int) -> None:
        if n < 0:
            raise ValueError(f"Ring radius must be non-negative, got {n}")
        self.x = x
        self.y = y
        self.n = n
        self.index = 0

    def __iter__(self) -> Iterator[tuple[int, int]]:
        return self

    def __len__(self) -> int:
        total = 1 if self.n == 0 else 4 * self.n
        return max(total - self.index, 0)

    def __next__(self) -> tuple[int, int]:
        x, y, n, index = self.x, self.y, self.n, self.index
        if n == 0:
            if index > 0:
                raise StopIteration
            out = (x, y)
        elif index < n:
            k = index
            out = (x + n - k, y + k)
        elif index < 2 * n:
            k = index - n
            out = (x - k, y + n - k)
        elif index < 3 * n:
            k = index - 2 * n
            out = (x - n + k, y - k)
        elif index < 4 * n:
            k = index - 3 * n
            out = (x + k, y - n + k)
        else:
            raise StopIteration
        self.index += 1
        return out


# =============================================================================
# Dense Map
# =============================================================================


@dataclass
class TaxicabMap(Generic[T]):
    """
    A dense rectangular map of values addressed by absolute coordinates.

    storage[i][j] holds the cell at relative index (i, j): width columns of
    height cells each. Every cell always holds a value.
    """

    storage: list[list[T]]
    cycle_x: bool = False
    cycle_y: bool = False
    origin_x: int = 0
    origin_y: int = 0

    def __post_init__(self) -> None:
        if not self.storage or not self.storage[0]:
            raise ValueError("Map storage must have at least one cell")
        height = len(self.storage[0])
        mismatched = [i for i, column in enumerate(self.storage) if len(column) != height]
        if mismatched:
            raise ValueError(
                f"Inconsistent column heights\n"
                f"  Expected: {height} cells (from column 0)\n"
                f"  Mismatched columns: {mismatched}"
            )

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def rectangle(cls, width: int, height: int, fill: T) -> TaxicabMap[T]:
        """Create a width x height map, every cell a copy of fill."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Map extents must be positive, got {width}x{height}")
        storage = [[copy.copy(fill) for _ in range(height)] for _ in range(width)]
        return cls(storage)

    @classmethod
    def square(cls, width: int, fill: T) -> TaxicabMap[T]:
        return cls.rectangle(width, width, fill)

    def clone(self) -> TaxicabMap[T]:
        return copy.deepcopy(self)

    def extend(
        self,
        direction: Direction,
        size: int,
        fill: T,
        preserve_coordinates: bool = False,
    ) -> None:
        """
        Grow the map by size cells along the axis of direction.

        E and N add cells at the low index edge, so every existing cell moves
        up by size indices and, with an unchanged origin, answers to a new
        absolute coordinate. W and S add cells at the high index edge and
        leave existing indices alone. Pass preserve_coordinates=True to shift
        the origin so existing absolute coordinates keep naming the same cells.

        Outstanding MapCell handles and iterators are invalidated.

        Args:
            direction: Direction whose axis grows
            size: Number of rows or columns to add
            fill: Value cloned into every new cell
            preserve_coordinates: Compensate the origin for low edge growth
        """
        if size < 0:
            raise ValueError(f"Extend size must be non-negative, got {size}")
        if size == 0:
            return

        width, height = self.get_size()
        if direction.axis == "x":
            new_columns = [[copy.copy(fill) for _ in range(height)] for _ in range(size)]
            if direction.positive:
                self.storage[0:0] = new_columns
            else:
                self.storage.extend(new_columns)
        else:
            for column in self.storage:
                new_cells = [copy.copy(fill) for _ in range(size)]
                if direction.positive:
                    column[0:0] = new_cells
                else:
                    column.extend(new_cells)

        if preserve_coordinates and direction.positive:
            if direction.axis == "x":
                self.shift_origin(-size, 0)
            else:
                self.shift_origin(0, -size)

        logger.info(
            "extend: %s by %d, size %dx%d -> %dx%d, origin=(%d, %d)",
            direction.name,
            size,
            width,
            height,
            *self.get_size(),
            self.origin_x,
            self.origin_y,
        )

    # -------------------------------------------------------------------------
    # Metadata
    # -------------------------------------------------------------------------

    @property
    def width(self) -> int:
        return len(self.storage)

    @property
    def height(self) -> int:
        return len(self.storage[0])

    def get_size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def get_cycle(self) -> tuple[bool, bool]:
        return (self.cycle_x, self.cycle_y)

    def set_cycle(self, cycle_x: bool, cycle_y: bool) -> None:
        self.cycle_x = cycle_x
        self.cycle_y = cycle_y

    def with_cycle(self, cycle_x: bool, cycle_y: bool) -> TaxicabMap[T]:
        self.set_cycle(cycle_x, cycle_y)
        return self

    def get_origin(self) -> tuple[int, int]:
        return (self.origin_x, self.origin_y)

    def set_origin(self, x: int, y: int) -> None:
        self.origin_x = x
        self.origin_y = y

    def with_origin(self, x: int, y: int) -> TaxicabMap[T]:
        self.set_origin(x, y)
        return self

    def shift_origin(self, dx: int, dy: int) -> None:
        self.origin_x += dx
        self.origin_y += dy

    # -------------------------------------------------------------------------
    # Point Access
    # -------------------------------------------------------------------------

    def _relative(self, x: int, y: int) -> tuple[int, int] | None:
        return absolute_to_relative(
            x, y, self.origin_x, self.origin_y, self.width, self.height, self.cycle_x, self.cycle_y
        )

    def has_point(self, x: int, y: int) -> bool:
        return self._relative(x, y) is not None

    def get_point(self, x: int, y: int) -> T | None:
        index = self._relative(x, y)
        if index is None:
            return None
        i, j = index
        return self.storage[i][j]

    def mut_point(self, x: int, y: int) -> MapCell[T] | None:
        """A writable handle on the cell at (x, y), or None if there is none."""
        index = self._relative(x, y)
        if index is None:
            return None
        i, j = index
        return MapCell(self.storage[i], j, x, y)

    def set_point(self, x: int, y: int, value: T) -> bool:
        """Store value at (x, y). Returns False, leaving the map unchanged, if out of range."""
        index = self._relative(x, y)
        if index is None:
            return False
        i, j = index
        self.storage[i][j] = value
        return True

    def canonical_point(self, x: int, y: int) -> Point | None:
        """The canonical absolute coordinate of the cell at (x, y)."""
        index = self._relative(x, y)
        if index is None:
            return None
        return Point(*relative_to_absolute(*index, self.origin_x, self.origin_y))

    def count_points(self) -> int:
        return self.width * self.height

    def __len__(self) -> int:
        return self.count_points()

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (Point, tuple)):
            return False
        x, y = _key_to_xy(key)
        return self.has_point(x, y)

    def __getitem__(self, key: PointKey) -> T:
        x, y = _key_to_xy(key)
        index = self._relative(x, y)
        if index is None:
            raise KeyError((x, y))
        i, j = index
        return self.storage[i][j]

    def __setitem__(self, key: PointKey, value: T) -> None:
        x, y = _key_to_xy(key)
        if not self.set_point(x, y, value):
            raise KeyError((x, y))

    # -------------------------------------------------------------------------
    # Iteration
    # -------------------------------------------------------------------------

    def points_all(self) -> Iterator[tuple[int, int, T]]:
        """Yield (x, y, value) for every cell, column by column, at canonical coordinates."""
        for i, column in enumerate(self.storage):
            for j, value in enumerate(column):
                x, y = relative_to_absolute(i, j, self.origin_x, self.origin_y)
                yield x, y, value

    def points_mut(self) -> Iterator[tuple[int, int, MapCell[T]]]:
        """Like points_all, but yields a distinct writable handle per cell."""
        for i, column in enumerate(self.storage):
            for j in range(len(column)):
                x, y = relative_to_absolute(i, j, self.origin_x, self.origin_y)
                yield x, y, MapCell(column, j, x, y)

    def __iter__(self) -> Iterator[tuple[int, int, T]]:
        return self.points_all()

    def points_around(self, x: int, y: int, steps: int) -> Iterator[tuple[int, int]]:
        """
        The ring at taxicab distance steps from (x, y), keeping only points with a cell.

        Coordinates are yielded as enumerated (not wrapped back into range);
        filtering never reorders the ring. A negative steps raises ValueError
        at the call.
        """
        ring = DiamondPoints(x, y, steps)
        # Capture settings now so the ring reflects the map at call time
        origin_x, origin_y = self.origin_x, self.origin_y
        width, height = self.get_size()
        cycle_x, cycle_y = self.cycle_x, self.cycle_y
        return (
            (px, py)
            for px, py in ring
            if absolute_to_relative(px, py, origin_x, origin_y, width, height, cycle_x, cycle_y) is not None
        )

    def points_nearby(self, x: int, y: int) -> Iterator[tuple[int, int]]:
        """The existing direct neighbors of (x, y), at most 4."""
        return self.points_around(x, y, 1)

    def points_within(self, x: int, y: int, steps: int) -> Iterator[tuple[int, int]]:
        """Every existing point at taxicab distance <= steps, ring by ring."""
        if steps < 0:
            raise ValueError(f"Ring radius must be non-negative, got {steps}")
        return itertools.chain.from_iterable(self.points_around(x, y, n) for n in range(steps + 1))

    # -------------------------------------------------------------------------
    # Solvers
    # -------------------------------------------------------------------------

    def action_field(
        self,
        start: Point,
        budget: float,
        rules: FieldRules | None = None,
    ) -> ActionFieldSolver[T]:
        """Points reachable from start for at most budget action points; see ActionFieldSolver."""
        from action_field import ActionFieldSolver

        return ActionFieldSolver(self, start, budget, rules)

    def path_finder(self, start: Point, goal: Point) -> PathFinder[T]:
        """Cheapest path from start to goal; see PathFinder."""
        from path_finder import PathFinder

        return PathFinder(self, start, goal)
