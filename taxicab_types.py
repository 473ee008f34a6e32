"""
Shared type definitions for the taxicab map system.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DirectionParseError(ValueError):
    """Raised when a string does not name any Direction."""

    def __init__(self, normalized: str) -> None:
        super().__init__(f"Unknown direction: '{normalized}'")
        self.normalized = normalized


@dataclass(frozen=True, order=True)
class Point:
    """A cell coordinate in absolute space, ordered by (x, y)."""

    x: int
    y: int

    def go(self, direction: Direction) -> Point:
        """The adjacent point one step toward direction."""
        dx, dy = direction.delta
        return Point(self.x + dx, self.y + dy)

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)


class Direction(Enum):
    """Cardinal direction; the value is the display symbol."""

    E = "→"  # Right (increasing x)
    W = "←"  # Left (decreasing x)
    N = "↑"  # Up (increasing y)
    S = "↓"  # Down (decreasing y)

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> Direction:
        """
        Parse a human name or arrow into a Direction (case-insensitive).

        Accepts east/right/→, west/left/←, north/up/↑ and south/down/↓.

        Raises:
            DirectionParseError: carrying the lower-cased input
        """
        normed = text.lower()
        try:
            return _DIRECTION_NAMES[normed]
        except KeyError:
            raise DirectionParseError(normed) from None

    from_str = parse

    @property
    def axis(self) -> str:
        return "x" if self in (Direction.E, Direction.W) else "y"

    @property
    def positive(self) -> bool:
        return self in (Direction.E, Direction.N)

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    def step(self, point: Point) -> Point:
        """Offset point by exactly one cell along this direction."""
        return point.go(self)


_DIRECTION_NAMES: dict[str, Direction] = {
    "east": Direction.E,
    "right": Direction.E,
    "→": Direction.E,
    "west": Direction.W,
    "left": Direction.W,
    "←": Direction.W,
    "north": Direction.N,
    "up": Direction.N,
    "↑": Direction.N,
    "south": Direction.S,
    "down": Direction.S,
    "↓": Direction.S,
}

# Direction deltas: (x_delta, y_delta)
_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.E: (1, 0),
    Direction.W: (-1, 0),
    Direction.N: (0, 1),
    Direction.S: (0, -1),
}

_OPPOSITES: dict[Direction, Direction] = {
    Direction.E: Direction.W,
    Direction.W: Direction.E,
    Direction.N: Direction.S,
    Direction.S: Direction.N,
}


@dataclass(frozen=True)
class Joint:
    """A directed edge from a cell to its neighbor."""

    point: Point
    direction: Direction

    def source(self) -> Point:
        return self.point

    def target(self) -> Point:
        return self.direction.step(self.point)
