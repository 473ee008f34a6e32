"""
Cheapest path between two points of a TaxicabMap (A* search).
"""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Generic, TypeVar

from action_field import ActionCost, Passable, always_passable, no_cost
from taxicab_types import Direction, Point

if TYPE_CHECKING:
    from taxicab_map import TaxicabMap

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Lower bound on the remaining cost from a point to the goal
Heuristic = Callable[[Point, Point], float]


def taxicab_distance(a: Point, b: Point) -> int:
    """Manhattan distance, ignoring wrap."""
    return abs(a.x - b.x) + abs(a.y - b.y)


def zero_heuristic(point: Point, goal: Point) -> float:
    return 0.0


@dataclass(frozen=True)
class PathResult:
    """A found path: total cost and every point from start to goal inclusive."""

    cost: float
    points: tuple[Point, ...]

    def __len__(self) -> int:
        return len(self.points)


class PathFinder(Generic[T]):
    """
    A* search over a TaxicabMap with caller-supplied passability and step costs.

    The default heuristic is zero, which makes the search Dijkstra's
    algorithm. A heuristic must never overestimate the remaining cost
    (taxicab_distance scaled by the minimum step cost is a safe choice on
    maps without wrap) or the returned path may not be the cheapest.

    Start and goal are canonicalized to the map's coordinates. The goal
    must be passable; the start is not checked.
    """

    def __init__(self, taxicab_map: TaxicabMap[T], start: Point, goal: Point) -> None:
        self.map = taxicab_map
        self.start = taxicab_map.canonical_point(start.x, start.y) or start
        self.goal = taxicab_map.canonical_point(goal.x, goal.y) or goal
        self.passable: Passable[T] = always_passable
        self.action_cost: ActionCost[T] = no_cost
        self.heuristic: Heuristic = zero_heuristic
        self.max_iterations: int | None = None

    def with_passable(self, passable: Passable[T]) -> PathFinder[T]:
        self.passable = passable
        return self

    def with_cost(self, cost: ActionCost[T]) -> PathFinder[T]:
        self.action_cost = cost
        return self

    def with_heuristic(self, heuristic: Heuristic) -> PathFinder[T]:
        self.heuristic = heuristic
        return self

    def with_max_iterations(self, max_iterations: int | None) -> PathFinder[T]:
        self.max_iterations = max_iterations
        return self

    def _neighbors(self, point: Point) -> list[tuple[Point, float]]:
        found: list[tuple[Point, float]] = []
        for direction in Direction:
            step = direction.step(point)
            key = self.map.canonical_point(step.x, step.y)
            if key is None or key == point:
                continue
            value = self.map.get_point(key.x, key.y)
            if not self.passable(key, value):
                continue
            found.append((key, self.action_cost(key, value)))
        return found

    def solve(self) -> PathResult | None:
        """
        Search for the cheapest path.

        Returns:
            PathResult, or None if the goal is unreachable (or missing from
            the map, or the iteration limit was hit first)
        """
        if self.start == self.goal:
            return PathResult(0.0, (self.start,))
        if not self.map.has_point(self.goal.x, self.goal.y):
            return None

        g_cost: dict[Point, float] = {self.start: 0.0}
        came_from: dict[Point, Point] = {}
        closed: set[Point] = set()
        queue: list[tuple[float, Point]] = [(self.heuristic(self.start, self.goal), self.start)]
        iterations = 0

        while queue:
            if self.max_iterations is not None and iterations >= self.max_iterations:
                logger.warning("path_finder: gave up after %d iterations", iterations)
                return None
            iterations += 1

            _, current = heapq.heappop(queue)
            if current in closed:
                continue
            closed.add(current)

            if current == self.goal:
                points = _reconstruct_path(current, came_from)
                logger.debug(
                    "path_finder: %d steps, cost=%s, iterations=%d",
                    len(points) - 1,
                    g_cost[current],
                    iterations,
                )
                return PathResult(g_cost[current], tuple(points))

            for neighbor, step_cost in self._neighbors(current):
                if neighbor in closed:
                    continue
                tentative = g_cost[current] + step_cost
                if neighbor not in g_cost or tentative < g_cost[neighbor]:
                    g_cost[neighbor] = tentative
                    came_from[neighbor] = current
                    heapq.heappush(queue, (tentative + self.heuristic(neighbor, self.goal), neighbor))

        return None  # no path


def _reconstruct_path(end: Point, came_from: dict[Point, Point]) -> list[Point]:
    """Walk parents back to the start; returns [start .. end]."""
    path = [end]
    while path[-1] in came_from:
        path.append(came_from[path[-1]])
    path.reverse()
    return path
