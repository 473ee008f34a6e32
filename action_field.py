"""
Action field: every point an actor can reach from a start point for at most
a fixed budget of action points, with the cumulative cost of getting there.

Usage:
    solver = taxicab_map.action_field(Point(0, 0), 3.0)
    solver = solver.with_passable(lambda p, v: v != "#").with_cost(lambda p, v: 1.0)
    for cost, point in solver.solve():
        ...
"""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Generic, Iterator, TypeVar

from taxicab_types import Direction, Point

if TYPE_CHECKING:
    from taxicab_map import TaxicabMap

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Gate deciding whether a cell may be entered, given its point and value
Passable = Callable[[Point, T], bool]

# Cost of stepping into a cell, given its point and value
ActionCost = Callable[[Point, T], float]


class Expansion(Enum):
    """Order in which the open set is expanded."""

    COORDINATE_ORDER = "coordinate_order"  # Smallest point first, latest cost wins
    LEAST_COST = "least_cost"  # Cheapest point first, only strict improvements


@dataclass(frozen=True)
class FieldRules:
    """Rules governing action field expansion."""

    expansion: Expansion = Expansion.COORDINATE_ORDER
    max_expansions: int | None = None  # None = expand until the open set is empty


def always_passable(point: Point, value: object) -> bool:
    return True


def no_cost(point: Point, value: object) -> float:
    return 0.0


class ActionFieldSolver(Generic[T]):
    """
    Cost-bounded flood expansion over a TaxicabMap.

    The default COORDINATE_ORDER expansion pops the open point with the
    smallest coordinate and overwrites a neighbor's open cost on every
    visit. With non-uniform costs it can report more than the cheapest
    cost for a point. LEAST_COST expands cheapest-first and only keeps
    strictly better costs, which yields optimal costs for non-negative
    edge costs.

    Points are canonicalized to the map's own coordinates, so a wrapped map
    yields each cell at most once. The start point is always part of the
    result with cost 0.0 and is not checked against the passable gate.
    Costs above the budget are pruned, and a point reached with the whole
    budget spent is not expanded further, so a budget of 0 leaves the actor
    where it stands even when steps are free.

    A solver is one-shot: solve() may be called once.
    """

    def __init__(
        self,
        taxicab_map: TaxicabMap[T],
        start: Point,
        budget: float,
        rules: FieldRules | None = None,
    ) -> None:
        self.map = taxicab_map
        self.start = taxicab_map.canonical_point(start.x, start.y) or start
        self.budget = budget
        self.rules = rules if rules is not None else FieldRules()
        self.open: dict[Point, float] = {self.start: 0.0}
        self.closed: dict[Point, float] = {}
        self.passable: Passable[T] = always_passable
        self.action_cost: ActionCost[T] = no_cost
        self.expansions = 0
        self.truncated = False
        self._solved = False

    def with_passable(self, passable: Passable[T]) -> ActionFieldSolver[T]:
        self.passable = passable
        return self

    def with_cost(self, cost: ActionCost[T]) -> ActionFieldSolver[T]:
        self.action_cost = cost
        return self

    def with_rules(self, rules: FieldRules) -> ActionFieldSolver[T]:
        self.rules = rules
        return self

    def neighbors(self, point: Point) -> list[tuple[Point, float]]:
        """
        Existing, passable, not yet closed neighbors of point with their step cost.

        Cost is evaluated with the neighbor's point and value.
        """
        found: list[tuple[Point, float]] = []
        for direction in Direction:
            step = direction.step(point)
            key = self.map.canonical_point(step.x, step.y)
            # On a wrapped axis of extent 1 a point is its own neighbor
            if key is None or key == point or key in self.closed:
                continue
            value = self.map.get_point(key.x, key.y)
            if not self.passable(key, value):
                continue
            found.append((key, self.action_cost(key, value)))
        return found

    def _steps_from(self, point: Point, cost: float) -> list[tuple[Point, float]]:
        # A point that has spent the whole budget cannot act again, even for free
        if cost >= self.budget:
            return []
        return self.neighbors(point)

    def solve(self) -> Iterator[tuple[float, Point]]:
        """
        Expand the field and return (cost, point) pairs sorted by ascending cost.

        Ties keep coordinate order.

        Raises:
            RuntimeError: if the solver has already been solved
        """
        if self._solved:
            raise RuntimeError("ActionFieldSolver.solve() may only be called once")
        self._solved = True

        if self.rules.expansion is Expansion.LEAST_COST:
            self._expand_least_cost()
        else:
            self._expand_coordinate_order()

        logger.debug(
            "action_field: start=(%d, %d) budget=%s expansion=%s expanded=%d reached=%d",
            self.start.x,
            self.start.y,
            self.budget,
            self.rules.expansion.value,
            self.expansions,
            len(self.closed),
        )
        return iter(sorted((cost, point) for point, cost in self.closed.items()))

    def __iter__(self) -> Iterator[tuple[float, Point]]:
        return self.solve()

    def _limit_reached(self) -> bool:
        limit = self.rules.max_expansions
        if limit is None or self.expansions < limit:
            return False
        self.truncated = True
        logger.warning(
            "action_field: stopped after %d expansions with %d points still open",
            self.expansions,
            len(self.open),
        )
        return True

    def _expand_coordinate_order(self) -> None:
        # Heap of open points; a point is pushed once, when it enters the open set
        queue: list[Point] = list(self.open)
        heapq.heapify(queue)

        while queue:
            if self._limit_reached():
                return
            point = heapq.heappop(queue)
            cost = self.open.pop(point)
            self.expansions += 1

            for neighbor, step_cost in self._steps_from(point, cost):
                new_cost = cost + step_cost
                if new_cost > self.budget:
                    continue
                if neighbor not in self.open:
                    heapq.heappush(queue, neighbor)
                self.open[neighbor] = new_cost

            self.closed[point] = cost

    def _expand_least_cost(self) -> None:
        queue: list[tuple[float, Point]] = [(cost, point) for point, cost in self.open.items()]
        heapq.heapify(queue)

        while queue:
            cost, point = heapq.heappop(queue)
            # Skip stale entries superseded by a cheaper push
            if point in self.closed or cost > self.open.get(point, cost):
                continue
            if self._limit_reached():
                return
            del self.open[point]
            self.expansions += 1

            for neighbor, step_cost in self._steps_from(point, cost):
                new_cost = cost + step_cost
                if new_cost > self.budget:
                    continue
                if new_cost < self.open.get(neighbor, float("inf")):
                    self.open[neighbor] = new_cost
                    heapq.heappush(queue, (new_cost, neighbor))

            self.closed[point] = cost
