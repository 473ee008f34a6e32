"""Tests for path_finder module."""

import pytest

from map_parser import parse_map
from path_finder import PathFinder, PathResult, taxicab_distance
from taxicab_map import TaxicabMap
from taxicab_types import Point


def unit_cost(point: Point, value: object) -> float:
    return 1.0


def not_wall(point: Point, value: str) -> bool:
    return value != "#"


class TestPathFinder:
    """Tests for the A* path finder."""

    def test_straight_path(self) -> None:
        """An open row is walked directly."""
        m = TaxicabMap.rectangle(4, 1, ".")
        result = m.path_finder(Point(0, 0), Point(3, 0)).with_cost(unit_cost).solve()
        assert result == PathResult(3.0, (Point(0, 0), Point(1, 0), Point(2, 0), Point(3, 0)))
        assert len(result) == 4

    def test_start_is_goal(self) -> None:
        """The trivial path costs nothing."""
        m = TaxicabMap.square(2, ".")
        assert m.path_finder(Point(1, 1), Point(1, 1)).solve() == PathResult(0.0, (Point(1, 1),))

    def test_routes_around_walls(self) -> None:
        """Walls force a detour."""
        m = parse_map(
            """
            ...
            .#.
            .#.
            """
        )
        result = (
            m.path_finder(Point(0, 0), Point(2, 0))
            .with_passable(not_wall)
            .with_cost(unit_cost)
            .solve()
        )
        assert result is not None
        assert result.cost == 6.0
        assert result.points[0] == Point(0, 0)
        assert result.points[-1] == Point(2, 0)
        assert all(m.get_point(p.x, p.y) != "#" for p in result.points)
        assert all(taxicab_distance(a, b) == 1 for a, b in zip(result.points, result.points[1:]))

    def test_unreachable_goal(self) -> None:
        """A walled-off goal gives None."""
        m = parse_map(".#.")
        assert m.path_finder(Point(0, 0), Point(2, 0)).with_passable(not_wall).solve() is None

    def test_goal_outside_map(self) -> None:
        """A goal with no cell gives None."""
        m = TaxicabMap.square(2, ".")
        assert m.path_finder(Point(0, 0), Point(5, 5)).solve() is None

    def test_wrap_shortcut(self) -> None:
        """Wrapping makes the far edge adjacent."""
        m = TaxicabMap.rectangle(6, 1, ".").with_cycle(True, False)
        result = m.path_finder(Point(0, 0), Point(5, 0)).with_cost(unit_cost).solve()
        assert result == PathResult(1.0, (Point(0, 0), Point(5, 0)))

    def test_weighted_costs(self) -> None:
        """Expensive cells are avoided when a cheaper detour exists."""
        m = parse_map(
            """
            ...
            .~.
            ...
            """
        )
        costs = {".": 1.0, "~": 10.0}
        result = (
            m.path_finder(Point(1, 0), Point(1, 2))
            .with_cost(lambda point, value: costs[value])
            .solve()
        )
        assert result is not None
        assert result.cost == 4.0
        assert Point(1, 1) not in result.points

    def test_heuristic_gives_same_cost(self) -> None:
        """An admissible heuristic does not change the optimum."""
        m = parse_map(
            """
            ......
            .####.
            ......
            """
        )
        finder = (
            m.path_finder(Point(0, 1), Point(5, 1))
            .with_passable(not_wall)
            .with_cost(unit_cost)
            .with_heuristic(lambda point, goal: float(taxicab_distance(point, goal)))
        )
        assert isinstance(finder, PathFinder)
        result = finder.solve()
        assert result is not None
        assert result.cost == 7.0

    def test_max_iterations(self) -> None:
        """An iteration cap abandons the search."""
        m = TaxicabMap.square(10, ".")
        finder = m.path_finder(Point(0, 0), Point(9, 9)).with_cost(unit_cost).with_max_iterations(2)
        assert finder.solve() is None


class TestTaxicabDistance:
    """Tests for the distance helper."""

    @pytest.mark.parametrize(
        "a,b,expected",
        [
            (Point(0, 0), Point(0, 0), 0),
            (Point(0, 0), Point(3, 4), 7),
            (Point(-2, 1), Point(1, -1), 5),
        ],
    )
    def test_distance(self, a: Point, b: Point, expected: int) -> None:
        """Sum of absolute axis differences."""
        assert taxicab_distance(a, b) == expected
