"""
Demonstration scripts for the taxicab map system.
"""

import logging

from action_field import Expansion, FieldRules
from ascii_render import render_field_costs, render_map
from map_parser import parse_map
from path_finder import taxicab_distance
from taxicab_map import DiamondPoints, TaxicabMap
from taxicab_types import Direction, Point


def ring_demo() -> None:
    """Demonstrate diamond rings, with and without wrap."""
    taxicab_map = TaxicabMap.square(7, ".")

    print("=" * 40)
    print("Diamond rings around (3, 3):")
    print("=" * 40)
    for n in range(4):
        points = list(DiamondPoints(3, 3, n))
        print(f"  n={n}: {len(points)} points, first {points[:3]}")
        for x, y in points:
            taxicab_map.set_point(x, y, str(n))
    print(render_map(taxicab_map, cell_width=2))
    print()

    print("=" * 40)
    print("Ring of radius 2 around the corner (0, 0):")
    print("=" * 40)
    print(f"  no wrap:   {list(taxicab_map.points_around(0, 0, 2))}")
    taxicab_map.set_cycle(True, True)
    print(f"  with wrap: {list(taxicab_map.points_around(0, 0, 2))}")


def origin_demo() -> None:
    """Demonstrate origin translation and growing the map."""
    taxicab_map = parse_map("ab|cd")

    print("=" * 40)
    print("Origin and extend:")
    print("=" * 40)
    print(f"  cells: {[(x, y, v) for x, y, v in taxicab_map]}")

    taxicab_map.set_origin(-1, -1)
    print(f"  origin (-1, -1): {[(x, y, v) for x, y, v in taxicab_map]}")

    taxicab_map.extend(Direction.E, 1, "+")
    print(f"  extend east: {taxicab_map.get_point(-1, 0)!r} now at (-1, 0)")

    taxicab_map.extend(Direction.E, 1, "*", preserve_coordinates=True)
    print(f"  extend east, preserving coordinates: {taxicab_map.get_point(-1, 0)!r} still at (-1, 0)")
    print(render_map(taxicab_map, cell_width=2))


def action_field_demo() -> None:
    """Compare the two expansion orders on uneven terrain."""
    costs = {".": 1.0, "~": 5.0}
    taxicab_map = parse_map(
        """
        .....
        .~~~.
        .~.~.
        .....
        """
    )
    start = Point(0, 0)

    for expansion in Expansion:
        field = list(
            taxicab_map.action_field(start, 6.0, FieldRules(expansion=expansion))
            .with_passable(lambda point, value: value in costs)
            .with_cost(lambda point, value: costs[value])
        )
        print("=" * 40)
        print(f"Action field from {start.as_tuple()}, budget 6, {expansion.value}:")
        print("=" * 40)
        print(render_field_costs(taxicab_map, field, cell_width=3))
        print()
        print(render_map(taxicab_map, highlight=start, field=field, cell_width=3))
        print()


def path_demo() -> None:
    """Find a path through a wrapped maze."""
    taxicab_map = parse_map(
        """
        .#...
        .#.#.
        ...#.
        """,
        cycle_x=True,
    )
    start, goal = Point(0, 2), Point(4, 2)
    result = (
        taxicab_map.path_finder(start, goal)
        .with_passable(lambda point, value: value != "#")
        .with_cost(lambda point, value: 1.0)
        .solve()
    )

    print("=" * 40)
    print(f"Path {start.as_tuple()} -> {goal.as_tuple()} with wrap on x:")
    print("=" * 40)
    print(f"  straight-line distance: {taxicab_distance(start, goal)}")
    if result is None:
        print("  no path")
        return
    print(f"  cost {result.cost:g}: {[p.as_tuple() for p in result.points]}")
    print(render_map(taxicab_map, field=[(0.0, p) for p in result.points], cell_width=2))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    ring_demo()
    print()
    origin_demo()
    print()
    action_field_demo()
    print()
    path_demo()
