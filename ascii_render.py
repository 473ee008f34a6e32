"""
ASCII rendering for taxicab maps.

Provides two views:
1. render_map - colored cell symbols with an optional action field overlay
2. render_field_costs - plain text with the cumulative cost of each reached cell
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, TypeVar

from simple_chalk import chalk  # type: ignore[import-untyped]

from taxicab_map import TaxicabMap, relative_to_absolute
from taxicab_types import Point

logger = logging.getLogger(__name__)

T = TypeVar("T")

# A solved action field: (cost, point) pairs
Field = Iterable[tuple[float, Point]]


def _field_costs(field: Field | None) -> dict[Point, float]:
    if field is None:
        return {}
    return {point: cost for cost, point in field}


def _rows(taxicab_map: TaxicabMap[T]) -> Iterable[list[tuple[Point, T]]]:
    """Rows from top (highest y) to bottom, each left to right, at canonical coordinates."""
    width, height = taxicab_map.get_size()
    for j in range(height - 1, -1, -1):
        row: list[tuple[Point, T]] = []
        for i in range(width):
            x, y = relative_to_absolute(i, j, taxicab_map.origin_x, taxicab_map.origin_y)
            row.append((Point(x, y), taxicab_map.storage[i][j]))
        yield row


def render_map(
    taxicab_map: TaxicabMap[T],
    highlight: Point | None = None,
    field: Field | None = None,
    symbol_fn: Callable[[T], str] = str,
    cell_width: int = 1,
) -> str:
    """
    Render a map as lines of cell symbols.

    Args:
        taxicab_map: The map to render
        highlight: Optional point drawn with a white background (e.g. the actor)
        field: Optional solved action field; reached cells are drawn green
        symbol_fn: Converts a cell value to its symbol (default str)
        cell_width: Characters per cell; symbols are centered (default 1)

    Returns:
        The rendered map, one line per row, top row first
    """
    costs = _field_costs(field)
    if highlight is not None:
        highlight = taxicab_map.canonical_point(highlight.x, highlight.y)

    lines: list[str] = []
    for row in _rows(taxicab_map):
        line_parts: list[str] = []
        for point, value in row:
            symbol = symbol_fn(value)
            content = symbol if cell_width == 1 else symbol.center(cell_width)

            # Highlight wins over the field overlay
            if point == highlight:
                content = chalk.bgWhite.black(content)
            elif point in costs:
                content = chalk.green(content)
            line_parts.append(content)
        lines.append("".join(line_parts))

    logger.debug(
        "render_map: %dx%d, %d field cells", taxicab_map.width, taxicab_map.height, len(costs)
    )
    return "\n".join(lines)


def _format_cost(cost: float) -> str:
    return str(int(cost)) if float(cost).is_integer() else f"{cost:.1f}"


def render_field_costs(
    taxicab_map: TaxicabMap[T],
    field: Field,
    cell_width: int = 1,
    unreached: str = ".",
) -> str:
    """
    Render the cumulative cost of every reached cell, uncolored.

    Integral costs print as integers, others with one decimal. Each cell is
    right-aligned to cell_width; costs wider than cell_width are not cut.
    """
    costs = _field_costs(field)
    lines: list[str] = []
    for row in _rows(taxicab_map):
        cells = [
            (_format_cost(costs[point]) if point in costs else unreached).rjust(cell_width)
            for point, _ in row
        ]
        lines.append("".join(cells))
    return "\n".join(lines)
