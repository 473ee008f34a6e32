"""
Build TaxicabMaps from compact text layouts.
"""

from __future__ import annotations

from taxicab_map import TaxicabMap


def parse_map(
    layout: str,
    cycle_x: bool = False,
    cycle_y: bool = False,
    origin: tuple[int, int] = (0, 0),
) -> TaxicabMap[str]:
    """
    Parse a map from a text layout, one character per cell.

    Format:
    - Rows separated by | or newlines
    - Leading/trailing whitespace on each row and blank rows are ignored
    - The FIRST row is the TOP of the map (highest y), matching how
      render_map prints; the first character of a row has the lowest x

    Example:
        parse_map("ab|cd") creates a 2x2 map where
        (0, 1) = "a", (1, 1) = "b", (0, 0) = "c", (1, 0) = "d"

    Args:
        layout: The text layout
        cycle_x: Wrap flag for the x axis
        cycle_y: Wrap flag for the y axis
        origin: Absolute coordinate of the bottom-left cell

    Returns:
        TaxicabMap of single-character strings

    Raises:
        ValueError: If the layout is empty or rows differ in length
    """
    row_strings = [
        row.strip()
        for line in layout.split("\n")
        for row in line.split("|")
        if row.strip()
    ]
    if not row_strings:
        raise ValueError("Empty map layout")

    width = len(row_strings[0])
    mismatched = [(i, row) for i, row in enumerate(row_strings) if len(row) != width]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths in map layout\n"
            f"  Expected: {width} cells (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, row in mismatched:
            error_msg += f"    Row {row_idx}: {len(row)} cells - \"{row}\"\n"
        error_msg += "  All rows must have the same number of cells"
        raise ValueError(error_msg)

    height = len(row_strings)
    # storage[x][y]; text rows run top to bottom, y runs bottom to top
    storage = [[row_strings[height - 1 - j][i] for j in range(height)] for i in range(width)]
    return TaxicabMap(storage, cycle_x=cycle_x, cycle_y=cycle_y, origin_x=origin[0], origin_y=origin[1])
