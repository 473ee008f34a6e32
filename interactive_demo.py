"""
Interactive demo for taxicab maps.
Move an actor around a map and watch its action field update.
"""

import logging
import sys

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from action_field import Expansion, FieldRules
from ascii_render import render_map
from map_parser import parse_map
from taxicab_map import TaxicabMap
from taxicab_types import Direction, Point

# Cell symbol -> cost of stepping in; symbols not listed are impassable
TERRAIN_COSTS = {
    ".": 1.0,
    ",": 2.0,  # Rough ground
    "~": 3.0,  # Shallow water
}

LAYOUTS = dict(
    meadow="""
        ............
        ..,,,...#...
        ..,,,...#...
        ........#~~.
        ..####..#~~.
        ........,,,.
        ............
    """,
    maze="""
        #.#########
        #...#.....#
        ###.#.###.#
        #...#...#.#
        #.#####.#.#
        #.......#..
        #########.#
    """,
)


def passable(point: Point, value: str) -> bool:
    return value in TERRAIN_COSTS


def terrain_cost(point: Point, value: str) -> float:
    return TERRAIN_COSTS[value]


class InteractiveDemo:
    """Interactive demo for action fields."""

    def __init__(self, taxicab_map: TaxicabMap[str], start: Point, budget: float = 4.0) -> None:
        self.map = taxicab_map
        self.actor = start
        self.budget = budget
        self.rules = FieldRules()
        self.console = Console()
        self.status_message = "Ready"

    def solve_field(self) -> list[tuple[float, Point]]:
        solver = (
            self.map.action_field(self.actor, self.budget, self.rules)
            .with_passable(passable)
            .with_cost(terrain_cost)
        )
        return list(solver.solve())

    def generate_display(self) -> Panel:
        """Generate the current display with map and status."""
        field = self.solve_field()
        map_text = render_map(self.map, highlight=self.actor, field=field, cell_width=2)

        status = Text()
        status.append("Actor: ", style="bold")
        status.append(f"({self.actor.x}, {self.actor.y})   ")
        status.append("Budget: ", style="bold")
        status.append(f"{self.budget:g}   ")
        status.append("Reachable: ", style="bold")
        status.append(f"{len(field)}\n")
        status.append("Wrap: ", style="bold")
        status.append(f"{self.map.get_cycle()}   ")
        status.append("Expansion: ", style="bold")
        status.append(f"{self.rules.expansion.value}\n\n")

        # Convert ANSI-colored map text to Rich Text
        status.append(Text.from_ansi(map_text))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  W/A/S/D or arrows - Move actor\n")
        status.append("  +/- - Change budget\n")
        status.append("  C - Toggle wrap on both axes\n")
        status.append("  M - Toggle expansion order\n")
        status.append("  Q - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Taxicab Map Action Field Demo", border_style="green", width=80)

    def attempt_move(self, direction: Direction) -> None:
        """Step the actor one cell if the target is passable."""
        target = self.map.canonical_point(*direction.step(self.actor).as_tuple())
        if target is None:
            self.status_message = f"✗ Move {direction} blocked: edge of map"
            return
        value = self.map.get_point(target.x, target.y)
        if not passable(target, value):
            self.status_message = f"✗ Move {direction} blocked by '{value}'"
            return
        self.actor = target
        self.status_message = f"✓ Moved {direction} to ({target.x}, {target.y})"

    def toggle_cycle(self) -> None:
        cycle_x, cycle_y = self.map.get_cycle()
        self.map.set_cycle(not cycle_x, not cycle_y)
        self.status_message = f"Wrap set to {self.map.get_cycle()}"

    def toggle_expansion(self) -> None:
        expansion = (
            Expansion.LEAST_COST
            if self.rules.expansion is Expansion.COORDINATE_ORDER
            else Expansion.COORDINATE_ORDER
        )
        self.rules = FieldRules(expansion=expansion)
        self.status_message = f"Expansion set to {expansion.value}"

    def run(self) -> None:
        """Run the interactive loop."""
        moves = {
            "w": Direction.N,
            "s": Direction.S,
            "a": Direction.W,
            "d": Direction.E,
            readchar.key.UP: Direction.N,
            readchar.key.DOWN: Direction.S,
            readchar.key.LEFT: Direction.W,
            readchar.key.RIGHT: Direction.E,
        }

        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())

                    key = readchar.readkey()
                    if key in moves or key.lower() in moves:
                        self.attempt_move(moves.get(key) or moves[key.lower()])
                    elif key.lower() == "q":
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key == "+":
                        self.budget += 1
                        self.status_message = f"Budget raised to {self.budget:g}"
                    elif key == "-":
                        self.budget = max(0.0, self.budget - 1)
                        self.status_message = f"Budget lowered to {self.budget:g}"
                    elif key.lower() == "c":
                        self.toggle_cycle()
                    elif key.lower() == "m":
                        self.toggle_expansion()
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


def main(taxicab_map: TaxicabMap[str]) -> None:
    """Run the interactive demo from the first passable cell."""
    start = next(Point(x, y) for x, y, value in taxicab_map if value in TERRAIN_COSTS)
    InteractiveDemo(taxicab_map, start).run()


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "sketch":
        # No terminal loop - just render one frame
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")

        demo = InteractiveDemo(parse_map(LAYOUTS["meadow"]), Point(5, 3))
        demo.console.print(demo.generate_display())
    else:
        main(parse_map(LAYOUTS[sys.argv[1] if len(sys.argv) > 1 else "meadow"]))
