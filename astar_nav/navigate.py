"""
Interactive A* navigation on a random grid.

A random map is generated and printed, then the user is asked for a
destination cell. The route from the start cell is found with A* and printed
on the map, or the user is told that the destination cannot be reached.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import matplotlib.pyplot as plt
from grid_planner import (
    InvalidCellError,
    annotate_path,
    find_path,
    validate_destination,
)
from grid_world import Cell, GridWorld
from nav_config import MAP_SIZE, OBSTACLE_RATIO, START_CELL
from visualize_world import render_grid, render_legend, show_path_on_grid

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ABORTED = 1
EXIT_NO_PATH = 2


def parse_destination(text: str) -> Cell:
    """
    Parse "row col" into a cell. Raises InvalidCellError on malformed input.
    """
    parts = text.split()
    if len(parts) != 2:
        raise InvalidCellError("Exceeded map boundaries.")
    try:
        return (int(parts[0]), int(parts[1]))
    except ValueError:
        raise InvalidCellError("Exceeded map boundaries.") from None


def prompt_destination(world: GridWorld, start: Cell) -> Optional[Cell]:
    """
    Ask for a destination until a free in-bounds cell is given.

    Returns None if input ends before a valid destination is read.
    """
    while True:
        print("\nStarting the pathfinding using A* algorithm.")
        print(f"Your car is currently at ({start[0]}, {start[1]}).")
        try:
            text = input(
                "Enter the row and column of the desired destination. "
                f"(0-{world.size - 1}, e.g., 5 5): "
            )
        except EOFError:
            return None

        try:
            goal = parse_destination(text)
            validate_destination(world, goal)
        except InvalidCellError as exc:
            logger.debug("rejected destination %r: %s", text, exc)
            print(f"\n!!! ERROR: {exc}")
            continue
        return goal


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find a route on a random grid map with A*."
    )
    parser.add_argument(
        "--size",
        type=int,
        default=MAP_SIZE,
        help="Side length of the square map.",
    )
    parser.add_argument(
        "--obstacle-ratio",
        type=float,
        default=OBSTACLE_RATIO,
        help="Fraction of cells turned into obstacles.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for the obstacle layout.",
    )
    parser.add_argument(
        "--start",
        type=int,
        nargs=2,
        default=list(START_CELL),
        metavar=("ROW", "COL"),
        help="Start cell of the car.",
    )
    parser.add_argument(
        "--show-steps",
        action="store_true",
        help="Print step numbers instead of '*' on the route.",
    )
    parser.add_argument(
        "--plot",
        action="store_true",
        help="Show the route with matplotlib after it is found.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    start: Cell = (args.start[0], args.start[1])
    try:
        world = GridWorld.random_world(
            size=args.size,
            obstacle_ratio=args.obstacle_ratio,
            seed=args.seed,
            start=start,
        )
    except ValueError as exc:
        parser.error(str(exc))
    logger.debug("generated %dx%d map, seed=%s", world.size, world.size, args.seed)

    print("\nHello! This program is <A* NAVIGATION> that finds the path to the destination!")
    print("\n    <Full Map>")
    print(render_grid(world))
    print("\n" + render_legend())

    goal = prompt_destination(world, start)
    if goal is None:
        print("\nNo destination given.")
        return EXIT_ABORTED

    result = find_path(world, start, goal)
    if result is None:
        print("\nNo path exists to the destination.")
        return EXIT_NO_PATH

    annotate_path(world, result)
    print("\n<Pathfinding Completed>")
    print(render_grid(world, show_steps=args.show_steps))
    print("\n" + render_legend(with_path=True))

    if args.plot:
        show_path_on_grid(world, result.route())
        plt.show()

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
