from typing import List, Tuple

import matplotlib.pyplot as plt
from grid_world import OBSTACLE, TRAVERSABLE, GridWorld
from nav_config import FREE_GLYPH, OBSTACLE_GLYPH, PATH_GLYPH

Cell = Tuple[int, int]


def render_grid(world: GridWorld, show_steps: bool = False) -> str:
    """
    Render the grid as text, one line per row.

    Path cells print as '*', or as their step ordinals when show_steps is set.
    In that case every cell is padded to the width of the largest ordinal.
    """
    width = 1
    if show_steps:
        width = len(str(max(1, int(world.cells.max()))))

    lines = []
    for row in range(world.size):
        out = []
        for col in range(world.size):
            value = world.classify((row, col))
            if value == TRAVERSABLE:
                glyph = FREE_GLYPH
            elif value == OBSTACLE:
                glyph = OBSTACLE_GLYPH
            elif show_steps:
                glyph = str(value)
            else:
                glyph = PATH_GLYPH
            out.append(glyph.rjust(width) + " ")
        lines.append("".join(out))
    return "\n".join(lines)


def render_legend(with_path: bool = False) -> str:
    if with_path:
        return f"{PATH_GLYPH}: Path"
    return f"{FREE_GLYPH}: Traversable Area\n{OBSTACLE_GLYPH}: Obstacle"


def show_grid(world: GridWorld, ax=None) -> None:
    """
    Visualize the obstacle grid (N, N) with obstacles in black.
    """
    if ax is None:
        _, ax = plt.subplots()
    ax.imshow(world.get_occupancy_grid(), cmap="gray_r", origin="upper")
    ax.set_title("Obstacle Grid")
    ax.set_xlabel("col")
    ax.set_ylabel("row")


def show_path_on_grid(
    world: GridWorld,
    route: List[Cell],
    ax=None,
    color="red",
    label="A* Path",
) -> None:
    """
    Overlay a route of (row, col) cells on the grid visualization.

    Cell (row, col) is drawn at pixel (x=col, y=row).
    """
    if ax is None:
        _, ax = plt.subplots()

    ax.imshow(world.get_occupancy_grid(), cmap="gray_r", origin="upper")
    xs = [c[1] for c in route]
    ys = [c[0] for c in route]
    ax.plot(xs, ys, color=color, linewidth=2, label=label)
    ax.scatter(xs[0], ys[0], c="green", s=30, label="Start")
    ax.scatter(xs[-1], ys[-1], c="red", s=30, label="Goal")
    ax.set_title(label)
    ax.legend()
