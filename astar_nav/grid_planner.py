import heapq
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from grid_world import OBSTACLE, Cell, GridWorld

logger = logging.getLogger(__name__)


class InvalidCellError(ValueError):
    """Raised when a start or goal cell cannot be used for a search."""


@dataclass
class SearchNode:
    """
    One frontier entry.

    `parent` is the index of the predecessor node in the search's node list,
    or None for the start node.
    """

    cell: Cell
    g: int
    h: int
    parent: Optional[int] = None

    @property
    def f(self) -> int:
        return self.g + self.h


@dataclass
class PathFound:
    """
    Result of a successful search: the node list and the goal node's index.
    """

    nodes: List[SearchNode]
    terminal: int
    expanded: int = 0
    pushed: int = 0

    def chain(self) -> List[SearchNode]:
        """
        Nodes from the goal back to the start, following parent indices.
        """
        result: List[SearchNode] = []
        idx: Optional[int] = self.terminal
        while idx is not None:
            node = self.nodes[idx]
            result.append(node)
            idx = node.parent
        return result

    def cells(self) -> List[Cell]:
        """
        Route cells in goal -> start order.
        """
        return [node.cell for node in self.chain()]

    def route(self) -> List[Cell]:
        """
        Route cells in start -> goal order.
        """
        return self.cells()[::-1]

    @property
    def length(self) -> int:
        """Number of cells on the route, start and goal included."""
        return self.cost + 1

    @property
    def cost(self) -> int:
        return self.nodes[self.terminal].g


def manhattan(a: Cell, b: Cell) -> int:
    """
    Manhattan distance between two cells. Admissible and consistent for
    unit-cost 4-connected moves.
    """
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _check_cells(world: GridWorld, start: Cell, goal: Cell) -> None:
    if not world.is_within_bounds(start):
        raise InvalidCellError(f"Start cell {start} is outside the map")
    if not world.is_within_bounds(goal):
        raise InvalidCellError(f"Goal cell {goal} is outside the map")
    if world.classify(start) == OBSTACLE:
        raise InvalidCellError(f"Start cell {start} is an obstacle")


def find_path(world: GridWorld, start: Cell, goal: Cell) -> Optional[PathFound]:
    """
    Run A* on the world grid.

    Parameters
    ----------
    world : GridWorld
        Grid to search. It is not modified.
    start, goal : (row, col) tuples
        Start and goal cells. Both must be in bounds and the start must not be
        an obstacle. An obstacle goal is allowed and simply cannot be reached.

    Returns
    -------
    PathFound for the first time the goal is finalized, or None if the
    frontier runs dry.
    """
    start = (int(start[0]), int(start[1]))
    goal = (int(goal[0]), int(goal[1]))
    _check_cells(world, start, goal)

    nodes: List[SearchNode] = [SearchNode(start, 0, manhattan(start, goal))]
    # (f, node index); the index grows monotonically so equal f pops FIFO.
    open_heap: List[Tuple[int, int]] = [(nodes[0].f, 0)]
    visited = np.zeros((world.size, world.size), dtype=bool)
    expanded = 0

    while open_heap:
        _, idx = heapq.heappop(open_heap)
        current = nodes[idx]
        row, col = current.cell

        # Stale duplicate of a cell that was already finalized.
        if visited[row, col]:
            continue
        visited[row, col] = True
        expanded += 1

        if current.cell == goal:
            logger.debug(
                "path found %s -> %s: cost=%d expanded=%d pushed=%d",
                start, goal, current.g, expanded, len(nodes),
            )
            return PathFound(
                nodes=nodes, terminal=idx, expanded=expanded, pushed=len(nodes)
            )

        for nb in world.neighbors(current.cell):
            if not world.is_open(nb) or visited[nb[0], nb[1]]:
                continue
            nodes.append(SearchNode(nb, current.g + 1, manhattan(nb, goal), idx))
            heapq.heappush(open_heap, (nodes[-1].f, len(nodes) - 1))

    logger.debug(
        "no path %s -> %s: expanded=%d pushed=%d", start, goal, expanded, len(nodes)
    )
    return None


def annotate_path(world: GridWorld, result: PathFound) -> int:
    """
    Write step ordinals along the found route, in place.

    Numbering follows the parent chain: the goal gets 1 and the start gets
    the route length. Returns that length.
    """
    step = 0
    for node in result.chain():
        step += 1
        world.mark_step(node.cell, step)
    return step


def validate_destination(world: GridWorld, cell: Cell) -> None:
    """
    Reject destinations that are off the map or blocked.
    """
    if not world.is_within_bounds(cell):
        raise InvalidCellError("Exceeded map boundaries.")
    if world.classify(cell) == OBSTACLE:
        raise InvalidCellError(
            "The destination cannot be set in an area with an obstacle."
        )


def plan_route(world: GridWorld, start: Cell, goal: Cell) -> Optional[List[Cell]]:
    """
    High-level helper:
    1. Validate the goal.
    2. Run A* on the world.
    3. Annotate the grid and return the route from start to goal.

    Returns None (grid untouched) if no path is found.
    """
    validate_destination(world, goal)

    result = find_path(world, start, goal)
    if result is None:
        return None

    annotate_path(world, result)
    return result.route()
