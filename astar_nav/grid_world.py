# grid_world.py
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

Cell = Tuple[int, int]  # (row, col), row 0 is the top of the map

# Stored cell values. Any positive value k marks the k-th path step.
TRAVERSABLE = -1
OBSTACLE = -2

# 4-connected moves in expansion order: north, south, west, east.
DIRECTIONS: List[Cell] = [(-1, 0), (1, 0), (0, -1), (0, 1)]


class GridWorld:
    """
    Square grid world with blocked cells.

    Cells are stored in an (N, N) int32 array indexed as cells[row, col]:
        -1 = traversable
        -2 = obstacle
        k > 0 = step k of an annotated route
    """

    def __init__(self, cells: np.ndarray):
        """
        Parameters
        ----------
        cells : np.ndarray of shape (N, N)
            Initial cell values. The array is copied.
        """
        cells = np.asarray(cells)
        if cells.ndim != 2 or cells.shape[0] != cells.shape[1]:
            raise ValueError(f"Grid must be square, got shape {cells.shape}")
        if cells.shape[0] == 0:
            raise ValueError("Grid must have at least one cell")
        self.cells = cells.astype(np.int32, copy=True)
        self.size = self.cells.shape[0]

    @classmethod
    def empty(cls, size: int) -> "GridWorld":
        """
        Create a size x size world with every cell traversable.
        """
        return cls(np.full((size, size), TRAVERSABLE, dtype=np.int32))

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "GridWorld":
        """
        Build a world from text rows: '#' is an obstacle, anything else is free.
        """
        cells = np.array(
            [[OBSTACLE if ch == "#" else TRAVERSABLE for ch in row] for row in rows],
            dtype=np.int32,
        )
        return cls(cells)

    @classmethod
    def random_world(
        cls,
        size: int = 10,
        obstacle_ratio: float = 0.2,
        seed: int = None,
        start: Cell = (0, 0),
    ) -> "GridWorld":
        """
        Create a world with randomly placed single-cell obstacles.

        The obstacle count is size * size * percent // 100, with the ratio
        rounded to a whole percent. Random cells are drawn until that many
        distinct cells other than `start` are blocked.
        """
        if not 0.0 <= obstacle_ratio < 1.0:
            raise ValueError(f"obstacle_ratio must be in [0, 1), got {obstacle_ratio}")

        world = cls.empty(size)
        if not world.is_within_bounds(start):
            raise ValueError(f"Start cell {start} lies outside a {size}x{size} map")

        remaining = size * size * int(round(obstacle_ratio * 100)) // 100
        if remaining > size * size - 1:
            raise ValueError("Not enough free cells to place the requested obstacles")

        rng = np.random.RandomState(seed)
        while remaining > 0:
            row = int(rng.randint(size))
            col = int(rng.randint(size))
            if world.cells[row, col] == TRAVERSABLE and (row, col) != tuple(start):
                world.cells[row, col] = OBSTACLE
                remaining -= 1

        return world

    def is_within_bounds(self, cell: Cell) -> bool:
        row, col = cell
        return 0 <= row < self.size and 0 <= col < self.size

    def classify(self, cell: Cell) -> int:
        """
        Return the raw state of a cell: TRAVERSABLE, OBSTACLE or a step ordinal.
        """
        if not self.is_within_bounds(cell):
            raise IndexError(f"Cell {cell} lies outside a {self.size}x{self.size} map")
        row, col = cell
        return int(self.cells[row, col])

    def is_open(self, cell: Cell) -> bool:
        return self.is_within_bounds(cell) and self.classify(cell) == TRAVERSABLE

    def is_obstacle(self, cell: Cell) -> bool:
        return self.is_within_bounds(cell) and self.classify(cell) == OBSTACLE

    def neighbors(self, cell: Cell) -> List[Cell]:
        """
        In-bounds 4-connected neighbors in north, south, west, east order.
        """
        row, col = cell
        result: List[Cell] = []
        for dr, dc in DIRECTIONS:
            nb = (row + dr, col + dc)
            if self.is_within_bounds(nb):
                result.append(nb)
        return result

    def mark_step(self, cell: Cell, step: int) -> None:
        """
        Annotate a cell as step `step` of a route. Obstacles are never annotated.
        """
        if step < 1:
            raise ValueError(f"Step ordinals start at 1, got {step}")
        if self.classify(cell) == OBSTACLE:
            raise ValueError(f"Cannot mark obstacle cell {cell} as a path step")
        row, col = cell
        self.cells[row, col] = step

    def path_steps(self) -> Dict[Cell, int]:
        """
        Map every annotated cell to its step ordinal.
        """
        rows, cols = np.nonzero(self.cells > 0)
        return {
            (int(r), int(c)): int(self.cells[r, c]) for r, c in zip(rows, cols)
        }

    def clear_path(self) -> None:
        """
        Turn every annotated cell back into a traversable one.
        """
        self.cells[self.cells > 0] = TRAVERSABLE

    def get_grid(self) -> np.ndarray:
        """
        Return a copy of the raw cell values.
        """
        return self.cells.copy()

    def get_occupancy_grid(self) -> np.ndarray:
        """
        Return a binary copy of the grid (1 = obstacle, 0 = free), shape (N, N).
        """
        return (self.cells == OBSTACLE).astype(np.uint8)

    def sample_free_cell(
        self,
        rng: Optional[np.random.RandomState] = None,
        max_tries: int = 1000,
    ) -> Cell:
        """
        Randomly sample a traversable cell.

        If we fail max_tries times in a row, raise RuntimeError.
        """
        if rng is None:
            rng = np.random.RandomState()
        for _ in range(max_tries):
            cell = (int(rng.randint(self.size)), int(rng.randint(self.size)))
            if self.is_open(cell):
                return cell
        raise RuntimeError("Failed to sample a free cell within max_tries.")
