# --- START OF FILE phosphor_snake/grid.py ---

import numpy as np
from enum import Enum
from typing import Iterable, List, Optional, Tuple

# ---------------- Constants ---------------- #
GRID_SIZE = 24 # Cells per side of the square board
MIN_GRID_SIZE = 4 # Smallest board that fits the 3-segment starting snake

# Values used in the occupancy grid (see Grid.occupancy)
CELL_EMPTY = 0
CELL_BODY = 1
CELL_HEAD = 2
CELL_FRUIT = 3

Cell = Tuple[int, int] # (x, y), 0 <= x, y < size


class Direction(Enum):
    """The four movement directions. Values are unit vectors (dx, dy), y grows downwards."""
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))


class Grid:
    """
    Fixed-size square lattice the snake moves on.
    Holds no mutable state, every method is a pure query.
    """

    def __init__(self, size: int = GRID_SIZE):
        if size < MIN_GRID_SIZE:
            raise ValueError(f"Grid size must be at least {MIN_GRID_SIZE}, got {size}")
        self.size = size

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.size and 0 <= y < self.size

    def neighbour(self, cell: Cell, direction: Direction) -> Cell:
        """Cell one unit away in `direction`. May be out of bounds."""
        dx, dy = direction.value
        return (cell[0] + dx, cell[1] + dy)

    def center(self) -> int:
        return self.size // 2

    @property
    def area(self) -> int:
        return self.size * self.size

    def occupancy(self, snake: Iterable[Cell], fruit: Optional[Cell] = None) -> np.ndarray:
        """
        Returns the board as a 2D array indexed [y, x].
        Body cells are CELL_BODY, the head (last cell of `snake`) is CELL_HEAD,
        the fruit is CELL_FRUIT, everything else CELL_EMPTY.
        """
        grid = np.full((self.size, self.size), CELL_EMPTY, dtype=np.int8)
        if fruit is not None and self.in_bounds(fruit):
            grid[fruit[1], fruit[0]] = CELL_FRUIT

        head = None
        for x, y in snake:
            if 0 <= x < self.size and 0 <= y < self.size:
                grid[y, x] = CELL_BODY
                head = (x, y)
        # Head placed last so it overwrites the body value
        if head is not None:
            grid[head[1], head[0]] = CELL_HEAD
        return grid

    def free_cells(self, occupied: Iterable[Cell]) -> List[Cell]:
        """All in-bounds cells not present in `occupied`, row-major order."""
        grid = self.occupancy(occupied)
        # argwhere yields (row, col) == (y, x)
        return [(int(x), int(y)) for y, x in np.argwhere(grid == CELL_EMPTY)]

# --- END OF FILE phosphor_snake/grid.py ---
