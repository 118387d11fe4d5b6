"""Board representation for the playfield."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from .screen import MAX_DIMENSION


# Dimensions of the standard board.
WIDTH = 10
HEIGHT = 20

# Cells framing the board on screen on each side.
BORDER = 1

# ``0`` marks an empty cell; anything else is the colour code of the block.
EMPTY = 0

Grid = NDArray[np.uint8]


class BoardSizeError(ValueError):
    """Raised when a board cannot be represented on the rendering surface."""


def create_empty_grid(width: int = WIDTH, height: int = HEIGHT) -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((height, width), dtype=np.uint8)


class Board:
    """Grid of optionally occupied cells addressed as ``(x, y)``.

    Row ``0`` is the top of the playfield.  The grid is stored row-major so
    ``grid[y, x]`` is the cell in column ``x`` of row ``y``.
    """

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise BoardSizeError(f"Board dimensions must be positive, got {width}x{height}")
        if width + 2 * BORDER > MAX_DIMENSION or height + 2 * BORDER > MAX_DIMENSION:
            raise BoardSizeError(f"Board {width}x{height} does not fit on a screen")
        self.width = width
        self.height = height
        self.grid: Grid = create_empty_grid(width, height)

    def _require(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Cell ({x}, {y}) out of bounds")

    def is_occupied(self, x: int, y: int) -> bool:
        """Return ``True`` if the cell at ``(x, y)`` holds a block.

        Raises:
            IndexError: If the coordinates are outside the board.
        """

        self._require(x, y)
        return bool(self.grid[y, x] != EMPTY)

    def color_at(self, x: int, y: int) -> int:
        """Return the colour code stored at ``(x, y)`` (``0`` when empty)."""

        self._require(x, y)
        return int(self.grid[y, x])

    def set_cell(self, x: int, y: int, color: int) -> None:
        """Occupy ``(x, y)`` with a block of ``color``.

        Raises:
            IndexError: If the coordinates are outside the board.
            ValueError: If ``color`` would mark the cell as empty.
        """

        self._require(x, y)
        if not 0 < int(color) <= 0xFF:
            raise ValueError(f"Invalid cell colour {color!r}")
        self.grid[y, x] = np.uint8(int(color))

    def clear_cell(self, x: int, y: int) -> None:
        self._require(x, y)
        self.grid[y, x] = EMPTY

    def row_is_full(self, y: int) -> bool:
        if not 0 <= y < self.height:
            raise IndexError(f"Row {y} out of bounds")
        return bool(np.all(self.grid[y] != EMPTY))

    def clear_full_rows(self) -> int:
        """Clear completed rows and return how many were removed.

        Surviving rows keep their relative order and drop down by the number
        of cleared rows beneath them; fresh empty rows are inserted on top.
        """

        full_rows = np.all(self.grid != EMPTY, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = self.grid[~full_rows]
            new_rows = np.zeros((cleared, self.width), dtype=self.grid.dtype)
            self.grid = np.vstack((new_rows, remaining))
        return cleared

    def copy_grid(self) -> Grid:
        return self.grid.copy()
