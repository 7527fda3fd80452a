from __future__ import annotations

from enum import Enum

import numpy as np

from pygoblin.domain.cell import Cell
from pygoblin.domain.exceptions import OutOfBounds


class GridSize(Enum):
    # Square playing fields: rows == cols == value.
    SMALL = 20
    MEDIUM = 30
    LARGE = 40


MAX_SIDE = max(s.value for s in GridSize)


class Grid:
    """
    Cell contents of the playing field.

    Storage is allocated once at the largest supported size. Only the active
    rows x cols corner is ever read or written; everything past it is stale.
    """

    def __init__(self, size: GridSize = GridSize.MEDIUM) -> None:
        self._cells = np.full((MAX_SIDE, MAX_SIDE), Cell.EMPTY, dtype=np.int8)
        self._size = size
        self.resize(size)

    def resize(self, size: GridSize) -> None:
        self._size = size
        self._active()[:] = Cell.EMPTY

    @property
    def size(self) -> GridSize:
        return self._size

    @property
    def rows(self) -> int:
        return self._size.value

    @property
    def cols(self) -> int:
        return self._size.value

    @property
    def dimensions(self) -> tuple[int, int]:
        return self.rows, self.cols

    @property
    def bottom_row(self) -> int:
        return self.rows - 1

    @property
    def left_border(self) -> int:
        return 0

    @property
    def right_border(self) -> int:
        return self.cols - 1

    def interior_cells(self) -> int:
        return self.rows * (self.cols - 2)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell_at(self, row: int, col: int) -> Cell:
        self._check(row, col)
        return Cell(int(self._cells[row, col]))

    def set_cell(self, row: int, col: int, cell: Cell) -> None:
        self._check(row, col)
        self._cells[row, col] = cell

    def stamp_borders(self) -> None:
        active = self._active()
        active[:, self.left_border] = Cell.BORDER
        active[:, self.right_border] = Cell.BORDER

    def fill_interior(self, cell: Cell = Cell.EMPTY) -> None:
        self._active()[:, self.left_border + 1:self.right_border] = cell

    def count(self, cell: Cell) -> int:
        return int(np.count_nonzero(self._active() == cell))

    def replace_all(self, old: Cell, new: Cell) -> int:
        active = self._active()
        mask = active == old
        active[mask] = new
        return int(np.count_nonzero(mask))

    def snapshot(self) -> np.ndarray:
        # Copy, so callers cannot write around the active-region bookkeeping.
        return self._active().copy()

    def _active(self) -> np.ndarray:
        return self._cells[: self.rows, : self.cols]

    def _check(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise OutOfBounds(f"cell ({row}, {col}) outside active {self.rows}x{self.cols} grid")
