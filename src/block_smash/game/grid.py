from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np

from .rules import SmashResult, smash


Coordinate = Tuple[int, int]


class GameGrid:
    """Fixed-size board of placed blocks.

    Cells hold 0 when empty and a positive `Color` value once a piece has been
    locked there. Coordinates are (row, col) with row 0 at the top.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {self.width}x{self.height}")
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    @classmethod
    def from_rows(cls, rows) -> "GameGrid":
        data = np.asarray(rows, dtype=np.int8)
        if data.ndim != 2:
            raise ValueError("grid rows must form a 2D matrix")
        grid = cls(data.shape[1], data.shape[0])
        grid.grid[:, :] = data
        return grid

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def place(self, slots: Iterable[Coordinate], value: int) -> int:
        """Write `value` into every slot and return the number of cells placed."""
        placed = 0
        for row, col in slots:
            if not self.is_inside(row, col):
                raise IndexError(f"slot {(row, col)} is outside the {self.height}x{self.width} grid")
            self.grid[row, col] = value
            placed += 1
        return placed

    def smash(self, result: SmashResult) -> None:
        self.grid = smash(self.grid, result)

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != 0, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        top_index = int(non_empty_rows[0])
        return self.height - top_index

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            column = self.grid[:, x]
            seen_block = False
            for cell in column:
                if cell != 0:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
