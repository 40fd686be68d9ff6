from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np


Coordinate = Tuple[int, int]


@dataclass
class Touch:
    above: bool = False
    below: bool = False
    left: bool = False
    right: bool = False

    def any(self) -> bool:
        return self.above or self.below or self.left or self.right


@dataclass
class FitResult:
    """Outcome of laying a shape over the board at an offset.

    `size` counts every occupied shape cell, `slots` only the in-grid board
    cells that are free, `blocked` the in-grid cells already taken. Off-grid
    cells are never collected, so a shape that overhangs the board does not fit.
    """

    fits: bool = False
    size: int = 0
    slots: List[Coordinate] = field(default_factory=list)
    blocked: int = 0
    touch: Touch = field(default_factory=Touch)


def analyze(shape_grid, board_grid, row_offset: int, col_offset: int) -> FitResult:
    """Check whether `shape_grid` fits `board_grid` at (row_offset, col_offset).

    Both grids may be numpy arrays or nested lists; any truthy cell counts as
    occupied. Touch flags are reported per direction for board edges and
    placed blocks, ignoring edges shared with the shape's own cells.
    """
    shape = np.asarray(shape_grid).astype(bool)
    board = np.asarray(board_grid).astype(bool)
    shape_h, shape_w = shape.shape
    board_h, board_w = board.shape

    result = FitResult()
    touch = result.touch
    for sr in range(shape_h):
        for sc in range(shape_w):
            if not shape[sr, sc]:
                continue
            result.size += 1
            br = row_offset + sr
            bc = col_offset + sc

            if br < 0:
                touch.above = True
                continue
            if br >= board_h:
                touch.below = True
                continue
            if bc < 0:
                touch.left = True
                continue
            if bc >= board_w:
                touch.right = True
                continue

            self_above = sr > 0 and shape[sr - 1, sc]
            self_below = sr + 1 < shape_h and shape[sr + 1, sc]
            self_left = sc > 0 and shape[sr, sc - 1]
            self_right = sc + 1 < shape_w and shape[sr, sc + 1]

            taken_above = br == 0 or board[br - 1, bc]
            taken_below = br == board_h - 1 or board[br + 1, bc]
            taken_left = bc == 0 or board[br, bc - 1]
            taken_right = bc == board_w - 1 or board[br, bc + 1]

            if taken_above and not self_above:
                touch.above = True
            if taken_below and not self_below:
                touch.below = True
            if taken_left and not self_left:
                touch.left = True
            if taken_right and not self_right:
                touch.right = True

            if board[br, bc]:
                result.blocked += 1
                continue
            result.slots.append((br, bc))

    result.fits = result.size == len(result.slots)
    return result
