from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple

from .shapes import Color, PieceType, Shape, lookup


class PiecePhase(IntEnum):
    FALLING = 0
    TOUCHING = 1
    LOCKED = 2


@dataclass
class ActivePiece:
    """The falling piece: its shape variant and board-relative offset.

    `row` is negative while the piece is still emerging above the board;
    `delay` counts ticks spent touching something below.
    """

    kind: PieceType
    rotation: int = 1
    row: int = 0
    col: int = 0
    delay: int = 0
    phase: PiecePhase = PiecePhase.FALLING

    @classmethod
    def spawn(cls, kind: PieceType, board_cols: int) -> "ActivePiece":
        shape = lookup(kind, 1)
        col = (board_cols - shape.cols) // 2
        return cls(kind=kind, rotation=1, row=-shape.rows, col=col)

    def shape(self) -> Shape:
        return lookup(self.kind, self.rotation)

    @property
    def color(self) -> Color:
        return self.shape().color

    def cells_at(self, origin_row: int, origin_col: int) -> List[Tuple[int, int]]:
        return [(origin_row + r, origin_col + c) for r, c in self.shape().cells]

    def cells(self) -> List[Tuple[int, int]]:
        return self.cells_at(self.row, self.col)

    def bounds(self) -> Tuple[int, int, int, int]:
        shape = self.shape()
        return self.row, self.col, shape.rows, shape.cols
