from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Sequence, Tuple, Union

import numpy as np


class UnknownShapeError(LookupError):
    """Raised when a (piece type, rotation) pair is not in the catalog."""


class PieceType(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


class Color(IntEnum):
    EMPTY = 0
    RED = 1
    BLUE = 2
    ORANGE = 3
    YELLOW = 4
    PURPLE = 5
    TEAL = 6
    GREEN = 7


Cell = Tuple[int, int]


@dataclass(frozen=True)
class Shape:
    """One rotation variant of a piece family.

    `grid` is a read-only boolean matrix; rows/cols describe its bounding box,
    which may include empty padding rows and columns.
    """

    piece_type: PieceType
    rotation: int
    color: Color
    grid: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        grid = np.array(self.grid, dtype=bool)
        if grid.ndim != 2 or grid.size == 0:
            raise ValueError(f"shape grid for {self.piece_type.name}{self.rotation} must be a non-empty matrix")
        if not grid.any():
            raise ValueError(f"shape grid for {self.piece_type.name}{self.rotation} has no occupied cells")
        if self.rotation < 1:
            raise ValueError("rotation indices are 1-based")
        grid.setflags(write=False)
        object.__setattr__(self, "grid", grid)

    @property
    def rows(self) -> int:
        return int(self.grid.shape[0])

    @property
    def cols(self) -> int:
        return int(self.grid.shape[1])

    @property
    def cells(self) -> List[Cell]:
        return [(int(r), int(c)) for r, c in zip(*np.nonzero(self.grid))]

    @property
    def min_col(self) -> int:
        return int(np.flatnonzero(self.grid.any(axis=0))[0])

    @property
    def max_col(self) -> int:
        return int(np.flatnonzero(self.grid.any(axis=0))[-1])


COLORS: Dict[PieceType, Color] = {
    PieceType.I: Color.RED,
    PieceType.J: Color.BLUE,
    PieceType.L: Color.ORANGE,
    PieceType.O: Color.YELLOW,
    PieceType.S: Color.PURPLE,
    PieceType.T: Color.TEAL,
    PieceType.Z: Color.GREEN,
}

# Rotation variants in order; index 0 is rotation 1.
VARIANTS: Dict[PieceType, List[List[List[int]]]] = {
    PieceType.I: [
        [[0, 0, 0, 0],
         [1, 1, 1, 1],
         [0, 0, 0, 0],
         [0, 0, 0, 0]],
        [[0, 0, 1, 0],
         [0, 0, 1, 0],
         [0, 0, 1, 0],
         [0, 0, 1, 0]],
    ],
    PieceType.J: [
        [[1, 0, 0],
         [1, 1, 1],
         [0, 0, 0]],
        [[0, 1, 1],
         [0, 1, 0],
         [0, 1, 0]],
        [[0, 0, 0],
         [1, 1, 1],
         [0, 0, 1]],
        [[0, 1, 0],
         [0, 1, 0],
         [1, 1, 0]],
    ],
    PieceType.L: [
        [[0, 0, 1],
         [1, 1, 1],
         [0, 0, 0]],
        [[0, 1, 0],
         [0, 1, 0],
         [0, 1, 1]],
        [[0, 0, 0],
         [1, 1, 1],
         [1, 0, 0]],
        [[1, 1, 0],
         [0, 1, 0],
         [0, 1, 0]],
    ],
    PieceType.O: [
        [[1, 1],
         [1, 1]],
    ],
    PieceType.S: [
        [[0, 1, 1],
         [1, 1, 0],
         [0, 0, 0]],
        [[0, 1, 0],
         [0, 1, 1],
         [0, 0, 1]],
    ],
    PieceType.T: [
        [[0, 1, 0],
         [1, 1, 1],
         [0, 0, 0]],
        [[0, 1, 0],
         [0, 1, 1],
         [0, 1, 0]],
        [[0, 0, 0],
         [1, 1, 1],
         [0, 1, 0]],
        [[0, 1, 0],
         [1, 1, 0],
         [0, 1, 0]],
    ],
    PieceType.Z: [
        [[1, 1, 0],
         [0, 1, 1],
         [0, 0, 0]],
        [[0, 0, 1],
         [0, 1, 1],
         [0, 1, 0]],
    ],
}

CATALOG: Dict[Tuple[PieceType, int], Shape] = {
    (kind, index + 1): Shape(kind, index + 1, COLORS[kind], np.array(variant))
    for kind, variants in VARIANTS.items()
    for index, variant in enumerate(variants)
}


def _as_piece_type(piece_type: Union[PieceType, int, str]) -> PieceType:
    try:
        if isinstance(piece_type, str):
            return PieceType[piece_type]
        return PieceType(piece_type)
    except (KeyError, ValueError):
        raise UnknownShapeError(f"unknown piece type: {piece_type!r}") from None


def all_piece_types() -> List[PieceType]:
    return list(VARIANTS)


def rotation_count(piece_type: Union[PieceType, int, str]) -> int:
    return len(VARIANTS[_as_piece_type(piece_type)])


def wrap_rotation(piece_type: Union[PieceType, int, str], rotation: int) -> int:
    """Wrap a 1-based rotation index into 1..count."""
    count = rotation_count(piece_type)
    if rotation < 1:
        return count
    if rotation > count:
        return 1
    return rotation


def lookup(piece_type: Union[PieceType, int, str], rotation: int) -> Shape:
    kind = _as_piece_type(piece_type)
    try:
        return CATALOG[(kind, int(rotation))]
    except KeyError:
        raise UnknownShapeError(f"no shape {kind.name} with rotation {rotation}") from None


def parse_piece_types(names: Sequence[str]) -> List[PieceType]:
    return [_as_piece_type(name.strip().upper()) for name in names]
