from __future__ import annotations

import logging
import random
from typing import List, MutableSequence, Optional, Sequence, TypeVar

from .pieces import ActivePiece
from .shapes import PieceType, all_piece_types


logger = logging.getLogger(__name__)

T = TypeVar("T")


def shuffle(sequence: MutableSequence[T], rng: Optional[random.Random] = None) -> MutableSequence[T]:
    """Fisher-Yates shuffle in place; returns the same sequence."""
    rng = rng or random.Random()
    for i in range(len(sequence) - 1, 0, -1):
        j = rng.randrange(i + 1)
        sequence[i], sequence[j] = sequence[j], sequence[i]
    return sequence


class PieceBag:
    """Shuffled queue of upcoming piece types.

    Each refill keeps the last two entries and appends a freshly shuffled full
    set, so every type appears exactly once per refill cycle.
    """

    def __init__(self, rng: Optional[random.Random] = None, forced: Optional[Sequence[PieceType]] = None) -> None:
        self.rng = rng or random.Random()
        self.forced: Optional[List[PieceType]] = list(forced) if forced else None
        self.pieces: List[PieceType] = self._new_set()
        self.cursor = 0

    def _new_set(self) -> List[PieceType]:
        kinds = list(self.forced) if self.forced else all_piece_types()
        return list(shuffle(kinds, self.rng))

    def refill(self) -> bool:
        """Top the bag up when only two pieces remain; return True if it did."""
        if self.cursor < len(self.pieces) - 2:
            return False
        self.pieces = self.pieces[-2:] + self._new_set()
        self.cursor = 0
        logger.info("Generated new bag: %s", [kind.name for kind in self.pieces])
        return True

    def take(self) -> PieceType:
        self.refill()
        kind = self.pieces[self.cursor]
        self.cursor += 1
        return kind

    def next_piece(self, board_cols: int) -> ActivePiece:
        """Take the next type and spawn it centred, fully above the board."""
        return ActivePiece.spawn(self.take(), board_cols)

    def peek(self) -> PieceType:
        return self.pieces[self.cursor]

    def __len__(self) -> int:
        return len(self.pieces)
