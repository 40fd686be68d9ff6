from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .bag import PieceBag
from .fit import FitResult, analyze
from .grid import GameGrid
from .pieces import ActivePiece, PiecePhase
from .rules import ClearEvent, ScoringRules, evaluate
from .shapes import PieceType, Shape, lookup, wrap_rotation


logger = logging.getLogger(__name__)

STANDARD_COLS = 10
MIN_ROWS, MAX_ROWS = 20, 22

LOCK_EVENT = "lock"
GAME_OVER_EVENT = "gameover"


class Move(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_UP = 2
    ROTATE_DOWN = 3
    SOFT_DROP_START = 4
    SOFT_DROP_STOP = 5


@dataclass
class GameConfig:
    cols: int = STANDARD_COLS
    rows: int = MIN_ROWS
    speed: float = 1 / 9
    soft_drop_multiplier: float = 10.0
    lock_delay: int = 40
    forced_shapes: Optional[Sequence[PieceType]] = None
    random_seed: Optional[int] = None
    max_runtime: Optional[float] = None

    def __post_init__(self) -> None:
        if self.cols != STANDARD_COLS:
            raise ValueError(f"boards are {STANDARD_COLS} columns wide, got {self.cols}")
        if not MIN_ROWS <= self.rows <= MAX_ROWS:
            raise ValueError(f"boards have {MIN_ROWS}-{MAX_ROWS} rows, got {self.rows}")
        if self.speed <= 0 or self.soft_drop_multiplier <= 0:
            raise ValueError("speed and soft drop multiplier must be positive")
        if self.lock_delay < 0:
            raise ValueError("lock delay cannot be negative")


@dataclass
class TickResult:
    events: List[str] = field(default_factory=list)
    clears: List[ClearEvent] = field(default_factory=list)
    points: int = 0
    locked: bool = False
    game_over: bool = False


class BlockSmashGame:
    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.reset()
        logger.info("Created new game: %dx%d, first piece %s", self.grid.height, self.grid.width, self.current.kind.name)

    def reset(self) -> None:
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.cols, self.config.rows)
        self.bag = PieceBag(self.rng, self.config.forced_shapes)
        self.current: ActivePiece = self.bag.next_piece(self.grid.width)
        self.inputs: List[Move] = []
        self.soft_drop = False
        self.ticks = 0.0
        self.tick_count = 0
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.game_over = False

    # Input

    def push(self, move: Move) -> None:
        try:
            self.inputs.append(Move(move))
        except ValueError:
            raise ValueError(f"unknown move: {move!r}") from None

    def fits_at(self, rotation: int, row: int, col: int) -> FitResult:
        shape = lookup(self.current.kind, rotation)
        return analyze(shape.grid, self.grid.grid, row, col)

    def clamp_col(self, rotation: int, col: int) -> int:
        """Keep the occupied columns of the rotated shape on the board."""
        shape = lookup(self.current.kind, rotation)
        lowest = -shape.min_col
        highest = self.grid.width - 1 - shape.max_col
        return max(lowest, min(highest, col))

    def candidate(self, move: Move, rotation: int, col: int) -> Tuple[int, int]:
        if move == Move.ROTATE_UP:
            rotation = wrap_rotation(self.current.kind, rotation - 1)
        elif move == Move.ROTATE_DOWN:
            rotation = wrap_rotation(self.current.kind, rotation + 1)
        elif move == Move.LEFT:
            col -= 1
        elif move == Move.RIGHT:
            col += 1
        return rotation, self.clamp_col(rotation, col)

    def apply_moves(self) -> int:
        """Replay buffered moves in order; return how many were accepted."""
        accepted = 0
        rotation, col = self.current.rotation, self.current.col
        for move in self.inputs:
            if move == Move.SOFT_DROP_START:
                self.soft_drop = True
                continue
            if move == Move.SOFT_DROP_STOP:
                self.soft_drop = False
                continue
            cand_rotation, cand_col = self.candidate(move, rotation, col)
            if self.fits_at(cand_rotation, self.current.row, cand_col).fits:
                rotation, col = cand_rotation, cand_col
                accepted += 1
            else:
                logger.debug("Rejected %s for %s at row %d", move.name, self.current.kind.name, self.current.row)
        self.current.rotation = rotation
        self.current.col = col
        self.inputs = []
        return accepted

    # Stepping

    def gravity_step(self) -> bool:
        self.ticks += self.config.speed * (self.config.soft_drop_multiplier if self.soft_drop else 1.0)
        if self.ticks >= 1.0:
            self.ticks = 0.0
            return True
        return False

    def tick(self, moves: Optional[Iterable[Move]] = None) -> TickResult:
        result = TickResult()
        if self.game_over:
            result.game_over = True
            return result

        for move in moves or ():
            self.push(move)
        self.apply_moves()
        move_down = self.gravity_step()
        self.tick_count += 1

        piece = self.current
        shape = piece.shape()
        fit = analyze(shape.grid, self.grid.grid, piece.row, piece.col)

        # Near the top, resting on the stack or overlapping it ends the game
        if not fit.fits and piece.row <= 0 and (fit.touch.below or fit.blocked):
            logger.info("Board topped out with %s at row %d", piece.kind.name, piece.row)
            self.game_over = True
            result.game_over = True
            result.events.append(GAME_OVER_EVENT)
            return result

        if fit.touch.below:
            piece.phase = PiecePhase.TOUCHING
            piece.delay += 1
            if piece.delay > self.config.lock_delay and fit.fits:
                self._lock(shape, fit, result)
        elif (piece.row < 0 or fit.fits) and move_down:
            piece.phase = PiecePhase.FALLING
            piece.row += 1
        return result

    def _lock(self, shape: Shape, fit: FitResult, result: TickResult) -> None:
        self.grid.place(fit.slots, int(shape.color))
        self.current.phase = PiecePhase.LOCKED
        self.pieces_locked += 1
        result.locked = True
        result.events.append(LOCK_EVENT)
        self.current = self.bag.next_piece(self.grid.width)

        smashed = evaluate(self.grid.grid, self.rules)
        if smashed:
            self.grid.smash(smashed)
            self.score += smashed.points
            self.lines_cleared_total += len(smashed.rows)
            result.points = smashed.points
            result.clears = list(smashed.events)
            result.events.extend(event.name for event in smashed.events)

    # Renderer sink

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if not self.game_over:
            value = int(self.current.color)
            for row, col in self.current.cells():
                if self.grid.is_inside(row, col) and state[row, col] == 0:
                    # Use negative to indicate falling piece overlay
                    state[row, col] = -value
        return state

    def piece_bounds(self) -> Tuple[int, int, int, int]:
        return self.current.bounds()

    def preview(self) -> Shape:
        return lookup(self.bag.peek(), 1)

    def get_game_stats(self) -> dict:
        return {
            "final_score": self.score,
            "pieces_locked": self.pieces_locked,
            "lines_cleared": self.lines_cleared_total,
            "ticks": self.tick_count,
            "max_height": self.grid.get_max_height(),
        }
