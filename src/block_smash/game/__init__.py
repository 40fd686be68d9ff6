"""Game module for Block Smash.

Exports the falling-block engine and supporting pieces:
- shapes: piece catalog with rotation variants and color tags
- analyze / FitResult: collision, fit and touch detection
- PieceBag: shuffled, refillable piece sequence
- GameGrid: fixed-size board of locked blocks
- ScoringRules / evaluate: line-clear grouping and scoring
- BlockSmashGame: per-tick lock engine
- start / stop / restart: session control surface
"""

from .shapes import Color, PieceType, Shape, UnknownShapeError, lookup, rotation_count, wrap_rotation
from .fit import FitResult, Touch, analyze
from .pieces import ActivePiece, PiecePhase
from .bag import PieceBag, shuffle
from .grid import GameGrid
from .rules import ClearEvent, ScoringRules, SmashResult, evaluate
from .core import BlockSmashGame, GameConfig, Move, TickResult
from .session import SessionHandle, restart, start, stop

__all__ = [
    "Color",
    "PieceType",
    "Shape",
    "UnknownShapeError",
    "lookup",
    "rotation_count",
    "wrap_rotation",
    "FitResult",
    "Touch",
    "analyze",
    "ActivePiece",
    "PiecePhase",
    "PieceBag",
    "shuffle",
    "GameGrid",
    "ClearEvent",
    "ScoringRules",
    "SmashResult",
    "evaluate",
    "BlockSmashGame",
    "GameConfig",
    "Move",
    "TickResult",
    "SessionHandle",
    "restart",
    "start",
    "stop",
]
