from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, Optional, Protocol

from .core import GAME_OVER_EVENT, BlockSmashGame, GameConfig, Move, TickResult


logger = logging.getLogger(__name__)


class AudioSink(Protocol):
    def play(self, name: str) -> None: ...

    def start_music(self) -> bool: ...

    def stop_all(self) -> None: ...


@dataclass
class SessionHandle:
    """A running game plus the collaborators it reports to.

    The handle is what a host keeps between frames: it forwards each tick's
    events to the audio sink and stops itself on game over.
    """

    game: BlockSmashGame
    audio: Optional[AudioSink] = None
    running: bool = True
    started_at: float = field(default_factory=time.monotonic)
    stopped_at: Optional[float] = None

    @property
    def config(self) -> GameConfig:
        return self.game.config

    @property
    def game_over(self) -> bool:
        return self.game.game_over

    @property
    def runtime(self) -> float:
        end = self.stopped_at if self.stopped_at is not None else time.monotonic()
        return end - self.started_at

    def push(self, move: Move) -> None:
        if self.running:
            self.game.push(move)

    def tick(self, moves: Optional[Iterable[Move]] = None) -> TickResult:
        if not self.running:
            return TickResult(game_over=self.game.game_over)
        result = self.game.tick(moves)
        if result.game_over:
            # stop() silences the session before cueing the game-over sound
            stop(self)
            return result
        if self.audio is not None:
            for name in result.events:
                self.audio.play(name)
        max_runtime = self.config.max_runtime
        if max_runtime is not None and self.runtime > max_runtime:
            stop(self)
        return result

    def stats(self) -> dict:
        stats = self.game.get_game_stats()
        stats["runtime"] = round(self.runtime, 3)
        stats["game_over"] = self.game.game_over
        return stats


def start(config: Optional[GameConfig] = None, audio: Optional[AudioSink] = None) -> SessionHandle:
    handle = SessionHandle(game=BlockSmashGame(config), audio=audio)
    if audio is not None:
        audio.start_music()
    return handle


def stop(handle: SessionHandle) -> None:
    if not handle.running:
        return
    handle.running = False
    handle.stopped_at = time.monotonic()
    if handle.audio is not None:
        handle.audio.stop_all()
        if handle.game.game_over:
            handle.audio.play(GAME_OVER_EVENT)
    logger.info("Game stopped. Stats: %s", handle.stats())


def restart(handle: SessionHandle) -> SessionHandle:
    stop(handle)
    return start(handle.config, handle.audio)
