from __future__ import annotations

from dataclasses import replace
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_smash.game import BlockSmashGame, GameConfig, Move
from block_smash.game.shapes import Color


class EnvAction(IntEnum):
    NONE = 0
    LEFT = 1
    RIGHT = 2
    ROTATE_UP = 3
    ROTATE_DOWN = 4
    SOFT_DROP_START = 5
    SOFT_DROP_STOP = 6


ACTION_TO_MOVE: Dict[EnvAction, Move] = {
    EnvAction.LEFT: Move.LEFT,
    EnvAction.RIGHT: Move.RIGHT,
    EnvAction.ROTATE_UP: Move.ROTATE_UP,
    EnvAction.ROTATE_DOWN: Move.ROTATE_DOWN,
    EnvAction.SOFT_DROP_START: Move.SOFT_DROP_START,
    EnvAction.SOFT_DROP_STOP: Move.SOFT_DROP_STOP,
}


def _compute_action_mask(game: BlockSmashGame) -> np.ndarray:
    """True for every action that the engine would currently accept."""
    mask = np.ones((len(EnvAction),), dtype=np.bool_)
    if game.game_over:
        mask[1:] = False
        return mask
    piece = game.current
    for action in (EnvAction.LEFT, EnvAction.RIGHT, EnvAction.ROTATE_UP, EnvAction.ROTATE_DOWN):
        rotation, col = game.candidate(ACTION_TO_MOVE[action], piece.rotation, piece.col)
        mask[action] = game.fits_at(rotation, piece.row, col).fits
    mask[EnvAction.SOFT_DROP_START] = not game.soft_drop
    mask[EnvAction.SOFT_DROP_STOP] = game.soft_drop
    return mask


class BlockSmashEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 60}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 ticks_per_step: int = 9, max_episode_steps: int = 20000) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.game = BlockSmashGame(self.config)
        self.render_mode = render_mode
        self.ticks_per_step = int(ticks_per_step)
        self.max_episode_steps = int(max_episode_steps)

        rows, cols = self.game.grid.height, self.game.grid.width
        top = int(max(Color))
        # Locked blocks are positive color tags, the falling piece negative
        self.observation_space = spaces.Box(low=-top, high=top, shape=(rows, cols), dtype=np.int8)
        self.action_space = spaces.Discrete(len(EnvAction))

        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return self.game.get_state().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "score": self.game.score,
            "lines_cleared": self.game.lines_cleared_total,
            "pieces_locked": self.game.pieces_locked,
            "max_height": self.game.grid.get_max_height(),
            "holes": self.game.grid.count_holes(),
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        # Each episode draws its bag seed from the env RNG
        game_seed = int(self.np_random.integers(2**31))
        self.game = BlockSmashGame(replace(self.config, random_seed=game_seed))
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        action = EnvAction(int(action))
        move = ACTION_TO_MOVE.get(action)
        if move is not None:
            self.game.push(move)

        reward = 0.0
        events = []
        for _ in range(self.ticks_per_step):
            result = self.game.tick()
            reward += float(result.points)
            events.extend(result.events)
            if result.game_over:
                break

        self._steps += 1
        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps and not terminated

        info = self._get_info()
        info["events"] = events
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        from block_smash.visualization.renderer import color_for_value

        state = self.game.get_state()
        cell = 12
        h, w = state.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                img[y * cell:(y + 1) * cell, x * cell:(x + 1) * cell, :] = color_for_value(int(state[y, x]))
        return img

    def close(self) -> None:
        pass
