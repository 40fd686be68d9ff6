import gymnasium as gym
import numpy as np

import block_smash.env  # noqa: F401
from block_smash.env.block_smash_env import BlockSmashEnv, EnvAction, _compute_action_mask
from block_smash.env.wrappers import ResampleInvalidActionWrapper
from block_smash.game import GameConfig
from block_smash.game.shapes import PieceType


def test_registered_env_reset_and_step():
    env = gym.make("BlockSmash-10x20-v0")
    obs, info = env.reset(seed=3)
    assert obs.shape == (20, 10)
    assert obs.dtype == np.int8
    assert info["action_mask"].shape == (len(EnvAction),)

    obs, reward, terminated, truncated, info = env.step(int(EnvAction.NONE))
    assert reward == 0.0
    assert not terminated and not truncated
    assert info["score"] == 0
    env.close()


def test_seeded_resets_are_reproducible():
    env = BlockSmashEnv()
    env.reset(seed=12)
    first = env.game.current.kind
    env.reset(seed=12)
    assert env.game.current.kind == first


def test_unseeded_resets_draw_fresh_bags():
    env = BlockSmashEnv()
    env.reset(seed=5)
    bags = []
    for _ in range(3):
        env.reset()
        bags.append(list(env.game.bag.pieces))
    assert bags[0] != bags[1] or bags[1] != bags[2]


def test_mask_blocks_moves_while_piece_emerges():
    env = BlockSmashEnv(GameConfig(forced_shapes=[PieceType.T]))
    env.reset()
    mask = _compute_action_mask(env.game)
    assert mask[EnvAction.NONE]
    assert not mask[EnvAction.LEFT]
    assert not mask[EnvAction.ROTATE_UP]
    assert mask[EnvAction.SOFT_DROP_START]
    assert not mask[EnvAction.SOFT_DROP_STOP]


def test_mask_allows_moves_once_on_board():
    env = BlockSmashEnv(GameConfig(forced_shapes=[PieceType.T]))
    env.reset()
    for _ in range(5):
        env.step(int(EnvAction.NONE))
    mask = _compute_action_mask(env.game)
    assert mask[EnvAction.LEFT] and mask[EnvAction.RIGHT]


def test_soft_drop_episode_reaches_game_over():
    env = BlockSmashEnv(GameConfig(forced_shapes=[PieceType.O]), ticks_per_step=20)
    env.reset(seed=0)
    env.step(int(EnvAction.SOFT_DROP_START))
    terminated = False
    for _ in range(2000):
        _, _, terminated, truncated, info = env.step(int(EnvAction.NONE))
        if terminated:
            break
    assert terminated
    assert "gameover" in info["events"]
    assert info["pieces_locked"] == 10


def test_resample_wrapper_replaces_rejected_actions():
    env = ResampleInvalidActionWrapper(BlockSmashEnv(GameConfig(forced_shapes=[PieceType.T])))
    env.reset(seed=1)
    col = env.unwrapped.game.current.col
    env.step(int(EnvAction.LEFT))
    assert env.unwrapped.game.current.col == col
    assert env.get_action_mask().shape == (len(EnvAction),)


def test_rgb_render():
    env = BlockSmashEnv(render_mode="rgb_array")
    env.reset(seed=0)
    frame = env.render()
    assert frame.shape == (240, 120, 3)
    assert frame.dtype == np.uint8


def test_random_agent_runs_headless(capsys):
    from block_smash.rl.random_agent import run_random

    total = run_random(steps=30, seed=0)
    assert total >= 0.0
    assert "Random agent total reward" in capsys.readouterr().out
