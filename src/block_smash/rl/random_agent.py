from __future__ import annotations

import argparse
import logging

import gymnasium as gym
import numpy as np

import block_smash.env  # noqa: F401
from block_smash.env.wrappers import ResampleInvalidActionWrapper


def run_random(steps: int = 2000, seed: int | None = None) -> float:
    env = ResampleInvalidActionWrapper(gym.make("BlockSmash-10x20-v0"))
    obs, info = env.reset(seed=seed)
    rng = np.random.default_rng(seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        # Prefer valid actions if available
        valid = np.flatnonzero(info["action_mask"])
        action = int(rng.choice(valid)) if valid.size else env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f} over {episodes} finished episodes")
    return total_reward


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", type=str, default="WARNING")
    args = p.parse_args()
    logging.basicConfig(level=args.log_level.upper())
    run_random(args.steps, args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
