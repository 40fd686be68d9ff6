"""Gymnasium environments for Block Smash."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register the tick-driven falling block environment
register(
    id="BlockSmash-10x20-v0",
    entry_point="block_smash.env.block_smash_env:BlockSmashEnv",
)

__all__ = ["BlockSmash-10x20-v0"]
