"""Gymnasium environments for Tile Merge."""

from __future__ import annotations

from gymnasium.envs.registration import register

from .tile_merge_env import TileMergeEnv

# Register default 4x4 Tile Merge environment
register(
    id="TileMerge-4x4-v0",
    entry_point="tile_merge.env.tile_merge_env:TileMergeEnv",
)

__all__ = ["TileMergeEnv"]
