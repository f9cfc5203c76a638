from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tile_merge.game import DIRECTIONS
from .tile_merge_env import _compute_action_mask


class DisableUndoWrapper(gym.ActionWrapper):
    """Restricts the action space to the four directions.

    Also exposes `get_action_mask()` returning a boolean mask of shape (4,).
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        assert isinstance(env.action_space, spaces.Discrete)
        self.action_space = spaces.Discrete(len(DIRECTIONS))

    def action(self, action: int):  # type: ignore[override]
        return int(DIRECTIONS[int(action)])

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.env.unwrapped.game)[: len(DIRECTIONS)]


class ResampleInvalidActionWrapper(gym.Wrapper):
    """If a sampled action would not change the game, resample uniformly among valid ones.

    Useful when training without action masking.
    """

    def step(self, action):  # type: ignore[override]
        mask = self.get_action_mask()
        if 0 <= int(action) < mask.shape[0] and not bool(mask[int(action)]):
            valid_idxs = np.flatnonzero(mask)
            if valid_idxs.size > 0:
                action = int(self.np_random.choice(valid_idxs))
        return self.env.step(action)

    def get_action_mask(self) -> np.ndarray:
        if hasattr(self.env, "get_action_mask"):
            return getattr(self.env, "get_action_mask")()
        return _compute_action_mask(self.env.unwrapped.game)
