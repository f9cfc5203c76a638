from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tile_merge.game import DIRECTIONS, Action, Game, GameAnalytics, GameConfig


def _compute_action_mask(game: Game) -> np.ndarray:
    mask = np.zeros((len(Action),), dtype=np.bool_)
    for direction in DIRECTIONS:
        mask[int(direction)] = game.can_move(direction)
    mask[int(Action.UNDO)] = game.undos_left > 0 and game.history_length > 1
    return mask


class TileMergeEnv(gym.Env):
    metadata = {"render_modes": []}

    def __init__(self, config: Optional[GameConfig] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 invalid_action_penalty: float = -1.0,
                 step_penalty: float = 0.0,
                 terminal_penalty: float = 0.0,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.game = Game(config=self.config)

        # Reward shaping parameters
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)
        self.reward_weights: Dict[str, float] = {
            "score": 0.01,          # per point of merge score gained
            "empty": 0.1,           # per empty cell gained
            "max_tile": 0.0,        # per doubling of the largest tile
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        size = self.config.grid_size
        self.observation_space = spaces.Box(
            low=0,
            high=min(2 ** (size * size + 1), int(np.iinfo(np.int64).max)),
            shape=(size, size),
            dtype=np.int64,
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return self.game.tiles

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "score": self.game.score,
            "undos_left": self.game.undos_left,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        game_seed = int(self.np_random.integers(0, 2 ** 31 - 1))
        self.game = Game(config=replace(self.config, random_seed=game_seed))
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        action = Action(int(action))

        features_before = GameAnalytics.get_board_features(self.game.tiles)
        score_before = self.game.score
        if action == Action.UNDO:
            moved = self.game.undo()
        else:
            moved = self.game.move(action)
        features_after = GameAnalytics.get_board_features(self.game.tiles)

        reward_components: Dict[str, float] = {}
        if moved and action != Action.UNDO:
            gained = max(0, self.game.score - score_before)
            reward_components["score"] = self.reward_weights["score"] * float(gained)
            reward_components["empty"] = self.reward_weights["empty"] * float(
                features_after["empty_cells"] - features_before["empty_cells"])
            if features_after["max_tile"] > features_before["max_tile"]:
                reward_components["max_tile"] = self.reward_weights["max_tile"] * float(
                    np.log2(features_after["max_tile"]) - np.log2(max(1, features_before["max_tile"])))
        elif not moved:
            reward_components["invalid"] = self.invalid_action_penalty

        reward_components["step"] = self.step_penalty
        self._steps += 1
        terminated = bool(self.game.is_game_over)
        truncated = self._steps >= self.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        reward = float(sum(reward_components.values()))

        info = self._get_info()
        info["moved"] = bool(moved)
        info["reward_components"] = reward_components
        return self._get_obs(), reward, terminated, truncated, info

    def close(self) -> None:
        pass
