from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Deque, Optional, Tuple

import numpy as np

from .rules import SpawnRules
from .state import GameState


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    UP = 2
    DOWN = 3
    UNDO = 4


DIRECTIONS = (Action.LEFT, Action.RIGHT, Action.UP, Action.DOWN)


@dataclass
class GameConfig:
    grid_size: int = 4
    undos: int = 3
    random_seed: Optional[int] = None
    # Off by default: tiles are only placed when the game is created.
    spawn_after_move: bool = False

    def __post_init__(self) -> None:
        if self.grid_size < 2:
            raise ValueError(f"grid_size must be at least 2, got {self.grid_size}")
        if self.undos < 0:
            raise ValueError(f"undos must be non-negative, got {self.undos}")


class Game:
    """Move history with a limited undo budget.

    The front of `history` is the current state. A state-changing move pushes a
    new snapshot, evicting the oldest one once the history holds more entries
    than there are undos left. Moves that leave the tiles unchanged are dropped.
    """

    def __init__(
        self,
        undos: Optional[int] = None,
        config: Optional[GameConfig] = None,
        rules: Optional[SpawnRules] = None,
    ) -> None:
        self.config = config or GameConfig()
        if undos is not None:
            self.config = replace(self.config, undos=int(undos))
        self.rules = rules or SpawnRules()
        self.rng = random.Random(self.config.random_seed)
        self.undos_left = self.config.undos
        self.history: Deque[GameState] = deque()
        self.last_move_changed = False
        self._push_state(GameState(self.config.grid_size, rng=self.rng, rules=self.rules))

    @property
    def state(self) -> GameState:
        assert self.history, "history always contains at least one state"
        return self.history[0]

    @property
    def tiles(self) -> np.ndarray:
        return self.state.tiles.copy()

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def history_length(self) -> int:
        return len(self.history)

    def _push_state(self, state: GameState) -> None:
        if len(self.history) > self.undos_left:
            self.history.pop()
            logger.debug("history full, evicted oldest state (undos_left=%d)", self.undos_left)
        self.history.appendleft(state)

    def _apply(self, direction: Action) -> GameState:
        candidate = self.state.clone()
        if direction == Action.LEFT:
            candidate.slide_and_merge_left()
        elif direction == Action.RIGHT:
            candidate.rotate180()
            candidate.slide_and_merge_left()
            candidate.rotate180()
        elif direction == Action.UP:
            candidate.rotate270()
            candidate.slide_and_merge_left()
            candidate.rotate90()
        elif direction == Action.DOWN:
            candidate.rotate90()
            candidate.slide_and_merge_left()
            candidate.rotate270()
        else:
            raise ValueError(f"not a direction: {direction!r}")
        return candidate

    def move(self, direction: Action) -> bool:
        """Apply one directional move. Returns whether the tiles changed."""
        direction = Action(direction)
        candidate = self._apply(direction)
        if candidate == self.state:
            logger.debug("move %s changed nothing, discarded", direction.name)
            self.last_move_changed = False
            return False
        if self.config.spawn_after_move:
            candidate.add_random_tile()
        self._push_state(candidate)
        self.last_move_changed = True
        return True

    def left(self) -> None:
        self.move(Action.LEFT)

    def right(self) -> None:
        self.move(Action.RIGHT)

    def up(self) -> None:
        self.move(Action.UP)

    def down(self) -> None:
        self.move(Action.DOWN)

    def undo(self) -> bool:
        if self.undos_left == 0:
            logger.debug("undo ignored, budget exhausted")
            return False
        if len(self.history) < 2:
            logger.debug("undo ignored, no earlier state")
            return False
        self.history.popleft()
        self.undos_left -= 1
        logger.debug("undo applied, %d left", self.undos_left)
        return True

    def can_move(self, direction: Action) -> bool:
        return self._apply(Action(direction)) != self.state

    @property
    def is_game_over(self) -> bool:
        return not any(self.can_move(d) for d in DIRECTIONS)

    def step(self, action: Action) -> Tuple[np.ndarray, int, bool, dict]:
        action = Action(action)
        score_before = self.score
        if action == Action.UNDO:
            changed = self.undo()
        else:
            changed = self.move(action)
        reward = max(0, self.score - score_before)
        done = self.is_game_over
        info = {
            "score": self.score,
            "undos_left": self.undos_left,
            "changed": changed,
        }
        return self.tiles, reward, done, info

    def get_state(self) -> dict:
        return {
            "tiles": self.tiles,
            "score": self.score,
            "undos_left": self.undos_left,
            "history_length": self.history_length,
            "last_move_changed": self.last_move_changed,
            "max_tile": self.state.max_tile(),
            "game_over": self.is_game_over,
        }
