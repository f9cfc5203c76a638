from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass
class SpawnRules:
    prob_two: float = 0.9
    small_tile: int = 2
    large_tile: int = 4

    def __post_init__(self) -> None:
        if not 0.0 <= self.prob_two <= 1.0:
            raise ValueError(f"prob_two must be within [0, 1], got {self.prob_two}")

    def draw_value(self, rng: random.Random) -> int:
        if rng.random() < self.prob_two:
            return self.small_tile
        return self.large_tile
