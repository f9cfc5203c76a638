from __future__ import annotations

import random
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .rules import SpawnRules


Coordinate = Tuple[int, int]

_TILE_MAX = np.iinfo(np.int64).max


def _is_tile_value(value: int) -> bool:
    return value == 0 or (value >= 2 and value & (value - 1) == 0)


class GameState:
    """One snapshot of the board: an N x N tile matrix and the cumulative score.

    Cells hold 0 for empty or a power of two >= 2. Two states compare equal when
    their tile matrices are equal; the score does not take part in equality.

    All four directional moves are expressed through `slide_and_merge_left`
    combined with the quarter-turn rotations below.
    """

    def __init__(
        self,
        size: int = 4,
        rng: Optional[random.Random] = None,
        rules: Optional[SpawnRules] = None,
    ) -> None:
        if size < 2:
            raise ValueError(f"grid size must be at least 2, got {size}")
        self.size = int(size)
        self.rng = rng or random.Random()
        self.rules = rules or SpawnRules()
        self.tiles = np.zeros((self.size, self.size), dtype=np.int64)
        self.score = 0
        self.add_random_tile()
        self.add_random_tile()

    @classmethod
    def from_tiles(
        cls,
        tiles: Iterable[Sequence[int]],
        score: int = 0,
        rng: Optional[random.Random] = None,
        rules: Optional[SpawnRules] = None,
    ) -> "GameState":
        """Build a state from an explicit matrix, without placing random tiles."""
        matrix = np.array(tiles, dtype=np.int64)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise ValueError(f"tiles must be a square matrix, got shape {matrix.shape}")
        if matrix.shape[0] < 2:
            raise ValueError(f"grid size must be at least 2, got {matrix.shape[0]}")
        if not all(_is_tile_value(int(v)) for v in matrix.flat):
            raise ValueError("tiles must be 0 or powers of two >= 2")
        if score < 0:
            raise ValueError(f"score must be non-negative, got {score}")
        state = cls.__new__(cls)
        state.size = int(matrix.shape[0])
        state.rng = rng or random.Random()
        state.rules = rules or SpawnRules()
        state.tiles = matrix
        state.score = int(score)
        return state

    def empty_cells(self) -> List[Coordinate]:
        rows, cols = np.nonzero(self.tiles == 0)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def max_tile(self) -> int:
        return int(self.tiles.max())

    def add_random_tile(self) -> bool:
        """Place a 2 (or, less often, a 4) on a uniformly chosen empty cell.

        Returns False and leaves the board untouched when no cell is empty.
        """
        candidates = self.empty_cells()
        if not candidates:
            return False
        row, col = self.rng.choice(candidates)
        self.tiles[row, col] = self.rules.draw_value(self.rng)
        return True

    def slide_left(self) -> None:
        for row in range(self.size):
            values = self.tiles[row][self.tiles[row] != 0]
            self.tiles[row, :] = 0
            self.tiles[row, : values.size] = values

    def merge_left(self) -> int:
        # Single pass per row: a tile produced by a merge is not merged again.
        gained = 0
        for row in range(self.size):
            for col in range(self.size - 1):
                current = int(self.tiles[row, col])
                if current != 0 and current == int(self.tiles[row, col + 1]):
                    if current > _TILE_MAX // 2:
                        raise OverflowError(f"merging two {current} tiles overflows int64")
                    merged = current * 2
                    self.tiles[row, col] = merged
                    self.tiles[row, col + 1] = 0
                    gained += merged
        return gained

    def slide_and_merge_left(self) -> int:
        self.slide_left()
        gained = self.merge_left()
        self.score += gained
        self.slide_left()
        return gained

    def transpose(self) -> None:
        self.tiles = self.tiles.T.copy()

    def reverse_rows(self) -> None:
        """Mirror every row left to right."""
        self.tiles = self.tiles[:, ::-1].copy()

    def reverse_cols(self) -> None:
        """Mirror every column top to bottom."""
        self.tiles = self.tiles[::-1, :].copy()

    def rotate90(self) -> None:
        # clockwise
        self.transpose()
        self.reverse_rows()

    def rotate180(self) -> None:
        self.reverse_rows()
        self.reverse_cols()

    def rotate270(self) -> None:
        self.reverse_rows()
        self.transpose()

    def clone(self) -> "GameState":
        new_state = GameState.__new__(GameState)
        new_state.size = self.size
        new_state.rng = self.rng
        new_state.rules = self.rules
        new_state.tiles = self.tiles.copy()
        new_state.score = self.score
        return new_state

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameState):
            return NotImplemented
        return bool(np.array_equal(self.tiles, other.tiles))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"GameState(size={self.size}, score={self.score}, tiles={self.tiles.tolist()})"
