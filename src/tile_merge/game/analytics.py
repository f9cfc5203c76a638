from __future__ import annotations

import numpy as np


class GameAnalytics:
    """Helper class for analyzing tile matrices"""

    @staticmethod
    def count_merge_pairs(tiles: np.ndarray) -> int:
        """Adjacent equal non-zero pairs, horizontally and vertically."""
        horizontal = (tiles[:, :-1] == tiles[:, 1:]) & (tiles[:, :-1] != 0)
        vertical = (tiles[:-1, :] == tiles[1:, :]) & (tiles[:-1, :] != 0)
        return int(horizontal.sum() + vertical.sum())

    @staticmethod
    def get_board_features(tiles: np.ndarray) -> dict:
        size = tiles.shape[0]
        empty = int(np.count_nonzero(tiles == 0))
        max_tile = int(tiles.max())
        corners = (tiles[0, 0], tiles[0, -1], tiles[-1, 0], tiles[-1, -1])
        return {
            "empty_cells": empty,
            "fill_ratio": float(size * size - empty) / float(size * size),
            "max_tile": max_tile,
            "tile_sum": int(tiles.sum()),
            "merge_pairs": GameAnalytics.count_merge_pairs(tiles),
            "max_in_corner": bool(max_tile > 0 and max_tile in corners),
        }
