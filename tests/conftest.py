from __future__ import annotations

from typing import Callable, List, Sequence

import pytest

from tile_merge.game import Game, GameConfig, GameState


def _install_state(game: Game, tiles: Sequence[Sequence[int]], score: int = 0) -> Game:
    """Replace the game's single starting state with a known board."""
    game.history.clear()
    game.history.append(GameState.from_tiles(tiles, score=score, rng=game.rng, rules=game.rules))
    return game


@pytest.fixture
def make_state() -> Callable[..., GameState]:
    def _make(rows: Sequence[Sequence[int]], score: int = 0) -> GameState:
        return GameState.from_tiles(rows, score=score)

    return _make


@pytest.fixture
def make_game() -> Callable[..., Game]:
    def _make(tiles: List[List[int]], undos: int = 3, **config_kwargs) -> Game:
        config = GameConfig(grid_size=len(tiles), undos=undos, random_seed=0, **config_kwargs)
        return _install_state(Game(config=config), tiles)

    return _make


@pytest.fixture
def install_state() -> Callable[..., Game]:
    return _install_state


@pytest.fixture
def single_tile() -> List[List[int]]:
    return [
        [2, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ]


@pytest.fixture
def locked_board() -> List[List[int]]:
    return [
        [2, 4, 2, 4],
        [4, 2, 4, 2],
        [2, 4, 2, 4],
        [4, 2, 4, 2],
    ]
