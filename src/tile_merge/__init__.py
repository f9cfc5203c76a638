"""Rules engine for a 2048-style sliding tile merge puzzle with bounded undo."""

from tile_merge.game import Action, Game, GameConfig, GameState, SpawnRules

__all__ = ["Action", "Game", "GameConfig", "GameState", "SpawnRules"]
