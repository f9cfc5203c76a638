"""Game module for Tile Merge.

Exports the core game engine and supporting classes:
- GameState: One board snapshot with slide, merge and rotation mechanics
- SpawnRules: Random tile spawning configuration
- Game: Move history with limited undo
- GameConfig: Construction settings for a Game
- Action: The four directions plus undo
- GameAnalytics: Read-only board features
"""

from .rules import SpawnRules
from .state import GameState
from .core import Action, DIRECTIONS, Game, GameConfig
from .analytics import GameAnalytics

__all__ = [
    "SpawnRules",
    "GameState",
    "Action",
    "DIRECTIONS",
    "Game",
    "GameConfig",
    "GameAnalytics",
]
