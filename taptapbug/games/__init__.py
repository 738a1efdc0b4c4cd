"""
Tap Tap Bug Game Framework.

Provides:
- base_game: BaseGame class that all games should inherit from
- game_state: Standard GameState enum for platform compatibility
- input: Pointer input event handling
"""

from taptapbug.games.game_state import GameState
from taptapbug.games.base_game import BaseGame

__all__ = [
    'GameState',
    'BaseGame',
]
