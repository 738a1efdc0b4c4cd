"""
Input abstraction layer for Tap Tap Bug.

Provides unified pointer input handling so the game loop never talks to
pygame's event queue directly.
"""

from taptapbug.games.input.input_event import InputEvent
from taptapbug.games.input.input_manager import InputManager

__all__ = ['InputEvent', 'InputManager']
