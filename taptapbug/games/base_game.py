"""Base class for Tap Tap Bug games.

Games inherit from BaseGame to get a consistent interface with the
GameSystem loop driver and the standalone entry point.

Game metadata (NAME, DESCRIPTION, etc.) and CLI arguments (ARGUMENTS)
are declared as class attributes.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List

import pygame

from taptapbug.games.game_state import GameState


class BaseGame(ABC):
    """Abstract base class for games driven by a fixed-tick loop.

    Class Attributes (metadata):
        NAME: Display name for the game
        DESCRIPTION: Short description of gameplay
        VERSION: Semantic version string
        AUTHOR: Author/team name
        ARGUMENTS: List of CLI argument definitions for argparse

    Subclasses must implement:
        - _get_internal_state() -> GameState: Map internal state to standard state
        - get_score() -> int: Return current score
        - update(): Advance the simulation by one tick
        - render(screen): Draw the game
        - on_pointer_down(x, y): Handle a click in canvas coordinates
        - on_pointer_move(x, y): Handle pointer motion in canvas coordinates

    Optional overrides:
        - reset(): Reset game to initial state

    Usage:
        class MyGame(BaseGame):
            NAME = "My Game"
            ARGUMENTS = [
                {'name': '--difficulty', 'type': str, 'default': 'normal',
                 'help': 'Game difficulty'},
            ]

            def _get_internal_state(self) -> GameState:
                return GameState.PLAYING

            # ... implement other abstract methods
    """

    # =========================================================================
    # Game Metadata (override in subclasses)
    # =========================================================================

    NAME: str = "Unnamed Game"
    DESCRIPTION: str = "No description"
    VERSION: str = "1.0.0"
    AUTHOR: str = "Unknown"

    # CLI argument definitions for argparse
    # Each entry is a dict with keys: name, type, default, help, choices (optional), action (optional)
    ARGUMENTS: List[Dict[str, Any]] = []

    # Standard arguments available to all games; game-specific ones take precedence
    _BASE_ARGUMENTS: List[Dict[str, Any]] = [
        {
            'name': '--fps',
            'type': int,
            'default': None,
            'help': 'Simulation ticks per second'
        },
        {
            'name': '--log-level',
            'type': str,
            'default': None,
            'choices': ['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'OFF'],
            'help': 'Default log level'
        },
    ]

    @classmethod
    def get_arguments(cls) -> List[Dict[str, Any]]:
        """Get all CLI arguments for this game (game-specific + base).

        Game-specific arguments come first, then base arguments.
        Duplicates by name are removed (game-specific takes precedence).
        """
        seen_names = set()
        result = []

        for arg in cls.ARGUMENTS:
            name = arg.get('name', '')
            if name and name not in seen_names:
                seen_names.add(name)
                result.append(arg)

        for arg in cls._BASE_ARGUMENTS:
            name = arg.get('name', '')
            if name and name not in seen_names:
                seen_names.add(name)
                result.append(arg)

        return result

    @classmethod
    def get_info(cls) -> Dict[str, Any]:
        """Get game metadata as a dictionary.

        Returns:
            Dict with keys: name, description, version, author, arguments
        """
        return {
            'name': cls.NAME,
            'description': cls.DESCRIPTION,
            'version': cls.VERSION,
            'author': cls.AUTHOR,
            'arguments': cls.get_arguments(),
        }

    @property
    def state(self) -> GameState:
        """Current game state (standard interface).

        Games should not override this - override _get_internal_state instead.
        """
        return self._get_internal_state()

    @abstractmethod
    def _get_internal_state(self) -> GameState:
        """Map internal game state to standard GameState."""
        pass

    @abstractmethod
    def get_score(self) -> int:
        """Get current score."""
        pass

    @abstractmethod
    def update(self) -> None:
        """Advance game logic by one fixed tick."""
        pass

    @abstractmethod
    def render(self, screen: pygame.Surface) -> None:
        """Render the game.

        Args:
            screen: Pygame surface to draw on
        """
        pass

    @abstractmethod
    def on_pointer_down(self, x: float, y: float) -> None:
        """Handle a click at canvas-local coordinates."""
        pass

    @abstractmethod
    def on_pointer_move(self, x: float, y: float) -> None:
        """Handle pointer motion at canvas-local coordinates."""
        pass

    def reset(self) -> None:
        """Reset game to initial state.

        Override this to implement game-specific reset logic.
        """
        pass
