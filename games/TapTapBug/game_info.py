"""
Tap Tap Bug - Game Info

This file defines the game's metadata and provides the factory function
for creating configured game instances.
"""

from typing import Optional

from games.TapTapBug.config import DEFAULT_ROUND
from games.TapTapBug.game.round_loader import RoundLoader
from games.TapTapBug.game_mode import TapTapBugMode
from models.taptapbug import RoundConfig

# Game metadata
NAME = TapTapBugMode.NAME
DESCRIPTION = TapTapBugMode.DESCRIPTION
VERSION = TapTapBugMode.VERSION
AUTHOR = TapTapBugMode.AUTHOR

# CLI argument definitions
ARGUMENTS = TapTapBugMode.get_arguments()


def load_round_config(round_id: Optional[str] = None) -> RoundConfig:
    """Load a round definition by id (DEFAULT_ROUND if None)."""
    return RoundLoader().load_round(round_id or DEFAULT_ROUND)


def get_game_mode(round_config: Optional[RoundConfig] = None, **kwargs) -> TapTapBugMode:
    """
    Factory function to create a configured TapTapBugMode.

    Args:
        round_config: Round definition; loaded from the 'round' kwarg if omitted
        **kwargs: Game configuration options
            - round: Round id (e.g., 'classic')
            - time: Seconds to survive, overrides the round
            - food: Food count, overrides the round
            - rng: random.Random instance for deterministic play

    Returns:
        TapTapBugMode ready for init()
    """
    if round_config is None:
        round_config = load_round_config(kwargs.get('round'))

    mode = TapTapBugMode(rng=kwargs.get('rng'))
    mode.configure(round_config)

    if kwargs.get('time') is not None:
        mode.set_allotted_time(kwargs['time'])
    if kwargs.get('food') is not None:
        mode.set_food_count(kwargs['food'])

    return mode
