"""
Tap Tap Bug models package.

This package contains the data models specific to Tap Tap Bug,
including enums and the round configuration models loaded from YAML.
"""

from .enums import (
    EventType,
    CursorStyle,
    RoundPhase,
    GameState,  # Re-exported from taptapbug.games.game_state
)

from .round_config import (
    PlacementArea,
    SpacingTolerance,
    FoodConfig,
    BugSpecies,
    ImageAsset,
    SpriteSheetAsset,
    AssetsConfig,
    RoundConfig,
)

__all__ = [
    # Enums
    "EventType",
    "CursorStyle",
    "RoundPhase",
    "GameState",
    # Configuration models
    "PlacementArea",
    "SpacingTolerance",
    "FoodConfig",
    "BugSpecies",
    "ImageAsset",
    "SpriteSheetAsset",
    "AssetsConfig",
    "RoundConfig",
]
