"""
Unified models library for Tap Tap Bug.

This package provides the Pydantic data models used across the system:
- Primitives: Basic geometric types (Point2D, Vector2D)
- TapTapBug: Game-specific enums and round configuration models

Usage:
    >>> from models import Point2D, EventType
    >>> from models.taptapbug import RoundConfig, BugSpecies
"""

# ============================================================================
# Primitives (basic types used everywhere)
# ============================================================================
from .primitives import (
    Point2D,
    Vector2D,  # Alias for Point2D
)

# ============================================================================
# Tap Tap Bug models
# ============================================================================
from .taptapbug import (
    EventType,
    CursorStyle,
    RoundPhase,
    GameState,
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
    # Primitives
    "Point2D",
    "Vector2D",
    # Tap Tap Bug
    "EventType",
    "CursorStyle",
    "RoundPhase",
    "GameState",
    "PlacementArea",
    "SpacingTolerance",
    "FoodConfig",
    "BugSpecies",
    "ImageAsset",
    "SpriteSheetAsset",
    "AssetsConfig",
    "RoundConfig",
]
