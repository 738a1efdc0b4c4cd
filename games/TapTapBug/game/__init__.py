"""
Tap Tap Bug simulation core.

Sprite primitives, entities and spawning logic used by TapTapBugMode.
"""

from games.TapTapBug.game.bounding_box import BoundingBox
from games.TapTapBug.game.resources import ImageResource, SpriteSheet, ResourceRegistry
from games.TapTapBug.game.sprite_animation import SpriteAnimation
from games.TapTapBug.game.food import Food
from games.TapTapBug.game.bug import Bug
from games.TapTapBug.game.spawning import (
    FoodPlacementError,
    FoodPlacer,
    SpawnTimer,
    SpeciesTable,
)

__all__ = [
    'BoundingBox',
    'ImageResource',
    'SpriteSheet',
    'ResourceRegistry',
    'SpriteAnimation',
    'Food',
    'Bug',
    'FoodPlacementError',
    'FoodPlacer',
    'SpawnTimer',
    'SpeciesTable',
]
