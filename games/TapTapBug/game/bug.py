"""
Bug entity for Tap Tap Bug.

Bugs crawl in from the top or bottom edge and head for the nearest uneaten
food, eating whatever they fully cover. When no food is left they head back
to where they came from. A squashed bug stops, fades out, and is removed.
"""

import math
from typing import List, Optional, Sequence, Tuple

import pygame

from games.TapTapBug.config import BUG_FADE_SECONDS
from games.TapTapBug.game.bounding_box import BoundingBox
from games.TapTapBug.game.food import Food
from games.TapTapBug.game.resources import SpriteSheet
from games.TapTapBug.game.sprite_animation import SpriteAnimation
from taptapbug.logging import get_logger

log = get_logger('bug')


class Bug:
    """A crawling bug worth point_value when squashed.

    Position (x, y) is the top-left corner of the sprite frame. Each tick the
    bug steps speed pixels toward its target, so faster species also animate
    faster (ticks per frame is 10 / speed).
    """

    def __init__(
        self,
        sheet: SpriteSheet,
        point_value: int,
        speed: float,
        fps: int,
        x: float,
        y: float,
        species_id: Optional[str] = None,
        fade_seconds: float = BUG_FADE_SECONDS,
    ):
        self.animation = SpriteAnimation(sheet, 0, fps, 10 / speed)
        self.species_id = species_id or sheet.sheet_id
        self._x = x
        self._y = y
        self._default_x = x
        self._default_y = y
        self._width = sheet.frame_width
        self._height = sheet.height
        self._box = BoundingBox(x, y, self._width, self._height)
        self._point_value = point_value
        self._speed = speed
        self._fade_seconds = fade_seconds
        self._angle = 0.0
        self._target: Tuple[float, float] = (x, y)
        self._dead = False
        self._removable = False

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def position(self) -> Tuple[float, float]:
        return self._x, self._y

    @property
    def default_position(self) -> Tuple[float, float]:
        """Spawn point the bug returns to when no food is left."""
        return self._default_x, self._default_y

    @property
    def center(self) -> Tuple[float, float]:
        return self._x + self._width / 2, self._y + self._height / 2

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def point_value(self) -> int:
        return self._point_value

    @property
    def angle(self) -> float:
        """Facing direction in radians (atan2 of the last movement)."""
        return self._angle

    @property
    def target(self) -> Tuple[float, float]:
        """Point the bug moved toward on its last update."""
        return self._target

    @property
    def box(self) -> BoundingBox:
        return self._box

    @property
    def is_dead(self) -> bool:
        return self._dead

    @property
    def is_removable(self) -> bool:
        """True once the death fade-out has finished."""
        return self._removable

    def kill(self) -> None:
        """Mark the bug dead. Calling this again has no further effect."""
        self._dead = True

    def update(self, foods: Sequence[Food]) -> List[Food]:
        """
        Advance the bug by one tick.

        Args:
            foods: Every food item still in the round, in list order

        Returns:
            Food items this bug ate during the tick
        """
        if self._dead:
            self.animation.fade(self._fade_seconds)
            if self.animation.opacity == 0:
                self._removable = True
            return []

        self._target = self._choose_target(foods)
        self._move_toward(*self._target)
        eaten = self._eat(foods)
        self.animation.advance_frame()
        self._box.move_to(self._x, self._y)
        return eaten

    def render(self, screen: pygame.Surface) -> None:
        self.animation.render(screen, self._x, self._y, self._angle)

    def _choose_target(self, foods: Sequence[Food]) -> Tuple[float, float]:
        """Center of the nearest uneaten food, or the spawn point if none is left.

        Distance is measured from the bug's top-left corner. The first food in
        list order wins ties.
        """
        shortest = math.inf
        target: Optional[Tuple[float, float]] = None
        for food in foods:
            if food.is_eaten:
                continue
            food_x, food_y = food.center
            dist = math.hypot(food_x - self._x, food_y - self._y)
            if dist < shortest:
                shortest = dist
                target = (food_x, food_y)

        if target is None:
            return self._default_x, self._default_y
        return target

    def _move_toward(self, target_x: float, target_y: float) -> None:
        """Step speed pixels from the bug's center toward a point and face it."""
        center_x, center_y = self.center
        dist_x = target_x - center_x
        dist_y = target_y - center_y
        hyp = math.hypot(dist_x, dist_y)
        if hyp == 0:
            # Already there
            return

        self._x += dist_x / hyp * self._speed
        self._y += dist_y / hyp * self._speed
        self._angle = math.atan2(dist_y, dist_x)

    def _eat(self, foods: Sequence[Food]) -> List[Food]:
        """Mark every uneaten food fully covered by (or covering) this bug as eaten."""
        eaten = []
        for food in foods:
            if food.is_eaten:
                continue
            if food.box.overlaps(self._box) or self._box.overlaps(food.box):
                food.mark_eaten()
                eaten.append(food)
                log.debug("%s ate food at (%.0f, %.0f)", self.species_id, food.x, food.y)
        return eaten
