"""
Food entity for Tap Tap Bug.

Food sits still on the table. Once a bug eats it, it fades out and is then
removed from the round.
"""

from typing import Tuple

import pygame

from games.TapTapBug.config import FOOD_FADE_SECONDS
from games.TapTapBug.game.bounding_box import BoundingBox
from games.TapTapBug.game.resources import SpriteSheet
from games.TapTapBug.game.sprite_animation import SpriteAnimation


class Food:
    """A single piece of food showing one frame of the food sprite sheet."""

    def __init__(
        self,
        sheet: SpriteSheet,
        fps: int,
        frame: int,
        x: float,
        y: float,
        fade_seconds: float = FOOD_FADE_SECONDS,
    ):
        """
        Create a food item.

        Args:
            sheet: Food sprite sheet
            fps: Simulation ticks per second
            frame: Sheet frame shown by this item (it never animates)
            x: Top-left x coordinate
            y: Top-left y coordinate
            fade_seconds: How long the eaten fade-out lasts
        """
        self.animation = SpriteAnimation(sheet, frame, fps, 0)
        self._x = x
        self._y = y
        self._width = sheet.frame_width
        self._height = sheet.height
        self._box = BoundingBox(x, y, self._width, self._height)
        self._fade_seconds = fade_seconds
        self._eaten = False
        self._removable = False

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def center(self) -> Tuple[float, float]:
        return self._x + self._width / 2, self._y + self._height / 2

    @property
    def box(self) -> BoundingBox:
        return self._box

    @property
    def frame(self) -> int:
        return self.animation.frame_index

    @property
    def is_eaten(self) -> bool:
        return self._eaten

    @property
    def is_removable(self) -> bool:
        """True once the eaten fade-out has finished."""
        return self._removable

    def mark_eaten(self) -> None:
        self._eaten = True

    def update(self) -> None:
        """Fade out if eaten; flag for removal once invisible."""
        if self._eaten:
            self.animation.fade(self._fade_seconds)
            if self.animation.opacity == 0:
                self._removable = True

    def render(self, screen: pygame.Surface) -> None:
        self.animation.render(screen, self._x, self._y, 0)
