"""
Frame cycling, fade-out and rotated drawing for one entity's sprite.
"""

import math

import pygame

from games.TapTapBug.game.resources import SpriteSheet


class SpriteAnimation:
    """Per-entity animation state over a shared sprite sheet.

    The frame advances once the tick counter exceeds ticks_per_frame, so a
    threshold of 0 advances on every call. Opacity only ever goes down.

    Attributes:
        sheet: Sprite sheet supplying the frames
        frame_index: Current frame, always in [0, num_frames)
        fps: Simulation ticks per second, used to turn fade seconds into ticks
        ticks_per_frame: Counter threshold for advancing the frame
        opacity: Blend factor in [0, 1]
    """

    def __init__(self, sheet: SpriteSheet, initial_frame: int, fps: int,
                 ticks_per_frame: float):
        self.sheet = sheet
        self.fps = fps
        self.ticks_per_frame = ticks_per_frame
        self.frame_index = initial_frame % sheet.num_frames
        self.tick_counter = 0
        self._opacity = 1.0

    @property
    def opacity(self) -> float:
        return self._opacity

    @property
    def num_frames(self) -> int:
        return self.sheet.num_frames

    def advance_frame(self) -> None:
        """Count one tick and move to the next frame when the timer triggers."""
        self.tick_counter += 1
        if self.tick_counter > self.ticks_per_frame:
            self.tick_counter = 0
            self.frame_index = (self.frame_index + 1) % self.sheet.num_frames

    def fade(self, seconds_to_full_fade: float) -> None:
        """Lower opacity by one tick's share of a fade lasting the given seconds."""
        self._opacity -= 1 / (self.fps * seconds_to_full_fade)
        if self._opacity < 0:
            self._opacity = 0.0

    def render(self, screen: pygame.Surface, x: float, y: float, angle: float) -> None:
        """Draw the current frame at (x, y) rotated by angle radians.

        Rotation is about the center of one frame cell. Nothing is drawn until
        the sheet's pixels are loaded, or once the sprite is fully faded.
        """
        sheet_surface = self.sheet.surface
        if sheet_surface is None or self._opacity <= 0:
            return

        frame_width = int(self.sheet.frame_width)
        frame = sheet_surface.subsurface(pygame.Rect(
            int(self.frame_index * self.sheet.frame_width), 0,
            frame_width, self.sheet.height
        ))

        # pygame rotates counter-clockwise in degrees with y pointing down
        rotated = pygame.transform.rotate(frame, -math.degrees(angle))
        rotated.set_alpha(round(self._opacity * 255))

        center_x = x + self.sheet.width / (2 * self.sheet.num_frames)
        center_y = y + self.sheet.height / 2
        screen.blit(rotated, rotated.get_rect(center=(round(center_x), round(center_y))))
