"""
Drawn stand-ins for missing image files.

Each factory returns a PlaceholderFactory: a callable taking the declared
(width, height) and returning a surface of exactly that size. Sprite sheet
factories draw num_frames cells side by side so animation still cycles.
Bugs face right (angle 0 points along +x).
"""

import math
from typing import Dict, Tuple

import pygame

from games.TapTapBug.game.resources import PlaceholderFactory
from models.taptapbug import RoundConfig

# Plate and snack colors cycled across food frames
FOOD_COLORS = [
    (230, 80, 60), (250, 200, 60), (120, 200, 90), (240, 150, 60),
    (160, 100, 60), (250, 240, 220), (200, 60, 120), (110, 70, 40),
]

BUG_COLORS = [
    (200, 40, 40),
    (235, 130, 30),
    (120, 120, 120),
    (60, 60, 160),
    (40, 140, 60),
]


def table_tile() -> PlaceholderFactory:
    """Checkered tablecloth."""
    def draw(width: int, height: int) -> pygame.Surface:
        surface = pygame.Surface((width, height))
        surface.fill((240, 235, 225))
        cell = max(8, min(width, height) // 12)
        for row in range(0, height, cell):
            for col in range(0, width, cell):
                if (row // cell + col // cell) % 2 == 0:
                    pygame.draw.rect(surface, (200, 60, 60), (col, row, cell, cell))
        return surface
    return draw


def food_sheet(num_frames: int) -> PlaceholderFactory:
    """One snack on a plate per frame, each frame a different color."""
    def draw(width: int, height: int) -> pygame.Surface:
        surface = pygame.Surface((width, height), pygame.SRCALPHA)
        frame_width = width / num_frames
        radius = int(min(frame_width, height) / 2) - 1
        for i in range(num_frames):
            center = (int(i * frame_width + frame_width / 2), height // 2)
            pygame.draw.circle(surface, (250, 250, 250), center, radius)
            pygame.draw.circle(surface, (180, 180, 180), center, radius, 2)
            pygame.draw.circle(surface, FOOD_COLORS[i % len(FOOD_COLORS)],
                               center, max(2, radius * 2 // 3))
        return surface
    return draw


def bug_sheet(color: Tuple[int, int, int], num_frames: int) -> PlaceholderFactory:
    """Beetle seen from above, legs alternating between frames."""
    def draw(width: int, height: int) -> pygame.Surface:
        surface = pygame.Surface((width, height), pygame.SRCALPHA)
        frame_width = width / num_frames
        for i in range(num_frames):
            left = i * frame_width
            cx = left + frame_width / 2
            cy = height / 2
            body_w = frame_width * 0.7
            body_h = height * 0.5

            swing = 4 if i % 2 == 0 else -4
            for k in (-1, 0, 1):
                leg_x = cx + k * body_w / 4
                pygame.draw.line(surface, (20, 20, 20), (leg_x, cy),
                                 (leg_x + swing * (1 if k else -1), cy - height * 0.45), 2)
                pygame.draw.line(surface, (20, 20, 20), (leg_x, cy),
                                 (leg_x - swing * (1 if k else -1), cy + height * 0.45), 2)

            body = pygame.Rect(0, 0, int(body_w), int(body_h))
            body.center = (int(cx), int(cy))
            pygame.draw.ellipse(surface, color, body)
            pygame.draw.line(surface, (20, 20, 20), (body.left + 2, cy), (body.right - 6, cy), 1)

            head_r = max(2, int(body_h / 3))
            head = (int(body.right - head_r / 2), int(cy))
            pygame.draw.circle(surface, (20, 20, 20), head, head_r)
            for side in (-1, 1):
                tip = (head[0] + head_r * 2,
                       head[1] + side * head_r * 2 * math.sin(math.pi / 4))
                pygame.draw.line(surface, (20, 20, 20), head, tip, 1)
        return surface
    return draw


def placeholders_for_round(config: RoundConfig) -> Dict[str, PlaceholderFactory]:
    """Placeholder factories for every asset a round declares."""
    factories: Dict[str, PlaceholderFactory] = {}
    sheets = config.assets.sprite_sheets

    if config.background_image_id:
        factories[config.background_image_id] = table_tile()

    food_id = config.food.sprite_id
    if food_id in sheets:
        factories[food_id] = food_sheet(sheets[food_id].frames)

    for index, species in enumerate(config.species):
        if species.sprite_id in sheets:
            factories[species.sprite_id] = bug_sheet(
                BUG_COLORS[index % len(BUG_COLORS)], sheets[species.sprite_id].frames
            )

    return factories
