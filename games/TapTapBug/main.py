#!/usr/bin/env python3
"""
Tap Tap Bug - Standalone entry point.

Run this to play Tap Tap Bug with the mouse.

Usage:
    python main.py
    python main.py --round classic --time 30
    python main.py --fps 30 --log-level DEBUG
"""

import argparse
import os
import sys
from typing import Optional

import pygame

# Support running from any directory - add project root to path
_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from games.TapTapBug.config import (
    ASSETS_DIR,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    FONT_SIZE,
    FPS,
    HUD_COLOR,
    HUD_HEIGHT,
    HUD_TEXT_COLOR,
    LOSE_COLOR,
    PAUSED_COLOR,
    USE_PLACEHOLDERS,
    WIN_COLOR,
)
from games.TapTapBug.game.resources import ResourceRegistry
from games.TapTapBug.game.spawning import FoodPlacementError
from games.TapTapBug.game_info import get_game_mode, load_round_config
from games.TapTapBug.game_mode import TapTapBugMode
from games.TapTapBug.game_system import GameSystem
from games.TapTapBug.high_score import HighScoreStore
from games.TapTapBug.placeholders import placeholders_for_round
from taptapbug.games.input import InputManager
from taptapbug.games.input.sources.mouse import MouseInputSource
from models import CursorStyle
from taptapbug.logging import (
    close_all_sinks,
    configure_logging,
    create_sink_for_module,
    get_logger,
    register_sink,
)

log = get_logger('main')


class Hud:
    """Score, countdown and result text in the bar above the canvas."""

    def __init__(self, surface: pygame.Surface, high_score: int):
        self.surface = surface
        self.font = pygame.font.Font(None, FONT_SIZE)
        self.score = 0
        self.seconds = 0
        self.high_score = high_score
        self.result: Optional[bool] = None

    def reset(self) -> None:
        self.score = 0
        self.result = None

    def render(self, paused: bool) -> None:
        self.surface.fill(HUD_COLOR)
        width, height = self.surface.get_size()

        score_text = self.font.render(f"Score: {self.score}", True, HUD_TEXT_COLOR)
        self.surface.blit(score_text, score_text.get_rect(midleft=(10, height // 2)))

        time_text = self.font.render(f"{max(self.seconds, 0)}s", True, HUD_TEXT_COLOR)
        self.surface.blit(time_text, time_text.get_rect(midright=(width - 10, height // 2)))

        if paused:
            label, color = "PAUSED", PAUSED_COLOR
        elif self.result is True:
            label, color = f"YOU WIN! Best: {self.high_score}", WIN_COLOR
        elif self.result is False:
            label, color = "GAME OVER  (R)", LOSE_COLOR
        else:
            return
        text = self.font.render(label, True, color)
        self.surface.blit(text, text.get_rect(center=(width // 2, height // 2)))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tap Tap Bug")
    for arg in TapTapBugMode.get_arguments():
        options = {'type': arg['type'], 'default': arg['default'], 'help': arg['help']}
        if 'choices' in arg:
            options['choices'] = arg['choices']
        parser.add_argument(arg['name'], **options)
    return parser


def main() -> int:
    """Run Tap Tap Bug."""
    args = _build_parser().parse_args()

    if args.log_level:
        configure_logging(level=args.log_level)

    fps = args.fps or FPS

    try:
        round_config = load_round_config(args.round)
        game = get_game_mode(round_config=round_config, time=args.time, food=args.food)
    except (FileNotFoundError, ValueError) as e:
        log.error("Could not set up round: %s", e)
        return 1

    # Initialize pygame
    pygame.init()
    screen = pygame.display.set_mode((CANVAS_WIDTH, CANVAS_HEIGHT + HUD_HEIGHT))
    pygame.display.set_caption(f"Tap Tap Bug - {round_config.name}")
    hud_surface = screen.subsurface(pygame.Rect(0, 0, CANVAS_WIDTH, HUD_HEIGHT))
    canvas = screen.subsurface(pygame.Rect(0, HUD_HEIGHT, CANVAS_WIDTH, CANVAS_HEIGHT))

    resources = ResourceRegistry(ASSETS_DIR)
    resources.register_assets(
        round_config.assets,
        placeholders_for_round(round_config) if USE_PLACEHOLDERS else None,
    )
    resources.load_all()

    register_sink('rounds', create_sink_for_module('rounds'))

    high_scores = HighScoreStore()
    hud = Hud(hud_surface, high_scores.load())

    def on_score_changed(score: int) -> None:
        hud.score = score

    def on_time_changed(seconds: int) -> None:
        hud.seconds = seconds

    def on_game_over(score: int, is_win: bool) -> None:
        hud.result = is_win
        if is_win and high_scores.submit(score):
            hud.high_score = score
        log.info("%s with %d points", "Won" if is_win else "Lost", score)

    game.bind_score_changed(on_score_changed)
    game.bind_time_changed(on_time_changed)
    game.bind_game_over(on_game_over)

    system = GameSystem(game, fps, canvas_offset=(0, HUD_HEIGHT), resources=resources)
    try:
        system.init(canvas)
    except FoodPlacementError as e:
        log.error("Could not lay out food: %s", e)
        pygame.quit()
        return 1
    system.start()

    input_manager = InputManager(MouseInputSource())
    current_cursor: Optional[CursorStyle] = None

    print("=" * 50)
    print("TAP TAP BUG")
    print("=" * 50)
    print("\nSquash the bugs before they eat the picnic!")
    print("\nControls:")
    print("  - Click to squash bugs")
    print("  - P or SPACE to pause")
    print("  - R to restart")
    print("  - ESC to quit")
    print("=" * 50)

    def on_frame(gs: GameSystem) -> bool:
        nonlocal current_cursor
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return False
                elif event.key in (pygame.K_p, pygame.K_SPACE):
                    gs.toggle_pause()
                elif event.key == pygame.K_r:
                    hud.reset()
                    gs.start()
                    print("\n--- RESTARTING ---\n")

        if game.cursor != current_cursor:
            current_cursor = game.cursor
            pygame.mouse.set_system_cursor(
                pygame.SYSTEM_CURSOR_HAND if game.cursor == CursorStyle.POINTER
                else pygame.SYSTEM_CURSOR_ARROW
            )

        hud.render(gs.is_paused())
        pygame.display.flip()
        return True

    try:
        system.run(input_manager, on_frame=on_frame)
    finally:
        close_all_sinks()
        pygame.quit()

    log.info("Session over after %d clicks", input_manager.click_count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
