"""
Fixed-rate loop driver for Tap Tap Bug.

GameSystem owns the tick schedule and the pause/active flags. Every tick it
advances the round controller once and renders it onto the canvas surface.
Pointer events arrive in window coordinates and are shifted into canvas
coordinates before being forwarded.
"""

from typing import Callable, List, Optional, Tuple

import pygame

from games.TapTapBug.game.resources import ResourceRegistry
from models import EventType
from taptapbug.games import BaseGame
from taptapbug.games.input import InputEvent, InputManager
from taptapbug.logging import get_logger

log = get_logger('game_system')

# Called once per frame after the tick; return False to stop the loop
FrameCallback = Callable[['GameSystem'], bool]


class GameSystem:
    """Drives one game at a fixed number of ticks per second.

    Usage:
        system = GameSystem(game, fps=60, canvas_offset=(0, 48), resources=registry)
        system.init(canvas_surface)
        system.start()
        system.run(input_manager, on_frame=draw_hud)
    """

    def __init__(
        self,
        game: BaseGame,
        fps: int,
        canvas_offset: Tuple[float, float] = (0.0, 0.0),
        resources: Optional[ResourceRegistry] = None,
    ):
        if fps <= 0:
            raise ValueError(f"FPS must be positive, got {fps}")
        self.game = game
        self.fps = fps
        self.canvas_offset = canvas_offset
        self.resources = resources or ResourceRegistry()
        self._surface: Optional[pygame.Surface] = None
        self._active = False
        self._paused = False
        self._in_tick = False
        self._ticks = 0

    @property
    def surface(self) -> Optional[pygame.Surface]:
        return self._surface

    @property
    def ticks(self) -> int:
        """Number of ticks that actually ran."""
        return self._ticks

    def init(self, surface: pygame.Surface) -> None:
        """Bind the render surface and initialize the game."""
        self._surface = surface
        self.game.init(self.fps, self.resources, surface.get_size())
        log.debug("Initialized %s at %d fps", type(self.game).__name__, self.fps)

    def start(self) -> None:
        """Reset the game and begin ticking."""
        self.game.reset()
        self._active = True
        self._paused = False
        log.info("Started")

    def stop(self) -> None:
        self._active = False
        log.info("Stopped")

    def toggle_pause(self) -> bool:
        """Flip the pause flag.

        Returns:
            True if now paused
        """
        self._paused = not self._paused
        log.info("Paused" if self._paused else "Resumed")
        return self._paused

    def is_paused(self) -> bool:
        return self._paused

    def is_active(self) -> bool:
        return self._active

    def _accepting(self) -> bool:
        return self._active and not self._paused

    def tick(self) -> bool:
        """Run one update/render cycle.

        Returns:
            True if the tick ran; False when inactive, paused, or already
            inside a tick
        """
        if not self._accepting() or self._in_tick:
            return False
        if self._surface is None:
            raise RuntimeError("GameSystem.init() must be called before tick()")

        self._in_tick = True
        try:
            self.game.update()
            self.game.render(self._surface)
            self._ticks += 1
        finally:
            self._in_tick = False
        return True

    def _to_canvas(self, x: float, y: float) -> Tuple[float, float]:
        offset_x, offset_y = self.canvas_offset
        return x - offset_x, y - offset_y

    def on_pointer_down(self, x: float, y: float) -> None:
        """Forward a click given in window coordinates."""
        if not self._accepting():
            return
        self.game.on_pointer_down(*self._to_canvas(x, y))

    def on_pointer_move(self, x: float, y: float) -> None:
        """Forward pointer motion given in window coordinates."""
        if not self._accepting():
            return
        self.game.on_pointer_move(*self._to_canvas(x, y))

    def handle_input(self, events: List[InputEvent]) -> None:
        """Dispatch pointer events collected by an InputManager."""
        for event in events:
            if event.event_type == EventType.POINTER_DOWN:
                self.on_pointer_down(event.position.x, event.position.y)
            elif event.event_type == EventType.POINTER_MOVE:
                self.on_pointer_move(event.position.x, event.position.y)

    def run(
        self,
        input_manager: Optional[InputManager] = None,
        on_frame: Optional[FrameCallback] = None,
        clock: Optional[pygame.time.Clock] = None,
    ) -> None:
        """Loop at self.fps until on_frame returns False.

        Args:
            input_manager: Source of pointer events, drained before each tick
            on_frame: Host hook for window events, HUD and display flip
            clock: Frame limiter (a new pygame Clock if not given)
        """
        clock = clock or pygame.time.Clock()
        running = True
        while running:
            dt = clock.tick(self.fps) / 1000.0

            if input_manager is not None:
                input_manager.update(dt)
                self.handle_input(input_manager.get_events())

            self.tick()

            if on_frame is not None:
                running = on_frame(self)
