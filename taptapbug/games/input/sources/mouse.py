"""
Mouse Input Source - Mouse clicks and motion as pointer events.
"""
import time
from typing import List

import pygame

from models import Vector2D, EventType
from taptapbug.games.input.input_event import InputEvent
from taptapbug.games.input.sources.base import InputSource


class MouseInputSource(InputSource):
    """Converts pygame mouse events into InputEvent models.

    Left button presses become POINTER_DOWN events and motion becomes
    POINTER_MOVE events. Consecutive motion events are collapsed into the
    latest one. Non-mouse events are re-posted to the pygame event queue for
    the main loop.
    """

    def __init__(self):
        """Initialize the mouse input source."""
        self._event_queue: List[InputEvent] = []

    def poll_events(self) -> List[InputEvent]:
        """Get new input events since last poll."""
        events = self._event_queue.copy()
        self._event_queue.clear()
        return events

    def update(self, dt: float) -> None:
        """Process pygame events and collect mouse input."""
        for event in pygame.event.get():
            if event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1:  # Left mouse button only
                    self._push(event.pos, EventType.POINTER_DOWN)
            elif event.type == pygame.MOUSEMOTION:
                if (self._event_queue and
                        self._event_queue[-1].event_type == EventType.POINTER_MOVE):
                    self._event_queue.pop()
                self._push(event.pos, EventType.POINTER_MOVE)
            elif event.type != pygame.MOUSEBUTTONUP:
                # Re-post non-mouse events for the main loop to handle
                pygame.event.post(event)

    def _push(self, pos, event_type: EventType) -> None:
        pos_x, pos_y = pos
        self._event_queue.append(InputEvent(
            position=Vector2D(x=float(pos_x), y=float(pos_y)),
            timestamp=time.monotonic(),
            event_type=event_type,
        ))

    def clear(self) -> None:
        """Clear the event queue."""
        self._event_queue.clear()
