"""
Input Manager - Drains pointer events from the active source once per frame.
"""
from typing import List, Optional

from models import EventType, Vector2D
from taptapbug.games.input.input_event import InputEvent
from taptapbug.games.input.sources.base import InputSource


class InputManager:
    """Owns the active pointer source and tracks what it reported.

    The host swaps sources (real mouse, scripted playback in tests) without
    the game loop noticing. Besides handing events on, the manager keeps the
    last pointer position and a running click count for the session summary.
    """

    def __init__(self, source: Optional[InputSource] = None):
        self._source: Optional[InputSource] = None
        self._pointer: Optional[Vector2D] = None
        self._clicks = 0
        if source is not None:
            self.set_source(source)

    def set_source(self, source: InputSource) -> None:
        """Make source the active input source."""
        if not isinstance(source, InputSource):
            raise TypeError(f"Expected an InputSource, got {type(source).__name__}")
        self._source = source

    def get_source(self) -> Optional[InputSource]:
        return self._source

    def has_source(self) -> bool:
        return self._source is not None

    @property
    def pointer_position(self) -> Optional[Vector2D]:
        """Last position reported by any event, None before the first one."""
        return self._pointer

    @property
    def click_count(self) -> int:
        """POINTER_DOWN events handed out so far."""
        return self._clicks

    def update(self, dt: float) -> None:
        """Let the active source collect new events.

        Args:
            dt: Delta time in seconds since last update.
        """
        if self._source is not None:
            self._source.update(dt)

    def get_events(self) -> List[InputEvent]:
        """Events collected since the last call, in arrival order."""
        if self._source is None:
            return []
        events = self._source.poll_events()
        for event in events:
            self._pointer = event.position
            if event.event_type == EventType.POINTER_DOWN:
                self._clicks += 1
        return events

    def clear_events(self) -> None:
        """Drop pending events without counting them."""
        if self._source is not None:
            self._source.clear()
