"""
Base Input Source - Interface for pointer backends.
"""
from abc import ABC, abstractmethod
from typing import List

from taptapbug.games.input.input_event import InputEvent


class InputSource(ABC):
    """Produces POINTER_DOWN / POINTER_MOVE events in window coordinates.

    update() gathers raw input into an internal queue; poll_events() hands
    the queue over and empties it.
    """

    @abstractmethod
    def poll_events(self) -> List[InputEvent]:
        """Return and forget the events queued since the last poll."""
        pass

    @abstractmethod
    def update(self, dt: float) -> None:
        """Collect raw input.

        Args:
            dt: Delta time in seconds since last update.
        """
        pass

    def clear(self) -> None:
        """Discard queued events."""
        self.poll_events()
