"""
Tap Tap Bug enumerations.

These enums define the input, cursor and round states used by the game.
"""

from enum import Enum

from taptapbug.games.game_state import GameState


class EventType(str, Enum):
    """Types of pointer input events.

    Attributes:
        POINTER_DOWN: A click/tap at a position
        POINTER_MOVE: The pointer moved to a position
    """
    POINTER_DOWN = "pointer_down"
    POINTER_MOVE = "pointer_move"


class CursorStyle(str, Enum):
    """Cursor affordance requested by the round.

    Attributes:
        DEFAULT: Normal arrow cursor
        POINTER: Hand cursor, shown while hovering a bug
    """
    DEFAULT = "default"
    POINTER = "pointer"


class RoundPhase(str, Enum):
    """Internal phases of a Tap Tap Bug round.

    These map to the common GameState for platform compatibility:
    - ACTIVE -> GameState.PLAYING
    - DRAINING -> GameState.PLAYING (end condition met, bugs still fading)
    - WON -> GameState.WON
    - LOST -> GameState.GAME_OVER

    Attributes:
        ACTIVE: Countdown running, bugs spawning
        DRAINING: Round is over, waiting for the remaining bugs to fade out
        WON: The countdown ran out before the bugs ate all the food
        LOST: The bugs ate all the food
    """
    ACTIVE = "active"
    DRAINING = "draining"
    WON = "won"
    LOST = "lost"

    def to_game_state(self) -> GameState:
        """Convert internal phase to common GameState."""
        mapping = {
            RoundPhase.ACTIVE: GameState.PLAYING,
            RoundPhase.DRAINING: GameState.PLAYING,
            RoundPhase.WON: GameState.WON,
            RoundPhase.LOST: GameState.GAME_OVER,
        }
        return mapping[self]
