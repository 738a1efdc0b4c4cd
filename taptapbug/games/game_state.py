"""Common GameState enum for Tap Tap Bug games.

Games report one of these standard states via their `state` property.
Games can have additional internal states, but must map them to these
standard states.
"""
from enum import Enum


class GameState(Enum):
    """Standard game states used by the platform.

    States:
        PLAYING: Active gameplay in progress (including the end-of-round fade)
        PAUSED: Game temporarily paused (manual pause)
        GAME_OVER: Game ended in loss/failure
        WON: Game ended in success/victory

    For games with internal states:
        class MyGameMode(BaseGame):
            def _get_internal_state(self) -> GameState:
                if self._phase == "eaten":
                    return GameState.GAME_OVER
                elif self._phase == "time_up":
                    return GameState.WON
                return GameState.PLAYING
    """
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    WON = "won"
