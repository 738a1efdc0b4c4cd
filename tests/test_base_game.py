"""
Tests for BaseGame metadata, arguments and state mapping.
"""

import pygame
import pytest

from models import RoundPhase
from taptapbug.games import BaseGame, GameState


class DemoGame(BaseGame):
    NAME = "Demo"
    DESCRIPTION = "A demo game"
    VERSION = "2.0.0"
    AUTHOR = "Tests"
    ARGUMENTS = [
        {'name': '--speed', 'type': float, 'default': 1.0, 'help': 'Speed'},
        {'name': '--fps', 'type': int, 'default': 30, 'help': 'Demo fps'},
    ]

    def __init__(self):
        self.phase = RoundPhase.ACTIVE

    def _get_internal_state(self) -> GameState:
        return self.phase.to_game_state()

    def get_score(self) -> int:
        return 0

    def update(self) -> None:
        pass

    def render(self, screen: pygame.Surface) -> None:
        pass

    def on_pointer_down(self, x: float, y: float) -> None:
        pass

    def on_pointer_move(self, x: float, y: float) -> None:
        pass


class TestBaseGame:

    def test_abstract(self):
        with pytest.raises(TypeError):
            BaseGame()  # type: ignore

    def test_game_arguments_come_first_and_override_base(self):
        names = [arg['name'] for arg in DemoGame.get_arguments()]
        assert names == ['--speed', '--fps', '--log-level']
        fps = next(arg for arg in DemoGame.get_arguments() if arg['name'] == '--fps')
        assert fps['default'] == 30

    def test_info(self):
        info = DemoGame.get_info()
        assert info['name'] == "Demo"
        assert info['version'] == "2.0.0"
        assert len(info['arguments']) == 3

    @pytest.mark.parametrize("phase,state", [
        (RoundPhase.ACTIVE, GameState.PLAYING),
        (RoundPhase.DRAINING, GameState.PLAYING),
        (RoundPhase.WON, GameState.WON),
        (RoundPhase.LOST, GameState.GAME_OVER),
    ])
    def test_state_follows_internal_phase(self, phase, state):
        game = DemoGame()
        game.phase = phase
        assert game.state == state

    def test_default_reset_is_noop(self):
        DemoGame().reset()
