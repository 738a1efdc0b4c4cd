"""
Tests for TapTapBugMode - the round controller.

Tests cover:
- Setup, reset and the before-init guard
- Countdown, spawning and spawn positions
- Click scoring (idempotent per bug) and hover cursor
- Soft over / hard over, win and loss, game-over fired once
- Background and entity rendering
"""

import random
from typing import Any, Dict, List
from unittest.mock import Mock

import pygame
import pytest

from games.TapTapBug.config import BACKGROUND_COLOR
from games.TapTapBug.game.bug import Bug
from games.TapTapBug.game.resources import ResourceRegistry
from games.TapTapBug.game.round_loader import RoundLoader
from games.TapTapBug.game.spawning import FoodPlacementError
from games.TapTapBug.game_info import get_game_mode
from games.TapTapBug.game_mode import TapTapBugMode
from models import CursorStyle, GameState, RoundPhase
from taptapbug.logging import LogSink, close_all_sinks, register_sink

FPS = 10
CANVAS = (387, 600)


def make_registry() -> ResourceRegistry:
    registry = ResourceRegistry()
    registry.add_image('IMG_BG', None, 387, 600)
    registry.add_sprite_sheet('SPR_FOOD', None, 896, 56, 16)
    registry.add_sprite_sheet('SPR_RED_BUG', None, 90, 50, 2)
    registry.add_sprite_sheet('SPR_GREY_BUG', None, 90, 50, 2)
    return registry


def make_mode(seed=0, allotted=5.0, food=3, intervals=(100.0,)) -> TapTapBugMode:
    mode = TapTapBugMode(rng=random.Random(seed))
    mode.set_allotted_time(allotted)
    mode.set_food_count(food)
    mode.set_food_area(10, 300, 120, 380)
    mode.set_food_tolerance(30, 30)
    mode.set_food_sprite_id('SPR_FOOD')
    mode.set_background_image_id('IMG_BG')
    mode.set_spawn_intervals(list(intervals))
    mode.add_bug_species('SPR_RED_BUG', 3, 2.5, 1.0)
    return mode


@pytest.fixture
def registry():
    return make_registry()


@pytest.fixture
def mode(registry):
    mode = make_mode()
    mode.init(FPS, registry, CANVAS)
    return mode


def center_of(bug: Bug):
    return bug.box.x + bug.box.width / 2, bug.box.y + bug.box.height / 2


def run_until_over(mode: TapTapBugMode, limit: int = 2000) -> int:
    ticks = 0
    while mode.state == GameState.PLAYING:
        mode.update()
        ticks += 1
        assert ticks < limit
    return ticks


class RecordingSink(LogSink):
    """Collects structured records in memory."""

    def __init__(self):
        self.records: List[Dict[str, Any]] = []

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        self.records.append(record)

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


# ============================================================================
# Setup
# ============================================================================


class TestSetup:

    def test_update_before_init_raises(self):
        with pytest.raises(RuntimeError):
            make_mode().update()

    def test_render_before_init_raises(self):
        with pytest.raises(RuntimeError):
            make_mode().render(pygame.Surface(CANVAS))

    def test_reset_lays_out_food(self, mode):
        assert len(mode.foods) == 3
        for food in mode.foods:
            assert 10 <= food.x <= 300
            assert 120 <= food.y <= 380
        assert len({food.frame for food in mode.foods}) == 3

    def test_reset_state(self, mode):
        assert mode.get_score() == 0
        assert mode.bugs == []
        assert not mode.is_over
        assert mode.state == GameState.PLAYING
        assert mode.time_remaining == pytest.approx(6.0)
        assert mode.cursor == CursorStyle.DEFAULT

    def test_reset_fires_score_changed_zero(self, registry):
        mode = make_mode()
        on_score = Mock()
        mode.bind_score_changed(on_score)
        mode.init(FPS, registry, CANVAS)
        on_score.assert_called_once_with(0)

    def test_init_with_round_config(self, registry):
        config = RoundLoader().load_round('classic')
        registry.add_sprite_sheet('SPR_ORAN_BUG', None, 90, 50, 2)
        mode = TapTapBugMode(rng=random.Random(5))
        mode.init(FPS, registry, CANVAS, config=config)
        assert len(mode.foods) == 6
        assert mode.seconds_remaining == 61
        assert set(mode.species_table.candidates) == {'SPR_RED_BUG', 'SPR_ORAN_BUG', 'SPR_GREY_BUG'}

    def test_factory_applies_overrides(self, registry):
        registry.add_sprite_sheet('SPR_ORAN_BUG', None, 90, 50, 2)
        mode = get_game_mode(round='classic', time=10, food=2, rng=random.Random(1))
        mode.init(FPS, registry, CANVAS)
        assert len(mode.foods) == 2
        assert mode.time_remaining == pytest.approx(11.0)

    def test_invalid_setters(self):
        mode = TapTapBugMode()
        with pytest.raises(ValueError):
            mode.set_food_count(0)
        with pytest.raises(ValueError):
            mode.set_spawn_intervals([])
        with pytest.raises(ValueError):
            mode.set_food_area(100, 10, 0, 10)

    def test_reset_without_food_config_raises(self, registry):
        mode = TapTapBugMode()
        mode.set_spawn_intervals([1.0])
        mode.add_bug_species('SPR_RED_BUG', 1, 1.0, 1.0)
        with pytest.raises(ValueError):
            mode.init(FPS, registry, CANVAS)

    def test_infeasible_food_layout_raises(self, registry):
        mode = make_mode(food=5)
        mode.set_food_area(0, 10, 0, 10)
        with pytest.raises(FoodPlacementError):
            mode.init(FPS, registry, CANVAS)

    def test_non_positive_fps_rejected(self, registry):
        with pytest.raises(ValueError):
            make_mode().init(0, registry, CANVAS)


# ============================================================================
# Countdown and spawning
# ============================================================================


class TestCountdownAndSpawning:

    def test_countdown_decreases_each_tick(self, mode):
        mode.update()
        assert mode.time_remaining == pytest.approx(6.0 - 1 / FPS)

    def test_time_changed_reports_floor(self, registry):
        mode = make_mode()
        on_time = Mock()
        mode.bind_time_changed(on_time)
        mode.init(FPS, registry, CANVAS)
        mode.update()
        on_time.assert_called_once_with(5)

    def test_first_tick_spawns_a_bug(self, mode):
        mode.update()
        assert len(mode.bugs) == 1

    def test_spawn_position_off_screen(self, registry):
        for seed in range(20):
            mode = make_mode(seed=seed)
            mode.init(FPS, registry, CANVAS)
            mode.update()
            bug = mode.bugs[0]
            x, y = bug.default_position
            assert y in (-50, 650)
            assert 50 <= x <= 337

    def test_spawn_interval_respected(self, registry):
        mode = make_mode(intervals=(0.5,))
        mode.init(FPS, registry, CANVAS)
        mode.update()
        for _ in range(5):
            mode.update()
        assert len(mode.bugs) == 1
        mode.update()
        assert len(mode.bugs) == 2

    def test_species_drawn_by_weight(self, registry):
        mode = make_mode(intervals=(0,))
        mode.add_bug_species('SPR_GREY_BUG', 5, 4.0, 0.0)
        mode.init(FPS, registry, CANVAS)
        for _ in range(10):
            mode.update()
        assert {bug.species_id for bug in mode.bugs} == {'SPR_RED_BUG'}


# ============================================================================
# Input
# ============================================================================


class TestClicks:

    def test_click_squashes_and_scores(self, registry):
        mode = make_mode()
        on_score = Mock()
        mode.bind_score_changed(on_score)
        mode.init(FPS, registry, CANVAS)
        mode.update()
        bug = mode.bugs[0]

        mode.on_pointer_down(*center_of(bug))

        assert bug.is_dead
        assert mode.get_score() == 3
        on_score.assert_called_with(3)

    def test_second_click_on_dead_bug_scores_nothing(self, mode):
        mode.update()
        bug = mode.bugs[0]
        x, y = center_of(bug)
        mode.on_pointer_down(x, y)
        mode.on_pointer_down(x, y)
        assert mode.get_score() == 3

    def test_miss_scores_nothing(self, mode):
        mode.update()
        mode.on_pointer_down(5, 300)
        assert mode.get_score() == 0
        assert not mode.bugs[0].is_dead

    def test_click_hits_every_bug_under_cursor(self, mode, registry):
        sheet = registry.get_sprite_sheet('SPR_RED_BUG')
        mode._bugs.extend([Bug(sheet, 3, 2.5, FPS, 100, 10), Bug(sheet, 5, 4.0, FPS, 110, 15)])
        mode.on_pointer_down(130, 40)
        assert mode.get_score() == 8
        assert all(bug.is_dead for bug in mode.bugs)

    def test_squashed_bug_fades_and_is_evicted(self, mode):
        mode.update()
        mode.on_pointer_down(*center_of(mode.bugs[0]))
        for _ in range(2 * FPS + 2):
            mode.update()
        assert mode.bugs == []


class TestHover:

    def test_pointer_over_bug_sets_pointer_cursor(self, mode):
        mode.update()
        mode.on_pointer_move(*center_of(mode.bugs[0]))
        mode.update()
        assert mode.cursor == CursorStyle.POINTER

    def test_pointer_away_restores_default(self, mode):
        mode.update()
        mode.on_pointer_move(*center_of(mode.bugs[0]))
        mode.update()
        mode.on_pointer_move(5, 590)
        mode.update()
        assert mode.cursor == CursorStyle.DEFAULT

    def test_fading_bug_still_shows_pointer(self, mode):
        mode.update()
        x, y = center_of(mode.bugs[0])
        mode.on_pointer_down(x, y)
        mode.update()
        assert mode.cursor == CursorStyle.POINTER


# ============================================================================
# Termination
# ============================================================================


class TestTermination:

    def test_timeout_wins_once_bugs_drain(self, registry):
        mode = make_mode(allotted=1.0)
        on_over = Mock()
        mode.bind_game_over(on_over)
        mode.init(FPS, registry, CANVAS)

        for _ in range(11):
            mode.update()
        assert mode.is_over
        assert mode.phase == RoundPhase.DRAINING
        assert mode.state == GameState.PLAYING
        on_over.assert_not_called()

        run_until_over(mode)
        assert mode.state == GameState.WON
        on_over.assert_called_once_with(0, True)

    def test_countdown_stops_once_over(self, registry):
        mode = make_mode(allotted=1.0)
        mode.init(FPS, registry, CANVAS)
        for _ in range(11):
            mode.update()
        remaining = mode.time_remaining
        mode.update()
        assert mode.time_remaining == remaining
        assert remaining < 1

    def test_bugs_are_killed_when_round_ends(self, registry):
        mode = make_mode(allotted=1.0)
        mode.init(FPS, registry, CANVAS)
        for _ in range(11):
            mode.update()
        assert all(bug.is_dead for bug in mode.bugs)

    def test_no_spawns_after_round_ends(self, registry):
        mode = make_mode(allotted=1.0, intervals=(0,))
        mode.init(FPS, registry, CANVAS)
        for _ in range(11):
            mode.update()
        count = len(mode.bugs)
        mode.update()
        assert len(mode.bugs) <= count

    def test_losing_all_food_loses(self, registry):
        mode = make_mode(allotted=60.0)
        on_over = Mock()
        mode.bind_game_over(on_over)
        mode.init(FPS, registry, CANVAS)
        mode.update()
        mode.on_pointer_down(*center_of(mode.bugs[0]))

        for food in mode.foods:
            food.mark_eaten()
        run_until_over(mode)

        assert mode.foods == []
        assert mode.state == GameState.GAME_OVER
        on_over.assert_called_once_with(3, False)

    def test_game_over_fires_exactly_once(self, registry):
        mode = make_mode(allotted=1.0)
        on_over = Mock()
        mode.bind_game_over(on_over)
        mode.init(FPS, registry, CANVAS)
        run_until_over(mode)
        for _ in range(50):
            mode.update()
        assert on_over.call_count == 1

    def test_reset_starts_a_new_round(self, registry):
        mode = make_mode(allotted=1.0)
        on_over = Mock()
        mode.bind_game_over(on_over)
        mode.init(FPS, registry, CANVAS)
        run_until_over(mode)

        mode.reset()
        assert mode.state == GameState.PLAYING
        assert len(mode.foods) == 3
        run_until_over(mode)
        assert on_over.call_count == 2

    def test_round_record_emitted(self, registry):
        sink = RecordingSink()
        register_sink('rounds', sink)
        try:
            mode = make_mode(allotted=1.0)
            mode.init(FPS, registry, CANVAS)
            run_until_over(mode)
        finally:
            close_all_sinks()

        assert len(sink.records) == 1
        record = sink.records[0]
        assert record['type'] == 'round_over'
        assert record['won'] is True
        assert record['bugs_spawned'] == 1


# ============================================================================
# Rendering
# ============================================================================


class TestRender:

    def test_plain_fill_without_background_image(self, registry, pygame_init):
        mode = make_mode()
        mode.set_background_image_id(None)
        mode.init(FPS, registry, CANVAS)
        screen = pygame.Surface(CANVAS)
        mode.render(screen)
        assert screen.get_at((200, 10))[:3] == BACKGROUND_COLOR

    def test_background_skipped_until_loaded(self, mode, pygame_init):
        screen = pygame.Surface(CANVAS)
        screen.fill((1, 2, 3))
        mode.render(screen)
        assert screen.get_at((200, 10))[:3] == (1, 2, 3)

    def test_background_drawn_once_loaded(self, mode, registry, pygame_init):
        tile = pygame.Surface((387, 600))
        tile.fill((10, 120, 30))
        registry.get_image('IMG_BG').set_surface(tile)

        screen = pygame.Surface(CANVAS)
        mode.render(screen)
        assert screen.get_at((200, 10))[:3] == (10, 120, 30)

    def test_food_drawn_over_background(self, mode, registry, pygame_init):
        sheet_surface = pygame.Surface((896, 56))
        sheet_surface.fill((250, 0, 250))
        registry.get_sprite_sheet('SPR_FOOD').image.set_surface(sheet_surface)

        screen = pygame.Surface(CANVAS)
        mode.render(screen)
        food = mode.foods[0]
        x, y = food.center
        assert screen.get_at((int(x), int(y)))[:3] == (250, 0, 250)
