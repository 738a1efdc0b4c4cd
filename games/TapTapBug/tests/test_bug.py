"""
Tests for Bug targeting, movement, eating and death.
"""

import math

import pytest

from games.TapTapBug.game.bug import Bug
from games.TapTapBug.game.food import Food
from games.TapTapBug.game.resources import ResourceRegistry


@pytest.fixture
def registry():
    registry = ResourceRegistry()
    registry.add_sprite_sheet('SPR_FOOD', None, 896, 56, 16)
    registry.add_sprite_sheet('SPR_BUG', None, 90, 50, 2)
    return registry


@pytest.fixture
def food_sheet(registry):
    return registry.get_sprite_sheet('SPR_FOOD')


@pytest.fixture
def bug_sheet(registry):
    return registry.get_sprite_sheet('SPR_BUG')


def make_bug(sheet, x=0.0, y=0.0, speed=2.0, points=3):
    return Bug(sheet, points, speed, 60, x, y)


class TestConstruction:

    def test_size_and_spawn_point(self, bug_sheet):
        bug = make_bug(bug_sheet, 100, -50)
        assert (bug.width, bug.height) == (45, 50)
        assert bug.default_position == (100, -50)
        assert bug.center == (122.5, -25)

    def test_starts_on_first_frame(self, bug_sheet):
        assert make_bug(bug_sheet).animation.frame_index == 0

    def test_faster_bugs_animate_faster(self, bug_sheet):
        assert make_bug(bug_sheet, speed=2.5).animation.ticks_per_frame == pytest.approx(4)
        assert make_bug(bug_sheet, speed=5).animation.ticks_per_frame == pytest.approx(2)


class TestTargeting:

    def test_targets_nearest_food_center(self, bug_sheet, food_sheet):
        far = Food(food_sheet, 60, 0, 300, 300)
        near = Food(food_sheet, 60, 1, 50, 50)
        bug = make_bug(bug_sheet, 0, 0)
        bug.update([far, near])
        assert bug.target == near.center

    def test_first_food_wins_ties(self, bug_sheet, food_sheet):
        # Both centers are 200 away from the bug's top-left corner
        first = Food(food_sheet, 60, 0, 172, -28)
        second = Food(food_sheet, 60, 1, -228, -28)
        bug = make_bug(bug_sheet, 0, 0)
        bug.update([first, second])
        assert bug.target == first.center

    def test_skips_eaten_food(self, bug_sheet, food_sheet):
        eaten = Food(food_sheet, 60, 0, 10, 10)
        eaten.mark_eaten()
        other = Food(food_sheet, 60, 1, 300, 300)
        bug = make_bug(bug_sheet, 0, 0)
        bug.update([eaten, other])
        assert bug.target == other.center

    def test_returns_home_when_only_food_is_eaten(self, bug_sheet, food_sheet):
        food = Food(food_sheet, 60, 0, 100, 100)
        food.mark_eaten()
        bug = make_bug(bug_sheet, 200, -50)
        bug.update([food])
        assert bug.target == (200, -50)

    def test_returns_home_when_every_food_is_eaten(self, bug_sheet, food_sheet):
        foods = [Food(food_sheet, 60, i, 100 * i, 100) for i in range(3)]
        for food in foods:
            food.mark_eaten()
        bug = make_bug(bug_sheet, 200, 650)
        bug.update(foods)
        assert bug.target == (200, 650)

    def test_returns_home_when_no_food(self, bug_sheet):
        bug = make_bug(bug_sheet, 200, -50)
        bug.update([])
        assert bug.target == (200, -50)


class TestMovement:

    def test_moves_speed_pixels_toward_target(self, bug_sheet, food_sheet):
        food = Food(food_sheet, 60, 0, 300, 400)
        bug = make_bug(bug_sheet, 0, 0, speed=2.5)
        start = bug.position
        bug.update([food])
        moved = math.hypot(bug.x - start[0], bug.y - start[1])
        assert moved == pytest.approx(2.5)

    def test_faces_direction_of_travel(self, bug_sheet, food_sheet):
        # Food center directly below the bug's center
        food = Food(food_sheet, 60, 0, -5.5, 400)
        bug = make_bug(bug_sheet, 0, 0)
        bug.update([food])
        assert bug.angle == pytest.approx(math.pi / 2)
        assert bug.x == pytest.approx(0)
        assert bug.y == pytest.approx(2)

    def test_box_follows_bug(self, bug_sheet, food_sheet):
        food = Food(food_sheet, 60, 0, 300, 400)
        bug = make_bug(bug_sheet, 0, 0)
        bug.update([food])
        assert (bug.box.x, bug.box.y) == (bug.x, bug.y)

    def test_no_movement_when_centered_on_target(self, bug_sheet):
        # Spawn point is the top-left corner; place the center there by hand
        bug = make_bug(bug_sheet, 100, 100)
        bug._x, bug._y = 100 - 22.5, 100 - 25
        bug.update([])
        assert (bug.x, bug.y) == (77.5, 75)
        assert bug.angle == 0.0
        assert not math.isnan(bug.x)

    def test_animation_advances_while_alive(self, bug_sheet):
        bug = make_bug(bug_sheet, 0, 0, speed=10)
        bug.update([])
        bug.update([])
        assert bug.animation.frame_index == 1


class TestEating:

    def test_eats_food_it_covers(self, bug_sheet, food_sheet):
        # Food box (56x56) fully contains the bug box (45x50)
        food = Food(food_sheet, 60, 0, 100, 100)
        bug = make_bug(bug_sheet, 105, 103, speed=0.5)
        eaten = bug.update([food])
        assert eaten == [food]
        assert food.is_eaten

    def test_does_not_eat_partially_overlapping_food(self, bug_sheet, food_sheet):
        food = Food(food_sheet, 60, 0, 100, 100)
        bug = make_bug(bug_sheet, 80, 80, speed=0.5)
        assert bug.update([food]) == []
        assert not food.is_eaten

    def test_eats_several_foods_in_one_tick(self, bug_sheet, food_sheet):
        first = Food(food_sheet, 60, 0, 100, 100)
        second = Food(food_sheet, 60, 1, 102, 100)
        bug = make_bug(bug_sheet, 106, 103, speed=0.1)
        eaten = bug.update([first, second])
        assert eaten == [first, second]

    def test_already_eaten_food_is_not_reported(self, bug_sheet, food_sheet):
        food = Food(food_sheet, 60, 0, 100, 100)
        food.mark_eaten()
        bug = make_bug(bug_sheet, 105, 103, speed=0.1)
        assert bug.update([food]) == []

    def test_reaches_food_eventually(self, bug_sheet, food_sheet):
        food = Food(food_sheet, 60, 0, 200, 300)
        bug = make_bug(bug_sheet, 150, -50, speed=4)
        for _ in range(200):
            bug.update([food])
            if food.is_eaten:
                break
        assert food.is_eaten


class TestDeath:

    def test_kill_is_idempotent(self, bug_sheet):
        bug = make_bug(bug_sheet)
        bug.kill()
        bug.kill()
        assert bug.is_dead

    def test_dead_bug_stops_moving(self, bug_sheet, food_sheet):
        food = Food(food_sheet, 60, 0, 300, 300)
        bug = make_bug(bug_sheet, 0, 0)
        bug.kill()
        bug.update([food])
        assert bug.position == (0, 0)
        assert not food.is_eaten

    def test_dead_bug_fades_over_two_seconds(self, bug_sheet):
        bug = make_bug(bug_sheet)
        bug.kill()
        ticks = 0
        while not bug.is_removable:
            bug.update([])
            ticks += 1
            assert ticks < 500
        assert 120 <= ticks <= 121
