"""
Tap Tap Bug game mode.

Bugs crawl onto the picnic table and eat the food. Squash them by clicking
before the food is gone. The player wins if any food survives until the
countdown runs out.

The mode owns the round state: food and bug lists, score, countdown and
spawn timer. The GameSystem driver calls update() and render() once per
fixed tick and forwards pointer events to on_pointer_down/on_pointer_move.
"""

import math
import random
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import pygame

from games.TapTapBug.config import (
    BACKGROUND_COLOR,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    FOOD_PLACEMENT_ATTEMPTS,
)
from games.TapTapBug.game.bug import Bug
from games.TapTapBug.game.food import Food
from games.TapTapBug.game.resources import ResourceRegistry
from games.TapTapBug.game.spawning import FoodPlacer, SpawnTimer, SpeciesTable
from models.taptapbug import (
    BugSpecies,
    CursorStyle,
    PlacementArea,
    RoundConfig,
    RoundPhase,
    SpacingTolerance,
)
from taptapbug.games import BaseGame, GameState
from taptapbug.logging import emit_record, get_logger

log = get_logger('round')

ScoreCallback = Callable[[int], None]
TimeCallback = Callable[[int], None]
GameOverCallback = Callable[[int, bool], None]


class TapTapBugMode(BaseGame):
    """
    Tap Tap Bug round controller.

    Configure with the setters (or init(config=...)), then init() once and
    reset() for every new round. The round is over ("draining") as soon as the
    countdown drops below one second or the last food is gone; the game-over
    callback fires once every remaining bug has faded out.
    """

    # Game metadata
    NAME = "Tap Tap Bug"
    DESCRIPTION = "Squash the bugs before they eat the picnic."
    VERSION = "1.0.0"
    AUTHOR = "Tap Tap Bug Team"

    # CLI argument definitions
    ARGUMENTS = [
        {
            'name': '--round',
            'type': str,
            'default': None,
            'help': 'Round definition to play (file name in rounds/ without .yaml)'
        },
        {
            'name': '--time',
            'type': float,
            'default': None,
            'help': 'Seconds to survive (overrides the round file)'
        },
        {
            'name': '--food',
            'type': int,
            'default': None,
            'help': 'Number of food items (overrides the round file)'
        },
    ]

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        food_placement_attempts: int = FOOD_PLACEMENT_ATTEMPTS,
    ):
        """
        Create an unconfigured round controller.

        Args:
            rng: Random source for spawning and food layout
            food_placement_attempts: Candidate draws before a food layout is
                declared infeasible
        """
        self._rng = rng or random.Random()
        self._food_placement_attempts = food_placement_attempts

        # Bound by init()
        self._fps: Optional[int] = None
        self._resources: Optional[ResourceRegistry] = None
        self._canvas_size: Tuple[int, int] = (CANVAS_WIDTH, CANVAS_HEIGHT)

        # Configuration
        self._round_id = "custom"
        self._default_time_allotted = 0.0
        self._food_count = 0
        self._food_area: Optional[PlacementArea] = None
        self._food_tolerance = SpacingTolerance()
        self._food_sprite_id: Optional[str] = None
        self._background_image_id: Optional[str] = None
        self._spawn_intervals: List[float] = []
        self._species: Dict[str, BugSpecies] = {}

        # Host callbacks
        self._on_score_changed: ScoreCallback = lambda score: None
        self._on_time_changed: TimeCallback = lambda seconds: None
        self._on_game_over: GameOverCallback = lambda score, is_win: None

        # Round state
        self._score = 0
        self._time_allotted = 0.0
        self._foods: List[Food] = []
        self._bugs: List[Bug] = []
        self._is_over = False
        self._phase = RoundPhase.ACTIVE
        self._game_over_fired = False
        self._species_table: Optional[SpeciesTable] = None
        self._spawn_timer: Optional[SpawnTimer] = None
        self._mouse: Tuple[float, float] = (0.0, 0.0)
        self._cursor = CursorStyle.DEFAULT
        self._background: Optional[pygame.Surface] = None

        # Stats
        self._ticks = 0
        self._bugs_spawned = 0
        self._bugs_squashed = 0
        self._food_eaten = 0

    # =========================================================================
    # Configuration
    # =========================================================================

    def configure(self, config: RoundConfig) -> None:
        """Apply a round definition through the setters."""
        self._round_id = config.id
        self.set_allotted_time(config.allotted_time)
        self.set_food_count(config.food.count)
        area = config.food.area
        self.set_food_area(area.low_x, area.high_x, area.low_y, area.high_y)
        self.set_food_tolerance(config.food.tolerance.x, config.food.tolerance.y)
        self.set_food_sprite_id(config.food.sprite_id)
        self.set_background_image_id(config.background_image_id)
        self.set_spawn_intervals(config.spawn_intervals)
        self._species.clear()
        for species in config.species:
            self.add_bug_species(species.sprite_id, species.point_value,
                                 species.speed, species.weight)

    def set_allotted_time(self, seconds: float) -> None:
        """Seconds to survive.

        One extra second is added so the countdown shows the full allotted
        time for the first second and ends exactly when it drops below 1.
        """
        self._default_time_allotted = seconds + 1

    def set_food_count(self, count: int) -> None:
        if count < 1:
            raise ValueError(f"Food count must be at least 1, got {count}")
        self._food_count = count

    def set_food_area(self, low_x: int, high_x: int, low_y: int, high_y: int) -> None:
        """Inclusive range for food top-left corners."""
        self._food_area = PlacementArea(low_x=low_x, high_x=high_x, low_y=low_y, high_y=high_y)

    def set_food_tolerance(self, x: float, y: float) -> None:
        self._food_tolerance = SpacingTolerance(x=x, y=y)

    def set_food_sprite_id(self, sprite_id: str) -> None:
        self._food_sprite_id = sprite_id

    def set_background_image_id(self, image_id: Optional[str]) -> None:
        self._background_image_id = image_id
        self._background = None

    def set_spawn_intervals(self, intervals: Sequence[float]) -> None:
        if not intervals:
            raise ValueError("At least one spawn interval is required")
        self._spawn_intervals = list(intervals)

    def add_bug_species(self, sprite_id: str, point_value: int, speed: float,
                        weight: float) -> None:
        """Add (or replace) a bug species keyed by its sprite sheet id."""
        self._species[sprite_id] = BugSpecies(
            sprite_id=sprite_id, point_value=point_value, speed=speed, weight=weight
        )

    def bind_score_changed(self, callback: ScoreCallback) -> None:
        self._on_score_changed = callback

    def bind_time_changed(self, callback: TimeCallback) -> None:
        self._on_time_changed = callback

    def bind_game_over(self, callback: GameOverCallback) -> None:
        self._on_game_over = callback

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def init(
        self,
        fps: int,
        resources: ResourceRegistry,
        canvas_size: Optional[Tuple[int, int]] = None,
        config: Optional[RoundConfig] = None,
    ) -> None:
        """
        Bind the simulation rate and resources, then start a fresh round.

        Args:
            fps: Ticks per second of the driving loop
            resources: Registry holding the food/bug sprite sheets and background
            canvas_size: Play field size in pixels
            config: Optional round definition applied before the first reset
        """
        if fps <= 0:
            raise ValueError(f"FPS must be positive, got {fps}")
        self._fps = fps
        self._resources = resources
        if canvas_size is not None:
            self._canvas_size = (int(canvas_size[0]), int(canvas_size[1]))
        if config is not None:
            self.configure(config)
        self._background = None
        self.reset()

    def reset(self) -> None:
        """Start a new round: clear entities, lay out fresh food, zero the score."""
        self._require_init()
        if self._food_sprite_id is None or self._food_area is None or self._food_count < 1:
            raise ValueError("Food sprite, area and count must be configured before reset()")

        self._time_allotted = self._default_time_allotted
        self._score = 0
        self._ticks = 0
        self._bugs_spawned = 0
        self._bugs_squashed = 0
        self._food_eaten = 0
        self._species_table = SpeciesTable(list(self._species.values()), self._rng)
        self._spawn_timer = SpawnTimer(self._spawn_intervals, self._fps, self._rng)
        self._bugs = []
        self._foods = []
        self._is_over = False
        self._phase = RoundPhase.ACTIVE
        self._game_over_fired = False
        self._cursor = CursorStyle.DEFAULT
        self._on_score_changed(0)
        self._make_food()
        log.info("Round '%s' started: %d food, %.0fs", self._round_id,
                 len(self._foods), self._time_allotted - 1)

    def _require_init(self) -> None:
        if self._fps is None or self._resources is None:
            raise RuntimeError("TapTapBugMode.init() must be called first")

    # =========================================================================
    # State
    # =========================================================================

    def _get_internal_state(self) -> GameState:
        return self._phase.to_game_state()

    def get_score(self) -> int:
        return self._score

    @property
    def phase(self) -> RoundPhase:
        return self._phase

    @property
    def is_over(self) -> bool:
        """True once the end condition has been met (bugs may still be fading)."""
        return self._is_over

    @property
    def time_remaining(self) -> float:
        """Countdown in seconds, including the extra display second."""
        return self._time_allotted

    @property
    def seconds_remaining(self) -> int:
        return math.floor(self._time_allotted)

    @property
    def foods(self) -> List[Food]:
        return list(self._foods)

    @property
    def bugs(self) -> List[Bug]:
        return list(self._bugs)

    @property
    def cursor(self) -> CursorStyle:
        return self._cursor

    @property
    def fps(self) -> Optional[int]:
        return self._fps

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return self._canvas_size

    @property
    def species_table(self) -> Optional[SpeciesTable]:
        return self._species_table

    def get_stats(self) -> Dict[str, int]:
        return {
            'score': self._score,
            'ticks': self._ticks,
            'bugs_spawned': self._bugs_spawned,
            'bugs_squashed': self._bugs_squashed,
            'food_eaten': self._food_eaten,
        }

    # =========================================================================
    # Tick
    # =========================================================================

    def update(self) -> None:
        """Advance the round by one tick."""
        self._require_init()
        self._ticks += 1

        if not self._is_over:
            self._time_allotted -= 1 / self._fps
            self._on_time_changed(math.floor(self._time_allotted))
            if self._spawn_timer.tick():
                self._spawn_bug()

        self._check_round_over()
        self._update_cursor()

        for food in list(self._foods):
            food.update()
            if food.is_removable:
                self._foods.remove(food)

        for bug in list(self._bugs):
            self._food_eaten += len(bug.update(self._foods))
            if self._is_over:
                bug.kill()
            if bug.is_removable:
                self._bugs.remove(bug)

    def render(self, screen: pygame.Surface) -> None:
        """Draw background, then food, then bugs (bugs on top)."""
        self._require_init()
        self._render_background(screen)
        for food in self._foods:
            food.render(screen)
        for bug in self._bugs:
            bug.render(screen)

    # =========================================================================
    # Input
    # =========================================================================

    def on_pointer_down(self, x: float, y: float) -> None:
        """Squash every bug under the cursor, scoring each live one once."""
        self._mouse = (x, y)
        for bug in self._bugs:
            if bug.box.contains_point(x, y):
                if not bug.is_dead:
                    self._score += bug.point_value
                    self._bugs_squashed += 1
                    self._on_score_changed(self._score)
                    log.debug("Squashed %s for %d points", bug.species_id, bug.point_value)
                bug.kill()

    def on_pointer_move(self, x: float, y: float) -> None:
        self._mouse = (x, y)

    # =========================================================================
    # Internals
    # =========================================================================

    def _check_round_over(self) -> None:
        """Soft-end the round on timeout or no food; fire game over once bugs drain."""
        if not self._is_over and (self._time_allotted < 1 or not self._foods):
            self._is_over = True
            self._phase = RoundPhase.DRAINING
            log.info("Round over (%s), waiting for %d bugs",
                     "time up" if self._time_allotted < 1 else "food gone",
                     len(self._bugs))

        if self._is_over and not self._bugs and not self._game_over_fired:
            self._game_over_fired = True
            is_win = self._time_allotted < 1
            self._phase = RoundPhase.WON if is_win else RoundPhase.LOST
            log.info("Game over: score %d, %s", self._score, "won" if is_win else "lost")
            emit_record('rounds', {
                'type': 'round_over',
                'round': self._round_id,
                'won': is_win,
                **self.get_stats(),
            })
            self._on_game_over(self._score, is_win)

    def _update_cursor(self) -> None:
        mouse_x, mouse_y = self._mouse
        hovering = any(bug.box.contains_point(mouse_x, mouse_y) for bug in self._bugs)
        self._cursor = CursorStyle.POINTER if hovering else CursorStyle.DEFAULT

    def _make_food(self) -> None:
        sheet = self._resources.get_sprite_sheet(self._food_sprite_id)
        placer = FoodPlacer(
            area=self._food_area,
            tolerance=self._food_tolerance,
            food_width=sheet.frame_width,
            food_height=sheet.height,
            num_frames=sheet.num_frames,
            rng=self._rng,
            max_attempts=self._food_placement_attempts,
        )
        for placement in placer.place(self._food_count):
            self._foods.append(Food(sheet, self._fps, placement.frame,
                                    placement.x, placement.y))

    def _spawn_bug(self) -> None:
        """Spawn one bug just off the top or bottom edge."""
        species = self._species_table.draw()
        sheet = self._resources.get_sprite_sheet(species.sprite_id)
        width, height = self._canvas_size
        bug_height = sheet.height
        y = self._rng.choice([-bug_height, height + bug_height])
        x = self._rng.randint(bug_height, width - bug_height)
        self._bugs.append(Bug(sheet, species.point_value, species.speed,
                              self._fps, x, y, species_id=species.sprite_id))
        self._bugs_spawned += 1
        log.debug("Spawned %s at (%d, %d)", species.sprite_id, x, y)

    def _render_background(self, screen: pygame.Surface) -> None:
        """Tile the background image; skipped until its pixels have loaded."""
        if self._background_image_id is None:
            screen.fill(BACKGROUND_COLOR)
            return

        if self._background is None:
            image = self._resources.get_image(self._background_image_id)
            if image.surface is None:
                return
            self._background = self._build_pattern(image.surface)

        screen.blit(self._background, (0, 0))

    def _build_pattern(self, tile: pygame.Surface) -> pygame.Surface:
        width, height = self._canvas_size
        pattern = pygame.Surface((width, height))
        tile_w, tile_h = tile.get_size()
        for ty in range(0, height, tile_h):
            for tx in range(0, width, tile_w):
                pattern.blit(tile, (tx, ty))
        return pattern
