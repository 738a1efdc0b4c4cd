"""
Tap Tap Bug - spawn timing, species selection and food layout.

Handles when the next bug appears, which species it is, and where the
food goes at the start of a round.
"""
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

from models.taptapbug import BugSpecies, PlacementArea, SpacingTolerance
from taptapbug.logging import get_logger

log = get_logger('spawning')


class FoodPlacementError(ValueError):
    """The requested food layout does not fit the placement area."""


class SpeciesTable:
    """Weighted species draw.

    Each species is entered round(weight * 10) times into a flat candidate
    list and draws pick uniformly from that list. This is only an approximate
    categorical distribution: it is exact for weights that are multiples of
    0.1 and sum to 1.
    """

    def __init__(self, species: Sequence[BugSpecies], rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._species = {s.sprite_id: s for s in species}
        self._candidates: List[str] = []
        for s in species:
            self._candidates.extend([s.sprite_id] * int(round(s.weight * 10)))
        if not self._candidates:
            raise ValueError("Species table is empty: every weight rounds to zero")

    @property
    def candidates(self) -> List[str]:
        """Flattened candidate list (one entry per tenth of weight)."""
        return list(self._candidates)

    def get(self, sprite_id: str) -> BugSpecies:
        return self._species[sprite_id]

    def draw(self) -> BugSpecies:
        """Pick the species of the next bug."""
        return self._species[self._rng.choice(self._candidates)]


class SpawnTimer:
    """Tick counter that triggers a spawn after a randomly chosen interval.

    The first interval is 0 seconds, so the first tick spawns immediately.
    After each spawn a new interval is drawn from the candidates.
    """

    def __init__(self, intervals: Sequence[float], fps: int, rng: Optional[random.Random] = None):
        if not intervals:
            raise ValueError("At least one spawn interval is required")
        self._intervals = list(intervals)
        self._fps = fps
        self._rng = rng or random.Random()
        self.ticks = 0
        self.interval = 0.0

    def reset(self) -> None:
        self.ticks = 0
        self.interval = 0.0

    def tick(self) -> bool:
        """Count one tick.

        Returns:
            True when a bug should spawn on this tick
        """
        self.ticks += 1
        if self.ticks > self.interval * self._fps:
            self.ticks = 0
            self.interval = self._rng.choice(self._intervals)
            return True
        return False


@dataclass
class FoodPlacement:
    """Accepted food position and the sheet frame it shows."""
    x: int
    y: int
    frame: int


class FoodPlacer:
    """Random, non-overlapping food layout.

    Candidates are integer top-left corners drawn uniformly from the placement
    area. A candidate is rejected when it is within food size plus tolerance of
    an accepted position on both axes at once. Frames are chosen among the
    ones not used yet until every frame has been used, then any frame may
    repeat.
    """

    def __init__(
        self,
        area: PlacementArea,
        tolerance: SpacingTolerance,
        food_width: float,
        food_height: float,
        num_frames: int,
        rng: Optional[random.Random] = None,
        max_attempts: int = 10000,
    ):
        self.area = area
        self.tolerance = tolerance
        self.food_width = food_width
        self.food_height = food_height
        self.num_frames = num_frames
        self._rng = rng or random.Random()
        self.max_attempts = max_attempts

    def is_too_close(self, x: float, y: float, placed: Sequence[FoodPlacement]) -> bool:
        """Check a candidate against every accepted position."""
        min_dx = self.food_width + self.tolerance.x
        min_dy = self.food_height + self.tolerance.y
        for p in placed:
            if abs(x - p.x) <= min_dx and abs(y - p.y) <= min_dy:
                return True
        return False

    def place(self, count: int) -> List[FoodPlacement]:
        """Lay out count food items.

        Raises:
            FoodPlacementError: If the layout cannot be completed within
                max_attempts candidate draws
        """
        placed: List[FoodPlacement] = []
        used_frames: List[int] = []
        attempts = 0

        while len(placed) < count:
            if attempts >= self.max_attempts:
                raise FoodPlacementError(
                    f"Placed only {len(placed)} of {count} food items after "
                    f"{attempts} attempts; widen the area or lower the tolerance"
                )
            attempts += 1

            x = self._rng.randint(self.area.low_x, self.area.high_x)
            y = self._rng.randint(self.area.low_y, self.area.high_y)
            if self.is_too_close(x, y, placed):
                continue

            frame = self._choose_frame(used_frames)
            if frame not in used_frames:
                used_frames.append(frame)
            placed.append(FoodPlacement(x=x, y=y, frame=frame))

        log.debug("Placed %d food items in %d attempts", count, attempts)
        return placed

    def _choose_frame(self, used_frames: List[int]) -> int:
        unused = [f for f in range(self.num_frames) if f not in used_frames]
        if unused:
            return self._rng.choice(unused)
        return self._rng.randrange(self.num_frames)
