"""
Pydantic v2 models for round YAML configuration.

These models validate and parse the round definition files that describe
the food layout, the bug species, spawn timing and the assets a round uses.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class PlacementArea(BaseModel):
    """
    Inclusive integer rectangle where food may be placed.

    Candidate positions are drawn uniformly from [low_x, high_x] x [low_y, high_y].
    """
    model_config = {"frozen": True}

    low_x: int = Field(description="Smallest x coordinate of a food's top-left corner")
    high_x: int = Field(description="Largest x coordinate of a food's top-left corner")
    low_y: int = Field(description="Smallest y coordinate of a food's top-left corner")
    high_y: int = Field(description="Largest y coordinate of a food's top-left corner")

    @model_validator(mode='after')
    def validate_bounds(self) -> 'PlacementArea':
        """Ensure low <= high on both axes."""
        if self.low_x > self.high_x:
            raise ValueError(f"low_x ({self.low_x}) must not exceed high_x ({self.high_x})")
        if self.low_y > self.high_y:
            raise ValueError(f"low_y ({self.low_y}) must not exceed high_y ({self.high_y})")
        return self


class SpacingTolerance(BaseModel):
    """Extra gap kept between food items, per axis, on top of the food size."""
    model_config = {"frozen": True}

    x: float = Field(default=0.0, ge=0.0)
    y: float = Field(default=0.0, ge=0.0)


class FoodConfig(BaseModel):
    """
    Food layout for a round.

    Defines how many food items are placed, where, and which sprite sheet
    supplies their frames.
    """
    model_config = {"frozen": True}

    count: int = Field(description="Number of food items placed at round start", ge=1)
    area: PlacementArea = Field(description="Placement rectangle for food top-left corners")
    tolerance: SpacingTolerance = Field(
        default_factory=SpacingTolerance,
        description="Minimum extra spacing between food items"
    )
    sprite_id: str = Field(description="Sprite sheet id for food frames")


class BugSpecies(BaseModel):
    """
    One kind of bug.

    The weight is the spawn probability share. Each species is entered into
    the spawn table round(weight * 10) times, so weights are meant to be
    multiples of 0.1 that sum to 1.
    """
    model_config = {"frozen": True}

    sprite_id: str = Field(description="Sprite sheet id, also the species id")
    point_value: int = Field(description="Points awarded for squashing this bug", ge=0)
    speed: float = Field(description="Pixels moved per tick", gt=0.0)
    weight: float = Field(description="Spawn probability share", ge=0.0)


class ImageAsset(BaseModel):
    """Plain image (backgrounds)."""
    model_config = {"frozen": True}

    file: str
    width: int = Field(gt=0)
    height: int = Field(gt=0)


class SpriteSheetAsset(BaseModel):
    """Horizontal strip of equal-width animation frames."""
    model_config = {"frozen": True}

    file: str
    width: int = Field(description="Width of the whole sheet", gt=0)
    height: int = Field(gt=0)
    frames: int = Field(ge=1)

    @model_validator(mode='after')
    def validate_frames_fit(self) -> 'SpriteSheetAsset':
        """Each frame must be at least one pixel wide."""
        if self.width < self.frames:
            raise ValueError(
                f"Sheet width {self.width} is too small for {self.frames} frames"
            )
        return self


class AssetsConfig(BaseModel):
    """Asset files registered with the resource registry before a round starts."""
    model_config = {"frozen": True}

    images: Dict[str, ImageAsset] = Field(default_factory=dict)
    sprite_sheets: Dict[str, SpriteSheetAsset] = Field(default_factory=dict)


class RoundConfig(BaseModel):
    """
    Complete round configuration from YAML.

    Top-level model consumed by TapTapBugMode.init(): time limit, food
    layout, spawn timing, bug species and assets.
    """
    model_config = {"frozen": True}

    name: str = Field(description="Human-readable name of the round")
    id: str = Field(description="Unique identifier for the round")
    description: str = Field(default="")
    allotted_time: float = Field(
        description="Seconds the player must survive to win",
        gt=0.0
    )
    spawn_intervals: List[float] = Field(
        description="Candidate seconds between bug spawns, one is drawn per spawn",
        min_length=1
    )
    food: FoodConfig
    species: List[BugSpecies] = Field(min_length=1)
    background_image_id: Optional[str] = Field(
        default=None,
        description="Image id tiled behind the round (None = plain fill)"
    )
    assets: AssetsConfig = Field(default_factory=AssetsConfig)

    @field_validator("spawn_intervals")
    @classmethod
    def validate_spawn_intervals(cls, v: List[float]) -> List[float]:
        """Spawn intervals must not be negative."""
        for interval in v:
            if interval < 0:
                raise ValueError(f"Spawn intervals must be non-negative, got {interval}")
        return v

    @field_validator("species")
    @classmethod
    def validate_species(cls, v: List[BugSpecies]) -> List[BugSpecies]:
        """Species ids must be unique and at least one must be spawnable."""
        ids = [s.sprite_id for s in v]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate species sprite ids: {ids}")
        if all(round(s.weight * 10) == 0 for s in v):
            raise ValueError("At least one species needs a weight of 0.05 or more")
        return v
