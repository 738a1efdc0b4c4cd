"""Image and sprite sheet registry for Tap Tap Bug.

The host registers every image and sprite sheet once at setup. Entities and
the round controller only look resources up by id.

Image pixels load separately from registration: an ImageResource knows its
declared size immediately, but its surface stays None until load() runs.
The simulation only needs the sizes, so rounds can run (and be tested)
before or without any pixels being loaded. Rendering skips anything whose
surface is not there yet.

Usage:
    registry = ResourceRegistry(assets_dir=Path('assets'))
    registry.add_image('IMG_BG', 'background_table.png', 387, 600)
    registry.add_sprite_sheet('SPR_FOOD', 'food_sprite.png', 896, 56, 16)
    registry.load_all()

    sheet = registry.get_sprite_sheet('SPR_FOOD')
    sheet.frame_width  # 56.0
"""

from pathlib import Path
from typing import Callable, Dict, Optional

import pygame

from models.taptapbug import AssetsConfig
from taptapbug.logging import get_logger

log = get_logger('resources')

# Draws a stand-in surface of the requested size when the file is missing
PlaceholderFactory = Callable[[int, int], pygame.Surface]


class ImageResource:
    """An image with a declared size and a lazily loaded surface."""

    def __init__(
        self,
        image_id: str,
        path: Optional[Path],
        width: int,
        height: int,
        placeholder: Optional[PlaceholderFactory] = None,
    ):
        self.image_id = image_id
        self.path = path
        self.width = width
        self.height = height
        self._placeholder = placeholder
        self._surface: Optional[pygame.Surface] = None

    @property
    def surface(self) -> Optional[pygame.Surface]:
        """Loaded pixels, or None until load() has completed."""
        return self._surface

    @property
    def is_loaded(self) -> bool:
        return self._surface is not None

    def set_surface(self, surface: pygame.Surface) -> None:
        """Attach pixels directly, scaled to the declared size if needed."""
        if surface.get_size() != (self.width, self.height):
            surface = pygame.transform.scale(surface, (self.width, self.height))
        self._surface = surface

    def load(self) -> bool:
        """Load pixels from disk, falling back to the placeholder factory.

        Returns:
            True if a surface is available afterwards
        """
        if self._surface is not None:
            return True

        if self.path is not None and self.path.exists():
            try:
                self.set_surface(pygame.image.load(str(self.path)))
                log.debug("Loaded image '%s' from %s", self.image_id, self.path)
                return True
            except pygame.error as e:
                log.warning("Failed to load image '%s' from %s: %s", self.image_id, self.path, e)

        if self._placeholder is not None:
            self.set_surface(self._placeholder(self.width, self.height))
            log.debug("Using placeholder for image '%s'", self.image_id)
            return True

        log.warning("No pixels available for image '%s'", self.image_id)
        return False


class SpriteSheet:
    """A horizontal strip of equal-width animation frames."""

    def __init__(self, sheet_id: str, image: ImageResource, num_frames: int):
        if num_frames < 1:
            raise ValueError(f"Sprite sheet '{sheet_id}' needs at least one frame")
        self.sheet_id = sheet_id
        self.image = image
        self.num_frames = num_frames

    @property
    def width(self) -> int:
        """Width of the whole sheet."""
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def frame_width(self) -> float:
        return self.image.width / self.num_frames

    @property
    def surface(self) -> Optional[pygame.Surface]:
        return self.image.surface


class ResourceRegistry:
    """Stores images and sprite sheets by string id."""

    def __init__(self, assets_dir: Optional[Path] = None):
        self._assets_dir = Path(assets_dir) if assets_dir else None
        self._images: Dict[str, ImageResource] = {}
        self._sprite_sheets: Dict[str, SpriteSheet] = {}

    def _resolve(self, file: Optional[str]) -> Optional[Path]:
        if not file:
            return None
        path = Path(file)
        if not path.is_absolute() and self._assets_dir is not None:
            path = self._assets_dir / path
        return path

    def add_image(
        self,
        image_id: str,
        file: Optional[str],
        width: int,
        height: int,
        placeholder: Optional[PlaceholderFactory] = None,
    ) -> ImageResource:
        """Register a plain image."""
        image = ImageResource(image_id, self._resolve(file), width, height, placeholder)
        self._images[image_id] = image
        return image

    def add_sprite_sheet(
        self,
        sheet_id: str,
        file: Optional[str],
        width: int,
        height: int,
        num_frames: int,
        placeholder: Optional[PlaceholderFactory] = None,
    ) -> SpriteSheet:
        """Register a sprite sheet of num_frames frames laid out horizontally."""
        image = ImageResource(sheet_id, self._resolve(file), width, height, placeholder)
        sheet = SpriteSheet(sheet_id, image, num_frames)
        self._sprite_sheets[sheet_id] = sheet
        return sheet

    def register_assets(
        self,
        assets: AssetsConfig,
        placeholders: Optional[Dict[str, PlaceholderFactory]] = None,
    ) -> None:
        """Register every image and sprite sheet declared by a round."""
        placeholders = placeholders or {}
        for image_id, image in assets.images.items():
            self.add_image(image_id, image.file, image.width, image.height,
                           placeholders.get(image_id))
        for sheet_id, sheet in assets.sprite_sheets.items():
            self.add_sprite_sheet(sheet_id, sheet.file, sheet.width, sheet.height,
                                  sheet.frames, placeholders.get(sheet_id))

    def get_image(self, image_id: str) -> ImageResource:
        if image_id not in self._images:
            raise KeyError(f"Unknown image id '{image_id}'")
        return self._images[image_id]

    def get_sprite_sheet(self, sheet_id: str) -> SpriteSheet:
        if sheet_id not in self._sprite_sheets:
            raise KeyError(f"Unknown sprite sheet id '{sheet_id}'")
        return self._sprite_sheets[sheet_id]

    def has_image(self, image_id: str) -> bool:
        return image_id in self._images

    def has_sprite_sheet(self, sheet_id: str) -> bool:
        return sheet_id in self._sprite_sheets

    def load_all(self) -> int:
        """Load pixels for every registered resource.

        Returns:
            Number of resources that failed to load
        """
        failures = 0
        resources = list(self._images.values())
        resources.extend(sheet.image for sheet in self._sprite_sheets.values())
        for image in resources:
            if not image.load():
                failures += 1
        log.info("Loaded %d resources (%d failed)", len(resources) - failures, failures)
        return failures
