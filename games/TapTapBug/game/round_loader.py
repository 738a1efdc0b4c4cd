"""
Round Loader - YAML round definitions with Pydantic validation.

Discovers round files in the rounds/ directory, loads them, and validates
them into RoundConfig models.

Examples:
    >>> loader = RoundLoader()
    >>> round_config = loader.load_round("classic")
    >>> round_config.name
    'Classic Picnic'
    >>> loader.list_available_rounds()
    ['classic']
"""

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import ValidationError

from games.TapTapBug.config import ROUNDS_DIR
from models.taptapbug import RoundConfig


class RoundLoader:
    """Loads and validates round configurations from YAML files.

    Attributes:
        rounds_dir: Path to the directory containing round YAML files
    """

    def __init__(self, rounds_dir: Optional[Path] = None):
        """Initialize the round loader.

        Args:
            rounds_dir: Optional custom path to the rounds directory.
                        Defaults to the game's rounds/ directory.
        """
        self.rounds_dir = Path(rounds_dir) if rounds_dir is not None else ROUNDS_DIR

    def load_round(self, round_id: str) -> RoundConfig:
        """Load and validate a round configuration from YAML.

        Args:
            round_id: The ID of the round to load (without .yaml extension)

        Returns:
            Validated RoundConfig instance

        Raises:
            FileNotFoundError: If the round YAML file doesn't exist
            ValueError: If the YAML content is invalid
            yaml.YAMLError: If the YAML syntax is malformed
        """
        yaml_path = self.rounds_dir / f"{round_id}.yaml"

        if not yaml_path.exists():
            raise FileNotFoundError(
                f"Round '{round_id}' not found. "
                f"Expected file: {yaml_path}"
            )

        try:
            with open(yaml_path, 'r') as f:
                config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(
                f"Failed to parse YAML file '{yaml_path}': {e}"
            ) from e

        if not isinstance(config_dict, dict):
            raise ValueError(f"Round file '{yaml_path}' must contain a mapping")

        try:
            config = RoundConfig(**config_dict)
        except ValidationError as e:
            raise ValueError(
                f"Invalid round configuration in '{yaml_path}':\n{e}"
            ) from e

        return config

    def list_available_rounds(self) -> List[str]:
        """List all available round IDs, sorted alphabetically."""
        if not self.rounds_dir.exists():
            return []
        return sorted(f.stem for f in self.rounds_dir.glob("*.yaml"))

    def round_exists(self, round_id: str) -> bool:
        """Check if a round file exists."""
        return (self.rounds_dir / f"{round_id}.yaml").exists()
