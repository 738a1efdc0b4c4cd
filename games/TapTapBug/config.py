"""
Tap Tap Bug - Configuration loader.

Loads settings from .env file in the game directory with sensible defaults.
Round content (bugs, food, timing) lives in the YAML files under rounds/.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

# Find the game directory (where this config.py lives)
GAME_DIR = Path(__file__).parent

# Load .env from game directory
_env_path = GAME_DIR / '.env'
load_dotenv(_env_path)


def _get_bool(key: str, default: bool) -> bool:
    """Get boolean from environment."""
    val = os.getenv(key, str(default)).lower()
    return val in ('true', '1', 'yes')


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


def _get_str(key: str, default: str) -> str:
    """Get string from environment."""
    return os.getenv(key, default)


# Timing
FPS = _get_int('FPS', 60)

# Canvas (the play field); the window adds a HUD bar above it
CANVAS_WIDTH = _get_int('CANVAS_WIDTH', 387)
CANVAS_HEIGHT = _get_int('CANVAS_HEIGHT', 600)
HUD_HEIGHT = _get_int('HUD_HEIGHT', 48)

# Rounds
ROUNDS_DIR = Path(_get_str('ROUNDS_DIR', str(GAME_DIR / 'rounds')))
DEFAULT_ROUND = _get_str('DEFAULT_ROUND', 'classic')

# Assets; missing files are replaced by drawn placeholders
ASSETS_DIR = Path(_get_str('ASSETS_DIR', str(GAME_DIR / 'assets')))
USE_PLACEHOLDERS = _get_bool('USE_PLACEHOLDERS', True)

# Food placement retries before the layout is declared infeasible
FOOD_PLACEMENT_ATTEMPTS = _get_int('FOOD_PLACEMENT_ATTEMPTS', 10000)

# Fade windows (seconds of ticks)
FOOD_FADE_SECONDS = _get_float('FOOD_FADE_SECONDS', 0.5)
BUG_FADE_SECONDS = _get_float('BUG_FADE_SECONDS', 2.0)

# High score file (empty = platform user data dir)
HIGH_SCORE_FILE = _get_str('HIGH_SCORE_FILE', '')

# HUD
FONT_SIZE = _get_int('FONT_SIZE', 32)

# Colors
BACKGROUND_COLOR = (205, 170, 125)
HUD_COLOR = (40, 30, 25)
HUD_TEXT_COLOR = (255, 255, 255)
WIN_COLOR = (100, 255, 100)
LOSE_COLOR = (255, 90, 90)
PAUSED_COLOR = (255, 220, 80)
