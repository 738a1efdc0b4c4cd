"""
High score persistence for Tap Tap Bug.

A single integer kept in a small JSON file. Only winning rounds are
submitted, and a score is written only if it beats the stored one.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

from games.TapTapBug.config import HIGH_SCORE_FILE
from taptapbug.logging import get_logger, get_user_data_dir

log = get_logger('high_score')


def default_high_score_path() -> Path:
    """HIGH_SCORE_FILE from config, else the user data directory."""
    if HIGH_SCORE_FILE:
        return Path(HIGH_SCORE_FILE).expanduser()
    return get_user_data_dir() / 'high_score.json'


class HighScoreStore:
    """Reads and writes the best winning score."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else default_high_score_path()

    def load(self) -> int:
        """Stored high score, or 0 if there is none yet."""
        if not self.path.exists():
            return 0
        try:
            with open(self.path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            log.warning("Ignoring unreadable high score file %s: %s", self.path, e)
            return 0
        score = data.get('high_score', 0) if isinstance(data, dict) else 0
        return score if isinstance(score, int) and score >= 0 else 0

    def submit(self, score: int) -> bool:
        """
        Save score if it beats the stored high score.

        Returns:
            True if score is the new high score
        """
        if score <= self.load():
            return False

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump({
                'high_score': score,
                'saved_at': datetime.now().isoformat(),
            }, f, indent=2)
        log.info("New high score %d saved to %s", score, self.path)
        return True

    def clear(self) -> None:
        """Forget the stored high score."""
        if self.path.exists():
            self.path.unlink()
