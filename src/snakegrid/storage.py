# storage.py
from pathlib import Path
from typing import Union
import logging

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path.home() / ".snakegrid" / "highscore.txt"


class HighScoreFile:
    """High score kept as a single integer in a text file."""

    def __init__(self, path: Union[str, Path] = DEFAULT_PATH):
        self.path = Path(path)

    def load(self) -> int:
        """Stored score, or 0 when the file is missing or unreadable."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return 0
        except OSError as exc:
            logger.warning("Could not read high score from %s: %s", self.path, exc)
            return 0
        try:
            return max(0, int(text.strip() or "0"))
        except ValueError:
            logger.warning("Ignoring malformed high score file %s", self.path)
            return 0

    def save(self, score: int) -> None:
        # OSError propagates; the engine decides what a failed save means
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(str(int(score)), encoding="utf-8")
        logger.debug("Saved high score %d to %s", score, self.path)
