# src/game/scoreboard.py
from __future__ import annotations
import json
import logging
from pathlib import Path

from .config import BEST_SCORE_PATH

logger = logging.getLogger(__name__)


class BestScoreStore:
    """
    Best score kept in a small JSON file: {"best_score": <int>}.
    Any read failure counts as 0; write failures are logged, never raised,
    and leave the stored best unchanged.
    """
    def __init__(self, path: Path | str = BEST_SCORE_PATH):
        self.path = Path(path)

    def load(self) -> int:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            best = int(data.get("best_score", 0))
        except FileNotFoundError:
            return 0
        except (OSError, ValueError, TypeError, AttributeError):
            logger.warning("unreadable best score at %s, using 0", self.path, exc_info=True)
            return 0
        return max(0, best)

    def record(self, score: int) -> int:
        """Store max(best, score) and return the resulting best."""
        best = self.load()
        if score <= best:
            return best
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({"best_score": int(score)}), encoding="utf-8")
        except OSError:
            logger.warning("could not save best score to %s", self.path, exc_info=True)
            return best
        return int(score)
