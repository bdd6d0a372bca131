"""
Best-score persistence in a small text file.
"""

import logging
import os


class BestScoreStore:
    """
    Reads and writes the best score as a single integer in a text file.

    Failures never propagate: a missing or garbled file reads as 0 and a
    failed write leaves the file as it was.
    """

    def __init__(self, path: str):
        self.path = path

    def load(self) -> int:
        if not os.path.exists(self.path):
            return 0
        try:
            with open(self.path, "r") as f:
                value = int(f.read().strip())
        except (OSError, ValueError) as e:
            logging.warning(f"Could not read best score from {self.path}: {e}. Using 0.")
            return 0
        if value < 0:
            logging.warning(f"Ignoring negative best score {value} in {self.path}")
            return 0
        return value

    def save(self, best_score: int) -> bool:
        try:
            with open(self.path, "w") as f:
                f.write(str(int(best_score)))
        except OSError as e:
            logging.warning(f"Could not save best score to {self.path}: {e}")
            return False
        logging.info(f"New best score saved: {best_score} to {self.path}")
        return True


class MemoryScoreStore:
    """Keeps the best score in memory only; used by headless runs."""

    def __init__(self, best_score: int = 0):
        self.best_score = best_score

    def load(self) -> int:
        return self.best_score

    def save(self, best_score: int) -> bool:
        self.best_score = best_score
        return True
