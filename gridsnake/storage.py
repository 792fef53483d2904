"""
storage.py — Best-score persistence.

A single integer in a plain text file. Any failure degrades to an
in-memory best score; gameplay never sees an exception from here.
"""

import os

from .config import HIGH_SCORE_PATH


class HighScoreStore:
    """Reads the best score once per session and rewrites it on a new best."""

    def __init__(self, path: str = HIGH_SCORE_PATH):
        self.path = path
        self._value: int = 0

    def load(self) -> int:
        """Read the stored best score. Missing or unreadable files give 0."""
        if not os.path.isfile(self.path):
            return self._value
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                self._value = max(0, int(fh.read().strip()))
        except (OSError, ValueError) as exc:
            print(f"[storage] Could not read high score from '{self.path}': {exc}")
            self._value = 0
        return self._value

    def save(self, score: int) -> None:
        """
        Store a new best score. The value is written to a sibling temp file
        and swapped in, so an interrupted write leaves the old score intact.
        """
        self._value = score
        tmp_path = self.path + ".tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as fh:
                fh.write(str(int(score)))
            os.replace(tmp_path, self.path)
        except OSError as exc:
            print(f"[storage] Could not write high score to '{self.path}': {exc}")
            self._discard(tmp_path)

    @staticmethod
    def _discard(tmp_path: str) -> None:
        """Remove a half-written temp file, if one was left behind."""
        try:
            os.remove(tmp_path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            print(f"[storage] Could not remove '{tmp_path}': {exc}")
