# --- START OF FILE phosphor_snake/adapters/persistence.py ---

import os
import json
import logging
from concurrent.futures import ThreadPoolExecutor

from phosphor_snake.adapters.base_adapter import HighScoreStore

# ---------------- Constants ---------------- #
HIGH_SCORE_KEY = "phosphor-pit-snake-high-score"
DEFAULT_STORE_PATH = os.path.join(os.path.expanduser("~"), ".phosphor_pit_snake", "scores.json")


def parse_high_score(raw) -> int:
    """Decimal text -> non-negative int. Anything unusable becomes 0."""
    if raw is None:
        return 0
    try:
        value = int(str(raw).strip())
    except ValueError:
        return 0
    return value if value > 0 else 0


class MemoryHighScoreStore(HighScoreStore):
    """Keeps the high score for the lifetime of the process only."""

    def __init__(self, initial=0, logger=None):
        super().__init__(logger)
        self.values = {HIGH_SCORE_KEY: str(initial)}
        self.writes = 0

    def read_high_score(self) -> int:
        return parse_high_score(self.values.get(HIGH_SCORE_KEY))

    def write_high_score(self, value: int):
        self.values[HIGH_SCORE_KEY] = str(int(value))
        self.writes += 1


class FileHighScoreStore(HighScoreStore):
    """
    High score kept in a small JSON key-value file ({key: "decimal text"}).
    Other keys in the file are preserved on write.

    With background=True writes are handed to a single worker thread so the
    game loop never waits on the disk. One worker keeps writes in order.
    """

    def __init__(self, path=DEFAULT_STORE_PATH, key=HIGH_SCORE_KEY, background=False, logger=None):
        super().__init__(logger)
        self.path = path
        self.key = key
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="highscore") if background else None

    def _load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            self._log(logging.WARNING, f"Could not read score file {self.path}: {e}. Treating high score as 0.")
            return {}
        if not isinstance(data, dict):
            self._log(logging.WARNING, f"Score file {self.path} does not hold a mapping. Ignoring it.")
            return {}
        return data

    def read_high_score(self) -> int:
        return parse_high_score(self._load().get(self.key))

    def write_high_score(self, value: int):
        if self._executor is not None:
            self._executor.submit(self._write, int(value))
        else:
            self._write(int(value))

    def _write(self, value: int):
        data = self._load()
        data[self.key] = str(value)
        self._ensure_dir_exists(self.path)
        tmp_path = self.path + ".tmp"
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
            self._log(logging.DEBUG, f"High score {value} saved to {self.path}")
        except OSError as e:
            self._log(logging.ERROR, f"Error saving high score to {self.path}: {e}", exc_info=True)

    def close(self):
        """Waits for queued writes to finish."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

# --- END OF FILE phosphor_snake/adapters/persistence.py ---
