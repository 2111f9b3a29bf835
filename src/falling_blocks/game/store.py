"""High-score persistence.

The engine only ever needs a single non-negative integer keyed by a fixed
identifier. Store failures are never fatal: reads fall back to 0 and failed
writes are dropped.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Dict, Protocol

logger = logging.getLogger(__name__)

HIGH_SCORE_KEY = "tetris-highscore"


class HighScoreStore(Protocol):
    def get_high_score(self) -> int: ...

    def set_high_score(self, value: int) -> None: ...


class MemoryHighScoreStore:
    def __init__(self, initial: int = 0, key: str = HIGH_SCORE_KEY) -> None:
        self.key = key
        self._data: Dict[str, int] = {key: int(initial)}

    def get_high_score(self) -> int:
        return self._data.get(self.key, 0)

    def set_high_score(self, value: int) -> None:
        self._data[self.key] = int(value)


class JsonHighScoreStore:
    """Keeps the high score in a small JSON object file, e.g. {"tetris-highscore": 4200}."""

    def __init__(self, path: str | os.PathLike, key: str = HIGH_SCORE_KEY) -> None:
        self.path = os.fspath(path)
        self.key = key

    def _read(self) -> dict:
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object in {self.path}")
        return data

    def get_high_score(self) -> int:
        value = self._read().get(self.key, 0)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"invalid high score {value!r} in {self.path}")
        return value

    def set_high_score(self, value: int) -> None:
        try:
            data = self._read()
        except (OSError, ValueError):
            data = {}
        data[self.key] = int(value)
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f)


def load_high_score(store: HighScoreStore) -> int:
    try:
        value = int(store.get_high_score())
    except FileNotFoundError:
        return 0
    except Exception:
        logger.warning("could not read high score, using 0", exc_info=True)
        return 0
    return max(0, value)


def save_high_score(store: HighScoreStore, value: int) -> bool:
    try:
        store.set_high_score(value)
    except Exception:
        logger.warning("could not persist high score %d", value, exc_info=True)
        return False
    return True
