from __future__ import annotations

from enum import Enum
from typing import Callable, Dict

from .core import GameSession


class Intent(Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    ROTATE = "rotate"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"


class InputMapper:
    """Translates discrete player intents into session calls.

    Intents arriving while the session is not running (ready, paused, over or
    stopped) are dropped.
    """

    def __init__(self, session: GameSession) -> None:
        self.session = session
        self._dispatch: Dict[Intent, Callable[[], bool]] = {
            Intent.MOVE_LEFT: session.move_left,
            Intent.MOVE_RIGHT: session.move_right,
            Intent.ROTATE: session.rotate,
            Intent.SOFT_DROP: session.soft_drop,
            Intent.HARD_DROP: session.hard_drop,
        }

    def handle(self, intent: Intent) -> bool:
        if not self.session.running:
            return False
        return self._dispatch[intent]()
