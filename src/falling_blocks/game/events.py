from __future__ import annotations

import logging
from collections import defaultdict
from enum import Enum
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)


class GameEvent(Enum):
    STARTED = "started"
    MOVED = "moved"
    ROTATED = "rotated"
    LOCKED = "locked"
    LINES_CLEARED = "lines_cleared"
    PAUSED = "paused"
    RESUMED = "resumed"
    STOPPED = "stopped"
    GAME_OVER = "game_over"


Listener = Callable[..., Any]


class EventBus:
    """Fire-and-forget dispatch of semantic game events to presentation listeners.

    Listeners receive the event payload as keyword arguments. A listener that
    raises is logged and skipped; the engine state is never affected.
    """

    def __init__(self) -> None:
        self._listeners: Dict[GameEvent, List[Listener]] = defaultdict(list)

    def subscribe(self, event: GameEvent, listener: Listener) -> None:
        self._listeners[event].append(listener)

    def unsubscribe(self, event: GameEvent, listener: Listener) -> None:
        try:
            self._listeners[event].remove(listener)
        except ValueError:
            pass

    def emit(self, event: GameEvent, **payload: Any) -> None:
        for listener in list(self._listeners[event]):
            try:
                listener(**payload)
            except Exception:
                logger.warning("listener %r failed for %s", listener, event.name, exc_info=True)
