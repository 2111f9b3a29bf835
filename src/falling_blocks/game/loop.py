"""Frame-driven gravity loop.

A `GameLoop` keeps at most one frame callback pending on its scheduler. Each
frame feeds the elapsed time to `GameSession.tick`; pausing or stopping
cancels the pending callback synchronously so no tick can sneak in afterwards.
"""

from __future__ import annotations

import itertools
from typing import Callable, Dict, Optional, Protocol

from .core import GameSession, GameSnapshot
from .events import GameEvent

FrameCallback = Callable[[float], None]


class FrameScheduler(Protocol):
    def request_callback(self, fn: FrameCallback) -> int: ...

    def cancel_callback(self, handle: int) -> None: ...


class ManualFrameScheduler:
    """Deterministic scheduler: callbacks fire when `advance` is called.

    Callbacks requested while a frame is being delivered wait for the next
    `advance`, like a display refresh callback would.
    """

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._pending: Dict[int, FrameCallback] = {}

    def request_callback(self, fn: FrameCallback) -> int:
        handle = next(self._ids)
        self._pending[handle] = fn
        return handle

    def cancel_callback(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def advance(self, timestamp_ms: float) -> int:
        """Deliver one frame at `timestamp_ms`; returns how many callbacks ran."""
        due = list(self._pending.items())
        self._pending.clear()
        for _, fn in due:
            fn(timestamp_ms)
        return len(due)


class GameLoop:
    def __init__(
        self,
        session: GameSession,
        scheduler: FrameScheduler,
        on_frame: Optional[Callable[[GameSnapshot], None]] = None,
    ) -> None:
        self.session = session
        self.scheduler = scheduler
        self.on_frame = on_frame
        self._handle: Optional[int] = None
        self._last_timestamp: Optional[float] = None
        # The session can end from player input between frames
        session.events.subscribe(GameEvent.GAME_OVER, self._on_session_end)
        session.events.subscribe(GameEvent.STOPPED, self._on_session_end)

    @property
    def scheduled(self) -> bool:
        return self._handle is not None

    def start(self, now_ms: Optional[float] = None) -> None:
        self._cancel()
        self.session.start()
        self._last_timestamp = now_ms
        self._schedule()

    def pause(self) -> bool:
        if not self.session.pause():
            return False
        self._cancel()
        return True

    def resume(self, now_ms: Optional[float] = None) -> bool:
        if not self.session.resume():
            return False
        # Time spent paused never counts toward the next drop.
        self._last_timestamp = now_ms
        self._schedule()
        return True

    def toggle_pause(self, now_ms: Optional[float] = None) -> bool:
        if self.session.paused:
            return self.resume(now_ms)
        return self.pause()

    def stop(self) -> bool:
        stopped = self.session.stop()
        self._cancel()
        return stopped

    def _schedule(self) -> None:
        if self._handle is None:
            self._handle = self.scheduler.request_callback(self._frame)

    def _cancel(self) -> None:
        if self._handle is not None:
            self.scheduler.cancel_callback(self._handle)
            self._handle = None

    def _on_session_end(self, **_: object) -> None:
        self._cancel()

    def _frame(self, timestamp_ms: float) -> None:
        self._handle = None
        if not self.session.running:
            return
        if self._last_timestamp is None:
            self._last_timestamp = timestamp_ms
        delta = timestamp_ms - self._last_timestamp
        self._last_timestamp = timestamp_ms
        self.session.tick(delta)
        if self.on_frame is not None:
            self.on_frame(self.session.snapshot())
        if self.session.running:
            self._schedule()
