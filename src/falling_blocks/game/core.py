from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple

import numpy as np

from .events import EventBus, GameEvent
from .grid import COLS, ROWS, GameGrid
from .pieces import Piece, random_piece_kind
from .rules import ScoringRules
from .store import (
    HIGH_SCORE_KEY,
    HighScoreStore,
    MemoryHighScoreStore,
    load_high_score,
    save_high_score,
)

logger = logging.getLogger(__name__)

# Tried in order against the current anchor when rotating.
WALL_KICKS: Tuple[Tuple[int, int], ...] = ((0, 0), (-1, 0), (1, 0), (0, -1), (0, 1))


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    NONE = 5


class SessionState(Enum):
    READY = "ready"
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"
    STOPPED = "stopped"


@dataclass
class GameConfig:
    width: int = COLS
    height: int = ROWS
    random_seed: Optional[int] = None
    spawn_y: int = 0
    high_score_key: str = HIGH_SCORE_KEY


@dataclass(frozen=True, eq=False)
class GameSnapshot:
    """Read-only view of a session for renderers."""

    grid: np.ndarray
    current_piece: Piece
    next_piece: Piece
    score: int
    level: int
    drop_interval: int
    lines_cleared_total: int
    high_score: int
    state: SessionState

    @property
    def paused(self) -> bool:
        return self.state is SessionState.PAUSED

    @property
    def game_over(self) -> bool:
        return self.state in (SessionState.OVER, SessionState.STOPPED)


class GameSession:
    """A single game: board, active and next piece, score, level and gravity timing.

    Every action is a no-op unless the session is running. Presentation code
    subscribes to `events` and reads `snapshot()`; it never mutates the session
    directly.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        store: Optional[HighScoreStore] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.store: HighScoreStore = store if store is not None else MemoryHighScoreStore(
            key=self.config.high_score_key
        )
        self.events = EventBus()
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.high_score = load_high_score(self.store)
        self.state = SessionState.READY
        self.score = 0
        self.level = 1
        self.drop_interval = self.rules.drop_interval_for_level(1)
        self.drop_counter = 0.0
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.current_piece = self._new_piece()
        self.next_piece = self._new_piece()

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------
    @property
    def running(self) -> bool:
        return self.state is SessionState.RUNNING

    @property
    def paused(self) -> bool:
        return self.state is SessionState.PAUSED

    @property
    def game_over(self) -> bool:
        return self.state in (SessionState.OVER, SessionState.STOPPED)

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.grid.reset()
        self.score = 0
        self.level = 1
        self.drop_interval = self.rules.drop_interval_for_level(1)
        self.drop_counter = 0.0
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.current_piece = self._new_piece()
        self.next_piece = self._new_piece()

    def start(self, seed: Optional[int] = None) -> None:
        """Begin a fresh game from any state."""
        self.reset(seed)
        self.state = SessionState.RUNNING
        self.events.emit(GameEvent.STARTED)

    def pause(self) -> bool:
        if self.state is not SessionState.RUNNING:
            return False
        self.state = SessionState.PAUSED
        self.events.emit(GameEvent.PAUSED)
        return True

    def resume(self) -> bool:
        if self.state is not SessionState.PAUSED:
            return False
        self.state = SessionState.RUNNING
        self.events.emit(GameEvent.RESUMED)
        return True

    def toggle_pause(self) -> bool:
        if self.paused:
            return self.resume()
        return self.pause()

    def stop(self) -> bool:
        if self.state not in (SessionState.RUNNING, SessionState.PAUSED):
            return False
        self.state = SessionState.STOPPED
        logger.info("game stopped with score %d", self.score)
        self.events.emit(GameEvent.STOPPED, final_score=self.score)
        return True

    def tick(self, delta_ms: float) -> bool:
        """Advance the gravity clock; returns True when a gravity step happened."""
        if not self.running:
            return False
        self.drop_counter += delta_ms
        if self.drop_counter > self.drop_interval:
            self.soft_drop()
            self.drop_counter = 0.0
            return True
        return False

    # ------------------------------------------------------------------
    # Piece actions
    # ------------------------------------------------------------------
    def _new_piece(self) -> Piece:
        kind = random_piece_kind(self.rng)
        return Piece.spawn(kind, self.grid.width, self.config.spawn_y)

    def _fits(self, piece: Piece) -> bool:
        return not self.grid.collides(piece.shape, piece.x, piece.y)

    def move_horizontal(self, direction: int) -> bool:
        if direction not in (-1, 1) or not self.running:
            return False
        candidate = self.current_piece.moved(direction, 0)
        if not self._fits(candidate):
            return False
        self.current_piece = candidate
        self.events.emit(GameEvent.MOVED, direction=direction)
        return True

    def move_left(self) -> bool:
        return self.move_horizontal(-1)

    def move_right(self) -> bool:
        return self.move_horizontal(1)

    def rotate(self) -> bool:
        if not self.running:
            return False
        rotated = self.current_piece.rotated()
        for dx, dy in WALL_KICKS:
            candidate = rotated.moved(dx, dy)
            if self._fits(candidate):
                self.current_piece = candidate
                self.events.emit(GameEvent.ROTATED)
                return True
        return False

    def soft_drop(self) -> bool:
        """Move the piece down one row, or lock it if it cannot move."""
        if not self.running:
            return False
        candidate = self.current_piece.moved(0, 1)
        if self._fits(candidate):
            self.current_piece = candidate
        else:
            self._lock_piece()
        return True

    def hard_drop(self) -> bool:
        if not self.running:
            return False
        piece = self.current_piece
        # A piece can never fall further than the board plus its own height.
        for _ in range(self.grid.height + piece.height):
            candidate = piece.moved(0, 1)
            if not self._fits(candidate):
                break
            piece = candidate
        self.current_piece = piece
        self._lock_piece()
        return True

    def step(self, action: Action) -> bool:
        if action == Action.LEFT:
            return self.move_left()
        if action == Action.RIGHT:
            return self.move_right()
        if action == Action.ROTATE:
            return self.rotate()
        if action == Action.SOFT_DROP:
            return self.soft_drop()
        if action == Action.HARD_DROP:
            return self.hard_drop()
        return False

    # ------------------------------------------------------------------
    # Locking, scoring and game over
    # ------------------------------------------------------------------
    def _lock_piece(self) -> None:
        piece = self.current_piece
        result = self.grid.lock(piece.shape, piece.x, piece.y, piece.color)
        if result.game_over:
            self._end_game()
            return
        self.pieces_locked += 1
        self._score_lines(result.lines_cleared)
        logger.debug("locked %s at (%d, %d)", piece.kind.name, piece.x, piece.y)
        self.events.emit(GameEvent.LOCKED, piece=piece.copy())
        self.current_piece = self.next_piece
        self.next_piece = self._new_piece()
        if not self._fits(self.current_piece):
            self._end_game()

    def _score_lines(self, lines: int) -> None:
        if lines <= 0:
            return
        self.score += self.rules.score_for_lines(lines, self.level)
        self.lines_cleared_total += lines
        self.level = max(self.level, self.rules.level_for_score(self.score))
        self.drop_interval = self.rules.drop_interval_for_level(self.level)
        logger.debug("cleared %d line(s), score=%d level=%d", lines, self.score, self.level)
        self.events.emit(GameEvent.LINES_CLEARED, count=lines)

    def _end_game(self) -> None:
        self.state = SessionState.OVER
        is_new_high_score = self.score > self.high_score
        if is_new_high_score:
            self.high_score = self.score
            save_high_score(self.store, self.high_score)
        logger.info("game over, score %d (new high score: %s)", self.score, is_new_high_score)
        self.events.emit(GameEvent.GAME_OVER, is_new_high_score=is_new_high_score, final_score=self.score)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    def snapshot(self) -> GameSnapshot:
        grid = self.grid.clone_state()
        grid.setflags(write=False)
        return GameSnapshot(
            grid=grid,
            current_piece=self.current_piece.copy(),
            next_piece=self.next_piece.copy(),
            score=self.score,
            level=self.level,
            drop_interval=self.drop_interval,
            lines_cleared_total=self.lines_cleared_total,
            high_score=self.high_score,
            state=self.state,
        )

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if not self.game_over:
            for x, y in self.current_piece.cells():
                if self.grid.is_inside(x, y):
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -self.current_piece.color
        return state

    def get_game_stats(self) -> dict:
        return {
            "final_score": self.score,
            "level": self.level,
            "pieces_locked": self.pieces_locked,
            "lines_cleared": self.lines_cleared_total,
            "high_score": self.high_score,
            "avg_lines_per_piece": self.lines_cleared_total / max(1, self.pieces_locked),
        }
