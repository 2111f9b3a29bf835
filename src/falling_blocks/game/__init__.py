"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- GameGrid: Grid representation, collision and line clearing
- Piece: Active piece with clockwise rotation
- TetrominoType: Enum of available piece types
- ScoringRules: Score, level and gravity speed progression
- GameSession: Session state machine and piece actions
- GameLoop: Frame-driven gravity loop
- InputMapper: Player intents to session calls
"""

from .grid import COLS, ROWS, GameGrid, PlacementResult, collides, empty_grid
from .pieces import BASE_SHAPES, COLORS, Piece, TetrominoType, random_piece_kind, rotate_cw
from .rules import ScoringRules
from .events import EventBus, GameEvent
from .store import HighScoreStore, JsonHighScoreStore, MemoryHighScoreStore
from .core import Action, GameConfig, GameSession, GameSnapshot, SessionState
from .loop import FrameScheduler, GameLoop, ManualFrameScheduler
from .input import InputMapper, Intent

__all__ = [
    "COLS",
    "ROWS",
    "GameGrid",
    "PlacementResult",
    "collides",
    "empty_grid",
    "BASE_SHAPES",
    "COLORS",
    "Piece",
    "TetrominoType",
    "random_piece_kind",
    "rotate_cw",
    "ScoringRules",
    "EventBus",
    "GameEvent",
    "HighScoreStore",
    "JsonHighScoreStore",
    "MemoryHighScoreStore",
    "Action",
    "GameConfig",
    "GameSession",
    "GameSnapshot",
    "SessionState",
    "FrameScheduler",
    "GameLoop",
    "ManualFrameScheduler",
    "InputMapper",
    "Intent",
]
