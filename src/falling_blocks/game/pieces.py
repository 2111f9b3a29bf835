from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    """Piece kinds. The value doubles as the color id stored in the grid."""

    I = 1
    T = 2
    S = 3
    Z = 4
    O = 5
    L = 6
    J = 7


Shape = np.ndarray


def _frozen(rows: List[List[int]]) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _frozen([[1, 1, 1, 1]]),
    TetrominoType.T: _frozen([[1, 1, 1], [0, 1, 0]]),
    TetrominoType.S: _frozen([[1, 1, 0], [0, 1, 1]]),
    TetrominoType.Z: _frozen([[0, 1, 1], [1, 1, 0]]),
    TetrominoType.O: _frozen([[1, 1], [1, 1]]),
    TetrominoType.L: _frozen([[1, 1, 1], [1, 0, 0]]),
    TetrominoType.J: _frozen([[1, 1, 1], [0, 0, 1]]),
}

COLORS: Dict[int, Tuple[int, int, int]] = {
    TetrominoType.I: (66, 133, 244),
    TetrominoType.T: (234, 67, 53),
    TetrominoType.S: (251, 188, 5),
    TetrominoType.Z: (52, 168, 83),
    TetrominoType.O: (242, 139, 130),
    TetrominoType.L: (161, 193, 216),
    TetrominoType.J: (254, 215, 102),
}


def rotate_cw(shape: Shape) -> Shape:
    """Rotate a bitmap 90 degrees clockwise (transpose, then reverse each row)."""
    return np.rot90(np.asarray(shape), 1, axes=(1, 0)).copy()


def random_piece_kind(rng: random.Random) -> TetrominoType:
    return rng.choice(list(TetrominoType))


@dataclass(eq=False)
class Piece:
    kind: TetrominoType
    shape: Shape
    x: int = 0
    y: int = 0

    @classmethod
    def spawn(cls, kind: TetrominoType, cols: int, spawn_y: int = 0) -> "Piece":
        shape = BASE_SHAPES[kind].copy()
        width = shape.shape[1]
        return cls(kind=kind, shape=shape, x=cols // 2 - width // 2, y=spawn_y)

    @property
    def color(self) -> int:
        return int(self.kind)

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])

    def rotated(self) -> "Piece":
        return Piece(self.kind, rotate_cw(self.shape), self.x, self.y)

    def moved(self, dx: int, dy: int) -> "Piece":
        return Piece(self.kind, self.shape.copy(), self.x + dx, self.y + dy)

    def copy(self) -> "Piece":
        return self.moved(0, 0)

    def cells(self) -> List[Tuple[int, int]]:
        """Board (x, y) coordinates covered by the piece."""
        cells: List[Tuple[int, int]] = []
        h, w = self.shape.shape
        for dy in range(h):
            for dx in range(w):
                if self.shape[dy, dx]:
                    cells.append((self.x + dx, self.y + dy))
        return cells

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return (
            self.kind == other.kind
            and self.x == other.x
            and self.y == other.y
            and np.array_equal(self.shape, other.shape)
        )
