from __future__ import annotations

from dataclasses import dataclass
import numpy as np

from .pieces import Shape


ROWS = 20
COLS = 10
EMPTY = 0


@dataclass
class PlacementResult:
    lines_cleared: int
    game_over: bool


def empty_grid(rows: int = ROWS, cols: int = COLS) -> np.ndarray:
    return np.zeros((rows, cols), dtype=np.int8)


def collides(grid: np.ndarray, shape: Shape, x: int, y: int) -> bool:
    """Return True if `shape` anchored at (x, y) hits a wall, the floor or a settled cell.

    Cells above the top edge (board y < 0) never collide, so a freshly spawned
    piece may overlap the ceiling.
    """
    rows, cols = grid.shape
    h, w = shape.shape
    for r in range(h):
        for c in range(w):
            if not shape[r, c]:
                continue
            bx, by = x + c, y + r
            if bx < 0 or bx >= cols or by >= rows:
                return True
            if by < 0:
                continue
            if grid[by, bx] != EMPTY:
                return True
    return False


class GameGrid:
    """Fixed-size board of settled cells.

    The grid uses 0 for empty cells and the piece color id (1..7) for settled
    cells. Row 0 is the top of the board.
    """

    def __init__(self, width: int = COLS, height: int = ROWS) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.grid = empty_grid(self.height, self.width)

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def collides(self, shape: Shape, x: int, y: int) -> bool:
        return collides(self.grid, shape, x, y)

    def lock(self, shape: Shape, x: int, y: int, color: int) -> PlacementResult:
        """Write `color` into every cell of `shape`, then clear full rows.

        A piece with any cell above the visible board cannot settle: the grid
        is left untouched and the result reports game over.
        """
        h, w = shape.shape
        cells = [(x + c, y + r) for r in range(h) for c in range(w) if shape[r, c]]
        if any(by < 0 for _, by in cells):
            return PlacementResult(lines_cleared=0, game_over=True)
        for bx, by in cells:
            self.grid[by, bx] = color
        return PlacementResult(lines_cleared=self.clear_lines(), game_over=False)

    def is_row_full(self, row: int) -> bool:
        return bool(np.all(self.grid[row, :] != EMPTY))

    def clear_lines(self) -> int:
        """Remove full rows bottom-up, dropping everything above them.

        After a removal the same row index is examined again, since the row
        above has just shifted into it.
        """
        cleared = 0
        row = self.height - 1
        while row >= 0:
            if self.is_row_full(row):
                self.grid[1 : row + 1, :] = self.grid[0:row, :].copy()
                self.grid[0, :] = EMPTY
                cleared += 1
            else:
                row -= 1
        return cleared

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != EMPTY, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return self.height - int(non_empty_rows[0])

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            seen_block = False
            for cell in self.grid[:, x]:
                if cell != EMPTY:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
