from __future__ import annotations

from typing import Optional, Tuple

import pygame

from falling_blocks.game import COLORS, GameSnapshot, Piece


def _color_for_value(v: int) -> Tuple[int, int, int]:
    if v == 0:
        return (20, 20, 26)
    return COLORS.get(abs(v), (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_cells = panel_cells
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, rows: int, cols: int) -> Tuple[int, int]:
        width = self.margin * 3 + (cols + self.panel_cells) * self.cell_size
        height = self.margin * 2 + rows * self.cell_size
        return width, height

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        return self._font

    def _cell_rect(self, x0: int, y0: int, x: float, y: float) -> pygame.Rect:
        return pygame.Rect(
            x0 + int(x * self.cell_size),
            y0 + int(y * self.cell_size),
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def _draw_piece(self, screen: pygame.Surface, piece: Piece, x0: int, y0: int, dx: float, dy: float) -> None:
        color = _color_for_value(piece.color)
        h, w = piece.shape.shape
        for py in range(h):
            for px in range(w):
                if piece.shape[py, px] and piece.y + py + dy >= 0:
                    pygame.draw.rect(screen, color, self._cell_rect(x0, y0, piece.x + px + dx, piece.y + py + dy))

    def draw_board(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        h, w = snapshot.grid.shape
        x0, y0 = self.margin, self.margin
        for y in range(h):
            for x in range(w):
                pygame.draw.rect(screen, _color_for_value(int(snapshot.grid[y, x])), self._cell_rect(x0, y0, x, y))
        if not snapshot.game_over:
            self._draw_piece(screen, snapshot.current_piece, x0, y0, 0, 0)

    def draw_panel(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        w = snapshot.grid.shape[1]
        x0 = self.margin * 2 + w * self.cell_size
        y0 = self.margin
        screen.blit(self.font.render("Next", True, (230, 230, 230)), (x0, y0))
        # Center the preview in a 4x4 box below the label
        nxt = snapshot.next_piece
        dx = (4 - nxt.width) / 2 - nxt.x
        dy = (4 - nxt.height) / 2 - nxt.y + 1
        self._draw_piece(screen, nxt, x0, y0, dx, dy)
        lines = [
            f"Score: {snapshot.score}",
            f"Level: {snapshot.level}",
            f"High: {snapshot.high_score}",
        ]
        for i, text in enumerate(lines):
            surf = self.font.render(text, True, (230, 230, 230))
            screen.blit(surf, (x0, y0 + 6 * self.cell_size + i * 30))

    def draw_message(self, screen: pygame.Surface, text: str) -> None:
        surf = self.font.render(text, True, (255, 255, 255))
        rect = surf.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2))
        backdrop = rect.inflate(24, 16)
        pygame.draw.rect(screen, (0, 0, 0), backdrop)
        screen.blit(surf, rect)

    def draw(self, screen: pygame.Surface, snapshot: GameSnapshot, message: Optional[str] = None) -> None:
        screen.fill((10, 10, 14))
        self.draw_board(screen, snapshot)
        self.draw_panel(screen, snapshot)
        if message:
            self.draw_message(screen, message)
        pygame.display.flip()
