from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from block_smash.game import Color, Shape


def color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        Color.EMPTY: (20, 20, 26),
        Color.RED: (220, 40, 40),       # I
        Color.BLUE: (40, 80, 230),      # J
        Color.ORANGE: (240, 150, 30),   # L
        Color.YELLOW: (240, 220, 40),   # O
        Color.PURPLE: (150, 60, 220),   # S
        Color.TEAL: (30, 190, 190),     # T
        Color.GREEN: (50, 200, 70),     # Z
    }
    return palette.get(abs(v), (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_width: int = 200) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font: Optional[pygame.font.Font] = None

    def surface_size(self, rows: int, cols: int) -> Tuple[int, int]:
        width = self.margin * 3 + cols * self.cell_size + self.panel_width
        height = self.margin * 2 + rows * self.cell_size
        return width, height

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, 28)
        return self._font

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        width = w * self.cell_size
        height = h * self.cell_size
        surf = pygame.Surface((width, height))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                color = color_for_value(v)
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, color, rect)
        return surf

    def _draw_panel(self, screen: pygame.Surface, board_w: int, points: int, preview: Optional[Shape]) -> None:
        x0 = self.margin * 2 + board_w
        y0 = self.margin
        screen.blit(self.font.render("Points:", True, (230, 230, 230)), (x0, y0))
        screen.blit(self.font.render(str(points), True, (230, 230, 230)), (x0, y0 + 30))
        if preview is None:
            return
        screen.blit(self.font.render("Next:", True, (230, 230, 230)), (x0, y0 + 80))
        py0 = y0 + 110
        color = color_for_value(int(preview.color))
        for r, c in preview.cells:
            rect = pygame.Rect(x0 + c * self.cell_size, py0 + r * self.cell_size, self.cell_size - 1, self.cell_size - 1)
            pygame.draw.rect(screen, color, rect)

    def draw(
        self,
        screen: pygame.Surface,
        state: np.ndarray,
        points: int = 0,
        preview: Optional[Shape] = None,
        game_over: bool = False,
    ) -> None:
        grid_surf = self._grid_surface(state)
        screen.fill((10, 10, 14))
        screen.blit(grid_surf, (self.margin, self.margin))
        self._draw_panel(screen, grid_surf.get_width(), points, preview)
        if game_over:
            # Banner sits in the side panel, below the preview
            x0 = self.margin * 2 + grid_surf.get_width()
            y = self.margin + 130 + 4 * self.cell_size
            for line in ("Game Over", "N: restart", "ESC: quit"):
                screen.blit(self.font.render(line, True, (255, 100, 100)), (x0, y))
                y += 26
