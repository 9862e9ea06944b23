# scenehash/rendering/debug_overlay.py
from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

import pygame

import scenehash.utils.settings as settings
from scenehash.core.bounds import coerce_bounds
from scenehash.core.spatial_hash import SpatialHash

Vec2 = pygame.math.Vector2
ToScreen = Callable[[Vec2], Tuple[int, int]]

log = logging.getLogger(__name__)


def _identity_to_screen(v: Vec2) -> Tuple[int, int]:
    return int(v.x), int(v.y)


class GridDebugOverlay:
    """
    Draws the cell grid of a SpatialHash, optionally with per-cell occupancy.

        overlay = GridDebugOverlay(system.hash2d, show_counts=True)
        overlay.draw(screen, camera_world_rect, to_screen=camera.world_to_screen)
    """

    def __init__(
        self,
        spatial_hash: SpatialHash,
        *,
        color: Tuple[int, int, int] = settings.DEBUG_GRID_COLOR,
        alpha: int = settings.DEBUG_GRID_ALPHA,
        show_counts: bool = False,
        font_size: int = settings.DEBUG_COUNT_FONT_SIZE,
        max_lines: int = settings.DEBUG_GRID_MAX_LINES,
    ) -> None:
        self.spatial_hash = spatial_hash
        self.color = color
        self.alpha = max(0, min(255, int(alpha)))
        self.show_counts = show_counts
        self.enabled: bool = True
        self._font_size = font_size
        self.max_lines = max(1, int(max_lines))
        self._font: Optional[pygame.font.Font] = None

    def draw(
        self,
        surface: pygame.Surface,
        view_world_rect,
        *,
        to_screen: Optional[ToScreen] = None,  # function(world_vec2) -> screen (x,y)
    ) -> int:
        """
        Draw grid lines covering ``view_world_rect`` and return how many were drawn.
        If ``to_screen`` is provided, it maps world positions to screen coords.
        """
        if not self.enabled or surface is None:
            return 0

        map_fn = to_screen or _identity_to_screen
        view = coerce_bounds(view_world_rect)
        c = self.spatial_hash.cell_size
        min_cx, min_cy, max_cx, max_cy = self.spatial_hash.cell_range(view)

        grid_color = (*self.color, self.alpha)
        line_surf = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        lines = 0

        cols = max_cx - min_cx + 1
        rows = max_cy - min_cy + 1
        if cols > self.max_lines or rows > self.max_lines:
            log.debug("grid too dense to draw: %d x %d lines (max %d)", cols, rows, self.max_lines)

        # vertical lines
        for cx in (range(min_cx, max_cx + 1) if cols <= self.max_lines else ()):
            x = cx * c
            a = map_fn(Vec2(x, view.top))
            b = map_fn(Vec2(x, view.bottom))
            pygame.draw.line(line_surf, grid_color, a, b, settings.DEBUG_GRID_LINE_WIDTH)
            lines += 1

        # horizontal lines
        for cy in (range(min_cy, max_cy + 1) if rows <= self.max_lines else ()):
            y = cy * c
            a = map_fn(Vec2(view.left, y))
            b = map_fn(Vec2(view.right, y))
            pygame.draw.line(line_surf, grid_color, a, b, settings.DEBUG_GRID_LINE_WIDTH)
            lines += 1

        surface.blit(line_surf, (0, 0))

        if self.show_counts:
            self._draw_counts(surface, map_fn, (min_cx, min_cy, max_cx, max_cy))
        return lines

    def _draw_counts(self, surface: pygame.Surface, map_fn: ToScreen, cell_range) -> None:
        if not pygame.font.get_init():
            pygame.font.init()
        if self._font is None:
            self._font = pygame.font.Font(None, self._font_size)

        min_cx, min_cy, max_cx, max_cy = cell_range
        c = self.spatial_hash.cell_size
        for (cx, cy), count in self.spatial_hash.bucket_sizes().items():
            if not (min_cx <= cx <= max_cx and min_cy <= cy <= max_cy):
                continue
            # number at cell center
            sx, sy = map_fn(Vec2((cx + 0.5) * c, (cy + 0.5) * c))
            img = self._font.render(str(count), True, self.color)
            surface.blit(img, img.get_rect(center=(sx, sy)))
