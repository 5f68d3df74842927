"""Left panel: water grid drawn as filled rectangles, one per wet cell, thin grey border."""

from typing import Optional

import pygame

from water.grid import WaterGrid

BACKGROUND = (80, 80, 80)
WATER_COLOR = (0, 121, 241)
BORDER_COLOR = (120, 120, 120)
BORDER_PX = 1


def water_rect(x: int, y: int, tile_size: int, volume: float, has_water_above: bool) -> Optional[pygame.Rect]:
    """Pixel rect for one cell relative to the grid origin, or None when dry.

    Height is tile_size * volume. Fills from the bottom of the tile, or from
    the top when the cell above is wet so a falling column looks connected.
    """
    if volume <= 0:
        return None
    height = int(tile_size * volume)
    offset_y = 0 if has_water_above else tile_size - height
    return pygame.Rect(x * tile_size, y * tile_size + offset_y, tile_size, height)


def draw_grid(surface: pygame.Surface, grid_rect: pygame.Rect, grid: WaterGrid) -> None:
    """Draw the grid into grid_rect at the grid's own tile size."""
    surface.fill(BACKGROUND, grid_rect)
    tile = grid.tile_size
    for x, y, volume, above in grid.render_cells():
        r = water_rect(x, y, tile, volume, above)
        if r is not None:
            r.move_ip(grid_rect.x, grid_rect.y)
            pygame.draw.rect(surface, WATER_COLOR, r)
    pygame.draw.rect(surface, BORDER_COLOR, grid_rect, BORDER_PX)
