"""UI: grid view and parameter panel."""

from ui.grid_view import draw_grid, water_rect
from ui.panel import ParamPanel

__all__ = ["draw_grid", "water_rect", "ParamPanel"]
