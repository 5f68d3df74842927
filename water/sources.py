"""Generators: fixed cells stamped back to full volume every few ticks."""

import logging

from water.constants import CAPACITY, DEFAULT_INJECT_EVERY
from water.grid import WaterGrid

logger = logging.getLogger(__name__)


def generator_positions(center_x: int, center_y: int, half_width: int = 1) -> list[tuple[int, int]]:
    """Center cell, then right/left neighbours out to half_width. (x, y) pairs."""
    positions = [(center_x, center_y)]
    for d in range(1, max(0, half_width) + 1):
        positions.append((center_x + d, center_y))
        positions.append((center_x - d, center_y))
    return positions


def inject_sources(positions: list[tuple[int, int]], grid: WaterGrid) -> None:
    """Set each in-bounds generator cell to full. Out-of-bounds positions are skipped."""
    for x, y in positions:
        if grid.in_bounds(x, y):
            grid.volume[y, x] = CAPACITY


class SourceInjector:
    """Generator positions plus the cadence they fire on. Ticks count from 1."""

    def __init__(self, positions: list[tuple[int, int]], every: int = DEFAULT_INJECT_EVERY) -> None:
        if every <= 0:
            raise ValueError(f"injection cadence must be positive, got {every}")
        self.positions = list(positions)
        self.every = every

    def bind(self, grid: WaterGrid) -> "SourceInjector":
        """Drop positions that fall outside grid; returns self."""
        kept = [p for p in self.positions if grid.in_bounds(*p)]
        for p in self.positions:
            if p not in kept:
                logger.warning("generator at %s is outside the %dx%d grid; ignored", p, grid.width, grid.height)
        self.positions = kept
        return self

    def due(self, tick: int) -> bool:
        return tick % self.every == 0

    def maybe_inject(self, tick: int, grid: WaterGrid) -> bool:
        if not self.due(tick):
            return False
        inject_sources(self.positions, grid)
        return True

    def prime(self, grid: WaterGrid) -> None:
        """Stamp generators once before the first tick."""
        inject_sources(self.positions, grid)
