"""Tick driver: inject on cadence, hand the pre-step grid to the renderer, then step."""

import logging
from typing import Callable, Optional

import numpy as np

from water.flow import step
from water.grid import WaterGrid
from water.sources import SourceInjector

logger = logging.getLogger(__name__)


class Simulation:
    """Owns the grid and the tick counter. Single writer; no partial tick is visible outside tick()."""

    def __init__(self, grid: WaterGrid, injector: SourceInjector, clamp: bool = False) -> None:
        self.grid = grid
        self.injector = injector.bind(grid)
        self.clamp = clamp
        self.tick_count = 0

    def tick(self, render: Optional[Callable[[WaterGrid], None]] = None) -> None:
        self.tick_count += 1
        if self.injector.maybe_inject(self.tick_count, self.grid):
            logger.debug("tick %d: injected %d generators", self.tick_count, len(self.injector.positions))
        if render is not None:
            render(self.grid)
        step(self.grid, clamp=self.clamp)

    def run(self, ticks: int, report_every: int = 0) -> dict:
        """Run headless for ticks; log stats every report_every ticks (0 = never). Returns final stats."""
        for _ in range(ticks):
            self.tick()
            if report_every and self.tick_count % report_every == 0:
                s = self.stats()
                logger.info(
                    "tick %5d | total=%9.4f | wet=%5d | max=%.4f | min=%.4f",
                    s["tick"], s["total_volume"], s["wet_cells"], s["max_volume"], s["min_volume"],
                )
        return self.stats()

    def reset(self) -> None:
        self.grid.clear()
        self.tick_count = 0

    def stats(self) -> dict:
        vol = self.grid.volume
        return {
            "tick": self.tick_count,
            "total_volume": self.grid.total_volume(),
            "wet_cells": self.grid.wet_cells(),
            "max_volume": float(np.max(vol)),
            "min_volume": float(np.min(vol)),
        }
