"""Water: grid of cell volumes, flow rules and generators."""

from water.grid import WaterGrid
from water.flow import step, transfer
from water.sources import SourceInjector, generator_positions, inject_sources
from water.simulation import Simulation
from water.constants import CAPACITY, DEFAULT_TILE_SIZE, EMPTY

__all__ = [
    "WaterGrid",
    "step",
    "transfer",
    "SourceInjector",
    "generator_positions",
    "inject_sources",
    "Simulation",
    "CAPACITY",
    "DEFAULT_TILE_SIZE",
    "EMPTY",
]
