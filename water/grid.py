"""2D grid of water volume per cell. volume is (height, width), indexed [y, x]; shape is (width, height)."""

from typing import Iterator

import numpy as np

from water.constants import EMPTY, DEFAULT_TILE_SIZE


class WaterGrid:
    """Volume array plus the tile edge length shared by every cell."""

    __slots__ = ("width", "height", "tile_size", "volume")

    def __init__(self, width: int, height: int, tile_size: int = DEFAULT_TILE_SIZE) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"grid must be at least 1x1, got {width}x{height}")
        if tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {tile_size}")
        self.width = width
        self.height = height
        self.tile_size = tile_size
        self.volume = np.full((height, width), EMPTY, dtype=np.float64)

    @classmethod
    def from_canvas(cls, width_px: int, height_px: int, tile_size: int = DEFAULT_TILE_SIZE) -> "WaterGrid":
        """Canvas 800x400 with tile 10 gives an 80x40 grid."""
        if tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {tile_size}")
        return cls(width_px // tile_size, height_px // tile_size, tile_size)

    @property
    def shape(self) -> tuple[int, int]:
        """(width, height) in cells; the volume array itself is (height, width)."""
        return (self.width, self.height)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_volume(self, x: int, y: int) -> float:
        return float(self.volume[y, x])

    def set_volume(self, x: int, y: int, volume: float) -> None:
        self.volume[y, x] = volume

    def total_volume(self) -> float:
        return float(np.sum(self.volume))

    def wet_cells(self) -> int:
        return int(np.count_nonzero(self.volume > EMPTY))

    def has_water_above(self, x: int, y: int) -> bool:
        return y > 0 and bool(self.volume[y - 1, x] > EMPTY)

    def render_cells(self) -> Iterator[tuple[int, int, float, bool]]:
        """Yield (x, y, volume, has_water_above) row by row, top to bottom."""
        vol = self.volume
        for y in range(self.height):
            for x in range(self.width):
                yield x, y, float(vol[y, x]), y > 0 and bool(vol[y - 1, x] > EMPTY)

    def clear(self) -> None:
        self.volume.fill(EMPTY)

    def copy(self) -> "WaterGrid":
        out = WaterGrid(self.width, self.height, self.tile_size)
        out.volume[:] = self.volume
        return out
