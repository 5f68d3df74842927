"""
Per-tick flow: gravity first, then sideways spread when the column below is full.
All movement goes through transfer(), which caps each move at a flow rate so
columns settle over several ticks instead of levelling out at once.

Cells are addressed as (y, x) into a (height, width) float array.
"""

import numpy as np

from water.constants import (
    CAPACITY,
    DOWN_RATE,
    EMPTY,
    SPREAD_FACTOR,
    SPREAD_GATE,
    SPREAD_REACH,
)
from water.grid import WaterGrid


def transfer(
    state: np.ndarray,
    source: tuple[int, int],
    target: tuple[int, int],
    capacity: float,
    rate: float,
    clamp: bool = False,
) -> None:
    """Move min(room in target, rate) from source to target, in place.

    Room is capacity minus the target's volume. Without clamp a target that is
    already over capacity gives negative room and water flows back into source.
    The source's own volume does not limit the move.
    """
    room = capacity - state[target]
    if clamp:
        room = max(EMPTY, room)
    moved = min(room, rate)
    state[source] -= moved
    state[target] += moved


def can_flow_down(x: int, y: int, state: np.ndarray) -> bool:
    return y + 1 < state.shape[0] and bool(state[y + 1, x] < CAPACITY)


def spread_horizontally(x: int, y: int, state: np.ndarray, clamp: bool = False) -> None:
    """Share water with up to SPREAD_REACH cells each side, right side first.

    Only runs when the cell below is more than half full. Rate is
    (current - target) * SPREAD_FACTOR / offset against the live current
    volume, so nearer cells take their share before farther ones.
    """
    height, width = state.shape
    if not (y + 1 < height and state[y + 1, x] > SPREAD_GATE):
        return
    here = (y, x)
    for direction in (1, -1):
        for offset in range(1, SPREAD_REACH + 1):
            tx = x + direction * offset
            # Explicit bounds: a negative index would wrap to the far edge.
            if tx < 0 or tx >= width:
                break
            there = (y, tx)
            if state[there] < state[here]:
                rate = (state[here] - state[there]) * SPREAD_FACTOR / offset
                transfer(state, here, there, CAPACITY, rate, clamp)


def update_cell(x: int, y: int, state: np.ndarray, clamp: bool = False) -> None:
    """Drain down; if something is left and the cell below is full, spread."""
    transfer(state, (y, x), (y + 1, x), CAPACITY, DOWN_RATE, clamp)
    if state[y, x] == EMPTY:
        return
    if can_flow_down(x, y, state):
        return
    spread_horizontally(x, y, state, clamp)


def step(grid: WaterGrid, clamp: bool = False) -> None:
    """One tick: bottom row up, left to right, then commit.

    The next buffer starts as a copy of the current volumes and every update
    both reads and writes it, so water moved by a lower cell is visible to the
    cells processed after it in the same tick. Which cells run is decided from
    the pre-tick volumes. Do not split this into separate read/write buffers:
    that changes the cascade.
    """
    current = grid.volume
    nxt = current.copy()
    height, width = current.shape
    # Bottom row has nowhere to drain, start one row up.
    for y in range(height - 2, -1, -1):
        row = current[y]
        for x in range(width):
            if row[x] > EMPTY:
                update_cell(x, y, nxt, clamp)
    grid.volume = nxt
