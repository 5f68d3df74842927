"""Flow rule constants. Capacity 1.0 = a full tile."""

EMPTY = 0.0
CAPACITY = 1.0
# Max volume a cell hands to the cell below in one tick.
DOWN_RATE = 0.5
# Sideways spread only when the cell below holds more than this.
SPREAD_GATE = 0.5
# Lateral reach in cells; rate falls off as 1/offset.
SPREAD_REACH = 3
SPREAD_FACTOR = 0.1
DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT = 800, 400
DEFAULT_TILE_SIZE = 10
DEFAULT_TICK_RATE = 20
DEFAULT_INJECT_EVERY = 5
