"""Load simulation and UI parameters. Configs live in configs/ as {name}.json, merged over defaults."""

import json
import logging
import re
from pathlib import Path

from water.constants import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_INJECT_EVERY,
    DEFAULT_TICK_RATE,
    DEFAULT_TILE_SIZE,
)

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parent / "configs"

# In-memory index of config names so the dropdown avoids disk access every frame.
_CONFIG_INDEX: set[str] = set()


def refresh_index() -> None:
    """Rebuild _CONFIG_INDEX from disk. Call at startup and after external changes."""
    global _CONFIG_INDEX
    _CONFIG_INDEX = set()
    if not CONFIG_DIR.exists():
        return
    for f in CONFIG_DIR.glob("*.json"):
        _CONFIG_INDEX.add(f.stem)


def _sanitize_name(name: str) -> str:
    s = (name or "").strip()
    s = re.sub(r"[^\w\s-]", "", s)
    s = re.sub(r"[\s-]+", "_", s).strip("_")
    return s[:64] or "unnamed"


def get_config_path(name: str) -> Path:
    return CONFIG_DIR / f"{_sanitize_name(name)}.json"


def config_name(path: Path | str) -> str:
    return Path(path).stem


def list_configs() -> list[str]:
    """Names of configs in configs/, from the in-memory index."""
    return sorted(_CONFIG_INDEX, key=str.lower)


def load_config(path: Path | str | None = None) -> dict:
    """Defaults merged with the JSON at path. Missing file = defaults; bad JSON raises."""
    if path is None:
        return _default_config()
    p = Path(path)
    if not p.exists():
        logger.warning("config %s not found, using defaults", p)
        return _default_config()
    with open(p, "r") as f:
        data = json.load(f)
    logger.info("loaded config %s", p)
    return _merge_defaults(data)


def grid_geometry(cfg: dict) -> tuple[int, int, int]:
    """(columns, rows, tile_size) for a config."""
    tile = int(cfg["tile_size"])
    if tile <= 0:
        raise ValueError(f"tile_size must be positive, got {tile}")
    canvas = cfg["canvas"]
    return int(canvas["width"]) // tile, int(canvas["height"]) // tile, tile


def source_cell(cfg: dict) -> tuple[int, int]:
    """Generator centre in grid cells, from its pixel origin."""
    tile = int(cfg["tile_size"])
    ox, oy = cfg["sources"]["origin_px"]
    return int(ox) // tile, int(oy) // tile


def _default_config() -> dict:
    return {
        "canvas": {"width": DEFAULT_CANVAS_WIDTH, "height": DEFAULT_CANVAS_HEIGHT},
        "tile_size": DEFAULT_TILE_SIZE,
        "tick_rate": DEFAULT_TICK_RATE,
        "clamp_transfer": False,
        "sources": {
            "origin_px": [100, 100],
            "half_width": 1,
            "every": DEFAULT_INJECT_EVERY,
            "prime": False,
        },
    }


def _merge_defaults(data: dict) -> dict:
    d = _default_config()
    for section in ("canvas", "sources"):
        if section in data:
            d[section] = {**d[section], **data[section]}
    for k in ("tile_size", "tick_rate", "clamp_transfer"):
        if k in data:
            d[k] = data[k]
    return d
