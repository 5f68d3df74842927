"""
App shell: display, main loop and CLI. One simulation tick per frame at tick_rate;
each tick the grid is drawn before it is stepped. World, UI, and config are wired here.

Usage:
    python app.py                              # window with the default config
    python app.py --config configs/wide.json   # window with a config file
    python app.py --headless --ticks 400       # no display, log stats
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import pygame

import config
from ui.grid_view import draw_grid
from ui.panel import ParamPanel
from water import Simulation, SourceInjector, WaterGrid, generator_positions

logger = logging.getLogger(__name__)

TITLE = "Water simulation"
PANEL_WIDTH = 240
MIN_HEIGHT = 320


def build_simulation(cfg: dict) -> Simulation:
    """Grid, generators and clamp mode from a config dict."""
    cols, rows, tile = config.grid_geometry(cfg)
    grid = WaterGrid(cols, rows, tile)
    cx, cy = config.source_cell(cfg)
    src = cfg["sources"]
    injector = SourceInjector(generator_positions(cx, cy, int(src["half_width"])), every=int(src["every"]))
    sim = Simulation(grid, injector, clamp=bool(cfg["clamp_transfer"]))
    if src.get("prime"):
        injector.prime(grid)
    return sim


def run(cfg: dict, selected: str | None = None) -> None:
    pygame.init()
    canvas_w, canvas_h = cfg["canvas"]["width"], cfg["canvas"]["height"]
    screen = pygame.display.set_mode((canvas_w + PANEL_WIDTH, max(canvas_h, MIN_HEIGHT)))
    pygame.display.set_caption(TITLE)
    clock = pygame.time.Clock()
    config.refresh_index()

    sim = build_simulation(cfg)
    logger.info("grid %dx%d, tile %d px, generators %s", sim.grid.width, sim.grid.height, sim.grid.tile_size, sim.injector.positions)

    grid_rect = pygame.Rect(0, 0, canvas_w, canvas_h)

    def draw_world(grid: WaterGrid) -> None:
        draw_grid(screen, grid_rect, grid)

    def do_step() -> None:
        sim.tick(render=draw_world)

    def do_restart() -> None:
        sim.reset()
        if cfg["sources"].get("prime"):
            sim.injector.prime(sim.grid)
        logger.info("restarted")

    def load_config_callback(name: str) -> None:
        nonlocal sim, cfg, grid_rect, screen
        path = config.get_config_path(name)
        try:
            new_cfg = config.load_config(path)
            new_sim = build_simulation(new_cfg)
        except (json.JSONDecodeError, ValueError, KeyError) as e:
            logger.error("could not load config %s: %s", path, e)
            return
        cfg, sim = new_cfg, new_sim
        panel.apply_config(cfg)
        w, h = cfg["canvas"]["width"], cfg["canvas"]["height"]
        if (w, h) != grid_rect.size:
            grid_rect = pygame.Rect(0, 0, w, h)
            screen = pygame.display.set_mode((w + PANEL_WIDTH, max(h, MIN_HEIGHT)))
            panel.rect = pygame.Rect(w, 0, PANEL_WIDTH, max(h, MIN_HEIGHT))

    panel = ParamPanel(
        pygame.Rect(canvas_w, 0, PANEL_WIDTH, max(canvas_h, MIN_HEIGHT)),
        {
            "tick_rate": cfg["tick_rate"],
            "inject_every": cfg["sources"]["every"],
            "clamp_transfer": cfg["clamp_transfer"],
            "selected_config": selected,
        },
        on_step=do_step,
        on_restart=do_restart,
        on_load_config=load_config_callback,
    )

    running = True
    while running:
        params = panel.get_params()
        clock.tick(max(1, min(60, params["tick_rate"])))

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                break
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False
                break
            panel.handle_event(event)

        params = panel.get_params()
        # Panel owns cadence and clamp once running; config values reach it via apply_config.
        sim.injector.every = max(1, params["inject_every"])
        sim.clamp = params["clamp_transfer"]

        screen.fill((0, 0, 0))
        if params["paused"]:
            draw_world(sim.grid)
        else:
            sim.tick(render=draw_world)
        mouse = pygame.mouse.get_pos()
        panel.draw(screen, sim.stats(), mouse)
        panel.draw_tooltip(screen, mouse)
        pygame.display.flip()

    pygame.quit()


def run_headless(cfg: dict, ticks: int, report_every: int) -> dict:
    sim = build_simulation(cfg)
    logger.info("headless run: %d ticks on a %dx%d grid", ticks, sim.grid.width, sim.grid.height)
    stats = sim.run(ticks, report_every=report_every)
    logger.info("done: total volume %.4f in %d wet cells", stats["total_volume"], stats["wet_cells"])
    return stats


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Grid water simulation")
    parser.add_argument("--config", type=Path, default=None, help="JSON config file (default: built-in defaults)")
    parser.add_argument("--headless", action="store_true", help="Run without a window and log stats")
    parser.add_argument("--ticks", type=int, default=200, help="Ticks to run in headless mode")
    parser.add_argument("--report-every", type=int, default=20, help="Headless stats interval in ticks (0 = off)")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        cfg = config.load_config(args.config)
        if args.headless:
            run_headless(cfg, args.ticks, args.report_every)
        else:
            run(cfg, selected=config.config_name(args.config) if args.config else None)
    except (json.JSONDecodeError, ValueError, KeyError) as e:
        logger.error("bad configuration: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
