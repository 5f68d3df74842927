"""Tick driver tests: injection cadence, render point and stats."""

import unittest

from water.grid import WaterGrid
from water.simulation import Simulation
from water.sources import SourceInjector, generator_positions


def _reference_sim():
    grid = WaterGrid.from_canvas(800, 400, 10)
    return Simulation(grid, SourceInjector(generator_positions(10, 10, 1), every=5))


class SimulationTests(unittest.TestCase):
    def test_generators_full_at_render_on_injection_ticks(self):
        sim = _reference_sim()
        seen = {}
        for _ in range(11):
            sim.tick(render=lambda g: seen.__setitem__(sim.tick_count, g.volume[10, 9:12].tolist()))
        for t in (1, 2, 3, 4):
            self.assertEqual(seen[t], [0.0, 0.0, 0.0])
        self.assertEqual(seen[5], [1.0, 1.0, 1.0])
        self.assertEqual(seen[10], [1.0, 1.0, 1.0])
        self.assertTrue(all(v < 1.0 for v in seen[6]))
        self.assertTrue(all(v < 1.0 for v in seen[11]))

    def test_first_injection_then_step(self):
        sim = _reference_sim()
        for _ in range(5):
            sim.tick()
        self.assertEqual(sim.grid.volume[10, 9:12].tolist(), [0.5, 0.5, 0.5])
        self.assertEqual(sim.grid.volume[11, 9:12].tolist(), [0.5, 0.5, 0.5])
        self.assertEqual(sim.grid.total_volume(), 3.0)

    def test_flow_adds_no_volume_between_injections(self):
        sim = _reference_sim()
        before = []
        for _ in range(200):
            sim.tick(render=lambda g: before.append(g.total_volume()))
            self.assertAlmostEqual(sim.grid.total_volume(), before[-1], places=9)
        self.assertGreater(sim.grid.total_volume(), 3.0)

    def test_run_reports_and_returns_stats(self):
        sim = _reference_sim()
        with self.assertLogs("water.simulation", level="INFO") as logs:
            stats = sim.run(10, report_every=5)
        self.assertEqual(len(logs.records), 2)
        self.assertEqual(stats["tick"], 10)
        self.assertEqual(set(stats), {"tick", "total_volume", "wet_cells", "max_volume", "min_volume"})

    def test_reset(self):
        sim = _reference_sim()
        sim.run(7)
        sim.reset()
        self.assertEqual(sim.tick_count, 0)
        self.assertEqual(sim.grid.total_volume(), 0.0)

    def test_injector_bound_to_grid(self):
        grid = WaterGrid(5, 5)
        with self.assertLogs("water.sources", level="WARNING"):
            sim = Simulation(grid, SourceInjector(generator_positions(4, 0, 1)))
        self.assertEqual(sim.injector.positions, [(4, 0), (3, 0)])


if __name__ == "__main__":
    unittest.main()
