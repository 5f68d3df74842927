"""Flow rule tests: transfer, gating, traversal order and edge walls."""

import unittest

import numpy as np

from water.flow import can_flow_down, spread_horizontally, step, transfer, update_cell
from water.grid import WaterGrid


def _grid(width, height, cells):
    grid = WaterGrid(width, height, tile_size=10)
    for (x, y), v in cells.items():
        grid.set_volume(x, y, v)
    return grid


class TransferTests(unittest.TestCase):
    def test_moves_up_to_rate(self):
        state = np.array([[1.0, 0.0]])
        transfer(state, (0, 0), (0, 1), 1.0, 0.5)
        self.assertEqual(state[0, 0], 0.5)
        self.assertEqual(state[0, 1], 0.5)

    def test_limited_by_room_in_target(self):
        state = np.array([[1.0, 0.8]])
        transfer(state, (0, 0), (0, 1), 1.0, 0.5)
        self.assertAlmostEqual(state[0, 0], 0.8, places=12)
        self.assertAlmostEqual(state[0, 1], 1.0, places=12)

    def test_source_volume_does_not_limit_move(self):
        state = np.array([[0.3, 0.0]])
        transfer(state, (0, 0), (0, 1), 1.0, 0.5)
        self.assertAlmostEqual(state[0, 0], -0.2, places=12)
        self.assertEqual(state[0, 1], 0.5)

    def test_over_full_target_pushes_back_unless_clamped(self):
        state = np.array([[0.3, 1.2]])
        transfer(state, (0, 0), (0, 1), 1.0, 0.5)
        self.assertAlmostEqual(state[0, 0], 0.5, places=12)
        self.assertAlmostEqual(state[0, 1], 1.0, places=12)

        state = np.array([[0.3, 1.2]])
        transfer(state, (0, 0), (0, 1), 1.0, 0.5, clamp=True)
        self.assertEqual(state[0, 0], 0.3)
        self.assertEqual(state[0, 1], 1.2)


class CanFlowDownTests(unittest.TestCase):
    def test_bottom_row_has_nothing_below(self):
        state = np.zeros((3, 2))
        self.assertFalse(can_flow_down(0, 2, state))

    def test_room_below(self):
        state = np.zeros((3, 2))
        state[1, 0] = 0.99
        self.assertTrue(can_flow_down(0, 0, state))
        state[1, 0] = 1.0
        self.assertFalse(can_flow_down(0, 0, state))


class SpreadTests(unittest.TestCase):
    def test_no_spread_when_cell_below_half_full_or_less(self):
        state = np.zeros((3, 7))
        state[0, 3] = 1.0
        state[1, 3] = 0.5
        before = state.copy()
        spread_horizontally(3, 0, state)
        np.testing.assert_array_equal(state, before)

    def test_spreads_once_cell_below_passes_half(self):
        state = np.zeros((3, 7))
        state[0, 3] = 1.0
        state[1, 3] = 0.51
        spread_horizontally(3, 0, state)
        self.assertGreater(state[0, 4], 0.0)
        self.assertGreater(state[0, 2], 0.0)

    def test_no_spread_in_bottom_row(self):
        state = np.zeros((2, 5))
        state[1, 2] = 1.0
        before = state.copy()
        spread_horizontally(2, 1, state)
        np.testing.assert_array_equal(state, before)

    def test_skips_neighbours_holding_as_much_or_more(self):
        state = np.zeros((2, 5))
        state[0, 2] = 0.6
        state[0, 3] = 0.6
        state[0, 1] = 0.9
        state[1, 2] = 1.0
        spread_horizontally(2, 0, state)
        self.assertEqual(state[0, 3], 0.6)
        self.assertEqual(state[0, 1], 0.9)
        # Offset 2 on the right still gets a share.
        self.assertAlmostEqual(state[0, 4], 0.6 * 0.1 / 2, places=12)


class UpdateCellTests(unittest.TestCase):
    def test_drains_before_spreading(self):
        state = np.zeros((3, 3))
        state[0, 1] = 1.0
        state[1, 1] = 0.2
        state[2, 1] = 1.0
        update_cell(1, 0, state)
        self.assertEqual(state[0, 1], 0.5)
        self.assertAlmostEqual(state[1, 1], 0.7, places=12)
        self.assertEqual(state[0, 0], 0.0)
        self.assertEqual(state[0, 2], 0.0)


class StepTests(unittest.TestCase):
    def test_empty_grid_stays_empty(self):
        grid = WaterGrid(8, 6)
        for _ in range(3):
            step(grid)
        self.assertEqual(grid.total_volume(), 0.0)
        self.assertFalse(np.any(grid.volume))

    def test_single_full_cell_drops_half(self):
        grid = _grid(5, 5, {(2, 1): 1.0})
        step(grid)
        self.assertEqual(grid.get_volume(2, 1), 0.5)
        self.assertEqual(grid.get_volume(2, 2), 0.5)
        self.assertEqual(grid.total_volume(), 1.0)
        self.assertEqual(grid.wet_cells(), 2)

    def test_column_trace_over_several_ticks(self):
        grid = _grid(5, 5, {(2, 1): 1.0})
        expected = [
            {(2, 1): 0.5, (2, 2): 0.5},
            {(2, 2): 0.5, (2, 3): 0.5},
            {(2, 3): 0.5, (2, 4): 0.5},
            {(2, 4): 1.0},
            {(2, 4): 1.0},
        ]
        for tick, cells in enumerate(expected, start=1):
            step(grid)
            want = np.zeros((5, 5))
            for (x, y), v in cells.items():
                want[y, x] = v
            np.testing.assert_array_equal(grid.volume, want, err_msg=f"tick {tick}")

    def test_blocked_cell_spreads_with_decaying_rate_right_first(self):
        grid = _grid(7, 4, {(3, 2): 1.0, (3, 3): 1.0})
        step(grid)
        row = grid.volume[2]
        self.assertAlmostEqual(row[4], 0.1, places=12)
        self.assertAlmostEqual(row[5], 0.045, places=12)
        self.assertAlmostEqual(row[6], 0.0285, places=12)
        self.assertAlmostEqual(row[2], 0.08265, places=12)
        self.assertAlmostEqual(row[1], 0.0371925, places=12)
        self.assertAlmostEqual(row[0], 0.02355525, places=12)
        self.assertAlmostEqual(row[3], 0.68310225, places=12)
        # Nearer cells get more, and the right side is served first.
        self.assertGreater(row[4], row[5])
        self.assertGreater(row[5], row[6])
        self.assertGreater(row[4], row[2])
        self.assertEqual(grid.get_volume(3, 3), 1.0)
        self.assertAlmostEqual(grid.total_volume(), 2.0, places=12)

    def test_upper_cell_sees_lower_cell_updates_in_same_tick(self):
        # (3, 1) fills the room (3, 2) just gave away to its neighbours.
        grid = _grid(7, 4, {(3, 1): 1.0, (3, 2): 1.0, (3, 3): 1.0})
        step(grid)
        self.assertEqual(grid.get_volume(3, 2), 1.0)
        # It drained 1 - 0.68310225 into (3, 2), then spread the rest sideways.
        self.assertLess(grid.get_volume(3, 1), 0.69)
        self.assertGreater(grid.get_volume(4, 1), 0.0)
        self.assertGreater(grid.get_volume(2, 1), 0.0)
        self.assertAlmostEqual(grid.total_volume(), 3.0, places=12)

    def test_bottom_row_cells_do_not_move(self):
        grid = _grid(5, 3, {(0, 2): 1.0, (4, 2): 1.0, (2, 2): 0.4})
        before = grid.volume.copy()
        step(grid)
        np.testing.assert_array_equal(grid.volume, before)

    def test_left_wall_no_wraparound(self):
        grid = _grid(5, 4, {(0, 2): 1.0, (0, 3): 1.0})
        step(grid)
        for x in (1, 2, 3):
            self.assertGreater(grid.get_volume(x, 2), 0.0)
        self.assertEqual(grid.get_volume(4, 2), 0.0)

    def test_right_wall_no_wraparound(self):
        grid = _grid(5, 4, {(4, 2): 1.0, (4, 3): 1.0})
        step(grid)
        for x in (1, 2, 3):
            self.assertGreater(grid.get_volume(x, 2), 0.0)
        self.assertEqual(grid.get_volume(0, 2), 0.0)

    def test_single_row_grid(self):
        grid = _grid(4, 1, {(1, 0): 1.0})
        step(grid)
        self.assertEqual(grid.get_volume(1, 0), 1.0)

    def test_volume_conserved(self):
        rng = np.random.default_rng(7)
        for clamp in (False, True):
            grid = WaterGrid(20, 12)
            grid.volume[:] = rng.random((12, 20))
            total = grid.total_volume()
            for _ in range(60):
                step(grid, clamp=clamp)
                self.assertAlmostEqual(grid.total_volume(), total, places=9)

    def test_commit_replaces_array(self):
        grid = _grid(3, 3, {(1, 0): 1.0})
        old = grid.volume
        step(grid)
        self.assertIsNot(grid.volume, old)
        self.assertEqual(old[0, 1], 1.0)


if __name__ == "__main__":
    unittest.main()
