import unittest

import pandas as pd

from src.raster import OpportunityGrid, RasterWindow, TravelTimeSurface
from src.utils.error_utils import DataValidationError


class TestRasterWindow(unittest.TestCase):
    def setUp(self):
        self.window = RasterWindow(west=100, north=200, width=3, height=2)

    def test_contains_is_window_local(self):
        """Containment uses local coordinates, not the window's position."""
        self.assertTrue(self.window.contains(0, 0))
        self.assertTrue(self.window.contains(2, 1))
        self.assertFalse(self.window.contains(100, 200))

    def test_contains_excludes_far_edges(self):
        self.assertFalse(self.window.contains(3, 0))
        self.assertFalse(self.window.contains(0, 2))

    def test_contains_excludes_negative_coordinates(self):
        self.assertFalse(self.window.contains(-1, 0))
        self.assertFalse(self.window.contains(0, -1))

    def test_size(self):
        self.assertEqual(self.window.size, 6)

    def test_window_is_immutable(self):
        with self.assertRaises(AttributeError):
            self.window.width = 10


class TestTravelTimeSurface(unittest.TestCase):
    def test_from_rows(self):
        surface = TravelTimeSurface.from_rows([[10, 70], [30, 60]], west=4, north=7)

        self.assertEqual(surface.query, RasterWindow(4, 7, 2, 2))
        self.assertEqual(list(surface.surface), [10, 70, 30, 60])
        self.assertEqual(surface.west, 4)
        self.assertEqual(surface.north, 7)

    def test_from_rows_empty(self):
        surface = TravelTimeSurface.from_rows([])
        self.assertEqual(surface.query.size, 0)
        self.assertEqual(list(surface.surface), [])

    def test_from_rows_rejects_ragged_rows(self):
        with self.assertRaises(DataValidationError):
            TravelTimeSurface.from_rows([[1, 2], [3]])


class TestOpportunityGrid(unittest.TestCase):
    def test_grid_is_a_raster_window(self):
        grid = OpportunityGrid(west=1, north=2, width=2, height=1, data=[3, 4])

        self.assertIsInstance(grid, RasterWindow)
        self.assertTrue(grid.contains(1, 0))
        self.assertFalse(grid.contains(2, 0))
        self.assertEqual(grid.total, 7)

    def test_from_rows(self):
        grid = OpportunityGrid.from_rows([[1, 2, 3], [4, 5, 6]], west=-5, north=9)

        self.assertEqual((grid.west, grid.north), (-5, 9))
        self.assertEqual((grid.width, grid.height), (3, 2))
        self.assertEqual(list(grid.data), [1, 2, 3, 4, 5, 6])

    def test_from_rows_rejects_ragged_rows(self):
        with self.assertRaises(DataValidationError):
            OpportunityGrid.from_rows([[1], [2, 3]])

    def test_from_frame(self):
        frame = pd.DataFrame({"a": [1, 4], "b": [2, 5], "c": [3, 6]})
        grid = OpportunityGrid.from_frame(frame, west=2, north=3)

        self.assertEqual((grid.width, grid.height), (3, 2))
        self.assertEqual((grid.west, grid.north), (2, 3))
        self.assertEqual(list(grid.data), [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])

    def test_from_frame_rejects_missing_values(self):
        frame = pd.DataFrame({"a": [1.0, None], "b": [2.0, 5.0]})
        with self.assertRaises(DataValidationError):
            OpportunityGrid.from_frame(frame)

    def test_from_frame_rejects_non_numeric_values(self):
        frame = pd.DataFrame({"a": ["many", "few"]})
        with self.assertRaises(DataValidationError):
            OpportunityGrid.from_frame(frame)


if __name__ == "__main__":
    unittest.main()
