"""
Unit tests for the state accident map.

Uses the non-interactive Agg backend and a one-box GeoDataFrame as the
state boundary layer.
"""

import math
import unittest
from unittest import mock

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import geopandas as gpd
import pandas as pd
from shapely.geometry import box

from fars.config import FarsConfig
from fars.mapping import fars_map_state, mask_sentinels
from tests.helpers import DataDirMixin, accident_frame, write_year


def _year_2013():
    alabama = accident_frame([1, 2, 3], state=1, lon=-86.0, lat=32.0)
    alabama.loc[1, ["LONGITUD", "LATITUDE"]] = [-87.5, 33.5]
    # unknown position coded with FARS sentinels
    alabama.loc[2, ["LONGITUD", "LATITUDE"]] = [999.9999, 99.9999]
    alaska = accident_frame([4], state=2, lon=999.9999, lat=99.9999)
    return pd.concat([alabama, alaska], ignore_index=True)


class TestMaskSentinels(unittest.TestCase):

    def test_values_above_thresholds_become_nan(self):
        data = pd.DataFrame({
            "LONGITUD": [-86.0, 999.9999, 888.0],
            "LATITUDE": [32.0, 99.9999, 77.7777],
        })
        out = mask_sentinels(data)
        self.assertTrue(pd.isna(out.loc[1, "LONGITUD"]))
        self.assertTrue(pd.isna(out.loc[1, "LATITUDE"]))
        self.assertEqual(out.loc[2, "LONGITUD"], 888.0)
        self.assertEqual(out.loc[0, "LATITUDE"], 32.0)
        # input is left untouched
        self.assertEqual(data.loc[1, "LONGITUD"], 999.9999)

    def test_thresholds_come_from_config(self):
        data = pd.DataFrame({"LONGITUD": [888.0], "LATITUDE": [10.0]})
        out = mask_sentinels(data, FarsConfig(longitude_sentinel=800.0, latitude_sentinel=5.0))
        self.assertTrue(out.isna().all().all())


class TestFarsMapState(DataDirMixin, unittest.TestCase):
    """Test cases for fars_map_state."""

    def setUp(self):
        super().setUp()
        write_year(self.data_dir, 2013, _year_2013())
        self.states = gpd.GeoDataFrame(geometry=[box(-88.5, 30.0, -84.9, 35.0)], crs="EPSG:4326")

    def tearDown(self):
        plt.close("all")
        super().tearDown()

    def test_extent_ignores_sentinel_coordinates(self):
        ax = fars_map_state(1, 2013, boundaries=self.states)
        xmin, xmax = ax.get_xlim()
        ymin, ymax = ax.get_ylim()
        self.assertAlmostEqual(xmin, -87.5)
        self.assertAlmostEqual(xmax, -86.0)
        self.assertAlmostEqual(ymin, 32.0)
        self.assertAlmostEqual(ymax, 33.5)

    def test_draws_on_given_axes(self):
        fig, ax = plt.subplots()
        out = fars_map_state("1", "2013", ax=ax, boundaries=self.states)
        self.assertIs(out, ax)
        # one collection for the boundaries, one for the points
        self.assertEqual(len(ax.collections), 2)

    def test_without_boundaries_plots_points_only(self):
        ax = fars_map_state(1, 2013)
        self.assertEqual(len(ax.collections), 1)

    def test_invalid_state_names_the_value(self):
        with self.assertRaises(ValueError) as ctx:
            fars_map_state(56, 2013)
        self.assertIn("invalid STATE number: 56", str(ctx.exception))

    def test_missing_year_propagates(self):
        with self.assertRaises(FileNotFoundError):
            fars_map_state(1, 2014)

    def test_non_integer_state_fails(self):
        with self.assertRaises(ValueError):
            fars_map_state("Alabama", 2013)

    def test_no_matching_rows_logs_and_returns_none(self):
        # The STATE check above the filter means a known state always has
        # rows; the empty-filter branch is only reachable by stubbing the filter.
        empty = _year_2013().iloc[0:0]
        with mock.patch("fars.mapping._select_state", return_value=empty):
            with self.assertLogs("fars.mapping", level="INFO") as logs:
                out = fars_map_state(1, 2013)
        self.assertIsNone(out)
        self.assertIn("no accidents to plot", logs.output[0])
        self.assertEqual(plt.get_fignums(), [])

    def test_only_sentinel_coordinates_fail_in_matplotlib(self):
        with self.assertRaises(ValueError):
            fars_map_state(2, 2013)

    def test_failed_plot_closes_its_figure(self):
        for _ in range(3):
            with self.assertRaises(ValueError):
                fars_map_state(2, 2013)
        self.assertEqual(plt.get_fignums(), [])

    def test_failed_plot_keeps_callers_figure(self):
        fig, ax = plt.subplots()
        with self.assertRaises(ValueError):
            fars_map_state(2, 2013, ax=ax)
        self.assertEqual(plt.get_fignums(), [fig.number])

    def test_boundaries_path_from_config(self):
        path = "states.geojson"
        self.states.to_file(path, driver="GeoJSON")
        ax = fars_map_state(1, 2013, config=FarsConfig(boundaries_path=path))
        self.assertEqual(len(ax.collections), 2)
        self.assertFalse(math.isnan(ax.get_xlim()[0]))


if __name__ == "__main__":
    unittest.main()
