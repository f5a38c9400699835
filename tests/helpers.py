"""Shared fixtures: tiny FARS-like accident files in a temporary directory."""

import os
import tempfile

import pandas as pd


def accident_frame(months, state=1, lon=-86.5, lat=32.5):
    """One accident per entry of `months`, all in `state` at (lon, lat)."""
    n = len(months)
    return pd.DataFrame({
        "STATE": [state] * n,
        "ST_CASE": list(range(10001, 10001 + n)),
        "MONTH": list(months),
        "LATITUDE": [lat] * n,
        "LONGITUD": [lon] * n,
    })


def write_year(data_dir, year, frame):
    path = os.path.join(data_dir, f"accident_{year}.csv.bz2")
    frame.to_csv(path, index=False, compression="bz2")
    return path


class DataDirMixin:
    """Creates a temp data directory and chdirs into it for each test."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = self._tmp.name
        self._old_cwd = os.getcwd()
        os.chdir(self.data_dir)

    def tearDown(self):
        os.chdir(self._old_cwd)
        self._tmp.cleanup()
