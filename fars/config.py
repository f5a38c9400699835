"""
Configuration (FarsConfig)
==========================

One small dataclass holds the knobs shared by the loader, the summary and the
map: where the yearly files live, how they are named, and which coordinate
values FARS uses to mean "unknown".

Every public function takes an optional `config=` keyword. Passing nothing
means: files in the current working directory, default FARS naming.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

# FARS codes unknown coordinates as 999.9999 (longitude) and 99.9999
# (latitude). Anything above these thresholds is not a real location.
LONGITUDE_SENTINEL = 900.0
LATITUDE_SENTINEL = 90.0

DEFAULT_FILENAME_PATTERN = "accident_{year}.csv.bz2"


@dataclass(frozen=True)
class FarsConfig:
    """Settings for locating and interpreting FARS accident files."""
    data_dir: str = "."
    filename_pattern: str = DEFAULT_FILENAME_PATTERN
    longitude_sentinel: float = LONGITUDE_SENTINEL
    latitude_sentinel: float = LATITUDE_SENTINEL
    # matplotlib scatter size (points^2); small, like a single pixel dot
    marker_size: float = 1.0
    # Optional vector file (shapefile / GeoJSON) with state boundaries
    boundaries_path: Optional[str] = None


DEFAULT_CONFIG = FarsConfig()
