"""
FARS package
============

Helpers for the Fatality Analysis Reporting System (FARS) accident files,
one compressed CSV per year (`accident_<year>.csv.bz2`).

- File name resolution and dataset loading are in `fars/loader.py`.
- The month x year summary is in `fars/summary.py`.
- The state accident map is in `fars/mapping.py`.
- The CLI entry point is in `fars/cli.py`.
"""

from .config import FarsConfig
from .loader import make_filename, fars_read, load_years, fars_read_years
from .summary import fars_summarize_years, export_summary
from .mapping import fars_map_state, mask_sentinels

__version__ = '0.1.0'

__all__ = [
    "FarsConfig",
    "make_filename",
    "fars_read",
    "load_years",
    "fars_read_years",
    "fars_summarize_years",
    "export_summary",
    "fars_map_state",
    "mask_sentinels",
]
