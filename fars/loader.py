"""
Dataset loader (FARS accident files -> DataFrame)
=================================================

This module turns a year into a file name and reads that file.

Key ideas:
- A year may come in as an int, a float or a string; `_as_int` casts it.
- A missing file is an error for a single read, but only a warning when
  loading a batch of years (see `load_years`).
- The loader never edits the files; each call returns a new DataFrame.
"""

from __future__ import annotations
import logging
import os
from typing import Iterable, List, Optional

import pandas as pd

from .config import FarsConfig, DEFAULT_CONFIG
from .models import YearLoad, MONTH, YEAR

logger = logging.getLogger(__name__)


def _as_int(value) -> int:
    """Cast a year/state value to int; raises ValueError/TypeError if it can't.

    Infinite values (``float("inf")``, ``"1e400"``) raise ValueError too.
    """
    if isinstance(value, str):
        value = float(value.strip())
    try:
        return int(value)
    except OverflowError as e:
        raise ValueError(f"cannot convert {value!r} to an integer") from e


def make_filename(year, config: Optional[FarsConfig] = None) -> str:
    """Return the FARS file name for `year`, e.g. ``accident_2013.csv.bz2``."""
    config = config or DEFAULT_CONFIG
    return config.filename_pattern.format(year=_as_int(year))


def fars_read(filename: str, config: Optional[FarsConfig] = None) -> pd.DataFrame:
    """Read one FARS accident file into a DataFrame.

    The file is looked up in `config.data_dir` (the working directory by
    default). Raises FileNotFoundError naming the file if it is absent.
    Parser errors from pandas are not caught.
    """
    config = config or DEFAULT_CONFIG
    path = os.path.join(config.data_dir, filename)
    if not os.path.exists(path):
        raise FileNotFoundError(f"file '{filename}' does not exist")
    # compression is inferred from the .bz2 suffix; low_memory=False keeps
    # pandas from emitting mixed-dtype warnings on the wide FARS files
    return pd.read_csv(path, low_memory=False)


def load_years(years: Iterable, config: Optional[FarsConfig] = None) -> List[YearLoad]:
    """Load the MONTH column of several years, one `YearLoad` per input year.

    A year that cannot be resolved or read is logged as a warning and kept
    as a failed record, so one bad year never aborts the batch.
    """
    out: List[YearLoad] = []
    for year in years:
        try:
            y = _as_int(year)
            data = fars_read(make_filename(y, config), config)
            tagged = data.assign(**{YEAR: y})[[MONTH, YEAR]]
        except Exception as e:
            logger.warning("invalid year: %s", year)
            out.append(YearLoad(year=year, error=str(e)))
            continue
        out.append(YearLoad(year=y, data=tagged))
    return out


def fars_read_years(years: Iterable, config: Optional[FarsConfig] = None) -> List[Optional[pd.DataFrame]]:
    """Return a list with a MONTH/year table per year, or None for invalid years."""
    return [r.data for r in load_years(years, config)]
