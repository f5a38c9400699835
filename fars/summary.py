"""
Yearly summary (accidents per month and year)
=============================================

`fars_summarize_years` counts accidents per (year, month) and pivots the
counts into a month x year table:

    year    2013  2014
    MONTH
    1       2230  2168
    ...

Months with no accidents in some year come out as NaN, not 0: the pivot
only fills the (year, month) pairs that were observed.
"""

from __future__ import annotations
import os
from typing import Iterable, Optional

import pandas as pd

from .config import FarsConfig
from .loader import load_years
from .models import MONTH, YEAR


def fars_summarize_years(years: Iterable, config: Optional[FarsConfig] = None) -> pd.DataFrame:
    """Count observations per month for each year.

    Years that fail to load are warned about (see `load_years`) and left out
    of the columns. Raises ValueError if none of the years could be loaded.
    """
    frames = [r.data for r in load_years(years, config) if r.ok]
    if not frames:
        raise ValueError("no valid years to summarize")
    counts = (
        pd.concat(frames, ignore_index=True)
        .groupby([YEAR, MONTH])
        .size()
        .reset_index(name="n")
    )
    return counts.pivot(index=MONTH, columns=YEAR, values="n")


def export_summary(summary: pd.DataFrame, path: str) -> str:
    """Write a summary table to CSV or JSON (picked from the file extension)."""
    ext = os.path.splitext(path)[1].lower()
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    if ext == ".csv":
        summary.to_csv(path)
    elif ext == ".json":
        # one object per month: {"MONTH": 1, "2013": 2230, ...}
        summary.rename(columns=str).reset_index().to_json(path, orient="records", indent=2)
    else:
        raise ValueError(f"unsupported export format: '{ext}' (use .csv or .json)")
    return path
