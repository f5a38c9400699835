"""
Data model (YearLoad)
=====================

Loading many years at once must survive a missing or broken file. Instead of
raising, each year produces a `YearLoad` record: either the per-year table or
the reason it could not be loaded. The list of records keeps the input order.
"""

from dataclasses import dataclass
from typing import Any, Optional

import pandas as pd

# Column names used from the FARS accident file
MONTH = "MONTH"
STATE = "STATE"
LONGITUDE = "LONGITUD"
LATITUDE = "LATITUDE"
# Column added by the loader
YEAR = "year"


@dataclass(frozen=True)
class YearLoad:
    """Outcome of loading one year (table on success, message on failure)."""
    year: Any
    data: Optional[pd.DataFrame] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.data is not None
