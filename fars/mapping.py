"""
State accident map
==================

`fars_map_state(state_num, year)` draws every accident of one state and year
as a small dot on top of the state boundaries.

FARS coordinates need cleaning first. Unknown positions are not blank in the
files; they are coded with out-of-range numbers (longitude 999.9999,
latitude 99.9999). `mask_sentinels` turns every longitude above
`FarsConfig.longitude_sentinel` (900) and every latitude above
`FarsConfig.latitude_sentinel` (90) into NaN, so the map extent is computed
from real positions only. This means the plotted data differs from the raw
file on purpose.
"""

from __future__ import annotations
import logging
from typing import Optional

import pandas as pd

from .config import FarsConfig, DEFAULT_CONFIG
from .loader import _as_int, fars_read, make_filename
from .models import STATE, LONGITUDE, LATITUDE

logger = logging.getLogger(__name__)


def _plot_libs():
    # Lazy imports: reading and summarizing work without a plotting stack.
    try:
        import matplotlib.pyplot as plt
        import geopandas as gpd
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib and geopandas.\n"
            "Install with: python -m pip install matplotlib geopandas"
        ) from e
    return plt, gpd


def mask_sentinels(data: pd.DataFrame, config: Optional[FarsConfig] = None) -> pd.DataFrame:
    """Return a copy with sentinel coordinates replaced by NaN."""
    config = config or DEFAULT_CONFIG
    out = data.copy()
    out[LONGITUDE] = out[LONGITUDE].mask(out[LONGITUDE] > config.longitude_sentinel)
    out[LATITUDE] = out[LATITUDE].mask(out[LATITUDE] > config.latitude_sentinel)
    return out


def _select_state(data: pd.DataFrame, state: int) -> pd.DataFrame:
    return data[data[STATE] == state]


def _load_boundaries(boundaries, config: FarsConfig, gpd):
    """Return state boundaries as a GeoDataFrame, or None if none are configured."""
    if boundaries is None:
        boundaries = config.boundaries_path
    if boundaries is None:
        return None
    if isinstance(boundaries, str):
        return gpd.read_file(boundaries)
    return boundaries


def fars_map_state(state_num, year, ax=None, boundaries=None, config: Optional[FarsConfig] = None):
    """Plot all accidents of one state in one year.

    Args:
        state_num: FARS state code (anything int() accepts).
        year: dataset year.
        ax: matplotlib Axes to draw on; a new figure is created if omitted.
        boundaries: GeoDataFrame or path with state outlines for the base
            map. Falls back to `config.boundaries_path`; without either only
            the accident points are drawn.

    Returns:
        The Axes that was drawn on, or None if the state had no accidents.

    Raises:
        FileNotFoundError: the year's file is missing.
        ValueError: `state_num` does not occur in the year's STATE column, or
            matplotlib rejects the axis limits (e.g. every coordinate of the
            state is a sentinel, so the range is NaN).
    """
    config = config or DEFAULT_CONFIG
    data = fars_read(make_filename(year, config), config)
    state = _as_int(state_num)

    if state not in set(data[STATE].unique()):
        raise ValueError(f"invalid STATE number: {state}")
    sub = _select_state(data, state)
    if sub.empty:
        logger.info("no accidents to plot")
        return None
    sub = mask_sentinels(sub, config)

    plt, gpd = _plot_libs()
    fig = None
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))

    try:
        base = _load_boundaries(boundaries, config, gpd)
        if base is not None:
            base.plot(ax=ax, color="white", edgecolor="black", linewidth=0.5)

        # NaN coordinates are skipped, like missing points on a paper map
        located = sub.dropna(subset=[LONGITUDE, LATITUDE])
        points = gpd.GeoDataFrame(
            located,
            geometry=gpd.points_from_xy(located[LONGITUDE], located[LATITUDE]),
            crs="EPSG:4326",
        )
        if not points.empty:
            points.plot(ax=ax, color="black", markersize=config.marker_size)

        # Extent from the cleaned coordinates (NaN-skipping min/max)
        ax.set_xlim(sub[LONGITUDE].min(), sub[LONGITUDE].max())
        ax.set_ylim(sub[LATITUDE].min(), sub[LATITUDE].max())
    except Exception:
        # don't leave our own figure open behind a failed plot
        if fig is not None:
            plt.close(fig)
        raise
    ax.set_title(f"FARS accidents, state {state}, {_as_int(year)}")
    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    return ax
