"""
Offshore turbine filter: depth sampling at turbine locations.

Sampling convention (used for both the statistics and the filter): rasterio's
``rowcol`` with ``op=np.floor``, so a point lying exactly on a cell edge
belongs to the cell east/south of that edge. Points outside the raster get
NaN.
"""

import logging

import numpy as np
import pandas as pd
from rasterio.transform import rowcol

from .layers import ensure_same_crs

logger = logging.getLogger(__name__)


def cell_index(raster, xs, ys):
    """Row/col of the cell holding each (x, y), -1 where outside the grid."""
    xs = np.atleast_1d(np.asarray(xs, dtype="float64"))
    ys = np.atleast_1d(np.asarray(ys, dtype="float64"))
    if xs.size == 0:
        empty = np.empty(0, dtype="int64")
        return empty, empty.copy()

    rows, cols = rowcol(raster.transform, xs, ys, op=np.floor)
    rows = np.asarray(rows, dtype="int64")
    cols = np.asarray(cols, dtype="int64")

    height, width = raster.shape
    outside = (rows < 0) | (rows >= height) | (cols < 0) | (cols >= width)
    rows[outside] = -1
    cols[outside] = -1
    return rows, cols


def sample_raster(raster, xs, ys):
    rows, cols = cell_index(raster, xs, ys)
    out = np.full(rows.shape, np.nan)
    inside = rows >= 0
    out[inside] = raster.values[rows[inside], cols[inside]]
    return out


def sample_depth(turbines, bathymetry):
    """Copy of ``turbines`` with a ``depth`` column sampled from the bathymetry."""
    ensure_same_crs(turbines, bathymetry)

    sampled = turbines.copy()
    if sampled.empty:
        sampled["depth"] = pd.Series(dtype="float64")
        return sampled

    points = sampled.geometry.representative_point()  # same as the geometry for points
    sampled["depth"] = sample_raster(bathymetry, points.x.to_numpy(), points.y.to_numpy())
    return sampled


def filter_offshore(turbines, bathymetry):
    """Turbines over a defined bathymetry cell, with their ``depth``."""
    sampled = sample_depth(turbines, bathymetry)
    offshore = sampled[sampled["depth"].notna()].copy()

    logger.info("Offshore turbines: %d of %d", len(offshore), len(sampled))
    if offshore.empty:
        logger.warning("No turbine lies over a defined bathymetry cell")
    return offshore


def depth_statistics(turbines):
    """
    Count, mean, min and max of the ``depth`` column.

    Statistics of an empty set are NaN, not zero.
    """
    depth = turbines["depth"].dropna() if "depth" in turbines else pd.Series(dtype="float64")
    return {
        "count": int(depth.count()),
        "mean": float(depth.mean()) if len(depth) else np.nan,
        "min": float(depth.min()) if len(depth) else np.nan,
        "max": float(depth.max()) if len(depth) else np.nan,
    }
