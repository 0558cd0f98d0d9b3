"""
Exclusion Masking
=================

Buffers around turbines and shipping lanes, and cell-wise removal of
excluded areas from a raster.

Every exclusion is carried as a GeoSeries holding one (multi)polygon, so its
CRS travels with it and is checked against the raster before masking. A cell
is removed when it touches the exclusion geometry at all
(``all_touched=True``). Masks only ever remove cells, which makes them
idempotent and independent of the order they are applied in.
"""

import logging

import geopandas as gpd
import numpy as np
import pandas as pd
from rasterio.features import geometry_mask

from .config import SHIPPING_BUFFER_M, WAKE_BUFFER_M
from .errors import SitingConfigError
from .layers import as_crs, ensure_same_crs

logger = logging.getLogger(__name__)


def _require_metric(gdf, what):
    crs = as_crs(gdf.crs)
    if not crs.is_projected:
        raise SitingConfigError(
            f"{what} must be in a projected CRS to buffer in metres, got {crs.to_string()}"
        )


def union_buffer(layer, distance, what="layer"):
    """
    Buffer every geometry by ``distance`` and merge the result.

    The merge is a polygon union, so overlapping buffers become one region
    without inner seams. An empty layer gives an empty GeoSeries.
    """
    _require_metric(layer, what)
    if layer.empty:
        return gpd.GeoSeries([], crs=layer.crs)
    merged = layer.geometry.buffer(distance).union_all()
    return gpd.GeoSeries([merged], crs=layer.crs)


def wake_buffer(turbines, radius=WAKE_BUFFER_M):
    return union_buffer(turbines, radius, what="turbines")


def shipping_buffer(lanes, distance=SHIPPING_BUFFER_M):
    return union_buffer(lanes, distance, what="shipping lanes")


def protected_area_union(protected):
    """Protected areas as a single exclusion geometry."""
    if protected.empty:
        return gpd.GeoSeries([], crs=protected.crs)
    return gpd.GeoSeries([protected.geometry.union_all()], crs=protected.crs)


def protected_area_sizes(protected):
    """Copy of the protected areas with an informational ``area_km2``."""
    _require_metric(protected, "protected areas")
    sized = protected.copy()
    sized["area_km2"] = sized.geometry.area / 1e6
    return sized


def mask_raster(raster, exclusion):
    """New raster with every cell touching ``exclusion`` set to NaN."""
    ensure_same_crs(raster, exclusion)

    geoms = [g for g in exclusion.geometry if g is not None and not g.is_empty]
    if not geoms:
        return raster.with_values(raster.values.copy())

    inside = geometry_mask(
        geoms,
        out_shape=raster.shape,
        transform=raster.transform,
        all_touched=True,
        invert=True,
    )
    return raster.with_values(np.where(inside, np.nan, raster.values))


def excluded_cells(before, after):
    return int(np.count_nonzero(before.defined & ~after.defined))


def apply_exclusions(zones, exclusions):
    """
    Mask ``zones`` with each exclusion in turn.

    Args:
        zones: zone Raster
        exclusions: ordered (name, GeoSeries) pairs

    Returns:
        dict name -> Raster after that exclusion, in application order
    """
    stages = {}
    current = zones
    for name, exclusion in exclusions:
        masked = mask_raster(current, exclusion)
        removed = excluded_cells(current, masked)
        logger.info("Excluded %s: %d cells removed, %d left",
                    name, removed, int(np.count_nonzero(masked.defined)))
        stages[name] = masked
        current = masked

    if not np.any(current.defined):
        logger.warning("No zone cells left after exclusions")
    return stages


def exclusion_summary(zones, stages):
    """Removed and remaining cells/area after each exclusion stage."""
    cell_km2 = zones.cell_area_m2 / 1e6
    rows = []
    previous = zones
    for name, masked in stages.items():
        remaining = int(np.count_nonzero(masked.defined))
        rows.append({
            "stage": name,
            "removed_cells": excluded_cells(previous, masked),
            "remaining_cells": remaining,
            "remaining_km2": remaining * cell_km2,
        })
        previous = masked
    return pd.DataFrame(rows, columns=["stage", "removed_cells", "remaining_cells", "remaining_km2"])
