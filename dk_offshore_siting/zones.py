"""
Depth Zones
===========

Reclassification of continuous depth into discrete cost zones.

Bins are (lower, upper, zone) with lower-inclusive, upper-exclusive bounds:
with the default table 10 m falls in zone 1, 20 m in zone 2 and 50 m in no
zone. Cells outside every bin are NaN.
"""

import logging

import numpy as np
import pandas as pd

from .config import DEPTH_BINS
from .errors import SitingConfigError

logger = logging.getLogger(__name__)


def check_bins(bins):
    """Reject empty, inverted or overlapping bins."""
    if not bins:
        raise SitingConfigError("no depth bins given")
    ordered = sorted(bins)
    for lower, upper, zone in ordered:
        if not lower < upper:
            raise SitingConfigError(f"depth bin for zone {zone} is empty: [{lower}, {upper})")
    for (_, prev_upper, prev_zone), (lower, _, zone) in zip(ordered, ordered[1:]):
        if lower < prev_upper:
            raise SitingConfigError(f"depth bins for zones {prev_zone} and {zone} overlap")
    return ordered


def classify_depth(bathymetry, bins=DEPTH_BINS):
    """Zone raster on the bathymetry grid."""
    bins = check_bins(bins)
    depth = bathymetry.values

    zones = np.full(depth.shape, np.nan)
    with np.errstate(invalid="ignore"):
        for lower, upper, zone in bins:
            zones[(depth >= lower) & (depth < upper)] = zone

    logger.info("Classified %d of %d cells into %d depth zones",
                int(np.count_nonzero(~np.isnan(zones))), zones.size, len(bins))
    return bathymetry.with_values(zones)


def zone_summary(zones, bins=DEPTH_BINS):
    """Cell count and area (km²) per depth zone, one row per bin."""
    cell_km2 = zones.cell_area_m2 / 1e6
    rows = []
    for lower, upper, zone in check_bins(bins):
        n_cells = int(np.count_nonzero(zones.values == zone))
        rows.append({
            "zone": zone,
            "depth_band_m": f"{lower:g}-{upper:g}",
            "cells": n_cells,
            "area_km2": n_cells * cell_km2,
        })
    return pd.DataFrame(rows, columns=["zone", "depth_band_m", "cells", "area_km2"])
