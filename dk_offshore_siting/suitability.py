"""
Suitability scoring: wind power density on the masked zone grid.
"""

import logging

import numpy as np
import pandas as pd
from rasterio.enums import Resampling
from rasterio.warp import reproject

from .layers import as_crs, ensure_same_crs

logger = logging.getLogger(__name__)


def warp_to_grid(source, target, resampling=Resampling.bilinear):
    """
    Resample ``source`` onto the exact grid (CRS, transform, shape) of ``target``.

    Cells of the target not covered by the source stay NaN.
    """
    destination = np.full(target.shape, np.nan)
    reproject(
        source=source.values,
        destination=destination,
        src_transform=source.transform,
        src_crs=as_crs(source.crs).to_wkt(),
        src_nodata=np.nan,
        dst_transform=target.transform,
        dst_crs=as_crs(target.crs).to_wkt(),
        dst_nodata=np.nan,
        resampling=resampling,
    )
    return target.with_values(destination)


def score_suitability(wind, zones):
    """Wind power density where a zone is defined, NaN elsewhere."""
    aligned = warp_to_grid(wind, zones)

    values = np.where(zones.defined, aligned.values, np.nan)
    n_scored = int(np.count_nonzero(~np.isnan(values)))
    n_zone = int(np.count_nonzero(zones.defined))
    logger.info("Wind power density on %d of %d zone cells", n_scored, n_zone)
    if n_zone and n_scored < n_zone:
        logger.warning("Wind raster does not cover %d zone cells", n_zone - n_scored)
    return zones.with_values(values)


def suitability_summary(suitability, zones):
    """
    Wind power density statistics per depth zone.

    Zones with no scored cells keep NaN mean/min/max.
    """
    ensure_same_crs(suitability, zones)
    classes = np.unique(zones.values[zones.defined]).astype(int)

    rows = []
    for zone in classes:
        power = pd.Series(suitability.values[zones.values == zone]).dropna()
        rows.append({
            "zone": int(zone),
            "cells": int(power.count()),
            "mean_wpd": power.mean(),
            "min_wpd": power.min(),
            "max_wpd": power.max(),
        })
    return pd.DataFrame(rows, columns=["zone", "cells", "mean_wpd", "min_wpd", "max_wpd"])
