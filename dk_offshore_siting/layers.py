"""
Layers
======

Loading and aligning the input layers of the siting run.

Rasters are held in memory as :class:`Raster` (float values, ``NaN`` where
undefined). Vector layers are plain GeoDataFrames. Everything is brought into
the bathymetry CRS with :func:`align_vector`, and :func:`ensure_same_crs`
guards every operation that combines two layers.
"""

import logging
from dataclasses import dataclass, replace
from pathlib import Path

import geopandas as gpd
import numpy as np
import rasterio
from pyproj import CRS
from rasterio.errors import RasterioIOError
from rasterio.transform import Affine, array_bounds

from .errors import CRSMismatchError, DataAccessError, SitingConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Raster:
    """A georeferenced single band grid. Undefined cells are NaN."""

    values: np.ndarray
    transform: Affine
    crs: object

    @property
    def shape(self):
        return self.values.shape

    @property
    def bounds(self):
        """(west, south, east, north) in raster CRS units."""
        height, width = self.shape
        return array_bounds(height, width, self.transform)

    @property
    def cell_area_m2(self):
        return abs(self.transform.a * self.transform.e - self.transform.b * self.transform.d)

    @property
    def defined(self):
        return ~np.isnan(self.values)

    def with_values(self, values):
        """Same grid, new values."""
        if values.shape != self.shape:
            raise ValueError(f"shape {values.shape} does not match grid {self.shape}")
        return replace(self, values=values)


###########################################
# CRS helpers
###########################################

def as_crs(crs_like):
    """Normalise rasterio/pyproj/EPSG/WKT input to a pyproj CRS."""
    if crs_like is None:
        raise SitingConfigError("layer has no CRS")
    return CRS.from_user_input(crs_like)


def crs_of(layer):
    if isinstance(layer, (Raster, gpd.GeoDataFrame, gpd.GeoSeries)):
        return as_crs(layer.crs)
    return as_crs(layer)


def ensure_same_crs(*layers):
    """
    Raise CRSMismatchError unless every layer is in the same CRS.

    Accepts Raster, GeoDataFrame/GeoSeries, or anything pyproj understands
    as a CRS. Returns the shared CRS.
    """
    crss = [crs_of(layer) for layer in layers]
    first = crss[0]
    for other in crss[1:]:
        if not first.equals(other, ignore_axis_order=True):
            raise CRSMismatchError(
                f"layers are not aligned: {first.to_string()} != {other.to_string()}"
            )
    return first


###########################################
# Raster loading
###########################################

def load_raster(path, band=1):
    """
    Read one band of a raster file into a Raster.

    No-data cells (and cells already NaN) come back as NaN.

    Raises:
        DataAccessError: file missing or unreadable, or no such band
    """
    path = Path(path)
    if not path.exists():
        raise DataAccessError(f"Raster not found: {path}")

    try:
        with rasterio.open(path) as src:
            if not 1 <= band <= src.count:
                raise DataAccessError(f"Raster {path.name} has no band {band} (bands: {src.count})")
            band_values = src.read(band, masked=True)
            transform = src.transform
            crs = src.crs
    except RasterioIOError as e:
        raise DataAccessError(f"Could not read raster {path}: {e}") from e

    values = band_values.astype("float64").filled(np.nan)
    if crs is None:
        raise SitingConfigError(f"Raster has no CRS: {path}")

    logger.info("Loaded %s: %dx%d cells, %s", path.name, values.shape[1], values.shape[0], crs)
    return Raster(values, transform, crs)


def load_bathymetry(path, elevation=False):
    """
    Load a bathymetry raster as depth, positive = metres below the surface.

    Args:
        path: raster file
        elevation: set when the file stores elevation (negative below sea
            level, e.g. GEBCO). Depth is then -elevation and cells at or
            above sea level are undefined.
    """
    bathy = load_raster(path)
    if not elevation:
        return bathy

    values = -bathy.values
    values[values <= 0] = np.nan  # land
    return bathy.with_values(values)


###########################################
# Vector loading
###########################################

def load_vector(path, layer=None):
    """
    Read a vector file, optionally selecting one named layer.

    Raises:
        DataAccessError: file missing, or ``layer`` not present in it
    """
    path = Path(path)
    if not path.exists():
        raise DataAccessError(f"Vector file not found: {path}")

    if layer is not None:
        available = gpd.list_layers(path)["name"].tolist()
        if layer not in available:
            raise DataAccessError(
                f"Layer '{layer}' not found in {path.name} (available: {', '.join(available)})"
            )

    gdf = gpd.read_file(path, layer=layer)
    if gdf.crs is None:
        raise SitingConfigError(f"Vector layer has no CRS: {path}")

    logger.info("Loaded %s%s: %d features", path.name, f"[{layer}]" if layer else "", len(gdf))
    return gdf


def align_vector(gdf, crs):
    """Reproject a GeoDataFrame into ``crs``. Always returns a new frame."""
    if gdf.crs is None:
        raise SitingConfigError("cannot align a layer without CRS")
    target = as_crs(crs)
    if as_crs(gdf.crs).equals(target, ignore_axis_order=True):
        return gdf.copy()
    return gdf.to_crs(target)
