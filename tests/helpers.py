"""
Builders for synthetic rasters and vector layers shared by the tests.
"""

import geopandas as gpd
import numpy as np
import rasterio
from rasterio.crs import CRS
from rasterio.transform import from_origin
from rasterio.warp import transform_bounds
from shapely.geometry import Point

from dk_offshore_siting.layers import Raster

# North Sea, west of Jylland, in ETRS89-LAEA
WEST = 4_000_000.0
NORTH = 3_600_000.0
RES = 1000.0
LAEA = CRS.from_epsg(3035)


def make_raster(values, west=WEST, north=NORTH, res=RES, crs=LAEA):
    values = np.asarray(values, dtype="float64")
    return Raster(values, from_origin(west, north, res, res), crs)


def cell_center(row, col, west=WEST, north=NORTH, res=RES):
    return west + res * col + res / 2, north - res * row - res / 2


def points_at(cells, crs="EPSG:3035", **columns):
    geoms = [Point(*cell_center(r, c)) for r, c in cells]
    return gpd.GeoDataFrame(columns, geometry=geoms, crs=crs)


def wgs84_wind(target, value, pad=0.5, res=0.01):
    """Constant wind raster in EPSG:4326 covering ``target`` with some margin."""
    west, south, east, north = transform_bounds(target.crs, "EPSG:4326", *target.bounds)
    west, south, east, north = west - pad, south - pad, east + pad, north + pad
    width = int(np.ceil((east - west) / res))
    height = int(np.ceil((north - south) / res))
    return Raster(np.full((height, width), value), from_origin(west, north, res, res), CRS.from_epsg(4326))


def write_geotiff(path, raster, nodata=-9999.0, count=1):
    values = np.where(np.isnan(raster.values), nodata, raster.values).astype("float32")
    height, width = values.shape
    with rasterio.open(
        path, "w",
        driver="GTiff",
        height=height,
        width=width,
        count=count,
        dtype="float32",
        crs=raster.crs,
        transform=raster.transform,
        nodata=nodata,
    ) as dst:
        for band in range(1, count + 1):
            dst.write(values, band)
    return path
