"""
Tests for loading, alignment and CRS checks of input layers.
"""

import geopandas as gpd
import numpy as np
import pytest
from shapely.geometry import LineString, Point

from dk_offshore_siting.errors import CRSMismatchError, DataAccessError, SitingConfigError
from dk_offshore_siting.layers import (
    align_vector,
    ensure_same_crs,
    load_bathymetry,
    load_raster,
    load_vector,
)

from helpers import LAEA, RES, WEST, NORTH, make_raster, points_at, write_geotiff


class TestRaster:

    def test_grid_properties(self):
        raster = make_raster(np.zeros((3, 4)))
        assert raster.shape == (3, 4)
        assert raster.cell_area_m2 == pytest.approx(RES * RES)
        west, south, east, north = raster.bounds
        assert west == pytest.approx(WEST)
        assert north == pytest.approx(NORTH)
        assert east == pytest.approx(WEST + 4 * RES)
        assert south == pytest.approx(NORTH - 3 * RES)

    def test_defined_mask(self):
        raster = make_raster([[1.0, np.nan], [np.nan, 2.0]])
        assert raster.defined.tolist() == [[True, False], [False, True]]

    def test_with_values_keeps_grid(self):
        raster = make_raster(np.zeros((2, 2)))
        other = raster.with_values(np.ones((2, 2)))
        assert other.transform == raster.transform
        assert other.crs == raster.crs
        assert raster.values.sum() == 0  # original untouched

    def test_with_values_rejects_other_shape(self):
        raster = make_raster(np.zeros((2, 2)))
        with pytest.raises(ValueError):
            raster.with_values(np.zeros((3, 3)))


class TestLoadRaster:

    def test_nodata_becomes_nan(self, tmp_path):
        source = make_raster([[10.0, np.nan], [30.0, 40.0]])
        path = write_geotiff(tmp_path / "bathy.tif", source)

        raster = load_raster(path)

        assert np.isnan(raster.values[0, 1])
        assert raster.values[1, 1] == pytest.approx(40.0)
        assert raster.transform == source.transform
        ensure_same_crs(raster, LAEA)

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataAccessError):
            load_raster(tmp_path / "nope.tif")

    def test_unreadable_file(self, tmp_path):
        path = tmp_path / "broken.tif"
        path.write_text("not a raster")
        with pytest.raises(DataAccessError):
            load_raster(path)

    def test_data_access_error_is_os_error(self, tmp_path):
        with pytest.raises(OSError):
            load_raster(tmp_path / "nope.tif")

    def test_second_band(self, tmp_path):
        path = write_geotiff(tmp_path / "two.tif", make_raster([[1.0, 2.0]]), count=2)
        assert load_raster(path, band=2).values.tolist() == [[1.0, 2.0]]

    @pytest.mark.parametrize("band", [0, 2, -1])
    def test_band_out_of_range(self, tmp_path, band):
        path = write_geotiff(tmp_path / "one.tif", make_raster([[1.0, 2.0]]))
        with pytest.raises(DataAccessError, match="no band"):
            load_raster(path, band=band)


class TestLoadBathymetry:

    def test_depth_kept_as_is(self, tmp_path):
        path = write_geotiff(tmp_path / "depth.tif", make_raster([[15.0, 45.0]]))
        bathy = load_bathymetry(path)
        assert bathy.values.tolist() == [[15.0, 45.0]]

    def test_elevation_converted_to_positive_depth(self, tmp_path):
        path = write_geotiff(tmp_path / "gebco.tif", make_raster([[-15.0, -45.0, 0.0, 12.0]]))

        bathy = load_bathymetry(path, elevation=True)

        assert bathy.values[0, 0] == pytest.approx(15.0)
        assert bathy.values[0, 1] == pytest.approx(45.0)
        assert np.isnan(bathy.values[0, 2])  # coastline
        assert np.isnan(bathy.values[0, 3])  # land


class TestLoadVector:

    @pytest.fixture
    def package(self, tmp_path):
        path = tmp_path / "turbines.gpkg"
        points_at([(0, 0), (1, 1)], kind=["a", "b"]).to_file(path, layer="turbines", driver="GPKG")
        cables = gpd.GeoDataFrame(
            {"kind": ["export"]},
            geometry=[LineString([(WEST, NORTH - 500), (WEST + 5000, NORTH - 500)])],
            crs="EPSG:3035",
        )
        cables.to_file(path, layer="cables", driver="GPKG")
        return path

    def test_select_layer_by_name(self, package):
        turbines = load_vector(package, layer="turbines")
        assert len(turbines) == 2
        assert set(turbines.geometry.geom_type) == {"Point"}

        cables = load_vector(package, layer="cables")
        assert len(cables) == 1

    def test_missing_layer(self, package):
        with pytest.raises(DataAccessError, match="substations"):
            load_vector(package, layer="substations")

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataAccessError):
            load_vector(tmp_path / "lanes.shp")

    def test_shapefile(self, tmp_path):
        path = tmp_path / "lanes.shp"
        lanes = gpd.GeoDataFrame(
            {"name": ["Route T"]},
            geometry=[LineString([(10.5, 57.0), (11.5, 56.0)])],
            crs="EPSG:4326",
        )
        lanes.to_file(path)
        loaded = load_vector(path)
        assert loaded.crs.to_epsg() == 4326
        assert len(loaded) == 1


class TestAlignment:

    def test_align_reprojects(self):
        turbines = points_at([(5, 5)]).to_crs("EPSG:4326")
        aligned = align_vector(turbines, LAEA)
        ensure_same_crs(aligned, LAEA)
        x, y = aligned.geometry.iloc[0].x, aligned.geometry.iloc[0].y
        assert x == pytest.approx(WEST + 5500, abs=1e-3)
        assert y == pytest.approx(NORTH - 5500, abs=1e-3)

    def test_round_trip_is_sub_metre(self):
        original = gpd.GeoDataFrame(
            geometry=[Point(4_321_000.0, 3_654_321.0), Point(4_500_123.4, 3_800_987.6)],
            crs="EPSG:3035",
        )
        back = align_vector(align_vector(original, "EPSG:4326"), "EPSG:3035")
        distances = original.geometry.distance(back.geometry)
        assert (distances < 1e-3).all()

    def test_aligned_layer_is_a_copy(self):
        turbines = points_at([(0, 0)])
        aligned = align_vector(turbines, "EPSG:3035")
        aligned["depth"] = 1.0
        assert "depth" not in turbines

    def test_layer_without_crs(self):
        gdf = gpd.GeoDataFrame(geometry=[Point(0, 0)])
        with pytest.raises(SitingConfigError):
            align_vector(gdf, LAEA)


class TestEnsureSameCrs:

    def test_raster_and_frame_match(self):
        raster = make_raster(np.zeros((2, 2)))
        crs = ensure_same_crs(raster, points_at([(0, 0)]), "EPSG:3035")
        assert crs.to_epsg() == 3035

    def test_mismatch_raises(self):
        raster = make_raster(np.zeros((2, 2)))
        wgs84 = points_at([(0, 0)]).to_crs("EPSG:4326")
        with pytest.raises(CRSMismatchError):
            ensure_same_crs(raster, wgs84)

    def test_mismatch_is_config_error(self):
        with pytest.raises(SitingConfigError):
            ensure_same_crs("EPSG:3035", "EPSG:25832")

    def test_missing_crs(self):
        with pytest.raises(SitingConfigError):
            ensure_same_crs(make_raster(np.zeros((1, 1)), crs=None))
