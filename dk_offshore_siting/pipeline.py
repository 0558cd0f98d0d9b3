"""
Pipeline
========

One pass from input files to the suitability raster:

    load -> align -> offshore filter -> depth zones -> exclusions -> suitability

Each stage is a function of the previous stage's output; the run returns every
intermediate in a :class:`SitingResult`.

Example:
    from dk_offshore_siting.pipeline import SitingInputs, run_pipeline

    result = run_pipeline(SitingInputs(
        bathymetry="Data/raw/bathymetry/dk_bathymetry_3035.tif",
        turbines="Data/raw/turbines/dk_wind_turbines.gpkg",
        protected_areas="Data/raw/wdpa/WDPA-DNK-polygons.shp",
        shipping_lanes="Data/raw/shipping/dk_shipping_lanes.shp",
        wind_power="Data/raw/gwa/DNK_power-density_100m.tif",
    ))
"""

import logging
from dataclasses import dataclass, field

from . import config
from .exclusions import (
    apply_exclusions,
    protected_area_sizes,
    protected_area_union,
    shipping_buffer,
    wake_buffer,
)
from .layers import align_vector, ensure_same_crs, load_bathymetry, load_raster, load_vector
from .suitability import score_suitability
from .turbines import depth_statistics, filter_offshore
from .zones import classify_depth

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SitingInputs:
    bathymetry: str = str(config.BATHYMETRY_PATH)
    turbines: str = str(config.TURBINES_PATH)
    protected_areas: str = str(config.PROTECTED_AREAS_PATH)
    shipping_lanes: str = str(config.SHIPPING_LANES_PATH)
    wind_power: str = str(config.WIND_POWER_PATH)
    turbines_layer: str = config.TURBINES_LAYER
    bathymetry_is_elevation: bool = False


@dataclass(frozen=True)
class SitingParams:
    wake_buffer_m: float = config.WAKE_BUFFER_M
    shipping_buffer_m: float = config.SHIPPING_BUFFER_M
    depth_bins: tuple = config.DEPTH_BINS


@dataclass(frozen=True, eq=False)
class SitingLayers:
    """Input layers, vectors already in the bathymetry CRS."""

    bathymetry: object
    turbines: object
    protected_areas: object
    shipping_lanes: object
    wind_power: object


@dataclass(frozen=True, eq=False)
class SitingResult:
    layers: SitingLayers
    offshore_turbines: object
    depth_stats: dict
    zones: object
    wake: object
    shipping: object
    exclusion_stages: dict = field(default_factory=dict)
    suitability: object = None
    params: SitingParams = SitingParams()

    @property
    def zones_excl_protected(self):
        return self.exclusion_stages[config.EXCLUSION_ORDER[0]]

    @property
    def final_zones(self):
        if not self.exclusion_stages:
            return self.zones
        return list(self.exclusion_stages.values())[-1]


###########################################
# Stages
###########################################

def load_layers(inputs):
    """Ingestion and alignment. Vectors are reprojected to the bathymetry CRS."""
    bathymetry = load_bathymetry(inputs.bathymetry, elevation=inputs.bathymetry_is_elevation)
    turbines = load_vector(inputs.turbines, layer=inputs.turbines_layer)
    protected = load_vector(inputs.protected_areas)
    lanes = load_vector(inputs.shipping_lanes)
    wind = load_raster(inputs.wind_power)

    crs = bathymetry.crs
    layers = SitingLayers(
        bathymetry=bathymetry,
        turbines=align_vector(turbines, crs),
        protected_areas=protected_area_sizes(align_vector(protected, crs)),
        shipping_lanes=align_vector(lanes, crs),
        wind_power=wind,
    )
    ensure_same_crs(layers.bathymetry, layers.turbines, layers.protected_areas, layers.shipping_lanes)
    logger.info("Aligned vector layers to %s", crs)
    return layers


def build_result(layers, params=SitingParams()):
    """Stages 3-6 on already loaded and aligned layers."""
    offshore = filter_offshore(layers.turbines, layers.bathymetry)
    stats = depth_statistics(offshore)
    logger.info("Offshore turbine depth: n=%d mean=%.1f min=%.1f max=%.1f",
                stats["count"], stats["mean"], stats["min"], stats["max"])

    zones = classify_depth(layers.bathymetry, bins=params.depth_bins)

    wake = wake_buffer(offshore, radius=params.wake_buffer_m)
    shipping = shipping_buffer(layers.shipping_lanes, distance=params.shipping_buffer_m)
    exclusions = list(zip(
        config.EXCLUSION_ORDER,
        (protected_area_union(layers.protected_areas), wake, shipping),
    ))
    stages = apply_exclusions(zones, exclusions)
    final_zones = list(stages.values())[-1]

    suitability = score_suitability(layers.wind_power, final_zones)

    return SitingResult(
        layers=layers,
        offshore_turbines=offshore,
        depth_stats=stats,
        zones=zones,
        wake=wake,
        shipping=shipping,
        exclusion_stages=stages,
        suitability=suitability,
        params=params,
    )


def run_pipeline(inputs=SitingInputs(), params=SitingParams()):
    logger.info("Loading layers")
    layers = load_layers(inputs)
    return build_result(layers, params)
