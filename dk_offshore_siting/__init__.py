"""
Danish offshore wind siting
===========================

Depth zoning and exclusion masking for offshore wind in Danish waters.

Modules:
    - layers: raster/vector loading, CRS alignment and checks
    - turbines: depth sampling and the offshore filter
    - zones: depth classification into cost zones
    - exclusions: protected areas, turbine wakes, shipping lane buffers
    - suitability: wind power density on the remaining zones
    - pipeline: the full run, stage by stage
    - plots: PNG maps and CSV summaries
"""

__version__ = "0.1.0"

from .errors import CRSMismatchError, DataAccessError, SitingConfigError, SitingError
from .layers import Raster, align_vector, ensure_same_crs, load_bathymetry, load_raster, load_vector
from .turbines import depth_statistics, filter_offshore, sample_depth
from .zones import classify_depth, zone_summary
from .exclusions import apply_exclusions, mask_raster, shipping_buffer, wake_buffer
from .suitability import score_suitability, suitability_summary, warp_to_grid
from .pipeline import SitingInputs, SitingParams, SitingResult, build_result, run_pipeline

__all__ = [
    "SitingError",
    "DataAccessError",
    "SitingConfigError",
    "CRSMismatchError",
    "Raster",
    "load_raster",
    "load_bathymetry",
    "load_vector",
    "align_vector",
    "ensure_same_crs",
    "sample_depth",
    "filter_offshore",
    "depth_statistics",
    "classify_depth",
    "zone_summary",
    "wake_buffer",
    "shipping_buffer",
    "mask_raster",
    "apply_exclusions",
    "warp_to_grid",
    "score_suitability",
    "suitability_summary",
    "SitingInputs",
    "SitingParams",
    "SitingResult",
    "build_result",
    "run_pipeline",
]
