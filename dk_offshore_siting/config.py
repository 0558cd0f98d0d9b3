"""
Configuration Constants
=======================

Paths and parameters for the offshore siting run. The driver script in
``Scripts/`` keeps its own PATHS block; these are the defaults it falls
back on.
"""

from pathlib import Path


###########################################
# PATHS
###########################################

ROOT_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = ROOT_DIR / "Data" / "raw"
OUTPUT_DIR = ROOT_DIR / "plots_and_figures" / "offshore_siting"

BATHYMETRY_PATH = DATA_DIR / "bathymetry" / "dk_bathymetry_3035.tif"
TURBINES_PATH = DATA_DIR / "turbines" / "dk_wind_turbines.gpkg"
TURBINES_LAYER = "turbines"  # package holds several layers, only this one has the points
PROTECTED_AREAS_PATH = DATA_DIR / "wdpa" / "WDPA_Oct2022_Public_shp-DNK-polygons.shp"
SHIPPING_LANES_PATH = DATA_DIR / "shipping" / "dk_shipping_lanes.shp"
WIND_POWER_PATH = DATA_DIR / "gwa" / "DNK_power-density_100m.tif"


###########################################
# INPUT
###########################################

# positive depth = metres below the surface
DEPTH_BINS = (
    (10.0, 20.0, 1),
    (20.0, 30.0, 2),
    (30.0, 40.0, 3),
    (40.0, 50.0, 4),
)

WAKE_BUFFER_M = 5500.0
SHIPPING_BUFFER_M = 4600.0

EXCLUSION_ORDER = ("protected areas", "turbine wakes", "shipping lanes")


###########################################
# EXPORT
###########################################

FIGSIZE = (8, 6)  # inches; 8x6 at 200 dpi -> 1600x1200 px
DPI = 200

WIND_POWER_PNG = "wind_power_density_DK.png"
DEPTH_ZONES_PNG = "depth_zones_DK.png"
DEPTH_ZONES_NO_PA_PNG = "depth_zones_excl_protected_areas_DK.png"
OVERVIEW_PNG = "offshore_siting_overview_DK.png"

ZONE_SUMMARY_CSV = "depth_zone_summary_DK.csv"
SUITABILITY_SUMMARY_CSV = "wind_suitability_by_zone_DK.csv"
EXCLUSION_STAGES_CSV = "exclusion_stages_DK.csv"
