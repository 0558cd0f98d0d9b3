import logging

from dk_offshore_siting.pipeline import SitingInputs, run_pipeline
from dk_offshore_siting.plots import export_maps, export_tables
from dk_offshore_siting.zones import zone_summary

###########################################
# PATHS
###########################################

BATHY_PATH = "../Data/raw/bathymetry/dk_bathymetry_3035.tif"
TURBINES_PATH = "../Data/raw/turbines/dk_wind_turbines.gpkg"
PA_PATH = "../Data/raw/wdpa/WDPA_Oct2022_Public_shp-DNK-polygons.shp"
SHIP_PATH = "../Data/raw/shipping/dk_shipping_lanes.shp"
WPD_PATH = "../Data/raw/gwa/DNK_power-density_100m.tif"

OUT_DIR = "../plots_and_figures/offshore_siting"

###########################################
# INPUT
###########################################

TURBINES_LAYER = "turbines"  # the gpkg also holds cables and substations
BATHY_IS_ELEVATION = False  # depth raster is positive below the surface

###########################################
# Run
###########################################

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

inputs = SitingInputs(
    bathymetry=BATHY_PATH,
    turbines=TURBINES_PATH,
    protected_areas=PA_PATH,
    shipping_lanes=SHIP_PATH,
    wind_power=WPD_PATH,
    turbines_layer=TURBINES_LAYER,
    bathymetry_is_elevation=BATHY_IS_ELEVATION,
)
result = run_pipeline(inputs)

###########################################
# Summary
###########################################

stats = result.depth_stats
print(f"Offshore turbines: {stats['count']}")
print(f"Depth of offshore turbines (m): mean={stats['mean']:.1f} min={stats['min']:.1f} max={stats['max']:.1f}")

print("Depth zones before exclusions:")
print(zone_summary(result.zones, result.params.depth_bins).to_string(index=False))
print("Depth zones after exclusions:")
print(zone_summary(result.final_zones, result.params.depth_bins).to_string(index=False))

###########################################
# Save plots and tables
###########################################

for path in export_maps(result, OUT_DIR) + export_tables(result, OUT_DIR):
    print("Wrote:", path)
