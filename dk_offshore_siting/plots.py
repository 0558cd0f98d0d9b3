"""
Plots and exports of the siting result.

PNG exports are 1600x1200 px (8x6 in at 200 dpi); no tight bounding box so
the pixel size stays fixed.
"""

import logging
from pathlib import Path

import matplotlib.patches as mpatches
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap
from rasterio.plot import show

from . import config
from .exclusions import exclusion_summary
from .layers import as_crs
from .suitability import suitability_summary
from .zones import zone_summary

logger = logging.getLogger(__name__)

ZONE_COLORS = {
    1: "#c6dbef",
    2: "#6baed6",
    3: "#2171b5",
    4: "#08306b",
}


def _zone_style(bins=config.DEPTH_BINS):
    """Colormap and vmin/vmax with one colour step per zone code in ``bins``."""
    codes = sorted(int(zone) for _, _, zone in bins)
    low, high = codes[0], codes[-1]
    colors = [ZONE_COLORS.get(zone, "grey") for zone in range(low, high + 1)]
    return dict(cmap=ListedColormap(colors), vmin=low - 0.5, vmax=high + 0.5)


def _axis_labels(ax, raster):
    crs = as_crs(raster.crs)
    code = crs.to_epsg()
    label = f"EPSG:{code}" if code else crs.name
    ax.set_xlabel(f"Easting (m) – {label}")
    ax.set_ylabel(f"Northing (m) – {label}")


def _zone_legend(ax, bins=config.DEPTH_BINS):
    handles = [
        mpatches.Patch(color=ZONE_COLORS.get(zone, "grey"), label=f"Zone {zone}: {lower:g}-{upper:g} m")
        for lower, upper, zone in bins
    ]
    ax.legend(handles=handles, loc="upper right", fontsize=7)


def plot_wind_power(raster, ax=None, title="Wind power density"):
    if ax is None:
        fig, ax = plt.subplots(figsize=config.FIGSIZE)
    show(raster.values, transform=raster.transform, cmap="viridis", ax=ax)
    images = ax.get_images()
    if images:
        ax.figure.colorbar(images[-1], ax=ax, label="W/m²", shrink=0.8)
    ax.set_title(title)
    _axis_labels(ax, raster)
    return ax


def plot_depth_zones(zones, ax=None, title="Depth zones", bins=config.DEPTH_BINS):
    if ax is None:
        fig, ax = plt.subplots(figsize=config.FIGSIZE)
    show(zones.values, transform=zones.transform, ax=ax, **_zone_style(bins))
    _zone_legend(ax, bins)
    ax.set_title(title)
    _axis_labels(ax, zones)
    return ax


def plot_overview(result, ax=None):
    """Final zones with protected areas, buffers and offshore turbines on top."""
    if ax is None:
        fig, ax = plt.subplots(figsize=config.FIGSIZE)
    final = result.final_zones
    bins = result.params.depth_bins
    show(final.values, transform=final.transform, ax=ax, **_zone_style(bins))

    if not result.layers.protected_areas.empty:
        result.layers.protected_areas.boundary.plot(ax=ax, color="darkgreen", linewidth=0.6)
    if not result.wake.empty:
        result.wake.boundary.plot(ax=ax, color="orange", linewidth=0.6)
    if not result.shipping.empty:
        result.shipping.boundary.plot(ax=ax, color="red", linewidth=0.6)
    if not result.offshore_turbines.empty:
        result.offshore_turbines.plot(ax=ax, color="black", markersize=2)

    _zone_legend(ax, bins)
    ax.set_title("Candidate offshore wind zones in Denmark")
    _axis_labels(ax, final)
    return ax


def _save(fig, path):
    fig.savefig(path, dpi=config.DPI)
    plt.close(fig)
    logger.info("Wrote %s", path)
    return path


def export_maps(result, out_dir=config.OUTPUT_DIR):
    """Write the PNG maps, returns the written paths."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []

    fig, ax = plt.subplots(figsize=config.FIGSIZE)
    plot_wind_power(result.layers.wind_power, ax=ax, title="Wind power density in Denmark (100 m)")
    written.append(_save(fig, out_dir / config.WIND_POWER_PNG))

    fig, ax = plt.subplots(figsize=config.FIGSIZE)
    plot_depth_zones(result.zones, ax=ax, title="Offshore depth zones in Denmark",
                     bins=result.params.depth_bins)
    written.append(_save(fig, out_dir / config.DEPTH_ZONES_PNG))

    fig, ax = plt.subplots(figsize=config.FIGSIZE)
    plot_depth_zones(result.zones_excl_protected, ax=ax,
                     title="Offshore depth zones excl. protected areas",
                     bins=result.params.depth_bins)
    written.append(_save(fig, out_dir / config.DEPTH_ZONES_NO_PA_PNG))

    fig, ax = plt.subplots(figsize=config.FIGSIZE)
    plot_overview(result, ax=ax)
    written.append(_save(fig, out_dir / config.OVERVIEW_PNG))

    return written


def export_tables(result, out_dir=config.OUTPUT_DIR):
    """Write zone and suitability summaries as CSV."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    bins = result.params.depth_bins
    zones = zone_summary(result.zones, bins)
    stages = exclusion_summary(result.zones, result.exclusion_stages)
    zones_out = out_dir / config.ZONE_SUMMARY_CSV
    zones.merge(
        zone_summary(result.final_zones, bins)[["zone", "cells", "area_km2"]],
        on="zone",
        suffixes=("", "_after_exclusions"),
    ).to_csv(zones_out, index=False)
    stages_out = out_dir / config.EXCLUSION_STAGES_CSV
    stages.to_csv(stages_out, index=False)

    suit_out = out_dir / config.SUITABILITY_SUMMARY_CSV
    suitability_summary(result.suitability, result.final_zones).to_csv(suit_out, index=False)

    for path in (zones_out, stages_out, suit_out):
        logger.info("Wrote %s", path)
    return [zones_out, stages_out, suit_out]
