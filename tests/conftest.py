import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from helpers import make_raster


@pytest.fixture
def ocean_grid():
    """40x40 km grid, zone 1 everywhere."""
    return make_raster(np.ones((40, 40)))


@pytest.fixture
def bathymetry_10x10():
    """Depth cycling through 5..55 m and NaN, one value per column."""
    row = [5, 15, 25, 35, 45, 55, np.nan, 15, 25, 35]
    return make_raster(np.tile(row, (10, 1)))
