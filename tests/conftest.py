from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from tests.utils import write_boundary, write_raster

# lon -100..-96, lat 30..34; precipitation rises 100 -> 500 mm west to east
PPT_BOUNDS = (-100.0, 30.0, -96.0, 34.0)
STATE_BOUNDS = (-99.5, 31.0, -96.5, 33.0)


@pytest.fixture
def ppt_raster(tmp_path: Path) -> Path:
    cols = np.linspace(100.0, 500.0, 100, dtype="float32")
    data = np.tile(cols, (100, 1))
    data[0, 0] = -9999.0
    path = tmp_path / "raw" / "ppt_normal.tif"
    write_raster(path, data, bounds=PPT_BOUNDS, crs="EPSG:4269", nodata=-9999.0)
    return path


@pytest.fixture
def state_boundary(tmp_path: Path) -> Path:
    path = tmp_path / "raw" / "state.gpkg"
    write_boundary(path, STATE_BOUNDS, crs="EPSG:4326")
    return path
