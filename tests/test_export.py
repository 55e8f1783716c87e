from __future__ import annotations

from pathlib import Path

import geopandas as gpd
import numpy as np
import pandas as pd
import pytest
import rasterio
from shapely.geometry import box

from src.errors import OutputExistsError
from src.export.export_utils import export_raster, export_table, export_vector
from tests.utils import make_grid


def _grid(value: float = 1.0):
    return make_grid(np.full((3, 3), value), res=1000.0, origin=(0.0, 3000.0), crs="EPSG:5070")


def test_second_raster_export_is_skipped(tmp_path: Path) -> None:
    path = tmp_path / "out" / "ppt.tif"
    assert export_raster(_grid(1.0), path) is True
    before = path.read_bytes()

    assert export_raster(_grid(2.0), path) is False
    assert path.read_bytes() == before
    with rasterio.open(path) as dataset:
        assert dataset.read(1).max() == 1.0
        assert dataset.crs.to_epsg() == 5070


def test_overwrite_policy_replaces(tmp_path: Path) -> None:
    path = tmp_path / "ppt.tif"
    export_raster(_grid(1.0), path)
    assert export_raster(_grid(2.0), path, if_exists="overwrite") is True
    with rasterio.open(path) as dataset:
        assert dataset.read(1).max() == 2.0


def test_error_policy_raises(tmp_path: Path) -> None:
    path = tmp_path / "ppt.tif"
    export_raster(_grid(), path)
    with pytest.raises(OutputExistsError):
        export_raster(_grid(), path, if_exists="error")


def test_unknown_policy(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        export_raster(_grid(), tmp_path / "ppt.tif", if_exists="append")


def test_vector_export_skip_and_overwrite(tmp_path: Path) -> None:
    path = tmp_path / "band.gpkg"
    first = gpd.GeoDataFrame({"code": [2], "label": ["200-400 mm"]},
                             geometry=[box(0, 0, 1, 1)], crs="EPSG:5070")
    second = gpd.GeoDataFrame({"code": [2, 3], "label": ["a", "b"]},
                              geometry=[box(0, 0, 1, 1), box(1, 1, 2, 2)], crs="EPSG:5070")

    assert export_vector(first, path) is True
    assert export_vector(second, path) is False
    assert len(gpd.read_file(path)) == 1

    assert export_vector(second, path, if_exists="overwrite") is True
    assert len(gpd.read_file(path)) == 2


def test_table_export(tmp_path: Path) -> None:
    path = tmp_path / "areas.csv"
    frame = pd.DataFrame({"code": [1, 2], "area_km2": [10.0, 112.0]})
    assert export_table(frame, path) is True
    assert export_table(frame.iloc[:1], path) is False
    assert pd.read_csv(path)["area_km2"].tolist() == [10.0, 112.0]
