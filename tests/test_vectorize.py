from __future__ import annotations

import numpy as np
import pytest

from src.classification.classify_utils import DEFAULT_THRESHOLDS, classify_raster, isolate_band
from src.vectorize.vectorize_utils import polygonize_bands
from tests.utils import make_grid

LABELS = {row.code: row.name for row in DEFAULT_THRESHOLDS}


def test_single_region_gives_single_feature() -> None:
    data = np.full((6, 6), 100.0)
    data[1:4, 1:5] = 300.0
    grid = make_grid(data, res=1000.0, origin=(0.0, 6000.0), crs="EPSG:5070")
    band = isolate_band(classify_raster(grid, DEFAULT_THRESHOLDS), 2)

    bands = polygonize_bands(band, labels=LABELS)
    assert len(bands) == 1
    assert bands["code"].tolist() == [2]
    assert bands["label"].tolist() == ["200-400 mm"]
    assert bands.geometry.iloc[0].geom_type == "Polygon"
    assert bands.geometry.iloc[0].area == pytest.approx(12 * 1000 * 1000)
    assert bands.crs.to_epsg() == 5070


def test_separate_regions_dissolve_into_one_feature() -> None:
    data = np.full((5, 7), 100.0)
    data[0:2, 0:2] = 300.0
    data[3:5, 4:7] = 300.0
    grid = make_grid(data, res=1.0, crs="EPSG:5070")
    band = isolate_band(classify_raster(grid, DEFAULT_THRESHOLDS), 2)

    bands = polygonize_bands(band)
    assert len(bands) == 1
    assert bands.geometry.iloc[0].geom_type == "MultiPolygon"
    assert bands.geometry.iloc[0].area == pytest.approx(10.0)
    assert bands["label"].tolist() == ["band 2"]


def test_one_feature_per_code() -> None:
    grid = make_grid([150, 250, 350, 450, 4000], res=1.0, crs="EPSG:5070")
    bands = polygonize_bands(classify_raster(grid, DEFAULT_THRESHOLDS), labels=LABELS)
    assert bands["code"].tolist() == [1, 2, 3]
    assert bands.set_index("code").geometry.area.tolist() == pytest.approx([1.0, 2.0, 2.0])


def test_no_band_cells() -> None:
    grid = make_grid([150.0, 450.0], res=1.0, crs="EPSG:5070")
    band = isolate_band(classify_raster(grid, DEFAULT_THRESHOLDS), 2)
    bands = polygonize_bands(band)
    assert bands.empty
    assert list(bands.columns) == ["code", "label", "geometry"]
