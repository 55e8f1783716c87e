from __future__ import annotations

from pathlib import Path
from typing import Tuple

import geopandas as gpd
import numpy as np
import rasterio
import rioxarray  # noqa: F401
import xarray as xr
from affine import Affine
from rasterio.transform import from_bounds
from shapely.geometry import box


def write_raster(
    path: Path,
    data: np.ndarray,
    *,
    bounds: Tuple[float, float, float, float],
    crs: str | None = "EPSG:4326",
    nodata: float | None = None,
) -> None:
    height, width = data.shape
    transform = from_bounds(*bounds, width=width, height=height)
    path.parent.mkdir(parents=True, exist_ok=True)
    with rasterio.open(
        path,
        "w",
        driver="GTiff",
        height=height,
        width=width,
        count=1,
        dtype=data.dtype,
        crs=crs,
        transform=transform,
        nodata=nodata,
    ) as dataset:
        dataset.write(data, 1)


def make_grid(
    values,
    *,
    res: float = 1.0,
    origin: Tuple[float, float] = (0.0, 0.0),
    crs: str | None = None,
) -> xr.DataArray:
    """In-memory grid; ``origin`` is the (west, north) corner."""
    data = np.asarray(values, dtype="float32")
    if data.ndim == 1:
        data = data[np.newaxis, :]
    height, width = data.shape
    west, north = origin
    xs = west + res * (np.arange(width) + 0.5)
    ys = north - res * (np.arange(height) + 0.5)
    grid = xr.DataArray(data, coords={"y": ys, "x": xs}, dims=("y", "x"))
    if crs is not None:
        grid = grid.rio.write_crs(crs)
    return grid.rio.write_transform(Affine(res, 0.0, west, 0.0, -res, north))


def write_boundary(
    path: Path,
    bounds: Tuple[float, float, float, float],
    *,
    crs: str = "EPSG:4326",
    name: str = "TX",
) -> gpd.GeoDataFrame:
    frame = gpd.GeoDataFrame({"STUSPS": [name]}, geometry=[box(*bounds)], crs=crs)
    path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_file(path)
    return frame
