# precip_utils.py
# ---------------------------------------------------------
# Raster helpers for the PRISM precipitation normal:
# loading, CRS resolution, reprojection and boundary clipping.
# All functions return new DataArrays; inputs are never edited.

from pathlib import Path

import geopandas as gpd
import rioxarray
import xarray as xr
from pyproj import CRS
from rasterio.enums import Resampling
from rasterio.errors import RasterioIOError
from shapely.geometry import mapping

from src.errors import CrsMismatchError, FormatError, NotFoundError


# ==========================================================
# 1. Load precipitation raster
# ==========================================================
def load_precip_raster(path, band: int = 1) -> xr.DataArray:
    """
    Read one band of a gridded precipitation surface (.bil / .tif).

    No-data cells come back as NaN (masked read); CRS and transform
    are taken from the file metadata.
    """
    path = Path(path)
    if not path.exists():
        raise NotFoundError(f"Precipitation raster not found: {path}")

    print(f"[Load] Reading raster {path.name}")
    try:
        with rioxarray.open_rasterio(path, masked=True) as src:
            if band not in src.band.values:
                raise FormatError(f"{path.name} has no band {band} "
                                  f"(bands: {list(src.band.values)})")
            grid = src.sel(band=band, drop=True).load()
    except RasterioIOError as exc:
        raise FormatError(f"Cannot read raster {path}: {exc}") from exc

    grid.name = path.stem
    return grid


# ==========================================================
# 2. CRS helpers
# ==========================================================
def resolve_crs(target) -> CRS:
    """
    Turn a CRS description into a pyproj CRS.

    ``target`` may be an EPSG/WKT/PROJ string, a pyproj or rasterio CRS,
    or another dataset (GeoDataFrame / GeoSeries / DataArray) whose CRS
    should be borrowed.
    """
    if isinstance(target, (gpd.GeoDataFrame, gpd.GeoSeries)):
        crs = target.crs
    elif isinstance(target, xr.DataArray):
        crs = target.rio.crs
    else:
        crs = target

    if crs is None:
        raise CrsMismatchError("Target dataset has no CRS to reproject to")
    return CRS.from_user_input(crs)


def same_crs(a, b) -> bool:
    """True when two CRS descriptions are equal (axis order ignored)."""
    return resolve_crs(a).equals(resolve_crs(b), ignore_axis_order=True)


# ==========================================================
# 3. Reproject raster
# ==========================================================
def resampling_method(name) -> Resampling:
    if isinstance(name, Resampling):
        return name
    try:
        return Resampling[str(name).lower()]
    except KeyError:
        raise ValueError(f"Unknown resampling method: {name!r}") from None


def reproject_raster(grid: xr.DataArray, target, resolution=None,
                     resampling="bilinear") -> xr.DataArray:
    """
    Reproject a grid to ``target`` CRS, optionally at an explicit resolution.

    Parameters
    ----------
    grid : xarray.DataArray
        Source surface with a CRS written to its ``rio`` accessor.
    target :
        Anything accepted by :func:`resolve_crs`.
    resolution : float or (float, float), optional
        Output cell size in target CRS units. Derived from the source
        grid when omitted.
    resampling : str or Resampling
        ``"nearest"`` or ``"bilinear"`` (any rasterio method name works).
    """
    method = resampling_method(resampling)
    dst_crs = resolve_crs(target)
    if grid.rio.crs is None:
        raise CrsMismatchError("Cannot reproject a raster without a CRS")

    kwargs = {"resampling": method}
    if resolution is not None:
        kwargs["resolution"] = resolution

    out = grid.rio.reproject(dst_crs.to_wkt(), **kwargs)
    print(f"[Reproject] {grid.rio.crs.to_string()} → {dst_crs.to_string()} "
          f"({method.name}, res={out.rio.resolution()})")
    return out


# ==========================================================
# 4. Clip raster to boundary
# ==========================================================
def clip_to_boundary(grid: xr.DataArray, boundary: gpd.GeoDataFrame,
                     all_touched: bool = False) -> xr.DataArray:
    """
    Crop a grid to the boundary extent and mask cells outside the polygons.

    The boundary must already be in the grid CRS (reproject it with
    ``reproject_boundary`` first). Cells whose centres fall outside every
    polygon become NaN unless ``all_touched`` is set.
    """
    if grid.rio.crs is None or boundary.crs is None:
        raise CrsMismatchError("Raster and boundary must both carry a CRS")
    if not same_crs(grid, boundary):
        raise CrsMismatchError(
            f"Boundary CRS {boundary.crs.to_string()} does not match raster "
            f"CRS {grid.rio.crs.to_string()}; reproject the boundary first")

    print(f"Clipping raster to boundary ({len(boundary)} feature(s))")
    geoms = [mapping(geom) for geom in boundary.geometry]
    return grid.rio.clip(geoms, crs=boundary.crs, drop=True,
                         all_touched=all_touched)
