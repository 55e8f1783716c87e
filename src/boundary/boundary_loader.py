"""
boundary_loader.py
-------------------------------------
Loads the state boundary used to crop the precipitation grid.

Functions:
    - load_state_boundary(): read a polygon boundary file (optionally
      filtering one state out of a national file).
    - reproject_boundary(): express the boundary in another CRS.
"""

from pathlib import Path

import geopandas as gpd
from pyogrio.errors import DataSourceError

from src.errors import CrsMismatchError, FormatError, NotFoundError
from src.precipitation.precip_utils import resolve_crs

POLYGON_TYPES = {"Polygon", "MultiPolygon"}


def load_state_boundary(path, layer=None, where=None):
    """
    Read a boundary vector file (Shapefile, GeoPackage, GeoJSON ...).

    Parameters:
        path (str | Path): boundary file.
        layer (str): layer name for multi-layer sources such as GeoPackage.
        where (str): optional SQL attribute filter, e.g. "STUSPS = 'TX'".

    Returns:
        GeoDataFrame of polygon features with the file's CRS.
    """
    path = Path(path)
    if not path.exists():
        raise NotFoundError(f"Boundary file not found: {path}")

    print(f"[Load] Reading boundary {path.name}")
    kwargs = {}
    if layer is not None:
        kwargs["layer"] = layer
    if where is not None:
        kwargs["where"] = where
    try:
        boundary = gpd.read_file(path, **kwargs)
    except DataSourceError as exc:
        raise FormatError(f"Cannot read boundary {path}: {exc}") from exc

    if boundary.crs is None:
        raise FormatError(f"Boundary {path.name} has no CRS")

    boundary = boundary[boundary.geometry.notnull()]
    boundary = boundary[boundary.geom_type.isin(POLYGON_TYPES)]
    if boundary.empty:
        raise FormatError(f"Boundary {path.name} has no polygon features"
                          + (f" matching {where!r}" if where else ""))

    # Fix invalid geometries
    if not boundary.is_valid.all():
        boundary = boundary.copy()
        boundary["geometry"] = boundary.buffer(0)

    return boundary.reset_index(drop=True)


def reproject_boundary(boundary, target):
    """Exact coordinate transform of the boundary into ``target`` CRS."""
    if boundary.crs is None:
        raise CrsMismatchError("Boundary has no CRS to reproject from")
    dst_crs = resolve_crs(target)
    if boundary.crs.equals(dst_crs, ignore_axis_order=True):
        return boundary.copy()
    return boundary.to_crs(dst_crs)
