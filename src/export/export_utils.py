"""
export_utils.py
-------------------------------------
Writers for the pipeline outputs.

Each writer honours an ``if_exists`` policy:
    "skip"      leave an existing file alone and return False
    "overwrite" replace it and return True
    "error"     raise OutputExistsError

Returns True when a file was written.
"""

from pathlib import Path

import rioxarray  # noqa: F401

from src.errors import OutputExistsError

IF_EXISTS_POLICIES = ("skip", "overwrite", "error")


def check_policy(if_exists):
    if if_exists not in IF_EXISTS_POLICIES:
        raise ValueError(f"if_exists must be one of {IF_EXISTS_POLICIES}, got {if_exists!r}")
    return if_exists


def _prepare(path, if_exists, what):
    """Return True when ``path`` should be written."""
    check_policy(if_exists)
    path = Path(path)
    if path.exists():
        if if_exists == "skip":
            print(f"{what} already exists. Skipping: {path}")
            return False
        if if_exists == "error":
            raise OutputExistsError(f"{what} already exists: {path}")
    path.parent.mkdir(parents=True, exist_ok=True)
    return True


def export_raster(grid, path, if_exists="skip", driver="GTiff"):
    """Write a DataArray to a raster file (GeoTIFF by default)."""
    if not _prepare(path, if_exists, "Raster"):
        return False
    grid.rio.to_raster(path, driver=driver)
    print(f"✅ Saved raster: {path}")
    return True


def export_vector(frame, path, if_exists="skip", driver=None):
    """Write a GeoDataFrame; the driver is inferred from the extension unless given."""
    if not _prepare(path, if_exists, "Vector file"):
        return False
    kwargs = {"driver": driver} if driver else {}
    if if_exists == "overwrite" and Path(path).exists():
        # some drivers (GPKG) append layers instead of replacing the file
        Path(path).unlink()
    frame.to_file(path, **kwargs)
    print(f"✅ Saved vector: {path} ({len(frame)} feature(s))")
    return True


def export_table(frame, path, if_exists="skip"):
    """Write a pandas DataFrame as CSV."""
    if not _prepare(path, if_exists, "Table"):
        return False
    frame.to_csv(path, index=False)
    print(f"✅ Saved table: {path}")
    return True


def export_figure(fig, path, if_exists="skip"):
    """Save a matplotlib Figure (format from the extension)."""
    if not _prepare(path, if_exists, "Figure"):
        return False
    fig.savefig(path, bbox_inches="tight")
    print(f"✅ Saved figure: {path}")
    return True
