"""
Precipitation Band Classification
---------------------------------

Maps continuous precipitation (mm) into discrete band codes.

Functions:
    - validate_thresholds(): check a threshold table before use.
    - classify_raster(): replace each cell by the code of its interval.
    - isolate_band(): keep a single code, everything else becomes no-data.

Intervals are half-open, ``low <= v < high``, so a value sitting on an
edge belongs to the higher band (200 mm -> 200-400 mm band).
"""

from dataclasses import dataclass

import numpy as np
import rioxarray  # noqa: F401  (registers the .rio accessor)
import xarray as xr

from src.errors import InvalidClassificationError

CLASS_NODATA = 0
CLASS_DTYPE = "int16"


@dataclass(frozen=True)
class BandThreshold:
    low: float
    high: float
    code: int
    label: str = ""

    @property
    def name(self) -> str:
        return self.label or f"band {self.code}"


DEFAULT_THRESHOLDS = (
    BandThreshold(0, 200, 1, "<200 mm"),
    BandThreshold(200, 400, 2, "200-400 mm"),
    BandThreshold(400, 5000, 3, ">400 mm"),
)
TARGET_CODE = 2


def as_thresholds(table):
    """Accept BandThreshold objects or plain (low, high, code[, label]) rows."""
    rows = []
    for row in table:
        if isinstance(row, BandThreshold):
            rows.append(row)
        else:
            try:
                rows.append(BandThreshold(*row))
            except TypeError as exc:
                raise InvalidClassificationError(f"Bad threshold row {row!r}: {exc}") from exc
    return rows


def validate_thresholds(table):
    """
    Validate an ordered threshold table and return it as BandThreshold rows.

    Raises InvalidClassificationError when the table is empty, a row has
    low >= high, rows are out of order or overlap, a code repeats, or a
    code is not a positive int16 (0 is reserved for no-data).
    """
    rows = as_thresholds(table)
    if not rows:
        raise InvalidClassificationError("Threshold table is empty")

    info = np.iinfo(CLASS_DTYPE)
    seen = set()
    prev = None
    for row in rows:
        if not (np.isfinite(row.low) and np.isfinite(row.high)):
            raise InvalidClassificationError(f"Non-finite bound in {row}")
        if row.low >= row.high:
            raise InvalidClassificationError(f"Empty interval [{row.low}, {row.high})")
        if isinstance(row.code, bool) or int(row.code) != row.code:
            raise InvalidClassificationError(f"Code {row.code!r} is not an integer")
        if not (CLASS_NODATA < row.code <= info.max):
            raise InvalidClassificationError(
                f"Code {row.code} must be between 1 and {info.max} "
                f"({CLASS_NODATA} is reserved for no-data)")
        if row.code in seen:
            raise InvalidClassificationError(f"Code {row.code} used twice")
        if prev is not None:
            if row.low < prev.low:
                raise InvalidClassificationError(
                    f"Intervals out of order: [{row.low}, {row.high}) after [{prev.low}, {prev.high})")
            if row.low < prev.high:
                raise InvalidClassificationError(
                    f"Intervals overlap: [{prev.low}, {prev.high}) and [{row.low}, {row.high})")
        seen.add(row.code)
        prev = row
    return rows


def _valid_mask(grid: xr.DataArray) -> np.ndarray:
    values = grid.values
    valid = ~np.isnan(values) if np.issubdtype(values.dtype, np.floating) else np.ones(values.shape, bool)
    nodata = grid.rio.nodata
    if nodata is not None and not np.isnan(nodata):
        valid &= values != nodata
    return valid


def _as_class_grid(template: xr.DataArray, codes: np.ndarray, name: str) -> xr.DataArray:
    out = xr.DataArray(codes.astype(CLASS_DTYPE), coords=template.coords,
                       dims=template.dims, name=name)
    out = out.rio.write_crs(template.rio.crs) if template.rio.crs is not None else out
    out = out.rio.write_transform(template.rio.transform())
    return out.rio.write_nodata(CLASS_NODATA)


def classify_raster(grid: xr.DataArray, thresholds=DEFAULT_THRESHOLDS) -> xr.DataArray:
    """
    Classify a continuous grid into band codes.

    Each valid cell gets the code of the first interval with
    ``low <= v < high``; no-data cells and values outside every interval
    become CLASS_NODATA.
    """
    rows = validate_thresholds(thresholds)

    values = grid.values
    valid = _valid_mask(grid)
    conditions = [valid & (values >= row.low) & (values < row.high) for row in rows]
    codes = np.select(conditions, [row.code for row in rows], default=CLASS_NODATA)

    counts = {row.code: int((codes == row.code).sum()) for row in rows}
    print(f"[Classify] cells per code: {counts}")
    return _as_class_grid(grid, codes, name="band_code")


def isolate_band(classified: xr.DataArray, code: int) -> xr.DataArray:
    """Keep cells equal to ``code``; every other cell becomes no-data."""
    values = classified.values
    codes = np.where(values == code, values, CLASS_NODATA)
    return _as_class_grid(classified, codes, name=classified.name)
