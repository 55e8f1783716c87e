"""
Band Area Utilities
-------------------

Area of classified bands from pixel counts:

    area = (cells equal to code) x |res_x x res_y|

Functions:
    - compute_band_area(): area of one code as an AreaMeasurement.
    - summarize_bands(): per-band cell counts and areas as a DataFrame.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd
import rioxarray  # noqa: F401
from pyproj import CRS

from src.classification.classify_utils import as_thresholds
from src.errors import NonLinearUnitError

SQUARE_METERS_PER = {
    "m2": 1.0,
    "ha": 1.0e4,
    "km2": 1.0e6,
    "acre": 4046.8564224,
    "mi2": 2589988.110336,
}
DEFAULT_UNITS = ("km2", "acre", "mi2")
UNIT_ABBREV = {"metre": "m", "foot": "ft", "US survey foot": "ftUS"}


@dataclass(frozen=True)
class AreaMeasurement:
    """Scalar area in square CRS linear units (``unit`` is e.g. 'm2')."""

    value: float
    unit: str
    meters_per_unit: Optional[float] = None

    @property
    def square_meters(self) -> float:
        if self.meters_per_unit is None:
            raise ValueError(f"Area in '{self.unit}' has no metric conversion")
        return self.value * self.meters_per_unit ** 2

    def to(self, unit: str) -> float:
        """Convert to one of m2, ha, km2, acre, mi2."""
        if unit not in SQUARE_METERS_PER:
            raise ValueError(f"Unknown area unit {unit!r}; choose from {sorted(SQUARE_METERS_PER)}")
        return self.square_meters / SQUARE_METERS_PER[unit]

    def __str__(self):
        return f"{self.value:,.2f} {self.unit}"


def linear_unit(crs):
    """
    Return (unit name, metres per unit) for a projected CRS.

    Raises NonLinearUnitError for geographic (degree-based) CRS.
    ``crs=None`` gives an abstract unit without metric conversion.
    """
    if crs is None:
        return "unit", None
    crs = CRS.from_user_input(crs)
    if crs.is_geographic:
        raise NonLinearUnitError(
            f"CRS {crs.name} uses angular units; reproject to a metric CRS before measuring area")
    axis = crs.axis_info[0]
    if axis.unit_conversion_factor is None or axis.unit_name in ("degree", "radian", "grad"):
        raise NonLinearUnitError(f"CRS {crs.name} axis unit '{axis.unit_name}' is not linear")
    return UNIT_ABBREV.get(axis.unit_name, axis.unit_name), axis.unit_conversion_factor


def compute_band_area(classified, code, resolution=None) -> AreaMeasurement:
    """
    Area covered by ``code`` in a classified grid.

    Parameters
    ----------
    classified : xarray.DataArray
        Output of ``classify_raster`` (or any integer code grid).
    code : int
        Band code to measure.
    resolution : float or (float, float), optional
        Cell size override (a single number means square cells); read
        from the grid transform when omitted.
    """
    unit, factor = linear_unit(classified.rio.crs)
    if resolution is None:
        resolution = classified.rio.resolution()
    elif np.isscalar(resolution):
        resolution = (resolution, resolution)
    res_x, res_y = resolution
    cells = int(np.count_nonzero(classified.values == code))
    value = cells * abs(res_x * res_y)
    area = AreaMeasurement(value=value, unit=f"{unit}2", meters_per_unit=factor)
    print(f"[Area] code {code}: {cells:,} cells × {abs(res_x)} × {abs(res_y)} = {area}")
    return area


def summarize_bands(classified, thresholds, units=DEFAULT_UNITS) -> pd.DataFrame:
    """
    Per-band summary table.

    Returns:
        DataFrame with 'code', 'label', 'cells' and one 'area_<unit>'
        column per requested unit. A grid without a CRS has no metric
        conversion, so it gets a single 'area_unit2' column instead.
    """
    unit, factor = linear_unit(classified.rio.crs)
    res_x, res_y = classified.rio.resolution()
    cell_area = abs(res_x * res_y)
    if factor is None:
        units = ()

    records = []
    for row in as_thresholds(thresholds):
        cells = int(np.count_nonzero(classified.values == row.code))
        record = {"code": row.code, "label": row.name, "cells": cells}
        area = AreaMeasurement(cells * cell_area, f"{unit}2", factor)
        if factor is None:
            record["area_unit2"] = area.value
        for u in units:
            record[f"area_{u}"] = area.to(u)
        records.append(record)

    area_cols = [f"area_{u}" for u in units] if factor is not None else ["area_unit2"]
    return pd.DataFrame(records, columns=["code", "label", "cells"] + area_cols)
