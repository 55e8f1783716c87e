# vectorize_utils.py
# ---------------------------------------------------------
# Raster band codes -> dissolved polygons (one feature per code).

import geopandas as gpd
import numpy as np
import rioxarray  # noqa: F401
from rasterio.features import shapes
from shapely.geometry import shape

from src.classification.classify_utils import CLASS_NODATA

COLUMNS = ["code", "label", "geometry"]


def polygonize_bands(classified, labels=None, connectivity=4):
    """
    Trace contiguous regions of equal code and dissolve them per code.

    Parameters:
        classified (DataArray): integer code grid; CLASS_NODATA cells are skipped.
        labels (dict): code -> label written to the 'label' column
            (defaults to "band <code>").
        connectivity (int): 4 or 8 neighbour connectivity for tracing.

    Returns:
        GeoDataFrame with columns code, label, geometry in the grid CRS.
    """
    labels = labels or {}
    codes = np.asarray(classified.values).astype("int16")
    valid = codes != CLASS_NODATA

    geoms, values = [], []
    for geom, val in shapes(codes, mask=valid, transform=classified.rio.transform(),
                            connectivity=connectivity):
        geoms.append(shape(geom))
        values.append(int(val))

    crs = classified.rio.crs
    if not geoms:
        print("[Vectorize] No band cells to polygonize.")
        return gpd.GeoDataFrame({"code": [], "label": []}, geometry=[], crs=crs)[COLUMNS]

    pieces = gpd.GeoDataFrame({"code": values}, geometry=geoms, crs=crs)
    bands = pieces.dissolve(by="code", as_index=False)
    bands["label"] = [labels.get(code, f"band {code}") for code in bands["code"]]
    print(f"[Vectorize] {len(pieces)} region(s) dissolved into {len(bands)} feature(s)")
    return bands[COLUMNS]
