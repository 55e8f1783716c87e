"""
# precip_process.py
# ---------------------------------------------------------
# Area of the 200-400 mm annual precipitation band inside a state
#
# Pipeline:
#   1. Load PRISM normal raster + state boundary
#   2. Boundary → raster CRS, clip/mask raster to the state
#   3. Reproject clipped raster to Albers equal-area (4 km)
#   4. Classify into <200 / 200-400 / >400 mm bands
#   5. Band area from pixel counts (m² → km², acres, mi²)
#   6. Polygonize the selected band, export raster/vector/summary
#
# A failure in any step stops the run; files already written remain.
"""

import time
from dataclasses import dataclass, field
from typing import Dict, Optional

import geopandas as gpd
import pandas as pd

from src.area.area_utils import AreaMeasurement, compute_band_area, summarize_bands
from src.boundary.boundary_loader import load_state_boundary, reproject_boundary
from src.classification.classify_utils import (
    classify_raster,
    isolate_band,
    validate_thresholds,
)
from src.config import PipelineConfig
from src.export.export_utils import (
    export_figure,
    export_raster,
    export_table,
    export_vector,
)
from src.precipitation.precip_utils import (
    clip_to_boundary,
    load_precip_raster,
    reproject_raster,
)
from src.vectorize.vectorize_utils import polygonize_bands


@dataclass
class BandAreaResult:
    area: AreaMeasurement
    converted: Dict[str, float]
    summary: pd.DataFrame
    bands: gpd.GeoDataFrame
    written: Dict[str, bool] = field(default_factory=dict)
    figure: Optional[object] = None


def run_band_area_pipeline(config: Optional[PipelineConfig] = None) -> BandAreaResult:
    config = (config or PipelineConfig()).validate()
    thresholds = validate_thresholds(config.thresholds)
    labels = {row.code: row.name for row in thresholds}
    t0 = time.time()
    print("=== Precipitation band processing started ===")

    # 1. Load inputs
    ppt = load_precip_raster(config.raster_path)
    state = load_state_boundary(config.boundary_path, layer=config.boundary_layer,
                                where=config.boundary_where)

    # 2. Align boundary with the raster, then crop + mask
    state_native = reproject_boundary(state, ppt)
    ppt_state = clip_to_boundary(ppt, state_native)

    # 3. Equal-area metric grid
    ppt_metric = reproject_raster(ppt_state, config.target_crs,
                                  resolution=config.target_res,
                                  resampling=config.resampling)

    # 4. Classify
    classified = classify_raster(ppt_metric, thresholds)

    # 5. Area of the selected band
    area = compute_band_area(classified, config.band_code)
    converted = {unit: area.to(unit) for unit in config.report_units}
    for unit, value in converted.items():
        print(f"[Area] {labels[config.band_code]}: {value:,.2f} {unit}")
    summary = summarize_bands(classified, thresholds, config.report_units)

    # 6. Polygonize + export
    bands = polygonize_bands(isolate_band(classified, config.band_code), labels=labels)

    written = {
        "raster": export_raster(ppt_metric, config.out_raster, if_exists=config.if_exists),
        "vector": export_vector(bands, config.out_vector, if_exists=config.if_exists),
    }
    if config.out_summary is not None:
        written["summary"] = export_table(summary, config.out_summary, if_exists=config.if_exists)

    figure = None
    if config.out_figure is not None:
        from src.visualization.plot_band import plot_band_map

        figure = plot_band_map(state, bands,
                               title=f"{labels[config.band_code]} precipitation band")
        written["figure"] = export_figure(figure, config.out_figure, if_exists=config.if_exists)

    print(f"[Done] Total time: {time.time() - t0:.1f} s")
    return BandAreaResult(area=area, converted=converted, summary=summary,
                          bands=bands, written=written, figure=figure)
