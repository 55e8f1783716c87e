"""
config.py
-------------------------------------
Default paths and parameters for the precipitation band workflow.

Module constants are defaults only; stages receive everything through a
PipelineConfig so no step reads global state.
"""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Tuple

from src.area.area_utils import DEFAULT_UNITS, SQUARE_METERS_PER
from src.classification.classify_utils import DEFAULT_THRESHOLDS, TARGET_CODE, validate_thresholds
from src.export.export_utils import check_policy
from src.precipitation.precip_utils import resampling_method

# ============================================================
# DEFAULTS
# ============================================================

BASE = Path(__file__).resolve().parents[1]

RAW_PPT = Path("data/raw/precipitation_data/PRISM_ppt_30yr_normal_4kmM4_annual_bil.bil")
STATE_SHP = Path("data/raw/state_boundary/state_boundary.shp")
OUT_DIR = Path("data/processed/precipitation_band")

TARGET_CRS = "EPSG:5070"   # NAD83 / Conus Albers (equal area, metres)
TARGET_RES = 4000          # metres, close to the native 4 km PRISM cell


@dataclass(frozen=True)
class PipelineConfig:
    raster_path: Path = BASE / RAW_PPT
    boundary_path: Path = BASE / STATE_SHP
    boundary_where: Optional[str] = None
    boundary_layer: Optional[str] = None

    out_raster: Path = BASE / OUT_DIR / "ppt_state_albers.tif"
    out_vector: Path = BASE / OUT_DIR / "ppt_band_200_400mm.shp"
    out_summary: Optional[Path] = BASE / OUT_DIR / "ppt_band_areas.csv"
    out_figure: Optional[Path] = None

    target_crs: str = TARGET_CRS
    target_res: float = TARGET_RES
    resampling: str = "bilinear"
    thresholds: Tuple = DEFAULT_THRESHOLDS
    band_code: int = TARGET_CODE
    report_units: Tuple[str, ...] = DEFAULT_UNITS
    if_exists: str = "skip"

    def validate(self):
        """Check parameters before any file is touched."""
        check_policy(self.if_exists)
        resampling_method(self.resampling)
        rows = validate_thresholds(self.thresholds)
        if self.band_code not in {row.code for row in rows}:
            raise ValueError(f"band_code {self.band_code} is not in the threshold table")
        unknown = [u for u in self.report_units if u not in SQUARE_METERS_PER]
        if unknown:
            raise ValueError(f"Unknown report units: {unknown}")
        if self.target_res is not None and self.target_res <= 0:
            raise ValueError("target_res must be positive")
        return self

    def with_base(self, base):
        """Relocate every default-relative path under another project root."""
        base = Path(base)
        return replace(
            self,
            raster_path=base / RAW_PPT,
            boundary_path=base / STATE_SHP,
            out_raster=base / OUT_DIR / Path(self.out_raster).name,
            out_vector=base / OUT_DIR / Path(self.out_vector).name,
            out_summary=None if self.out_summary is None else base / OUT_DIR / Path(self.out_summary).name,
            out_figure=None if self.out_figure is None else base / OUT_DIR / Path(self.out_figure).name,
        )
