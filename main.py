from src.config import PipelineConfig
from src.precipitation.precip_process import run_band_area_pipeline


def main():
    #default PRISM normal + state boundary under data/raw
    config = PipelineConfig()

    #clip, reproject, classify, measure and export
    result = run_band_area_pipeline(config)

    #per-band areas
    print(result.summary.to_string(index=False))

if __name__ == "__main__":
    main()
