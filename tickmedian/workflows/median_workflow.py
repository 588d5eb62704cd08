#!filepath: tickmedian/workflows/median_workflow.py
from __future__ import annotations

from tickmedian.config.app_config import AppConfig
from tickmedian.observability.instrumentation import Instrumentation
from tickmedian.pipeline.context import MedianContext
from tickmedian.pipeline.pipeline import MedianPipeline
from tickmedian.steps.discover_step import DiscoverStep
from tickmedian.steps.load_records_step import LoadRecordsStep
from tickmedian.steps.median_step import MedianStep
from tickmedian.steps.order_step import OrderStep
from tickmedian.utils.logger import logs


def build_median_pipeline(inst: Instrumentation | None = None) -> MedianPipeline:
    """
    Running-median Pipeline

    Semantic Order:
        Discover      (input_dir + masks → *.csv files)
        → LoadRecords (files → PriceRecord, fail-fast)
        → Order       (stable sort by receive_ts, source_file, line_no)
        → Median      (MedianEngine + ChangeEmitter → change log)
    """
    return MedianPipeline(
        steps=[
            DiscoverStep(inst=inst),
            LoadRecordsStep(inst=inst),
            OrderStep(inst=inst),
            MedianStep(inst=inst),
        ],
        inst=inst,
    )


def build_context(cfg: AppConfig) -> MedianContext:
    main = cfg.main
    return MedianContext(
        input_dir=main.input,
        output_file=cfg.output_file,
        filename_mask=list(main.filename_mask),
        precision=main.precision,
        write_empty=main.write_empty,
    )


@logs.catch(msg="median run failed")
def run_median(cfg: AppConfig, inst: Instrumentation | None = None) -> MedianContext:
    pipeline = build_median_pipeline(inst if inst is not None else Instrumentation())
    return pipeline.run(build_context(cfg))
