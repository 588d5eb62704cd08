# tickmedian/steps/load_records_step.py
from __future__ import annotations

from tickmedian.dataloader.csv_reader import PriceCsvReader, load_records
from tickmedian.pipeline.context import MedianContext
from tickmedian.pipeline.step import PipelineStep
from tickmedian.utils.logger import logs


class LoadRecordsStep(PipelineStep):
    """
    LoadRecordsStep

    - 串行读取 ctx.files（发现顺序）
    - 任一文件出错 → 整个 run 失败（InputAccessError / InputFormatError 上抛）
    """

    def __init__(self, reader: PriceCsvReader | None = None, inst=None):
        super().__init__(inst)
        self.reader = reader or PriceCsvReader()

    def run(self, ctx: MedianContext) -> MedianContext:
        if not ctx.files:
            logs.warning(f"[{self.step_name}] no input files")
            ctx.records = []
            return ctx

        with self.inst.timer("load_records"):
            ctx.records = load_records(ctx.files, self.reader)

        self.inst.metrics.record("records", len(ctx.records))
        return ctx
