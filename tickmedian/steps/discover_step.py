# tickmedian/steps/discover_step.py
from __future__ import annotations

from tickmedian.dataloader.discovery import discover_csv_files
from tickmedian.pipeline.context import MedianContext
from tickmedian.pipeline.step import PipelineStep


class DiscoverStep(PipelineStep):
    """ctx.input_dir + ctx.filename_mask → ctx.files"""

    def run(self, ctx: MedianContext) -> MedianContext:
        with self.inst.timer("discover"):
            ctx.files = discover_csv_files(ctx.input_dir, ctx.filename_mask)

        self.inst.metrics.record("files", len(ctx.files))
        return ctx
