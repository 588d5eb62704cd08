#!filepath: tickmedian/pipeline/pipeline.py
from __future__ import annotations

from typing import List

from tickmedian.pipeline.context import MedianContext
from tickmedian.pipeline.step import PipelineStep
from tickmedian.observability.instrumentation import Instrumentation, NoOpInstrumentation
from tickmedian.utils.logger import logs


class MedianPipeline:
    """
    MedianPipeline = 调度器

    - 只负责顺序执行 Step，单线程、一次性 batch pass
    - 任何 Step 抛错即终止整个 run（无 retry / 无部分恢复）
    - Timeline 只包含叶子计时（由 Step 写入）
    """

    def __init__(
            self,
            steps: List[PipelineStep],
            inst: Instrumentation | None = None,
    ):
        self.steps = steps
        self.inst = inst if inst is not None else NoOpInstrumentation()

    def run(self, ctx: MedianContext) -> MedianContext:
        logs.info(f"[Pipeline] ====== START {ctx.input_dir} ======")

        for step in self.steps:
            with step.timed():
                ctx = step.run(ctx)

        self.inst.generate_timeline_report(str(ctx.input_dir))
        logs.info(
            f"[Pipeline] ====== DONE records={len(ctx.records)} "
            f"emitted={ctx.emitted} ======"
        )
        return ctx
