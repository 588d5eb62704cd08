# tickmedian/steps/median_step.py
from __future__ import annotations

from tickmedian.engines.change_emitter import ChangeEmitter
from tickmedian.engines.median_engine import MedianEngine
from tickmedian.engines.writers import ChangeLogWriter
from tickmedian.pipeline.context import MedianContext
from tickmedian.pipeline.step import PipelineStep
from tickmedian.utils.logger import logs


class MedianStep(PipelineStep):
    """
    MedianStep

    输入：
      - ctx.records（Ordered Stream，OrderStep 之后）

    输出：
      - ctx.output_file：receive_ts;price_median change log
      - ctx.emitted / ctx.last_median

    语义：
      - 每个 run 新建一个 MedianEngine（状态不跨 run）
      - ChangeEvent 产生即写出，不在内存中保留
      - 输出文件在写第一行数据之前打开；打不开 → OutputAccessError
      - 无记录时由 ctx.write_empty 决定：只写 header / 不建文件
    """

    def run(self, ctx: MedianContext) -> MedianContext:
        if not ctx.records and not ctx.write_empty:
            logs.warning(f"[{self.step_name}] no records, output not created")
            return ctx

        emitter = ChangeEmitter(MedianEngine(), precision=ctx.precision)

        with self.inst.timer("median"):
            with ChangeLogWriter(ctx.output_file, precision=ctx.precision) as writer:
                for event in emitter.process_stream(ctx.records):
                    writer.write(event)

        ctx.emitted = writer.rows
        ctx.last_median = emitter.last_emitted
        ctx.output_written = True

        logs.info(
            f"[{self.step_name}] {len(ctx.records)} records -> "
            f"{ctx.emitted} change rows -> {ctx.output_file}"
        )
        self.inst.metrics.record("emitted", ctx.emitted)
        return ctx
