# tickmedian/steps/order_step.py
from __future__ import annotations

from tickmedian.engines.order_builder import OrderBuilder
from tickmedian.pipeline.context import MedianContext
from tickmedian.pipeline.step import PipelineStep


class OrderStep(PipelineStep):
    """ctx.records → Ordered Stream（稳定排序，原地替换）"""

    def __init__(self, builder: OrderBuilder | None = None, inst=None):
        super().__init__(inst)
        self.builder = builder or OrderBuilder()

    def run(self, ctx: MedianContext) -> MedianContext:
        with self.inst.timer("order"):
            ctx.records = self.builder.build(ctx.records)
            self.builder.assert_ordered(ctx.records)
        return ctx
