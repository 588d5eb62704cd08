#!filepath: tickmedian/pipeline/step.py
from __future__ import annotations

from abc import ABC, abstractmethod

from tickmedian.pipeline.context import MedianContext
from tickmedian.observability.instrumentation import (
    Instrumentation,
    NoOpInstrumentation,
)


class PipelineStep(ABC):
    """
    Pipeline Step 基类

    职责：
      1. 读 ctx → 做一件事 → 写回 ctx
      2. 提供 Step 级时间语义边界（parent scope）

    约束：
      - Step 行为不依赖 inst 是否存在
      - 叶子计时（record=True）只发生在 Step 内部
    """

    def __init__(self, inst: Instrumentation | None = None):
        # 永远保证 inst 可用（No-op 语义）
        self.inst: Instrumentation | NoOpInstrumentation = (
            inst if inst is not None else NoOpInstrumentation()
        )

    @property
    def step_name(self) -> str:
        """默认使用类名作为 Step 名称。"""
        return self.__class__.__name__

    def timed(self):
        """
        Step 级时间边界（record=False，不进入 timeline）
        """
        return self.inst.timer(self.step_name, record=False)

    @abstractmethod
    def run(self, ctx: MedianContext) -> MedianContext:
        ...
