#!filepath: tickmedian/engines/change_emitter.py
from __future__ import annotations

from decimal import Context, Decimal, ROUND_HALF_EVEN
from typing import Iterable, Iterator, Optional

from tickmedian.core.types import ChangeEvent, PriceRecord
from tickmedian.engines.base import BaseEngine
from tickmedian.engines.median_engine import MedianEngine

DEFAULT_PRECISION = 8


def format_fixed(value: Decimal, precision: int = DEFAULT_PRECISION) -> str:
    """
    Decimal → 定点小数字符串（precision 位小数，ROUND_HALF_EVEN）

        format_fixed(Decimal("12.5"))  -> "12.50000000"
    """
    exp = Decimal(1).scaleb(-precision)
    # quantize 结果位数受 context.prec 限制：整数位 + 小数位 + 进位
    ctx = Context(prec=max(value.adjusted(), 0) + precision + 2, rounding=ROUND_HALF_EVEN)
    return format(value.quantize(exp, context=ctx), "f")


class ChangeEmitter(BaseEngine[PriceRecord, Optional[ChangeEvent]]):
    """
    ChangeEmitter（冻结）

    输入：
      - 已按 (receive_ts, source_file, line_no) 排好序的 PriceRecord

    每条记录：
      1. engine.insert(price)
      2. engine.current_median()
      3. 与上一次 emit 的值在 precision 位小数下比较，不同才 emit

    保证：
      - 第一条记录之前不 emit
      - 连续两次 emit 的 median（格式化后）一定不同
      - emit 顺序 = 输入顺序（ts 不回退）
    """

    def __init__(self, engine: MedianEngine | None = None, precision: int = DEFAULT_PRECISION):
        self.engine = engine if engine is not None else MedianEngine()
        self.precision = precision
        self._last_emitted: Optional[str] = None

    @property
    def last_emitted(self) -> Optional[str]:
        """上一次 emit 的格式化 median（尚未 emit 时为 None）"""
        return self._last_emitted

    def format_value(self, median: Decimal) -> str:
        return format_fixed(median, self.precision)

    # --------------------------------------------------
    def process(self, record: PriceRecord) -> Optional[ChangeEvent]:
        self.engine.insert(record.price)

        median = self.engine.current_median()
        if median is None:
            return None

        formatted = self.format_value(median)
        if formatted == self._last_emitted:
            return None

        self._last_emitted = formatted
        return ChangeEvent(receive_ts=record.receive_ts, median=median)

    def process_stream(self, records: Iterable[PriceRecord]) -> Iterator[ChangeEvent]:
        """只 yield 真正发生变化的事件"""
        for record in records:
            event = self.process(record)
            if event is not None:
                yield event
