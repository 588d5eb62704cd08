#!filepath: tickmedian/engines/median_engine.py
from __future__ import annotations

import heapq
from decimal import Context, Decimal
from typing import List, Optional

_TWO = Decimal(2)


class MedianEngine:
    """
    MedianEngine（double heap · insert-only）

    状态：
      - lower : max-heap（heapq 只有 min-heap，存取反后的值）
      - upper : min-heap

    不变量（每次 insert 之后）：
      - |len(lower) - len(upper)| <= 1
      - max(lower) <= min(upper)

    复杂度：
      - insert           : O(log n)
      - current_median   : O(1)，无副作用

    数值语义：
      - 全程 Decimal，不转 float
      - 取反用 copy_negate()（一元负号会按当前 context 舍入）
      - 偶数个时 (a + b) / 2 在按 a、b 位宽现算的 Context 中计算，结果总是精确
    """

    def __init__(self):
        self._lower: List[Decimal] = []  # 取反存储
        self._upper: List[Decimal] = []

    # --------------------------------------------------
    def insert(self, value: Decimal | int | str) -> None:
        value = _as_decimal(value)

        if not self._lower or value <= self._lower[0].copy_negate():
            heapq.heappush(self._lower, value.copy_negate())
        else:
            heapq.heappush(self._upper, value)

        self._rebalance()

    def _rebalance(self) -> None:
        if len(self._lower) > len(self._upper) + 1:
            heapq.heappush(self._upper, heapq.heappop(self._lower).copy_negate())
        elif len(self._upper) > len(self._lower) + 1:
            heapq.heappush(self._lower, heapq.heappop(self._upper).copy_negate())

    # --------------------------------------------------
    def current_median(self) -> Optional[Decimal]:
        """
        None = 尚未插入任何值
        """
        n_low = len(self._lower)
        n_up = len(self._upper)

        if n_low == 0 and n_up == 0:
            return None

        if n_low == n_up:
            a = self._lower[0].copy_negate()
            b = self._upper[0]
            ctx = Context(prec=_mean_prec(a, b))
            return ctx.divide(ctx.add(a, b), _TWO)

        if n_low > n_up:
            return self._lower[0].copy_negate()
        return self._upper[0]

    # --------------------------------------------------
    # introspection
    # --------------------------------------------------
    def lower_max(self) -> Optional[Decimal]:
        return self._lower[0].copy_negate() if self._lower else None

    def upper_min(self) -> Optional[Decimal]:
        return self._upper[0] if self._upper else None

    @property
    def lower_size(self) -> int:
        return len(self._lower)

    @property
    def upper_size(self) -> int:
        return len(self._upper)

    def __len__(self) -> int:
        return len(self._lower) + len(self._upper)

    def reset(self) -> None:
        self._lower.clear()
        self._upper.clear()


def _as_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # float 走文本形式，避免二进制展开
        return Decimal(repr(value))
    return Decimal(value)


def _mean_prec(a: Decimal, b: Decimal) -> int:
    # 最高位到最低位的跨度 + 进位 + 除 2 多出的一位
    top = max(a.adjusted(), b.adjusted())
    bottom = min(a.as_tuple().exponent, b.as_tuple().exponent)
    return max(top - bottom + 3, 1)
