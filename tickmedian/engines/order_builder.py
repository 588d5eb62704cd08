#!filepath: tickmedian/engines/order_builder.py
from __future__ import annotations

from typing import Iterable, List

from tickmedian.core.types import PriceRecord


class OrderBuilder:
    """
    OrderBuilder（冻结）

    Replay Ordering Semantics:

    - Records are ordered primarily by receive_ts (ascending).
    - Records sharing the same receive_ts are ordered by provenance:
      source_file, then line_no, both ascending.
    - The sort is stable, so the order is reproducible across runs.

    MedianEngine output depends on insertion order when ts ties,
    hence the deterministic tie-break.
    """

    def build(self, records: Iterable[PriceRecord]) -> List[PriceRecord]:
        return sorted(records, key=lambda r: r.sort_key)

    @staticmethod
    def assert_ordered(records: Iterable[PriceRecord]) -> None:
        """
        全局时间语义断言：ts 不允许回退
        """
        last_ts = None
        for r in records:
            if last_ts is not None and r.receive_ts < last_ts:
                raise ValueError(
                    "[OrderBuilder] receive_ts regression: "
                    f"{r.receive_ts} < {last_ts} ({r.source_file}:{r.line_no})"
                )
            last_ts = r.receive_ts
