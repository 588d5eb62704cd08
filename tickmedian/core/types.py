from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple
# tickmedian/core/types.py


@dataclass(frozen=True, slots=True)
class PriceRecord:
    """
    一行输入 = 一条 PriceRecord

    source_file / line_no 只用于 ts 相同时的确定性排序，不带业务语义。
    line_no 为文件内物理行号（header = 第 1 行）。
    """

    receive_ts: int
    price: Decimal
    source_file: str
    line_no: int

    @property
    def sort_key(self) -> Tuple[int, str, int]:
        return self.receive_ts, self.source_file, self.line_no


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    receive_ts: int
    median: Decimal
