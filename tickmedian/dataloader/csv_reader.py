#!filepath: tickmedian/dataloader/csv_reader.py
from __future__ import annotations

import csv
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from tickmedian.core.types import PriceRecord
from tickmedian.utils.errors import InputAccessError, InputFormatError
from tickmedian.utils.filesystem import FileSystem
from tickmedian.utils.logger import logs

TS_COL = "receive_ts"
PRICE_COL = "price"
REQUIRED_COLUMNS = (TS_COL, PRICE_COL)

U64_MAX = 2 ** 64 - 1
# 与 long double 可表示的量级一致（adjusted 指数）
PRICE_MAX_ADJUSTED = 4932
_ZERO = Decimal(0)


class PriceCsvReader:
    """
    `;` 分隔文本 → PriceRecord 列表

    约束（冻结）：
      - 第 1 行为 header，列名去首尾空白后必须包含 receive_ts / price
      - 其余列忽略
      - 空行跳过，但仍计入行号
      - 任何一行不合法 → InputFormatError（带文件名 + 行号），整个 run 失败
        不做逐行 skip：丢行会悄悄改变 median 序列
    """

    def __init__(self, delimiter: str = ";"):
        self.delimiter = delimiter

    # --------------------------------------------------
    def read(self, path: str | Path) -> List[PriceRecord]:
        path = Path(path)
        source = str(path)

        try:
            f = open(path, "r", encoding="utf-8-sig", newline="")
        except OSError as e:
            raise InputAccessError(f"Failed to open CSV file: {path} ({e})") from e

        records: List[PriceRecord] = []
        with f:
            reader = csv.reader(f, delimiter=self.delimiter)

            try:
                header = next(reader, None)
                if header is None:
                    logs.warning(f"[CsvReader] empty file, skipped: {path.name}")
                    return records

                idx = self._resolve_columns(header, source)
                need = max(idx.values())

                for row in reader:
                    line_no = reader.line_num
                    if not row:
                        continue

                    if len(row) <= need:
                        raise InputFormatError(
                            "Malformed CSV (not enough columns)", source, line_no
                        )

                    records.append(
                        PriceRecord(
                            receive_ts=self._parse_ts(row[idx[TS_COL]], source, line_no),
                            price=self._parse_price(row[idx[PRICE_COL]], source, line_no),
                            source_file=source,
                            line_no=line_no,
                        )
                    )
            except UnicodeDecodeError as e:
                raise InputFormatError(
                    f"Undecodable text ({e.reason})", source, reader.line_num + 1
                ) from e
            except csv.Error as e:
                raise InputFormatError(f"CSV syntax error ({e})", source, reader.line_num) from e

        return records

    # --------------------------------------------------
    @staticmethod
    def _resolve_columns(header: List[str], source: str) -> Dict[str, int]:
        positions = {name.strip(): i for i, name in enumerate(header)}

        missing = [c for c in REQUIRED_COLUMNS if c not in positions]
        if missing:
            raise InputFormatError(
                f"CSV missing required columns {tuple(missing)}", source, 1
            )
        return {c: positions[c] for c in REQUIRED_COLUMNS}

    @staticmethod
    def _parse_ts(raw: str, source: str, line_no: int) -> int:
        # 只接受十进制无符号整数，不允许空白 / 符号
        if not (raw.isascii() and raw.isdigit()):
            raise InputFormatError("Invalid receive_ts", source, line_no)
        value = int(raw)
        if value > U64_MAX:
            raise InputFormatError("Invalid receive_ts (exceeds uint64)", source, line_no)
        return value

    @staticmethod
    def _parse_price(raw: str, source: str, line_no: int) -> Decimal:
        text = raw.strip()
        # Decimal 接受 "1_000"，数值解析器不接受
        if "_" in text:
            raise InputFormatError("Invalid price", source, line_no)
        try:
            value = Decimal(text)
        except (InvalidOperation, ValueError):
            raise InputFormatError("Invalid price", source, line_no) from None

        if not value.is_finite():
            raise InputFormatError("Invalid price (not finite)", source, line_no)
        if not value:
            # 0E-99999 之类：指数归零，保留符号
            return value.quantize(_ZERO)
        if abs(value.adjusted()) > PRICE_MAX_ADJUSTED:
            raise InputFormatError("Invalid price (out of range)", source, line_no)
        return value


def load_records(files: Iterable[Path], reader: Optional[PriceCsvReader] = None) -> List[PriceRecord]:
    """
    按发现顺序读取全部文件；第一个错误直接上抛
    """
    reader = reader or PriceCsvReader()
    records: List[PriceRecord] = []

    for path in files:
        size = FileSystem.format_size(FileSystem.get_file_size(path))
        batch = reader.read(path)
        logs.info(f"[CsvReader] {path.name} ({size}) -> {len(batch)} records")
        records.extend(batch)

    return records
