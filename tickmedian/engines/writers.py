#!filepath: tickmedian/engines/writers.py

from __future__ import annotations
from pathlib import Path
from typing import IO, Optional

from tickmedian.core.types import ChangeEvent
from tickmedian.engines.change_emitter import DEFAULT_PRECISION, format_fixed
from tickmedian.utils.errors import OutputAccessError
from tickmedian.utils.filesystem import FileSystem

HEADER = ("receive_ts", "price_median")


class ChangeLogWriter:
    """
    单文件 Writer（逐行 write）

        receive_ts;price_median
        1;10.00000000
        2;15.00000000

    open() 负责建目录 + 打开文件 + 写 header，
    任一失败都在写入任何数据行之前抛 OutputAccessError。
    """

    def __init__(self, out_path: Path, precision: int = DEFAULT_PRECISION, delimiter: str = ";"):
        self.out_path = Path(out_path)
        self.precision = precision
        self.delimiter = delimiter
        self.rows = 0
        self._fh: Optional[IO[str]] = None

    def open(self) -> "ChangeLogWriter":
        try:
            FileSystem.ensure_dir(self.out_path.parent)
        except OSError as e:
            raise OutputAccessError(
                f"Cannot create output directory {self.out_path.parent}: {e}"
            ) from e

        try:
            self._fh = open(self.out_path, "w", encoding="utf-8", newline="")
        except OSError as e:
            raise OutputAccessError(f"Cannot open output file {self.out_path}: {e}") from e

        self._fh.write(self.delimiter.join(HEADER) + "\n")
        return self

    def write(self, event: ChangeEvent) -> None:
        if self._fh is None:
            raise RuntimeError("[ChangeLogWriter] write() before open()")
        self._fh.write(
            f"{event.receive_ts}{self.delimiter}{format_fixed(event.median, self.precision)}\n"
        )
        self.rows += 1

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def __enter__(self) -> "ChangeLogWriter":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
