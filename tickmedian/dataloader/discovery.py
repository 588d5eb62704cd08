#!filepath: tickmedian/dataloader/discovery.py
from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from tickmedian.utils.errors import InputAccessError
from tickmedian.utils.filesystem import FileSystem
from tickmedian.utils.logger import logs

CSV_SUFFIX = ".csv"


def discover_csv_files(input_dir: str | Path, masks: Sequence[str] = ()) -> List[Path]:
    """
    扫描 input_dir（不递归）：
      - 后缀 .csv（大小写不敏感）
      - 文件名包含 masks 中任意一个子串；masks 为空 = 全部接受
      - 按文件名排序，保证 provenance 可复现
    """
    p = Path(input_dir)
    if not p.exists():
        raise InputAccessError(f"Input directory does not exist: {p}")
    if not p.is_dir():
        raise InputAccessError(f"Input path is not a directory: {p}")

    files = FileSystem.scan_dir(p, suffix=CSV_SUFFIX, contains=masks)

    logs.info(
        f"[Discover] {len(files)} file(s) in {p} "
        f"(masks={list(masks) if masks else 'ALL'})"
    )
    return files
