#!filepath: tickmedian/pipeline/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from tickmedian.core.types import PriceRecord


@dataclass
class MedianContext:
    """
    MedianContext = Pipeline 运行期唯一上下文

    设计原则：
    - workflow 负责构造（所有默认值在构造前已解析完毕）
    - Step 之间唯一通信载体
    - 不放业务逻辑
    """

    # -------------------------
    # resolved config
    # -------------------------
    input_dir: Path
    output_file: Path
    filename_mask: List[str] = field(default_factory=list)
    precision: int = 8
    write_empty: bool = True

    # -------------------------
    # run state（由 Step 填充）
    # -------------------------
    files: List[Path] = field(default_factory=list)
    records: List[PriceRecord] = field(default_factory=list)
    emitted: int = 0
    last_median: Optional[str] = None
    output_written: bool = False
