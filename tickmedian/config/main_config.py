#!filepath: tickmedian/config/main_config.py
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class MainConfig(BaseModel):
    """
    [main] section

    input          : 输入目录（必填）
    output         : 输出目录（可选，AppConfig.load 统一补默认值）
    filename_mask  : 文件名子串过滤，空列表 = 全部 *.csv
    """

    input: Path
    output: Optional[Path] = None
    filename_mask: List[str] = Field(default_factory=list)

    output_name: str = "price_median.csv"
    precision: int = Field(default=8, ge=0, le=28)
    write_empty: bool = True

    @field_validator("filename_mask", mode="before")
    @classmethod
    def _none_is_empty(cls, v):
        return [] if v is None else v

    @field_validator("output_name")
    @classmethod
    def _plain_file_name(cls, v: str) -> str:
        if not v or Path(v).name != v:
            raise ValueError(f"output_name must be a plain file name, got {v!r}")
        return v
