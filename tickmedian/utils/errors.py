# tickmedian/utils/errors.py
from __future__ import annotations

from pathlib import Path


class MedianPipelineError(RuntimeError):
    """
    所有“预期内”错误的基类。
    CLI 只打印 message 并以 exit_code 退出，不打印 traceback。
    """

    exit_code: int = 1


class ConfigError(MedianPipelineError):
    """
    Raised for missing / malformed config (file, YAML, required keys).
    Fatal before any processing starts.
    """

    exit_code = 2


class InputAccessError(MedianPipelineError):
    """
    Input directory missing / not a directory, or an input file cannot be opened.
    """

    exit_code = 3


class InputFormatError(MedianPipelineError):
    """
    Missing required column, short row, unparsable receive_ts or price.
    Always carries the file and the physical line number.
    """

    exit_code = 4

    def __init__(self, reason: str, file: str | Path, line_no: int | None = None):
        self.reason = reason
        self.file = str(file)
        self.line_no = line_no

        where = self.file if line_no is None else f"{self.file} at line {line_no}"
        super().__init__(f"{reason} in file {where}")


class OutputAccessError(MedianPipelineError):
    """
    Output directory cannot be created or output file cannot be opened.
    """

    exit_code = 5
