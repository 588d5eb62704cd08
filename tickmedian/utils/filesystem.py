#!filepath: tickmedian/utils/filesystem.py
from pathlib import Path
from typing import Iterable, List, Optional

from tickmedian.utils.logger import logs


class FileSystem:
    """
    统一文件系统工具
    - 自动创建目录
    - 扫描目录（非递归，后缀大小写不敏感，文件名子串过滤）
    - 获取文件大小
    """

    @staticmethod
    def ensure_dir(path: str | Path) -> Path:
        """
        创建目录（如果不存在）
        """
        p = Path(path)
        if not p.exists():
            p.mkdir(parents=True, exist_ok=True)
            logs.debug(f"[FS] 创建目录: {p}")
        return p

    @staticmethod
    def get_file_size(path: str | Path) -> int:
        """
        返回文件大小（字节）
        """
        p = Path(path)
        if not p.exists():
            return 0
        return p.stat().st_size

    @staticmethod
    def format_size(size_bytes: int) -> str:
        """
        将字节转换为可读格式（GB / MB）
        """
        for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
            if size_bytes < 1024:
                return f"{size_bytes:.2f} {unit}"
            size_bytes /= 1024
        return f"{size_bytes:.2f} PB"

    @staticmethod
    def scan_dir(
        path: str | Path,
        suffix: Optional[str] = None,
        contains: Optional[Iterable[str]] = None,
    ) -> List[Path]:
        """
        返回目录下所有普通文件（不递归），按文件名排序

        suffix   : 后缀过滤，大小写不敏感（".csv" 同时匹配 ".CSV"）
        contains : 文件名子串列表，命中任意一个即保留；None / 空列表 = 不过滤
        """
        p = Path(path)
        if not p.exists():
            return []

        masks = list(contains or [])
        want = suffix.lower() if suffix else None

        files = []
        for f in p.iterdir():
            if not f.is_file():
                continue
            if want is not None and f.suffix.lower() != want:
                continue
            if masks and not any(m in f.name for m in masks):
                continue
            files.append(f)

        return sorted(files, key=lambda f: f.name)
