# tests/conftest.py
from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pytest
import yaml
from loguru import logger


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)  # or sys.stderr
    yield


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for key in ("TICKMEDIAN_CONFIG", "TICKMEDIAN_INPUT", "TICKMEDIAN_OUTPUT"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def write_csv():
    """
    写 `;` 分隔文件：

        write_csv(path, ["receive_ts;price", "1;10", "2;20"])
    """

    def _write(path: Path, lines: Iterable[str]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def input_dir(tmp_path: Path) -> Path:
    d = tmp_path / "input"
    d.mkdir()
    return d


@pytest.fixture
def make_config(tmp_path: Path):
    """
    Factory fixture：生成 YAML 配置文件并返回路径

        cfg_path = make_config(input="input", filename_mask=["btc"])
    """

    def _make(name: str = "config.yml", log: dict | None = None, **main) -> Path:
        data = {
            "log": log or {"dir": "logs", "level": "DEBUG"},
            "main": main,
        }
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data), encoding="utf-8")
        return path

    return _make
