#!filepath: tests/engines/test_change_log_writer.py
from decimal import Decimal

import pytest

from tickmedian.core.types import ChangeEvent
from tickmedian.engines.writers import ChangeLogWriter
from tickmedian.utils.errors import OutputAccessError


def test_writes_header_and_rows(tmp_path):
    out = tmp_path / "nested" / "out.csv"

    with ChangeLogWriter(out, precision=8) as w:
        w.write(ChangeEvent(1, Decimal("10")))
        w.write(ChangeEvent(4, Decimal("12.5")))

    assert out.read_text(encoding="utf-8").splitlines() == [
        "receive_ts;price_median",
        "1;10.00000000",
        "4;12.50000000",
    ]
    assert w.rows == 2


def test_header_only_when_no_events(tmp_path):
    out = tmp_path / "out.csv"

    with ChangeLogWriter(out):
        pass

    assert out.read_text(encoding="utf-8") == "receive_ts;price_median\n"


def test_output_dir_blocked_by_file(tmp_path):
    """父路径是普通文件 → 无法建目录"""
    blocker = tmp_path / "blocker"
    blocker.write_text("x")

    with pytest.raises(OutputAccessError, match="Cannot create output directory"):
        ChangeLogWriter(blocker / "sub" / "out.csv").open()


def test_output_path_is_directory(tmp_path):
    target = tmp_path / "out.csv"
    target.mkdir()

    with pytest.raises(OutputAccessError, match="Cannot open output file"):
        ChangeLogWriter(target).open()


def test_write_before_open(tmp_path):
    w = ChangeLogWriter(tmp_path / "out.csv")

    with pytest.raises(RuntimeError):
        w.write(ChangeEvent(1, Decimal("1")))
