#!filepath: tests/utils/test_logger.py
import pytest
from loguru import logger

from tickmedian.config.log_config import LogConfig
from tickmedian.utils.logger import Logging, logs


def test_catch_reraises_and_logs():
    captured = []
    sink_id = logger.add(lambda msg: captured.append(str(msg)))

    @logs.catch(msg="boom happened")
    def boom():
        raise ValueError("boom")

    with pytest.raises(ValueError):
        boom()

    logger.remove(sink_id)
    assert any("boom happened" in line for line in captured)


def test_catch_returns_result():
    @logs.catch()
    def ok(x):
        return x * 2

    assert ok(21) == 42


def test_configure_creates_log_dir(tmp_path):
    log_dir = tmp_path / "logs"

    Logging().configure(LogConfig(dir=str(log_dir), level="DEBUG"))
    logger.info("hello")

    assert log_dir.is_dir()
