import logging
from logging.handlers import TimedRotatingFileHandler

import pytest

from ordermenu.logsetup import LogConfig, init_logger


@pytest.fixture
def cleanup():
    handlers = []
    yield handlers
    root = logging.getLogger()
    for handler in handlers:
        root.removeHandler(handler)
        handler.close()


def test_defaults():
    config = LogConfig()
    assert (config.file_name, config.level, config.rolling) == ("order", "info", "daily")


def test_creates_log_dir_and_writes(tmp_path, cleanup):
    handler = init_logger(LogConfig(file_name="app"), tmp_path)
    cleanup.append(handler)
    logging.getLogger("ordermenu.test").info("hello log")
    handler.flush()
    log_file = tmp_path / "data" / "log" / "app.log"
    assert log_file.exists()
    assert "hello log" in log_file.read_text(encoding="utf-8")


def test_never_rolling_uses_plain_file(tmp_path, cleanup):
    handler = init_logger(LogConfig(rolling="never"), tmp_path)
    cleanup.append(handler)
    assert not isinstance(handler, TimedRotatingFileHandler)
    assert handler.baseFilename == str(tmp_path / "data" / "log" / "order.log")
    logging.getLogger("ordermenu.test").warning("plain file message")
    handler.flush()
    text = (tmp_path / "data" / "log" / "order.log").read_text(encoding="utf-8")
    assert "plain file message" in text


def test_daily_rolling_rotates(tmp_path, cleanup):
    handler = init_logger(LogConfig(rolling="daily"), tmp_path)
    cleanup.append(handler)
    assert isinstance(handler, TimedRotatingFileHandler)
    assert handler.interval == 24 * 60 * 60
    assert handler.baseFilename == str(tmp_path / "data" / "log" / "order.log")


def test_error_level_filters_info(tmp_path, cleanup):
    handler = init_logger(LogConfig(file_name="err", level="error"), tmp_path)
    cleanup.append(handler)
    logger = logging.getLogger("ordermenu.test")
    logger.info("quiet message")
    logger.error("loud message")
    handler.flush()
    text = (tmp_path / "data" / "log" / "err.log").read_text(encoding="utf-8")
    assert "loud message" in text
    assert "quiet message" not in text