# File: tests/test_logger.py
import logging

import pytest

from link_scout.logger import LOGGER_NAME, configure, init_logging


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    init_logging()


def test_file_handler_receives_records(tmp_path):
    log_file = tmp_path / "scout.log"
    lg = configure(level="DEBUG", log_file=log_file, log_format="%(levelname)s %(message)s")
    lg.debug("checked %d nodes", 3)
    for handler in lg.handlers:
        handler.flush()
    assert "DEBUG checked 3 nodes" in log_file.read_text(encoding="utf-8")


def test_init_logging_replaces_handlers(tmp_path):
    configure(log_file=tmp_path / "a.log")
    lg = init_logging(level="WARNING")
    assert lg.name == LOGGER_NAME
    assert lg.level == logging.WARNING
    assert len(lg.handlers) == 1
    assert not lg.propagate
