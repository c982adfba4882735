"""Logging setup."""

import logging

import pytest

from dnd_game.infra.log import setup_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_console_only_by_default(root_logger):
    setup_logging("debug", log_dir="")
    assert root_logger.level == logging.DEBUG
    assert [type(h).__name__ for h in root_logger.handlers] == ["StreamHandler"]


def test_log_dir_gets_app_and_error_files(root_logger, tmp_path):
    log_dir = tmp_path / "logs"
    setup_logging("INFO", log_dir=log_dir)

    log = logging.getLogger("dnd_game.test")
    log.info("table opened")
    log.error("dice exploded")
    for handler in root_logger.handlers:
        handler.flush()

    app_log = (log_dir / "app.log").read_text()
    error_log = (log_dir / "error.log").read_text()
    assert "table opened" in app_log and "dice exploded" in app_log
    assert "dice exploded" in error_log
    assert "table opened" not in error_log
