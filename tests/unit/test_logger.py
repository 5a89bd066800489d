"""
Tests for logging setup.
"""

import logging
import logging.handlers

import pytest

from cartstore.utils.logger import setup_logging

@pytest.fixture(autouse=True)
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers, level = root_logger.handlers[:], root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)

def test_setup_logging_creates_error_log(tmp_path):
    logger = setup_logging("warning", log_dir=tmp_path / "logs")

    root_logger = logging.getLogger()
    file_handlers = [h for h in root_logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]

    assert logger.name == "cartstore"
    assert root_logger.level == logging.WARNING
    assert [h.level for h in file_handlers] == [logging.ERROR]
    assert (tmp_path / "logs").is_dir()
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

def test_setup_logging_debug_mode(tmp_path):
    setup_logging("DEBUG", debug_mode=True, log_dir=tmp_path)

    file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.handlers.RotatingFileHandler)]

    assert len(file_handlers) == 2
    assert logging.getLogger("sqlalchemy.engine").level == logging.INFO

def test_setup_logging_without_files():
    setup_logging(log_dir=None)

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.StreamHandler)

def test_app_messages_are_printed_once(capsys):
    """Module loggers rely on the root handler installed by setup_logging."""
    import cartstore.main as main

    logging.getLogger().handlers.clear()
    setup_logging(log_dir=None)
    main.logger.info("application started")

    assert main.logger.handlers == []
    assert capsys.readouterr().out.count("application started") == 1
