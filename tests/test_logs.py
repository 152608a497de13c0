"""
Tests for setup_logger — rotating file log for the hubline process
"""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from hubline.utils.logs import setup_logger


@pytest.fixture
def logger_name(request):
    """A logger unique to the test, with its handlers closed afterwards."""
    name = f"hubline.test.{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class TestSetupLogger:

    def test_writes_to_file(self, tmp_path, logger_name, monkeypatch):
        monkeypatch.delenv("HUBLINE_LOG_STDOUT", raising=False)
        path = tmp_path / "logs" / "hubline.log"
        logger = setup_logger(path, logging.INFO, name=logger_name)
        logger.info("hub opened")
        for handler in logger.handlers:
            handler.flush()
        assert "INFO" in path.read_text(encoding="utf-8")
        assert "hub opened" in path.read_text(encoding="utf-8")

    def test_rotation_settings(self, tmp_path, logger_name, monkeypatch):
        monkeypatch.delenv("HUBLINE_LOG_STDOUT", raising=False)
        logger = setup_logger(tmp_path / "h.log", max_bytes=1000, backups=2, name=logger_name)
        handler, = logger.handlers
        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 1000
        assert handler.backupCount == 2

    def test_idempotent(self, tmp_path, logger_name, monkeypatch):
        """A second call only adjusts the level."""
        monkeypatch.delenv("HUBLINE_LOG_STDOUT", raising=False)
        setup_logger(tmp_path / "h.log", logging.WARNING, name=logger_name)
        logger = setup_logger(tmp_path / "h.log", logging.DEBUG, name=logger_name)
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG

    def test_stdout_opt_in(self, tmp_path, logger_name, monkeypatch):
        monkeypatch.setenv("HUBLINE_LOG_STDOUT", "1")
        logger = setup_logger(tmp_path / "h.log", name=logger_name)
        assert len(logger.handlers) == 2

    def test_does_not_propagate(self, tmp_path, logger_name, monkeypatch):
        monkeypatch.delenv("HUBLINE_LOG_STDOUT", raising=False)
        assert setup_logger(tmp_path / "h.log", name=logger_name).propagate is False
