"""Tests for the root logger setup."""

import logging
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from unittest.mock import patch

from bgg_expansions.logging_config import setup_logging

FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@contextmanager
def bare_root_logger():
    """Run with no root handlers, then put back whatever pytest had installed."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    saved_quiet = {name: logging.getLogger(name).level for name in ("requests", "urllib3")}
    root.handlers = []
    try:
        yield root
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = saved_handlers
        root.setLevel(saved_level)
        for name, level in saved_quiet.items():
            logging.getLogger(name).setLevel(level)


class TestSetupLogging:

    def test_console_only(self):
        with bare_root_logger() as root:
            setup_logging(level=logging.DEBUG)

            assert len(root.handlers) == 1
            handler = root.handlers[0]
            assert isinstance(handler, logging.StreamHandler)
            assert not isinstance(handler, RotatingFileHandler)
            assert handler.level == logging.DEBUG
            assert handler.formatter._fmt == FORMAT
            assert root.level == logging.DEBUG

    def test_rolling_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "bgg.log"
        with bare_root_logger() as root:
            setup_logging(level=logging.INFO, log_file=str(log_file), max_bytes=2048, backups=3)

            file_handlers = [h for h in root.handlers if isinstance(h, RotatingFileHandler)]
            assert len(root.handlers) == 2
            assert len(file_handlers) == 1
            handler = file_handlers[0]
            assert handler.maxBytes == 2048
            assert handler.backupCount == 3
            assert handler.baseFilename == str(log_file)
            assert all(h.formatter._fmt == FORMAT for h in root.handlers)

            logging.getLogger("bgg_expansions.test").info("Checked 3 games")
            handler.flush()

        assert log_file.parent.is_dir()
        assert "bgg_expansions.test - INFO - Checked 3 games" in log_file.read_text(encoding="utf-8")

    def test_quiets_http_libraries(self):
        with bare_root_logger():
            setup_logging(level=logging.DEBUG)

            assert logging.getLogger("requests").level == logging.WARNING
            assert logging.getLogger("urllib3").level == logging.WARNING

    def test_second_call_adds_no_handlers(self, tmp_path):
        with bare_root_logger() as root:
            setup_logging()
            handlers = root.handlers[:]

            setup_logging(level=logging.DEBUG, log_file=str(tmp_path / "late.log"))

            assert root.handlers == handlers
            assert root.level == logging.INFO
            assert not (tmp_path / "late.log").exists()

    def test_second_call_reports_ignored_settings(self):
        with bare_root_logger():
            setup_logging()
            with patch("bgg_expansions.logging_config.logger") as mock_logger:
                setup_logging(level=logging.DEBUG, log_file="late.log")

        message = mock_logger.debug.call_args.args[0]
        assert "DEBUG" in message
        assert "late.log" in message
