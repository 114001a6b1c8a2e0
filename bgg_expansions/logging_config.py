"""
Centralized logging configuration for the BGG Expansions package.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None,
                  max_bytes: int = 10 * 1024 * 1024, backups: int = 0) -> None:
    """
    Set up centralized logging for the BGG Expansions package.

    Args:
        level: Logging level
        log_file: Optional path of a rolling log file
        max_bytes: Size at which the log file is rolled over
        backups: Number of rolled files to keep (excluding the hot file)
    """
    # Avoid duplicate handlers if already configured
    if logging.getLogger().handlers:
        logger.debug(
            f"Logging already configured, ignoring level={logging.getLevelName(level)} log_file={log_file}"
        )
        return

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            str(log_path), maxBytes=max_bytes, backupCount=backups, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        root_logger.addHandler(file_handler)

    # Reduce noise from external libraries
    logging.getLogger('requests').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)
