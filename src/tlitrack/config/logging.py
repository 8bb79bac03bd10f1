"""Logging configuration for TLI Tracker."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from tlitrack.config.paths import get_data_dir

LOGGER_NAME = "tlitrack"

# Module-level logger
_logger: Optional[logging.Logger] = None

# Constants
LOG_FILENAME = "tlitrack.log"
MAX_BYTES = 5 * 1024 * 1024  # 5MB
BACKUP_COUNT = 3
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_log_path(data_dir: Optional[Path] = None) -> Path:
    """Get the path to the application log file."""
    return get_data_dir(data_dir) / LOG_FILENAME


def setup_logging(
    data_dir: Optional[Path] = None,
    console: bool = True,
    level: int = logging.INFO,
) -> logging.Logger:
    """
    Configure and return the application logger.

    Args:
        data_dir: Directory for the rotating log file (default data dir if None)
        console: If True, also log to stdout
        level: Logger level

    Returns:
        Configured logger instance
    """
    global _logger

    if _logger is not None:
        return _logger

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Prevent duplicate handlers if called multiple times
    if logger.handlers:
        _logger = logger
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    log_path = get_log_path(data_dir)
    try:
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=MAX_BYTES,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    except OSError as e:
        # Continue without file logging
        print(f"Warning: Could not create log file at {log_path}: {e}")

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    _logger = logger
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get the application logger, or a child of it.

    Handlers are attached by setup_logging(); until then records propagate
    to whatever the host application configured.
    """
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)
