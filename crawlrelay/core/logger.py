"""Logging setup for the crawl pipeline services.

Both services log to stderr, where Cloud Run collects the output. A rotating
file handler can be added for local runs.

Examples:
    >>> from crawlrelay.core.logger import get_logger
    >>> logger = get_logger("crawlrelay.services.mapper")
    >>> logger.info("Received crawl request")
    2026-01-14 23:45:00,123 | INFO | crawlrelay.services.mapper | Received crawl request
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

PACKAGE_LOGGER = "crawlrelay"

# Rotating file handler limits (100MB max file size, 5 backup files)
MAX_LOG_SIZE_BYTES = 100 * 1024 * 1024
BACKUP_COUNT = 5


def get_logger(
    name: str,
    log_level: str = "INFO",
    log_file: Path | None = None,
) -> logging.Logger:
    """Create and configure a logger with a console handler.

    The logger includes:
    - Console handler at the requested level, writing to stderr
    - Optional rotating file handler: DEBUG level, 100MB max size, 5 backups

    Calling this again for the same name replaces the previous handlers.

    Args:
        name: Logger name (typically module name like "crawlrelay.services.mapper")
        log_level: Logging level as string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file. Parent directories are created.

    Returns:
        Configured logging.Logger instance.

    Raises:
        ValueError: If log_level is not a valid logging level name.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear existing handlers to allow reconfiguration
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=MAX_LOG_SIZE_BYTES,
            backupCount=BACKUP_COUNT,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def configure_logging(log_level: str = "INFO", log_file: Path | None = None) -> None:
    """Configure the package logger that every module logger propagates to."""
    get_logger(PACKAGE_LOGGER, log_level=log_level, log_file=log_file)
