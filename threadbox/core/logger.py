"""
Centralized logging configuration for the Threadbox comment service
"""
import logging
import os
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_DIR = Path(os.getenv("THREADBOX_LOG_DIR") or Path(__file__).parent.parent.parent / "logs")

MAX_LOG_BYTES = 10 * 1024 * 1024  # 10MB
LOG_BACKUP_COUNT = 5


def _build_handlers(
    level: int,
    log_file: Optional[str],
    max_bytes: int = MAX_LOG_BYTES,
    backup_count: int = LOG_BACKUP_COUNT,
) -> list[logging.Handler]:
    """Console handler, plus a rotating file handler under LOG_DIR when log_file is set."""
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    handlers: list[logging.Handler] = [console_handler]

    if log_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                LOG_DIR / log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
        )

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    max_bytes: int = MAX_LOG_BYTES,
    backup_count: int = LOG_BACKUP_COUNT,
) -> logging.Logger:
    """
    Setup and return a logger with its own handlers.

    Args:
        name: Logger name (typically __name__ of the calling module)
        level: Logging level (default: INFO)
        log_file: Optional log file name. If None, only console logging is enabled
        max_bytes: Maximum size of each log file before rotation
        backup_count: Number of rotated files to keep

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    for handler in _build_handlers(level, log_file, max_bytes, backup_count):
        logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Module loggers propagate to the root handlers set by configure_app_logging()."""
    return logging.getLogger(name)


def configure_app_logging(
    level: int | None = None,
    log_to_file: bool | None = None,
    log_file: str = "threadbox.log",
) -> None:
    """
    Configure the root logger once at application startup.

    Unset arguments fall back to THREADBOX_LOG_LEVEL (default INFO) and
    THREADBOX_LOG_TO_FILE (default true).
    """
    if level is None:
        level = logging.getLevelName(os.getenv("THREADBOX_LOG_LEVEL", "INFO").upper())
        if not isinstance(level, int):
            level = logging.INFO
    if log_to_file is None:
        log_to_file = os.getenv("THREADBOX_LOG_TO_FILE", "true").lower() == "true"

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    for handler in _build_handlers(level, log_file if log_to_file else None):
        root_logger.addHandler(handler)
