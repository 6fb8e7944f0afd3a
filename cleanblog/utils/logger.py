"""Logging configuration for cleanblog."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from ..infrastructure.log_adapter import StdlibLogger


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ROOT_LOGGER_NAME = "cleanblog"


class AuditRecordFilter(logging.Filter):
    """Pass only records written by the audit service."""

    def filter(self, record: logging.LogRecord) -> bool:
        fields = getattr(record, "fields", None) or {}
        return fields.get("log_type") == "audit"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    audit_file: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of a rotating log file
        audit_file: Optional path of a rotating file receiving audit records only
        max_bytes: Rotation size for file handlers
        backup_count: Number of rotated files to keep

    Returns:
        The configured ``cleanblog`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)

    # Reconfiguring replaces previous handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(log_level)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if audit_file:
        Path(audit_file).parent.mkdir(parents=True, exist_ok=True)
        audit_handler = RotatingFileHandler(audit_file, maxBytes=max_bytes, backupCount=backup_count)
        audit_handler.setFormatter(formatter)
        audit_handler.addFilter(AuditRecordFilter())
        logger.addHandler(audit_handler)

    logger.propagate = False
    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> StdlibLogger:
    """
    Get a Logger port instance for a named stdlib logger.

    Args:
        name: Logger name (usually __name__)

    Returns:
        StdlibLogger wrapping ``logging.getLogger(name)``
    """
    return StdlibLogger(logging.getLogger(name))
