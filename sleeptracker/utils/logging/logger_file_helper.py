"""Module: logger_file_helper.py

Author: Michael Economou
Date: 2026-10-12

Attaches rotating file handlers to a logger.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from sleeptracker.config import LOG_DATE_FORMAT, LOG_FORMAT


def add_file_handler(
    logger: logging.Logger,
    log_path: str,
    level: int = logging.INFO,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
) -> RotatingFileHandler:
    """
    Attaches a rotating file handler to a logger.

    Args:
        logger (logging.Logger): The logger to attach the handler to.
        log_path (str): Path to the log file.
        level (int): Logging level for this file handler (e.g., logging.ERROR).
        max_bytes (int): Maximum file size before rotating.
        backup_count (int): Number of backup files to keep.

    Returns:
        RotatingFileHandler: The attached handler.
    """
    os.makedirs(os.path.dirname(log_path) or ".", exist_ok=True)

    file_handler = RotatingFileHandler(
        log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    logger.addHandler(file_handler)
    return file_handler
