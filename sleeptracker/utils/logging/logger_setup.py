"""Module: logger_setup.py

Author: Michael Economou
Date: 2026-10-12

ConfigureLogger sets up application-wide logging: INFO and higher to the
console, file logging to rotating files under the logs directory, and an
optional DEBUG file.
"""

import contextlib
import logging
import sys
from datetime import datetime
from pathlib import Path

from sleeptracker.config import (
    LOG_CONSOLE_LEVEL,
    LOG_DEBUG_FILE_BACKUP_COUNT,
    LOG_DEBUG_FILE_ENABLED,
    LOG_DEBUG_FILE_MAX_BYTES,
    LOG_FILE_BACKUP_COUNT,
    LOG_FILE_LEVEL,
    LOG_FILE_MAX_BYTES,
    LOG_TO_CONSOLE,
    LOG_TO_FILE,
)
from sleeptracker.utils.logging.logger_file_helper import add_file_handler
from sleeptracker.utils.logging.logger_helper import DevOnlyFilter

# Marks handlers installed by ConfigureLogger on the root logger
_HANDLER_MARK = "_sleeptracker_handler"


class ConfigureLogger:
    """
    Configures application-wide logging on the root logger.

    Handlers are only added once per process; a second ConfigureLogger finds
    the marked handlers already installed and leaves them alone.
    """

    def __init__(self, log_name: str = "sleeptracker", log_dir: str | Path | None = None):
        """
        Args:
            log_name (str): Base name for the log files.
            log_dir (str | Path, optional): Directory for log files. Defaults to
                the application logs directory.
        """
        if log_dir is None:
            from sleeptracker.utils.paths import AppPaths

            log_dir = AppPaths.get_logs_dir()
        self.log_dir = Path(log_dir)
        self.log_file_path: Path | None = None
        self.handlers: list[logging.Handler] = []

        self.logger = logging.getLogger()
        self._previous_level = self.logger.level
        self.logger.setLevel(logging.DEBUG)  # handlers filter levels

        if any(getattr(h, _HANDLER_MARK, False) for h in self.logger.handlers):
            return

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        if LOG_TO_CONSOLE:
            self._setup_console_handler(getattr(logging, LOG_CONSOLE_LEVEL, logging.INFO))

        if LOG_TO_FILE:
            self.log_file_path = self.log_dir / f"{log_name}_{timestamp}.log"
            self._register(
                add_file_handler(
                    logger=self.logger,
                    log_path=str(self.log_file_path),
                    level=getattr(logging, LOG_FILE_LEVEL, logging.INFO),
                    max_bytes=LOG_FILE_MAX_BYTES,
                    backup_count=LOG_FILE_BACKUP_COUNT,
                )
            )

        if LOG_DEBUG_FILE_ENABLED:
            self._register(
                add_file_handler(
                    logger=self.logger,
                    log_path=str(self.log_dir / f"{log_name}_debug_{timestamp}.log"),
                    level=logging.DEBUG,
                    max_bytes=LOG_DEBUG_FILE_MAX_BYTES,
                    backup_count=LOG_DEBUG_FILE_BACKUP_COUNT,
                )
            )

    def _register(self, handler: logging.Handler) -> None:
        setattr(handler, _HANDLER_MARK, True)
        self.handlers.append(handler)

    def _setup_console_handler(self, level: int):
        """Sets up console handler with UTF-8-safe output and DevOnlyFilter."""
        console_handler = logging.StreamHandler(sys.stdout)

        with contextlib.suppress(Exception):
            console_handler.stream.reconfigure(encoding="utf-8")

        console_handler.setLevel(level)
        console_handler.addFilter(DevOnlyFilter())
        console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        self.logger.addHandler(console_handler)
        self._register(console_handler)

    def shutdown(self) -> None:
        """Remove and close the handlers this instance installed."""
        for handler in self.handlers:
            self.logger.removeHandler(handler)
            handler.close()
        self.handlers.clear()
        self.logger.setLevel(self._previous_level)
