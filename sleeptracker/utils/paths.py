"""Module: paths.py

Author: Michael Economou
Date: 2026-10-12

Centralized path management for the sleeptracker application.

Platform-specific behavior:
- Windows: %LOCALAPPDATA%/sleeptracker/
- Linux: ~/.local/share/sleeptracker/ (or $XDG_DATA_HOME/sleeptracker/)
- macOS: ~/Library/Application Support/sleeptracker/

Setting ``SLEEPTRACKER_DATA_DIR`` (environment or ``.env``) replaces the
platform directory entirely.

Usage:
    from sleeptracker.utils.paths import AppPaths

    data_dir = AppPaths.get_user_data_dir()
    logs_dir = AppPaths.get_logs_dir()
"""

import os
import platform
from pathlib import Path

from sleeptracker.config import APP_NAME, DATA_DIR_OVERRIDE
from sleeptracker.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class AppPaths:
    """Centralized path management for the application.

    Directory Structure:
        <user_data_dir>/
        ├── databases/           # SQLite databases
        │   └── sleep_history_database
        └── logs/                # Log files
    """

    _user_data_dir: Path | None = None
    _initialized: bool = False

    @classmethod
    def _get_platform_data_dir(cls) -> Path:
        """Get platform-specific user data directory."""
        env_override = os.environ.get("SLEEPTRACKER_DATA_DIR") or DATA_DIR_OVERRIDE
        if env_override:
            return Path(env_override)

        system = platform.system()

        if system == "Windows":
            base = os.environ.get("LOCALAPPDATA")
            if not base:
                base = Path(os.environ.get("USERPROFILE", "")) / "AppData" / "Local"
            return Path(base) / APP_NAME

        elif system == "Darwin":
            return Path.home() / "Library" / "Application Support" / APP_NAME

        else:
            xdg_data = os.environ.get("XDG_DATA_HOME")
            if xdg_data:
                return Path(xdg_data) / APP_NAME
            return Path.home() / ".local" / "share" / APP_NAME

    @classmethod
    def get_user_data_dir(cls) -> Path:
        """Get the user data directory, creating it if necessary.

        Returns:
            Path to user data directory.

        """
        if cls._user_data_dir is None:
            cls._user_data_dir = cls._get_platform_data_dir()

        cls._user_data_dir.mkdir(parents=True, exist_ok=True)

        if not cls._initialized:
            logger.info("[AppPaths] User data directory: %s", cls._user_data_dir)
            cls._initialized = True

        return cls._user_data_dir

    @classmethod
    def get_logs_dir(cls) -> Path:
        """Get path to logs directory."""
        logs_dir = cls.get_user_data_dir() / "logs"
        logs_dir.mkdir(parents=True, exist_ok=True)
        return logs_dir

    @classmethod
    def reset(cls) -> None:
        """Forget the resolved data directory (used by tests)."""
        cls._user_data_dir = None
        cls._initialized = False
