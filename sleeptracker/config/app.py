"""Module: sleeptracker.config.app

Author: Michael Economou
Date: 2026-10-12

Application-level configuration: app info, database, logging settings.

Values read from the environment are loaded after ``.env`` (if present),
so a development checkout can point the app at a scratch data directory.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# =====================================
# APPLICATION INFORMATION
# =====================================

APP_NAME = "sleeptracker"
APP_VERSION = "1.0.0"
APP_AUTHOR = "Michael Economou"

# Overrides the platform user-data directory when set
DATA_DIR_OVERRIDE = os.environ.get("SLEEPTRACKER_DATA_DIR") or None

# =====================================
# DATABASE SETTINGS
# =====================================

# File name inside <data_dir>/databases/ (no extension)
DATABASE_NAME = "sleep_history_database"
DATABASE_VERSION = 1
DATABASES_SUBDIR = "databases"

# sqlite3.connect() busy timeout in seconds
DATABASE_TIMEOUT = 30.0

# =====================================
# LOGGING CONFIGURATION
# =====================================

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Console logging
LOG_TO_CONSOLE = True
LOG_CONSOLE_LEVEL = os.environ.get("SLEEPTRACKER_LOG_LEVEL", "INFO").upper()

# File logging
LOG_TO_FILE = True
LOG_FILE_LEVEL = "INFO"
LOG_FILE_MAX_BYTES = 10_000_000  # 10MB per file
LOG_FILE_BACKUP_COUNT = 5

# Debug file logging
LOG_DEBUG_FILE_ENABLED = False
LOG_DEBUG_FILE_MAX_BYTES = 20_000_000
LOG_DEBUG_FILE_BACKUP_COUNT = 3

# Development logging settings
SHOW_DEV_ONLY_IN_CONSOLE = False
