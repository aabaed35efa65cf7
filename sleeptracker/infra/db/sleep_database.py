"""Module: sleep_database.py

Author: Michael Economou
Date: 2026-10-12

The sleep history database and its process-wide handle.

``get_sleep_database(context)`` returns the one ``SleepDatabase`` of the
process. The first call builds it (file ``sleep_history_database`` in the
application's private databases directory, schema version 1, destructive
migration); every later call, from any thread, gets the same object.

Lifecycle: created on first request, kept until the process exits.
``reset_sleep_database()`` exists for tests and shutdown only.
"""

from __future__ import annotations

import sqlite3
import threading
from pathlib import Path
from typing import Any, ClassVar

from sleeptracker.config import DATABASE_NAME, DATABASE_VERSION
from sleeptracker.core.application_context import is_valid_context
from sleeptracker.infra.db.database_builder import DatabaseBuilder
from sleeptracker.infra.db.local_database import LocalDatabase
from sleeptracker.infra.db.sleep_database_dao import SleepDatabaseDao
from sleeptracker.infra.db.sleep_night import SleepNight
from sleeptracker.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class SleepDatabase(LocalDatabase):
    """Local database holding the sleep history."""

    ENTITIES: ClassVar[tuple[type, ...]] = (SleepNight,)
    VERSION: ClassVar[int] = DATABASE_VERSION

    def __init__(self, connection: sqlite3.Connection, path: str | Path):
        super().__init__(connection, path)
        self._dao: SleepDatabaseDao | None = None

    @property
    def sleep_database_dao(self) -> SleepDatabaseDao:
        with self._write_lock:
            if self._dao is None:
                self._dao = SleepDatabaseDao(self)
            return self._dao


# ====================================================================
# Process-wide handle
# ====================================================================

# Read and written only while holding _instance_lock.
_instance: SleepDatabase | None = None
_instance_lock = threading.Lock()


def get_sleep_database(context: Any) -> SleepDatabase:
    """Get or create the process-wide SleepDatabase.

    Args:
    ----
        context: Execution context; its ``application_context`` resolves the
            database location (only used on the first call)

    Returns:
    -------
        The shared SleepDatabase instance

    Raises:
    ------
        ValueError: ``context`` is None or has no application context
        DatabaseConstructionError: The database file could not be opened or prepared

    """
    if not is_valid_context(context):
        raise ValueError("get_sleep_database() requires a valid application context")

    global _instance
    with _instance_lock:
        instance = _instance
        if instance is None:
            instance = (
                DatabaseBuilder(context.application_context, SleepDatabase, DATABASE_NAME)
                .fallback_to_destructive_migration()
                .build()
            )
            _instance = instance
            logger.info("[SleepDatabase] Shared instance created: %s", instance.path)
        return instance


def reset_sleep_database() -> None:
    """Close and forget the shared instance (tests and shutdown only)."""
    global _instance
    with _instance_lock:
        instance = _instance
        _instance = None
    if instance is not None:
        instance.close()
