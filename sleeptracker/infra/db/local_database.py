"""Module: local_database.py

Author: Michael Economou
Date: 2026-10-12

Base class of an opened, schema-checked SQLite database.

Subclasses declare their tables and schema version as class attributes and
are instantiated by ``DatabaseBuilder`` once the connection is open and the
schema has been reconciled:

    class SleepDatabase(LocalDatabase):
        ENTITIES = (SleepNight,)
        VERSION = 1
"""

import contextlib
import sqlite3
import threading
from pathlib import Path
from typing import ClassVar

from sleeptracker.infra.db.migrations import read_schema_version
from sleeptracker.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class LocalDatabase:
    """Shared connection to one local SQLite database.

    The connection is opened with ``check_same_thread=False`` and may be used
    from any thread; writes go through ``transaction()``, which serializes
    them on the instance lock.
    """

    ENTITIES: ClassVar[tuple[type, ...]] = ()
    VERSION: ClassVar[int] = 1

    def __init__(self, connection: sqlite3.Connection, path: str | Path):
        self._conn = connection
        self._path = str(path)
        self._write_lock = threading.RLock()
        self._closed = False

    @property
    def path(self) -> str:
        return self._path

    @property
    def version(self) -> int:
        return self.VERSION

    @property
    def connection(self) -> sqlite3.Connection:
        if self._closed:
            raise sqlite3.ProgrammingError(f"Database {self._path} is closed")
        return self._conn

    @property
    def is_open(self) -> bool:
        return not self._closed

    @contextlib.contextmanager
    def transaction(self):
        """Context manager for atomic writes.

        Usage:
            with database.transaction() as conn:
                conn.execute(...)
                # Commits on success, rolls back on exception
        """
        with self._write_lock:
            conn = self.connection
            try:
                yield conn
                conn.commit()
            except Exception:
                conn.rollback()
                raise

    @contextlib.contextmanager
    def reading(self):
        """Connection for reads, serialized with writers so uncommitted rows stay hidden."""
        with self._write_lock:
            yield self.connection

    def get_stored_version(self) -> int | None:
        """Schema version recorded in the database file."""
        with self.reading() as conn:
            return read_schema_version(conn.cursor())

    def get_table_names(self) -> list[str]:
        with self.reading() as conn:
            rows = conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%' "
                "ORDER BY name"
            ).fetchall()
        return [row[0] for row in rows]

    def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        with self._write_lock:
            if self._closed:
                return
            self._conn.close()
            self._closed = True
        logger.info("[%s] Closed database: %s", type(self).__name__, self._path)

    def __repr__(self) -> str:
        state = "open" if self.is_open else "closed"
        return f"{type(self).__name__}(path={self._path!r}, version={self.VERSION}, {state})"
