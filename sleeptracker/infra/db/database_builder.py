"""Module: database_builder.py

Author: Michael Economou
Date: 2026-10-12

Builds ``LocalDatabase`` instances: resolves the file through the application
context, opens the SQLite connection, reconciles the schema and fires
lifecycle callbacks.

Usage:
    database = (
        DatabaseBuilder(context, SleepDatabase, "sleep_history_database")
        .fallback_to_destructive_migration()
        .build()
    )
"""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import Any, Generic, TypeVar

from sleeptracker.config import DATABASE_TIMEOUT
from sleeptracker.core.application_context import is_valid_context
from sleeptracker.infra.db.errors import DatabaseConstructionError
from sleeptracker.infra.db.local_database import LocalDatabase
from sleeptracker.infra.db.migration_policy import MigrationPolicy, SchemaOutcome
from sleeptracker.infra.db.migrations import Migration, reconcile_schema
from sleeptracker.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

MEMORY_DATABASE = ":memory:"

DatabaseT = TypeVar("DatabaseT", bound=LocalDatabase)


class DatabaseCallback:
    """Lifecycle hooks; override the ones you need."""

    def on_create(self, database: LocalDatabase) -> None:
        """Called after the schema was created on an empty (or wiped) database."""

    def on_open(self, database: LocalDatabase) -> None:
        """Called after every successful build."""

    def on_destructive_migration(self, database: LocalDatabase) -> None:
        """Called after all tables were dropped and recreated."""


class DatabaseBuilder(Generic[DatabaseT]):
    """Fluent builder for a ``LocalDatabase`` subclass."""

    def __init__(
        self,
        context: Any,
        database_class: type[DatabaseT],
        name: str | None,
    ):
        if not is_valid_context(context):
            raise ValueError("DatabaseBuilder requires a valid application context")
        if name is not None and (not isinstance(name, str) or not name.strip()):
            raise ValueError("Database name must be a non-empty string")
        if not (isinstance(database_class, type) and issubclass(database_class, LocalDatabase)):
            raise ValueError(f"{database_class!r} is not a LocalDatabase subclass")

        self._context = context.application_context
        self._database_class = database_class
        self._name = name
        self._policy: MigrationPolicy | None = None
        self._destructive_fallback = False
        self._migrations: list[Migration] = []
        self._callbacks: list[DatabaseCallback] = []
        self._schema_dir: Path | None = None

    @classmethod
    def in_memory(cls, context: Any, database_class: type[DatabaseT]) -> DatabaseBuilder[DatabaseT]:
        """Builder for a private in-memory database (gone when closed)."""
        return cls(context, database_class, None)

    def fallback_to_destructive_migration(self) -> DatabaseBuilder[DatabaseT]:
        self._destructive_fallback = True
        return self

    def add_migrations(self, *migrations: Migration) -> DatabaseBuilder[DatabaseT]:
        self._migrations.extend(migrations)
        return self

    def set_migration_policy(self, policy: MigrationPolicy) -> DatabaseBuilder[DatabaseT]:
        self._policy = policy
        return self

    def add_callback(self, callback: DatabaseCallback) -> DatabaseBuilder[DatabaseT]:
        self._callbacks.append(callback)
        return self

    def export_schema(self, directory: str | Path) -> DatabaseBuilder[DatabaseT]:
        self._schema_dir = Path(directory)
        return self

    @property
    def migration_policy(self) -> MigrationPolicy:
        """Policy used by ``build()``.

        An explicit ``set_migration_policy()`` wins; otherwise destructive
        fallback, then registered migrations, then ``NONE``.
        """
        if self._policy is not None:
            return self._policy
        if self._destructive_fallback:
            return MigrationPolicy.DESTRUCTIVE
        if self._migrations:
            return MigrationPolicy.INCREMENTAL
        return MigrationPolicy.NONE

    def build(self) -> DatabaseT:
        """Open the database and prepare its schema.

        Raises:
            DatabaseConstructionError: The file could not be opened, read or written
            SchemaMismatchError: Version mismatch under ``MigrationPolicy.NONE``
            MigrationError: No migration path under ``MigrationPolicy.INCREMENTAL``

        """
        db_class_name = self._database_class.__name__
        entities = self._database_class.ENTITIES
        version = self._database_class.VERSION
        policy = self.migration_policy
        path: str | Path = MEMORY_DATABASE

        try:
            if self._name is not None:
                path = self._context.get_database_path(self._name)
            connection = self._open_connection(path)
        except (sqlite3.Error, OSError) as e:
            logger.error("[%s] Failed to open database %s: %s", db_class_name, path, e)
            raise DatabaseConstructionError(
                f"Cannot open database {path}: {e}", path=str(path)
            ) from e

        try:
            outcome = reconcile_schema(connection, entities, version, policy, self._migrations)
        except sqlite3.Error as e:
            connection.close()
            logger.error("[%s] Failed to prepare schema in %s: %s", db_class_name, path, e)
            raise DatabaseConstructionError(
                f"Cannot prepare schema of {path}: {e}", path=str(path)
            ) from e
        except Exception:
            connection.close()
            raise

        database = self._database_class(connection, path)

        if self._schema_dir is not None:
            try:
                self._write_schema_file()
            except OSError as e:
                database.close()
                raise DatabaseConstructionError(
                    f"Cannot export schema to {self._schema_dir}: {e}", path=str(path)
                ) from e

        self._dispatch_callbacks(database, outcome)

        logger.info(
            "[%s] Opened %s (v%d, %s, policy=%s)",
            db_class_name,
            path,
            version,
            outcome.value,
            policy.value,
        )
        return database

    def _open_connection(self, path: str | Path) -> sqlite3.Connection:
        connection = sqlite3.connect(str(path), timeout=DATABASE_TIMEOUT, check_same_thread=False)
        try:
            connection.row_factory = sqlite3.Row
            connection.execute("PRAGMA foreign_keys = ON")
            if path != MEMORY_DATABASE:
                connection.execute("PRAGMA journal_mode = WAL")
                connection.execute("PRAGMA synchronous = NORMAL")
        except sqlite3.Error:
            connection.close()
            raise
        return connection

    def _write_schema_file(self) -> Path:
        """Write ``<dir>/<version>.json`` describing the schema."""
        db_class = self._database_class
        self._schema_dir.mkdir(parents=True, exist_ok=True)

        schema = {
            "format_version": 1,
            "database": {
                "class": f"{db_class.__module__}.{db_class.__qualname__}",
                "version": db_class.VERSION,
                "entities": [
                    {
                        "table_name": entity.TABLE_NAME,
                        "create_sql": " ".join(entity.create_table_sql().split()),
                        "indexes": list(getattr(entity, "INDEXES", ())),
                    }
                    for entity in db_class.ENTITIES
                ],
            },
        }

        target = self._schema_dir / f"{db_class.VERSION}.json"
        with open(target, "w", encoding="utf-8") as f:
            json.dump(schema, f, indent=2)

        logger.debug("[DatabaseBuilder] Schema exported to %s", target, extra={"dev_only": True})
        return target

    def _dispatch_callbacks(self, database: LocalDatabase, outcome: SchemaOutcome) -> None:
        for callback in self._callbacks:
            if outcome is SchemaOutcome.RECREATED:
                callback.on_destructive_migration(database)
            if outcome in (SchemaOutcome.CREATED, SchemaOutcome.RECREATED):
                callback.on_create(database)
            callback.on_open(database)
