"""Module: migrations.py

Author: Michael Economou
Date: 2026-10-12

Database schema creation, versioning and migration functions.

The declared version of a database is recorded in a one-row
``schema_version`` table. ``reconcile_schema`` compares it with the version
the code expects and, depending on the ``MigrationPolicy``, creates the
schema, runs migration steps, wipes and rebuilds everything, or refuses.
"""

import sqlite3
from collections.abc import Callable, Iterable, Sequence

from sleeptracker.infra.db.errors import MigrationError, SchemaMismatchError
from sleeptracker.infra.db.migration_policy import MigrationPolicy, SchemaOutcome
from sleeptracker.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

SCHEMA_VERSION_TABLE = "schema_version"


class Migration:
    """One schema step from ``start_version`` to ``end_version``."""

    def __init__(
        self,
        start_version: int,
        end_version: int,
        migrate: Callable[[sqlite3.Cursor], None],
    ):
        if start_version == end_version:
            raise ValueError("Migration start and end versions must differ")
        self.start_version = start_version
        self.end_version = end_version
        self._migrate = migrate

    def migrate(self, cursor: sqlite3.Cursor) -> None:
        self._migrate(cursor)

    def __repr__(self) -> str:
        return f"Migration({self.start_version} -> {self.end_version})"


def find_migration_path(
    migrations: Iterable[Migration], start: int, end: int
) -> list[Migration] | None:
    """Chain migrations from ``start`` to ``end``.

    At every step the migration that gets closest to ``end`` without
    overshooting it is taken. Returns ``None`` when the chain breaks.
    """
    if start == end:
        return []

    upgrade = end > start
    by_start: dict[int, list[Migration]] = {}
    for migration in migrations:
        by_start.setdefault(migration.start_version, []).append(migration)

    path: list[Migration] = []
    current = start
    while current != end:
        if upgrade:
            candidates = [
                m for m in by_start.get(current, []) if current < m.end_version <= end
            ]
            best = max(candidates, key=lambda m: m.end_version, default=None)
        else:
            candidates = [
                m for m in by_start.get(current, []) if end <= m.end_version < current
            ]
            best = min(candidates, key=lambda m: m.end_version, default=None)

        if best is None:
            return None
        path.append(best)
        current = best.end_version

    return path


def read_schema_version(cursor: sqlite3.Cursor) -> int | None:
    """Return the recorded schema version, or None for a database never set up.

    A ``schema_version`` table without a row reads as version 0.
    """
    cursor.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
        (SCHEMA_VERSION_TABLE,),
    )
    if not cursor.fetchone():
        return None

    cursor.execute(f"SELECT version FROM {SCHEMA_VERSION_TABLE}")
    row = cursor.fetchone()
    return row[0] if row else 0


def write_schema_version(cursor: sqlite3.Cursor, version: int) -> None:
    cursor.execute(
        f"CREATE TABLE IF NOT EXISTS {SCHEMA_VERSION_TABLE} (version INTEGER PRIMARY KEY)"
    )
    cursor.execute(f"DELETE FROM {SCHEMA_VERSION_TABLE}")
    cursor.execute(f"INSERT INTO {SCHEMA_VERSION_TABLE} (version) VALUES (?)", (version,))


def create_schema(cursor: sqlite3.Cursor, entities: Sequence[type]) -> None:
    """Create the table and indexes of every entity."""
    for entity in entities:
        cursor.execute(entity.create_table_sql())
        for index_sql in getattr(entity, "INDEXES", ()):
            cursor.execute(index_sql)

    logger.debug(
        "[migrations] Schema created: %s",
        ", ".join(entity.TABLE_NAME for entity in entities),
        extra={"dev_only": True},
    )


def drop_all_tables(cursor: sqlite3.Cursor) -> list[str]:
    """Drop every user view, trigger and table (including ``schema_version``).

    Returns:
        Names of the dropped tables

    """
    cursor.execute(
        "SELECT type, name FROM sqlite_master "
        "WHERE type IN ('view', 'trigger', 'table') AND name NOT LIKE 'sqlite_%'"
    )
    objects = cursor.fetchall()

    # Views and triggers first; they may reference the tables.
    order = {"view": 0, "trigger": 1, "table": 2}
    dropped = []
    for obj_type, name in sorted(objects, key=lambda item: order[item[0]]):
        cursor.execute(f'DROP {obj_type.upper()} IF EXISTS "{name}"')
        if obj_type == "table":
            dropped.append(name)

    logger.info("[migrations] Dropped tables: %s", ", ".join(dropped) or "(none)")
    return dropped


def reconcile_schema(
    connection: sqlite3.Connection,
    entities: Sequence[type],
    version: int,
    policy: MigrationPolicy,
    migrations: Sequence[Migration] = (),
) -> SchemaOutcome:
    """Bring the database schema to ``version`` according to ``policy``.

    Runs in a single transaction; on any failure the transaction is rolled back
    and the exception propagates.

    Raises:
        SchemaMismatchError: Versions differ and ``policy`` is ``NONE``
        MigrationError: Versions differ, ``policy`` is ``INCREMENTAL`` and the
            registered migrations do not lead to ``version``
        sqlite3.Error: The database could not be read or written

    """
    # foreign_keys is a no-op inside a transaction, so toggle it before BEGIN.
    connection.execute("PRAGMA foreign_keys = OFF")
    cursor = connection.cursor()
    try:
        cursor.execute("BEGIN")
        outcome = _reconcile(cursor, entities, version, policy, migrations)
        connection.commit()
    except Exception:
        if connection.in_transaction:
            connection.rollback()
        raise
    finally:
        connection.execute("PRAGMA foreign_keys = ON")

    return outcome


def _reconcile(
    cursor: sqlite3.Cursor,
    entities: Sequence[type],
    version: int,
    policy: MigrationPolicy,
    migrations: Sequence[Migration],
) -> SchemaOutcome:
    stored_version = read_schema_version(cursor)

    if stored_version is None:
        logger.info("[migrations] Creating new database schema (v%d)", version)
        create_schema(cursor, entities)
        write_schema_version(cursor, version)
        return SchemaOutcome.CREATED

    if stored_version == version:
        return SchemaOutcome.UNCHANGED

    if policy is MigrationPolicy.NONE:
        logger.error(
            "[migrations] Schema version mismatch: stored v%d, expected v%d",
            stored_version,
            version,
        )
        raise SchemaMismatchError(stored_version, version)

    path = find_migration_path(migrations, stored_version, version)

    if path is not None:
        logger.info(
            "[migrations] Migrating database from v%d to v%d", stored_version, version
        )
        for migration in path:
            logger.debug("[migrations] Running %r", migration, extra={"dev_only": True})
            migration.migrate(cursor)
        write_schema_version(cursor, version)
        return SchemaOutcome.MIGRATED

    if policy is MigrationPolicy.INCREMENTAL:
        logger.error(
            "[migrations] No migration path from v%d to v%d", stored_version, version
        )
        raise MigrationError(stored_version, version)

    logger.warning(
        "[migrations] Schema v%d does not match v%d - recreating database (all data discarded)",
        stored_version,
        version,
    )
    drop_all_tables(cursor)
    create_schema(cursor, entities)
    write_schema_version(cursor, version)
    return SchemaOutcome.RECREATED
