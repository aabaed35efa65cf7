"""Database layer - SQLite implementations.

Author: Michael Economou
Date: 2026-10-12
"""

from sleeptracker.infra.db.database_builder import DatabaseBuilder, DatabaseCallback
from sleeptracker.infra.db.errors import (
    DatabaseConstructionError,
    DatabaseError,
    MigrationError,
    SchemaMismatchError,
)
from sleeptracker.infra.db.local_database import LocalDatabase
from sleeptracker.infra.db.migration_policy import MigrationPolicy, SchemaOutcome
from sleeptracker.infra.db.migrations import Migration
from sleeptracker.infra.db.sleep_database import (
    SleepDatabase,
    get_sleep_database,
    reset_sleep_database,
)
from sleeptracker.infra.db.sleep_database_dao import SleepDatabaseDao
from sleeptracker.infra.db.sleep_night import SleepNight

__all__ = [
    "DatabaseBuilder",
    "DatabaseCallback",
    "DatabaseConstructionError",
    "DatabaseError",
    "LocalDatabase",
    "Migration",
    "MigrationError",
    "MigrationPolicy",
    "SchemaMismatchError",
    "SchemaOutcome",
    "SleepDatabase",
    "SleepDatabaseDao",
    "SleepNight",
    "get_sleep_database",
    "reset_sleep_database",
]
