"""Unit tests for DatabaseBuilder.

Author: Michael Economou
Date: 2026-10-14

Tests for policy selection, in-memory databases, lifecycle callbacks and
schema export.
"""

import json
import sqlite3

import pytest

from sleeptracker.infra.db.database_builder import DatabaseBuilder, DatabaseCallback
from sleeptracker.infra.db.errors import (
    DatabaseConstructionError,
    MigrationError,
    SchemaMismatchError,
)
from sleeptracker.infra.db.local_database import LocalDatabase
from sleeptracker.infra.db.migration_policy import MigrationPolicy
from sleeptracker.infra.db.migrations import SCHEMA_VERSION_TABLE, Migration
from sleeptracker.infra.db.sleep_database import SleepDatabase
from sleeptracker.infra.db.sleep_night import SleepNight


class RecordingCallback(DatabaseCallback):
    def __init__(self):
        self.events = []

    def on_create(self, database):
        self.events.append("create")

    def on_open(self, database):
        self.events.append("open")

    def on_destructive_migration(self, database):
        self.events.append("destructive")


class SleepDatabaseV2(SleepDatabase):
    VERSION = 2


@pytest.fixture
def built(app_context):
    """Track file databases built in a test and close them afterwards."""
    databases = []

    def _build(builder):
        database = builder.build()
        databases.append(database)
        return database

    yield _build

    for database in databases:
        database.close()


class TestBuilderArguments:
    @pytest.mark.parametrize("context", [None, 42, object()])
    def test_invalid_context(self, context):
        with pytest.raises(ValueError):
            DatabaseBuilder(context, SleepDatabase, "db")

    @pytest.mark.parametrize("name", ["", "   ", 3])
    def test_invalid_name(self, app_context, name):
        with pytest.raises(ValueError):
            DatabaseBuilder(app_context, SleepDatabase, name)

    def test_invalid_database_class(self, app_context):
        with pytest.raises(ValueError):
            DatabaseBuilder(app_context, dict, "db")

    def test_name_with_directory_is_rejected_on_build(self, app_context):
        """Test that a name escaping the databases dir is refused."""
        with pytest.raises(ValueError):
            DatabaseBuilder(app_context, SleepDatabase, "../outside").build()


class TestMigrationPolicySelection:
    """Resolution of the effective policy."""

    def test_default_is_none(self, app_context):
        assert DatabaseBuilder(app_context, SleepDatabase, "db").migration_policy is (
            MigrationPolicy.NONE
        )

    def test_migrations_make_it_incremental(self, app_context):
        builder = DatabaseBuilder(app_context, SleepDatabase, "db").add_migrations(
            Migration(1, 2, lambda cursor: None)
        )

        assert builder.migration_policy is MigrationPolicy.INCREMENTAL

    def test_destructive_fallback_wins_over_migrations(self, app_context):
        builder = (
            DatabaseBuilder(app_context, SleepDatabase, "db")
            .add_migrations(Migration(1, 2, lambda cursor: None))
            .fallback_to_destructive_migration()
        )

        assert builder.migration_policy is MigrationPolicy.DESTRUCTIVE

    def test_explicit_policy_wins(self, app_context):
        builder = (
            DatabaseBuilder(app_context, SleepDatabase, "db")
            .fallback_to_destructive_migration()
            .set_migration_policy(MigrationPolicy.NONE)
        )

        assert builder.migration_policy is MigrationPolicy.NONE


class TestBuild:
    def test_in_memory_database(self, app_context):
        """Test that an in-memory database is private and fully set up."""
        first = DatabaseBuilder.in_memory(app_context, SleepDatabase).build()
        second = DatabaseBuilder.in_memory(app_context, SleepDatabase).build()
        try:
            first.sleep_database_dao.insert(SleepNight())

            assert first.path == ":memory:"
            assert first.get_stored_version() == 1
            assert len(first.sleep_database_dao.get_all_nights()) == 1
            assert second.sleep_database_dao.get_all_nights() == []
            assert not (app_context.data_dir / "databases").exists()
        finally:
            first.close()
            second.close()

    def test_file_database_uses_wal(self, app_context, built):
        database = built(DatabaseBuilder(app_context, SleepDatabase, "nights"))

        mode = database.connection.execute("PRAGMA journal_mode").fetchone()[0]
        assert mode.lower() == "wal"
        assert database.connection.execute("PRAGMA foreign_keys").fetchone()[0] == 1

    def test_version_mismatch_under_none_policy(self, app_context, built):
        built(DatabaseBuilder(app_context, SleepDatabase, "nights")).close()

        with pytest.raises(SchemaMismatchError):
            DatabaseBuilder(app_context, SleepDatabaseV2, "nights").build()

    def test_version_mismatch_without_migration_path(self, app_context, built):
        built(DatabaseBuilder(app_context, SleepDatabase, "nights")).close()
        builder = DatabaseBuilder(app_context, SleepDatabaseV2, "nights").add_migrations(
            Migration(3, 4, lambda cursor: None)
        )

        with pytest.raises(MigrationError):
            builder.build()

    def test_upgrade_through_migration_keeps_rows(self, app_context, built):
        first = built(DatabaseBuilder(app_context, SleepDatabase, "nights"))
        first.sleep_database_dao.insert(SleepNight(sleep_quality=2))
        first.close()

        upgraded = built(
            DatabaseBuilder(app_context, SleepDatabaseV2, "nights").add_migrations(
                Migration(1, 2, lambda cursor: None)
            )
        )

        assert upgraded.get_stored_version() == 2
        assert [n.sleep_quality for n in upgraded.sleep_database_dao.get_all_nights()] == [2]

    def test_corrupt_file_raises_construction_error(self, app_context):
        app_context.get_database_path("broken").write_bytes(b"\x00garbage" * 512)

        with pytest.raises(DatabaseConstructionError) as exc_info:
            DatabaseBuilder(app_context, SleepDatabase, "broken").build()

        assert exc_info.value.path.endswith("broken")
        assert isinstance(exc_info.value.__cause__, sqlite3.Error)

    def test_generic_local_database_subclass(self, app_context):
        """Test that any LocalDatabase subclass can be built."""

        class EmptyDatabase(LocalDatabase):
            ENTITIES = ()
            VERSION = 9

        database = DatabaseBuilder.in_memory(app_context, EmptyDatabase).build()
        try:
            assert isinstance(database, EmptyDatabase)
            assert database.get_table_names() == [SCHEMA_VERSION_TABLE]
            assert database.get_stored_version() == 9
        finally:
            database.close()


class TestCallbacks:
    def test_create_then_open_on_new_database(self, app_context, built):
        callback = RecordingCallback()

        built(DatabaseBuilder(app_context, SleepDatabase, "nights").add_callback(callback))

        assert callback.events == ["create", "open"]

    def test_open_only_on_existing_database(self, app_context, built):
        built(DatabaseBuilder(app_context, SleepDatabase, "nights")).close()
        callback = RecordingCallback()

        built(DatabaseBuilder(app_context, SleepDatabase, "nights").add_callback(callback))

        assert callback.events == ["open"]

    def test_destructive_sequence(self, app_context, built):
        built(DatabaseBuilder(app_context, SleepDatabase, "nights")).close()
        callback = RecordingCallback()

        built(
            DatabaseBuilder(app_context, SleepDatabaseV2, "nights")
            .fallback_to_destructive_migration()
            .add_callback(callback)
        )

        assert callback.events == ["destructive", "create", "open"]

    def test_callback_receives_usable_database(self, app_context):
        class SeedCallback(DatabaseCallback):
            def on_create(self, database):
                database.sleep_database_dao.insert(SleepNight(sleep_quality=0))

        database = (
            DatabaseBuilder.in_memory(app_context, SleepDatabase)
            .add_callback(SeedCallback())
            .build()
        )
        try:
            assert database.sleep_database_dao.get_tonight().sleep_quality == 0
        finally:
            database.close()


class TestSchemaExport:
    def test_export_writes_versioned_json(self, app_context, tmp_path):
        schema_dir = tmp_path / "schemas"
        database = (
            DatabaseBuilder.in_memory(app_context, SleepDatabase).export_schema(schema_dir).build()
        )
        database.close()

        assert list(schema_dir.rglob("*.json")) == [schema_dir / "1.json"]

        schema = json.loads((schema_dir / "1.json").read_text(encoding="utf-8"))
        assert schema["database"]["version"] == 1
        assert schema["database"]["class"].endswith(".SleepDatabase")
        entity = schema["database"]["entities"][0]
        assert entity["table_name"] == SleepNight.TABLE_NAME
        assert entity["create_sql"].startswith("CREATE TABLE IF NOT EXISTS")

    def test_no_export_by_default(self, app_context, tmp_path):
        DatabaseBuilder.in_memory(app_context, SleepDatabase).build().close()

        assert list(tmp_path.rglob("*.json")) == []
