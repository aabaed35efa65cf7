"""Module: migration_policy.py

Author: Michael Economou
Date: 2026-10-12

What to do when the stored schema version differs from the declared one.
"""

from enum import Enum


class MigrationPolicy(Enum):
    """Schema mismatch policy.

    DESTRUCTIVE: drop every table and recreate an empty schema. Registered
        migrations are still preferred when they form a complete path.
    INCREMENTAL: run the registered migration steps; fail if none lead to the
        declared version.
    NONE: fail on any mismatch.
    """

    DESTRUCTIVE = "destructive"
    INCREMENTAL = "incremental"
    NONE = "none"


class SchemaOutcome(Enum):
    """What schema reconciliation did to the database file."""

    CREATED = "created"
    UNCHANGED = "unchanged"
    MIGRATED = "migrated"
    RECREATED = "recreated"
