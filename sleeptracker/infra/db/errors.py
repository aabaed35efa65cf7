"""Module: errors.py

Author: Michael Economou
Date: 2026-10-12

Exceptions raised by the database layer.
"""


class DatabaseError(Exception):
    """Base class for database layer failures."""


class DatabaseConstructionError(DatabaseError):
    """The database could not be opened or its schema could not be prepared.

    The originating ``sqlite3.Error`` or ``OSError`` is chained as ``__cause__``.
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class SchemaMismatchError(DatabaseError):
    """Stored schema version differs and the policy forbids changing it."""

    def __init__(self, stored_version: int, expected_version: int):
        super().__init__(
            f"Stored schema version {stored_version} does not match expected "
            f"version {expected_version} and no migration is allowed"
        )
        self.stored_version = stored_version
        self.expected_version = expected_version


class MigrationError(DatabaseError):
    """No registered chain of migrations leads to the expected version."""

    def __init__(self, from_version: int, to_version: int):
        super().__init__(
            f"A migration from {from_version} to {to_version} was required but not found"
        )
        self.from_version = from_version
        self.to_version = to_version
