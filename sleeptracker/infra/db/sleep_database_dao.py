"""Module: sleep_database_dao.py

Author: Michael Economou
Date: 2026-10-12

Data-access object for SleepNight rows.
Writes go through the database transaction (serialized and atomic);
database errors propagate to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sleeptracker.infra.db.sleep_night import SleepNight
from sleeptracker.utils.logging.logger_factory import get_cached_logger

if TYPE_CHECKING:
    from sleeptracker.infra.db.local_database import LocalDatabase

logger = get_cached_logger(__name__)

_TABLE = SleepNight.TABLE_NAME


class SleepDatabaseDao:
    """Queries against ``daily_sleep_quality_table``."""

    def __init__(self, database: LocalDatabase):
        self._database = database

    def insert(self, night: SleepNight) -> int:
        """Insert a night and return its id (also stored on ``night``)."""
        with self._database.transaction() as conn:
            if night.night_id:
                cursor = conn.execute(
                    f"""
                    INSERT INTO {_TABLE} (nightId, start_time_milli, end_time_milli, quality_rating)
                    VALUES (?, ?, ?, ?)
                    """,
                    (night.night_id, night.start_time_milli, night.end_time_milli, night.sleep_quality),
                )
            else:
                cursor = conn.execute(
                    f"""
                    INSERT INTO {_TABLE} (start_time_milli, end_time_milli, quality_rating)
                    VALUES (?, ?, ?)
                    """,
                    (night.start_time_milli, night.end_time_milli, night.sleep_quality),
                )
            night.night_id = cursor.lastrowid

        logger.debug("[SleepDatabaseDao] Inserted night %d", night.night_id, extra={"dev_only": True})
        return night.night_id

    def update(self, night: SleepNight) -> bool:
        """Overwrite a stored night. Returns False if no row has its id."""
        with self._database.transaction() as conn:
            cursor = conn.execute(
                f"""
                UPDATE {_TABLE}
                SET start_time_milli = ?, end_time_milli = ?, quality_rating = ?
                WHERE nightId = ?
                """,
                (night.start_time_milli, night.end_time_milli, night.sleep_quality, night.night_id),
            )
            return cursor.rowcount > 0

    def get(self, key: int) -> SleepNight | None:
        with self._database.reading() as conn:
            row = conn.execute(f"SELECT * FROM {_TABLE} WHERE nightId = ?", (key,)).fetchone()
        return SleepNight.from_row(row) if row else None

    def clear(self) -> int:
        """Delete every night. Returns the number of deleted rows."""
        with self._database.transaction() as conn:
            deleted = conn.execute(f"DELETE FROM {_TABLE}").rowcount

        logger.info("[SleepDatabaseDao] Cleared %d nights", deleted)
        return deleted

    def get_tonight(self) -> SleepNight | None:
        """Most recently inserted night."""
        with self._database.reading() as conn:
            row = conn.execute(
                f"SELECT * FROM {_TABLE} ORDER BY nightId DESC LIMIT 1"
            ).fetchone()
        return SleepNight.from_row(row) if row else None

    def get_all_nights(self) -> list[SleepNight]:
        """All nights, newest first."""
        with self._database.reading() as conn:
            rows = conn.execute(f"SELECT * FROM {_TABLE} ORDER BY nightId DESC").fetchall()
        return [SleepNight.from_row(row) for row in rows]
