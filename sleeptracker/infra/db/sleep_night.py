"""Module: sleep_night.py

Author: Michael Economou
Date: 2026-10-12

SleepNight entity: one tracked night and its quality rating.
"""

import sqlite3
import time
from dataclasses import dataclass, field
from typing import ClassVar


def current_time_millis() -> int:
    return int(time.time() * 1000)


@dataclass
class SleepNight:
    """A single night of sleep.

    ``night_id`` 0 means "not stored yet"; the database assigns the id on insert.
    ``end_time_milli`` defaults to the start time until the night is finished,
    ``sleep_quality`` stays -1 until the user rates it.
    """

    TABLE_NAME: ClassVar[str] = "daily_sleep_quality_table"
    INDEXES: ClassVar[tuple[str, ...]] = ()

    night_id: int = 0
    start_time_milli: int = field(default_factory=current_time_millis)
    end_time_milli: int | None = None
    sleep_quality: int = -1

    def __post_init__(self):
        if self.end_time_milli is None:
            self.end_time_milli = self.start_time_milli

    @classmethod
    def create_table_sql(cls) -> str:
        return f"""
            CREATE TABLE IF NOT EXISTS {cls.TABLE_NAME} (
                nightId INTEGER PRIMARY KEY AUTOINCREMENT NOT NULL,
                start_time_milli INTEGER NOT NULL,
                end_time_milli INTEGER NOT NULL,
                quality_rating INTEGER NOT NULL
            )
        """

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "SleepNight":
        return cls(
            night_id=row["nightId"],
            start_time_milli=row["start_time_milli"],
            end_time_milli=row["end_time_milli"],
            sleep_quality=row["quality_rating"],
        )
