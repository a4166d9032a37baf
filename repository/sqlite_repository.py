"""SQLite-backed store of committed classes."""

import sqlite3
from datetime import date, time
from pathlib import Path
from typing import Any, Union

from scheduling.conflicts import ConflictChecker
from scheduling.errors import DuplicateClassError, PersistenceError, ScheduleConflictError
from scheduling.models import (
    ClassScheduleRequest,
    ExistingSlot,
    Resolved,
    SchedulePeriod,
    TimeRange,
    parse_weekdays,
)
from .base import ExistingSlotRepository


class SqliteSlotRepository(ExistingSlotRepository):
    """Slot repository reading the ``courses`` table of a SQLite database.

    Each row is one class meeting on one or more weekdays, stored as a
    comma-separated ``days_of_week`` column (e.g. ``"Mon,Wed"``). Rows are
    expanded into one slot per weekday when loaded.

    New classes go through ``commit()``, which repeats the conflict check
    and inserts the row inside one write transaction, so a booking that
    appeared after validation is still caught.
    """

    SCHEMA = """
        CREATE TABLE IF NOT EXISTS courses (
            course_id    TEXT PRIMARY KEY,
            start_date   TEXT NOT NULL,
            end_date     TEXT NOT NULL,
            days_of_week TEXT NOT NULL,
            start_time   TEXT NOT NULL,
            end_time     TEXT NOT NULL,
            room_id      TEXT NOT NULL
        )
    """

    SELECT_BY_ROOM = (
        "SELECT course_id, start_date, end_date, days_of_week, start_time, end_time, room_id "
        "FROM courses WHERE room_id = ?"
    )

    INSERT = (
        "INSERT INTO courses "
        "(course_id, start_date, end_date, days_of_week, start_time, end_time, room_id) "
        "VALUES (?, ?, ?, ?, ?, ?, ?)"
    )

    REPLACE = (
        "INSERT OR REPLACE INTO courses "
        "(course_id, start_date, end_date, days_of_week, start_time, end_time, room_id) "
        "VALUES (?, ?, ?, ?, ?, ?, ?)"
    )

    def __init__(self, database: Union[str, Path], timeout: float = 5.0) -> None:
        """Open the database.

        Args:
            database: Path to the SQLite file, or ":memory:".
            timeout: Seconds to wait for a lock held by another writer.

        Raises:
            PersistenceError: If the database cannot be opened.
        """
        try:
            # Autocommit mode: transactions are opened explicitly in commit().
            self._conn = sqlite3.connect(str(database), timeout=timeout, isolation_level=None)
        except sqlite3.Error as e:
            raise PersistenceError("open", e) from e

    def __enter__(self) -> "SqliteSlotRepository":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._conn.close()

    def create_schema(self) -> None:
        """Create the ``courses`` table if it does not exist."""
        try:
            self._conn.execute(self.SCHEMA)
        except sqlite3.Error as e:
            raise PersistenceError("create_schema", e) from e

    def _row_to_slots(self, row: tuple) -> list[ExistingSlot]:
        course_id, start_date, end_date, days_of_week, start_time, end_time, room_id = row
        weekdays = parse_weekdays(days_of_week)
        if not weekdays:
            raise ValueError("no weekdays")
        period = SchedulePeriod(date.fromisoformat(start_date), date.fromisoformat(end_date))
        time_range = TimeRange(time.fromisoformat(start_time), time.fromisoformat(end_time))

        return [
            ExistingSlot(
                class_id=str(course_id),
                room_id=room_id,
                weekday=weekday,
                time_range=time_range,
                period=period
            )
            for weekday in sorted(weekdays)
        ]

    def _load_slots(self, room_id: str) -> list[ExistingSlot]:
        slots: list[ExistingSlot] = []
        for row in self._conn.execute(self.SELECT_BY_ROOM, (room_id,)):
            try:
                slots.extend(self._row_to_slots(row))
            except (ValueError, TypeError, AttributeError) as e:
                print(f"Warning: Skipping invalid course row {row[0]!r}: {e}")
        return slots

    def load(self, room_id: str) -> list[ExistingSlot]:
        try:
            return self._load_slots(room_id)
        except sqlite3.Error as e:
            raise PersistenceError("load", e) from e

    def commit(
        self,
        class_id: str,
        request: ClassScheduleRequest,
        resolved: Resolved,
        strict_period_overlap: bool = True
    ) -> None:
        """Store a validated class, re-checking conflicts under a write lock.

        Editing an existing class is done by passing its id both as
        ``class_id`` and as ``request.exclude_class_id``; only then is the
        stored row replaced.

        Args:
            class_id: Identifier of the class to store.
            request: The request that was validated.
            resolved: The validation result holding the derived end date.
            strict_period_overlap: Conflict policy, as in ``ConflictChecker``.

        Raises:
            ScheduleConflictError: If a conflicting class was stored in the
                meantime. Nothing is written.
            DuplicateClassError: If ``class_id`` is already stored and the
                request is not an edit of that class. Nothing is written.
            PersistenceError: If the database cannot be read or written.
        """
        checker = ConflictChecker(strict_period_overlap=strict_period_overlap)
        days = ",".join(day.short_label for day in sorted(request.weekdays))
        statement = self.REPLACE if class_id == request.exclude_class_id else self.INSERT

        try:
            self._conn.execute("BEGIN IMMEDIATE")
            try:
                slots = self._load_slots(request.room_id)
                conflicts = checker.find_conflicts(request, resolved.period, slots)
                if conflicts:
                    raise ScheduleConflictError(conflicts[0], conflicts)

                try:
                    self._conn.execute(statement, (
                        class_id,
                        resolved.start_date.isoformat(),
                        resolved.end_date.isoformat(),
                        days,
                        request.time_range.start.isoformat(),
                        request.time_range.end.isoformat(),
                        request.room_id,
                    ))
                except sqlite3.IntegrityError as e:
                    raise DuplicateClassError(class_id) from e
            except BaseException:
                self._conn.execute("ROLLBACK")
                raise
            self._conn.execute("COMMIT")
        except sqlite3.Error as e:
            raise PersistenceError("commit", e) from e

