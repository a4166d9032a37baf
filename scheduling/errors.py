"""Error taxonomy for schedule resolution and conflict detection."""

from datetime import date
from typing import Any, Iterable, Optional


class ScheduleError(Exception):
    """Base class for every error produced while validating a class schedule.

    Subclasses keep their details as attributes so that callers can
    format or localize them without parsing the message text.
    """

    kind = "schedule_error"


class InvalidInputError(ScheduleError, ValueError):
    """Malformed request: empty weekdays, bad session count, bad time range."""

    kind = "invalid_input"

    def __init__(self, field: str, value: Any, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} ({value!r}): {reason}")


class UnresolvableScheduleError(ScheduleError):
    """The resolver reached its horizon before placing every session."""

    kind = "unresolvable_schedule"

    def __init__(
        self,
        start_date: date,
        total_sessions: int,
        weekdays: Iterable[Any],
        horizon_end: date,
        sessions_found: int
    ) -> None:
        self.start_date = start_date
        self.total_sessions = total_sessions
        self.weekdays = frozenset(weekdays)
        self.horizon_end = horizon_end
        self.sessions_found = sessions_found
        super().__init__(
            f"Cannot place {total_sessions} sessions between {start_date} "
            f"and {horizon_end}: only {sessions_found} available"
        )


class ScheduleConflictError(ScheduleError):
    """The candidate class overlaps an existing class in the same room."""

    kind = "schedule_conflict"

    def __init__(self, conflict: Any, conflicts: Optional[list[Any]] = None) -> None:
        self.conflict = conflict
        self.conflicts = conflicts if conflicts is not None else [conflict]
        super().__init__(
            f"Room {conflict.room_id} is taken on {conflict.weekday.label} "
            f"{conflict.conflicting_time_range} by class {conflict.conflicting_class_id}"
        )


class PersistenceError(ScheduleError):
    """Reading or writing the slot store failed."""

    kind = "persistence"

    def __init__(self, operation: str, cause: Optional[BaseException] = None) -> None:
        self.operation = operation
        self.cause = cause
        message = f"Slot store {operation} failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class DuplicateClassError(ScheduleError):
    """A new class was committed under an id that is already stored."""

    kind = "duplicate_class"

    def __init__(self, class_id: str) -> None:
        self.class_id = class_id
        super().__init__(f"Class {class_id} is already stored")
