"""Scheduling module for resolving weekly classes and detecting room conflicts."""

from .conflicts import ConflictChecker, slots_overlap
from .errors import (
    DuplicateClassError,
    InvalidInputError,
    PersistenceError,
    ScheduleConflictError,
    ScheduleError,
    UnresolvableScheduleError,
)
from .models import (
    ClassScheduleRequest,
    Conflict,
    ExistingSlot,
    Holiday,
    Rejected,
    Resolved,
    SchedulePeriod,
    TimeRange,
    ValidationResult,
    Weekday,
    parse_weekdays,
)
from .resolver import ScheduleResolver, count_sessions
from .validator import ScheduleValidator, check_request, validate

__all__ = [
    "ClassScheduleRequest",
    "Conflict",
    "ConflictChecker",
    "DuplicateClassError",
    "ExistingSlot",
    "Holiday",
    "InvalidInputError",
    "PersistenceError",
    "Rejected",
    "Resolved",
    "ScheduleConflictError",
    "ScheduleError",
    "SchedulePeriod",
    "ScheduleResolver",
    "ScheduleValidator",
    "TimeRange",
    "UnresolvableScheduleError",
    "ValidationResult",
    "Weekday",
    "check_request",
    "count_sessions",
    "parse_weekdays",
    "slots_overlap",
    "validate",
]
