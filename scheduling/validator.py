"""Single entry point validating a class schedule request."""

from typing import TYPE_CHECKING, Optional

from .conflicts import ConflictChecker
from .errors import (
    InvalidInputError,
    ScheduleConflictError,
    UnresolvableScheduleError,
)
from .models import (
    ClassScheduleRequest,
    Rejected,
    Resolved,
    SchedulePeriod,
    ValidationResult,
    Weekday,
)
from .resolver import ScheduleResolver

if TYPE_CHECKING:
    from holiday_calendar.base import HolidayOracle
    from repository.base import ExistingSlotRepository


def check_request(request: ClassScheduleRequest) -> list[InvalidInputError]:
    """Return every structural problem of a request (empty when valid)."""
    errors: list[InvalidInputError] = []

    if not request.weekdays:
        errors.append(InvalidInputError("weekdays", request.weekdays, "at least one weekday is required"))
    elif not all(isinstance(day, Weekday) for day in request.weekdays):
        errors.append(InvalidInputError("weekdays", request.weekdays, "contains an unknown weekday"))

    total = request.total_sessions
    if isinstance(total, bool) or not isinstance(total, int) or total < 1:
        errors.append(InvalidInputError("total_sessions", total, "must be at least 1"))

    if not request.time_range.is_valid:
        errors.append(InvalidInputError("time_range", str(request.time_range), "end time must be after start time"))

    if not request.room_id:
        errors.append(InvalidInputError("room_id", request.room_id, "a room is required"))

    return errors


class ScheduleValidator:
    """Resolves a class schedule and checks it against the room's bookings.

    Validation is read-only: the repository is only read, never written.
    """

    def __init__(
        self,
        holiday_oracle: Optional["HolidayOracle"],
        repository: "ExistingSlotRepository",
        strict_period_overlap: bool = True,
        resolver: Optional[ScheduleResolver] = None
    ) -> None:
        self._holiday_oracle = holiday_oracle
        self._repository = repository
        self._resolver = resolver or ScheduleResolver()
        self._checker = ConflictChecker(strict_period_overlap=strict_period_overlap)

    def validate(self, request: ClassScheduleRequest) -> ValidationResult:
        """Validate a request.

        Args:
            request: The candidate class schedule.

        Returns:
            ``Resolved`` with the end date and session dates, or
            ``Rejected`` with every error found.

        Raises:
            PersistenceError: If the repository cannot be read.
        """
        input_errors = check_request(request)
        if input_errors:
            return Rejected(errors=tuple(input_errors))

        try:
            end_date, session_dates = self._resolver.resolve(
                request.start_date,
                request.total_sessions,
                request.weekdays,
                self._holiday_oracle
            )
        except (InvalidInputError, UnresolvableScheduleError) as e:
            return Rejected(errors=(e,))

        period = SchedulePeriod(request.start_date, end_date)
        slots = self._repository.load(request.room_id)
        conflicts = self._checker.find_conflicts(request, period, slots)

        if conflicts:
            return Rejected(errors=tuple(ScheduleConflictError(c) for c in conflicts))

        return Resolved(
            start_date=request.start_date,
            end_date=end_date,
            session_dates=tuple(session_dates)
        )


def validate(
    request: ClassScheduleRequest,
    holiday_oracle: Optional["HolidayOracle"],
    repository: "ExistingSlotRepository",
    strict_period_overlap: bool = True
) -> ValidationResult:
    """Validate a request with a one-off ``ScheduleValidator``."""
    validator = ScheduleValidator(
        holiday_oracle, repository, strict_period_overlap=strict_period_overlap
    )
    return validator.validate(request)
