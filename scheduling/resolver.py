"""Resolution of a recurring weekly class into concrete session dates."""

import calendar
from datetime import MAXYEAR, date, timedelta
from typing import TYPE_CHECKING, Iterable, Iterator, Optional

from .errors import InvalidInputError, UnresolvableScheduleError
from .models import SchedulePeriod, Weekday

if TYPE_CHECKING:
    from holiday_calendar.base import HolidayOracle


def add_years(day: date, years: int) -> date:
    """Add calendar years to a date.

    Feb 29 becomes Feb 28 in a non-leap target year, and results past
    ``date.max`` are clamped to ``date.max``.
    """
    year = day.year + years
    if year > MAXYEAR:
        return date.max
    last_day = calendar.monthrange(year, day.month)[1]
    return day.replace(year=year, day=min(day.day, last_day))


def _days(first: date, last: date) -> Iterator[date]:
    """Yield every day from ``first`` to ``last`` inclusive."""
    for offset in range((last - first).days + 1):
        yield first + timedelta(days=offset)


class ScheduleResolver:
    """Derives the end date and session calendar of a weekly class.

    Walks forward one day at a time from the start date, counting each
    non-holiday day whose weekday is selected, until the requested number
    of sessions is placed. The walk never goes further than
    ``max_horizon_years`` past the start date.
    """

    MAX_HORIZON_YEARS = 5

    def __init__(self, max_horizon_years: Optional[int] = None) -> None:
        self._max_horizon_years = (
            max_horizon_years if max_horizon_years is not None else self.MAX_HORIZON_YEARS
        )

    def resolve(
        self,
        start_date: date,
        total_sessions: int,
        weekdays: Iterable[Weekday],
        holiday_oracle: Optional["HolidayOracle"] = None
    ) -> tuple[date, list[date]]:
        """Compute the end date and the ordered list of session dates.

        Args:
            start_date: First day a session may fall on.
            total_sessions: Number of sessions to place (at least 1).
            weekdays: Weekdays the class meets on (non-empty).
            holiday_oracle: Source of non-instructional days. ``None``
                means no holidays.

        Returns:
            Tuple of (end date, session dates). The end date is the last
            session date.

        Raises:
            InvalidInputError: If the session count or weekdays are invalid.
            UnresolvableScheduleError: If the horizon is reached first.
        """
        if isinstance(total_sessions, bool) or not isinstance(total_sessions, int) or total_sessions < 1:
            raise InvalidInputError("total_sessions", total_sessions, "must be at least 1")

        selected = frozenset(weekdays)
        if not selected:
            raise InvalidInputError("weekdays", selected, "at least one weekday is required")

        horizon_end = add_years(start_date, self._max_horizon_years)
        session_dates: list[date] = []

        for current in _days(start_date, horizon_end):
            if holiday_oracle is not None and holiday_oracle.is_holiday(current):
                continue

            if current.weekday() in selected:
                session_dates.append(current)
                if len(session_dates) == total_sessions:
                    return current, session_dates

        raise UnresolvableScheduleError(
            start_date=start_date,
            total_sessions=total_sessions,
            weekdays=selected,
            horizon_end=horizon_end,
            sessions_found=len(session_dates)
        )


def count_sessions(
    period: SchedulePeriod,
    weekdays: Iterable[Weekday],
    holiday_oracle: Optional["HolidayOracle"] = None
) -> int:
    """Count the sessions a weekly class has inside a period."""
    selected = frozenset(weekdays)
    count = 0
    for current in _days(period.start_date, period.end_date):
        if current.weekday() in selected and not (
            holiday_oracle is not None and holiday_oracle.is_holiday(current)
        ):
            count += 1
    return count
