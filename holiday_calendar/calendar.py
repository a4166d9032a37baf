"""In-memory holiday calendar built from holiday date ranges."""

from datetime import date, timedelta
from pathlib import Path
from typing import Iterable, Optional, Union

from scheduling.models import Holiday
from .base import HolidayOracle
from .ical_loader import load_holidays


class HolidayCalendar(HolidayOracle):
    """Holiday oracle backed by a fixed list of holidays.

    Every holiday range is expanded into single days up front so that
    lookups are a dictionary access. When ranges overlap, the holiday
    listed first wins.
    """

    def __init__(self, holidays: Iterable[Holiday] = ()) -> None:
        """Initialize the calendar.

        Args:
            holidays: Holidays to include.
        """
        self._holidays: list[Holiday] = list(holidays)
        self._by_day: dict[date, Holiday] = {}
        for holiday in self._holidays:
            self._cache_holiday(holiday)

    @classmethod
    def from_ics(cls, path: Union[str, Path]) -> "HolidayCalendar":
        """Build a calendar from the events of an iCalendar file."""
        return cls(load_holidays(path))

    def _cache_holiday(self, holiday: Holiday) -> None:
        current = holiday.start_date
        while current <= holiday.end_date:
            self._by_day.setdefault(current, holiday)
            current += timedelta(days=1)

    @property
    def holidays(self) -> list[Holiday]:
        return list(self._holidays)

    def holiday_for(self, day: date) -> Optional[Holiday]:
        """Return the holiday covering a day, or None."""
        return self._by_day.get(day)

    def is_holiday(self, day: date) -> bool:
        return day in self._by_day

    def __len__(self) -> int:
        return len(self._by_day)
