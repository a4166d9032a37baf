"""Abstract base class for holiday sources."""

from abc import ABC, abstractmethod
from datetime import date


class HolidayOracle(ABC):
    """Abstract base class answering whether a day is a holiday.

    Extend this class to plug in other holiday sources (e.g. a database
    table or a public holiday API). Implementations must be free of side
    effects: the same day always gets the same answer.
    """

    @abstractmethod
    def is_holiday(self, day: date) -> bool:
        """Check whether no classes are held on a day.

        Args:
            day: The calendar date to check.

        Returns:
            True if the day is a holiday.
        """
        pass
