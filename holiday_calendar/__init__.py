"""Holiday calendar module answering which days have no classes."""

from .base import HolidayOracle
from .calendar import HolidayCalendar
from .ical_loader import load_holidays, parse_holidays

__all__ = ["HolidayCalendar", "HolidayOracle", "load_holidays", "parse_holidays"]
