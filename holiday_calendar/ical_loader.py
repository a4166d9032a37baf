"""Loader reading holidays from iCalendar (.ics) files."""

from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Optional, Union

from icalendar import Calendar, Event

from scheduling.models import Holiday


def _as_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _event_to_holiday(event: Event) -> Optional[Holiday]:
    """Convert a VEVENT into a holiday.

    All-day events use an exclusive DTEND (RFC 5545), so the last holiday
    is the day before it. Timed events end on the date of their DTEND.

    Args:
        event: The iCalendar event component.

    Returns:
        Holiday, or None if the event has no DTSTART.
    """
    dtstart = event.get("dtstart")
    if dtstart is None:
        return None

    start_value = dtstart.dt
    start_date = _as_date(start_value)

    dtend = event.get("dtend")
    if dtend is None:
        end_date = start_date
    elif isinstance(start_value, datetime):
        end_date = _as_date(dtend.dt)
    else:
        end_date = _as_date(dtend.dt) - timedelta(days=1)

    end_date = max(end_date, start_date)

    name = str(event.get("summary", "")) or "Holiday"
    color = event.get("color")

    return Holiday(
        name=name,
        start_date=start_date,
        end_date=end_date,
        color_hex=str(color) if color else None
    )


def parse_holidays(data: bytes) -> list[Holiday]:
    """Parse holidays from raw iCalendar data.

    Args:
        data: Content of an .ics file.

    Returns:
        Holidays in the order their events appear.

    Raises:
        ValueError: If the data is not valid iCalendar.
    """
    calendar = Calendar.from_ical(data)
    holidays: list[Holiday] = []

    for event in calendar.walk("VEVENT"):
        holiday = _event_to_holiday(event)
        if holiday is None:
            print(f"Warning: Skipping holiday event without DTSTART: {event.get('summary', '')}")
            continue
        holidays.append(holiday)

    return holidays


def load_holidays(path: Union[str, Path]) -> list[Holiday]:
    """Read holidays from an .ics file.

    Args:
        path: Path to the iCalendar file.

    Returns:
        List of holidays.
    """
    with open(path, "rb") as f:
        return parse_holidays(f.read())
