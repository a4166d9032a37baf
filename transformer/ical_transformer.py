"""iCalendar transformer for resolved class sessions."""

import hashlib
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from icalendar import Calendar, Event

from scheduling.models import ClassScheduleRequest, Resolved
from .base import BaseTransformer


class ICalTransformer(BaseTransformer):
    """Transformer that writes every session of a class as an iCalendar event.

    Sessions are emitted one by one rather than as a weekly RRULE, since
    holidays leave gaps in the weekly pattern.
    """

    TIMEZONE = "Asia/Ho_Chi_Minh"
    UID_DOMAIN = "class-schedule.local"

    def __init__(self, timezone: Optional[str] = None) -> None:
        """Initialize the iCalendar transformer.

        Args:
            timezone: IANA timezone name of the session times. Defaults to
                ``TIMEZONE``.
        """
        self._calendar: Optional[Calendar] = None
        self._timezone_name = timezone or self.TIMEZONE
        self._timezone = ZoneInfo(self._timezone_name)

    def _generate_uid(self, request: ClassScheduleRequest, session_date: date) -> str:
        """Generate a unique identifier for one session.

        Args:
            request: The class request.
            session_date: Date of the session.

        Returns:
            Unique identifier string, stable across exports.
        """
        unique_string = (
            f"{request.room_id}-{session_date}-"
            f"{request.time_range.start}-{request.time_range.end}"
        )
        return hashlib.md5(unique_string.encode()).hexdigest() + "@" + self.UID_DOMAIN

    def transform(
        self,
        request: ClassScheduleRequest,
        resolved: Resolved,
        summary: str
    ) -> Calendar:
        """Transform the resolved sessions into iCalendar format.

        Args:
            request: The validated class request.
            resolved: The resolved schedule.
            summary: Title of each session event.

        Returns:
            iCalendar Calendar object.
        """
        self._calendar = Calendar()
        self._calendar.add("prodid", "-//Class Schedule//class-schedule//EN")
        self._calendar.add("version", "2.0")
        self._calendar.add("calscale", "GREGORIAN")
        self._calendar.add("method", "PUBLISH")
        self._calendar.add("x-wr-calname", summary)
        self._calendar.add("x-wr-timezone", self._timezone_name)

        total = len(resolved.session_dates)
        stamp = datetime.now(self._timezone)

        for number, session_date in enumerate(resolved.session_dates, start=1):
            ical_event = Event()

            ical_event.add("uid", self._generate_uid(request, session_date))
            ical_event.add("dtstart", datetime.combine(
                session_date, request.time_range.start, tzinfo=self._timezone
            ))
            ical_event.add("dtend", datetime.combine(
                session_date, request.time_range.end, tzinfo=self._timezone
            ))
            ical_event.add("dtstamp", stamp)
            ical_event.add("summary", f"{summary} ({number}/{total})")

            if request.room_id:
                ical_event.add("location", request.room_id)

            self._calendar.add_component(ical_event)

        return self._calendar

    def save(self, output_path: str) -> None:
        """Save the calendar to an .ics file.

        Args:
            output_path: Path to the output file.

        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        if self._calendar is None:
            raise RuntimeError("No calendar data. Call transform() first.")

        with open(output_path, "wb") as f:
            f.write(self._calendar.to_ical())
