"""Shared builders for requests, slots and holiday oracles used across the tests."""

from datetime import date, time

from holiday_calendar import HolidayOracle
from scheduling import (
    ClassScheduleRequest,
    ExistingSlot,
    SchedulePeriod,
    TimeRange,
    Weekday,
)


class SetHolidays(HolidayOracle):
    def __init__(self, *days):
        self.days = set(days)

    def is_holiday(self, day):
        return day in self.days


class SundayHolidays(HolidayOracle):
    def is_holiday(self, day):
        return day.weekday() == Weekday.SUNDAY


def tr(start, end):
    """TimeRange from "HH:MM" strings."""
    return TimeRange(time.fromisoformat(start), time.fromisoformat(end))


def make_request(
    weekdays=(Weekday.MONDAY,),
    start="08:00",
    end="09:30",
    room="P101",
    start_date=date(2024, 1, 1),
    total_sessions=3,
    exclude=None,
):
    return ClassScheduleRequest(
        start_date=start_date,
        total_sessions=total_sessions,
        weekdays=frozenset(weekdays),
        time_range=tr(start, end),
        room_id=room,
        exclude_class_id=exclude,
    )


def make_slot(
    class_id="X",
    weekday=Weekday.MONDAY,
    start="09:00",
    end="10:00",
    room="P101",
    period=(date(2024, 1, 1), date(2024, 6, 30)),
):
    return ExistingSlot(
        class_id=class_id,
        room_id=room,
        weekday=weekday,
        time_range=tr(start, end),
        period=SchedulePeriod(*period),
    )
