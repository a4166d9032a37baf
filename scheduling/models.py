"""Data models for weekly class schedules."""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import IntEnum
from typing import Optional, Union

from .errors import InvalidInputError, ScheduleError


class Weekday(IntEnum):
    """Day of the week, numbered like ``date.weekday()`` (Monday = 0)."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def short_label(self) -> str:
        return self.label[:3]

    @classmethod
    def of(cls, day: date) -> "Weekday":
        return cls(day.weekday())

    @classmethod
    def parse(cls, label: str) -> "Weekday":
        """Parse a weekday label.

        Accepts English names and abbreviations ("Mon", "monday"), ISO
        day numbers ("1" = Monday .. "7" = Sunday) and the Vietnamese
        labels used by the center ("Thứ 2" .. "Thứ 7", "Chủ nhật", "CN").

        Raises:
            InvalidInputError: If the label is not recognised.
        """
        key = " ".join(label.strip().lower().split())
        try:
            return _WEEKDAY_LABELS[key]
        except KeyError:
            raise InvalidInputError("weekday", label, "unknown weekday label") from None


_WEEKDAY_LABELS: dict[str, Weekday] = {}
for _day in Weekday:
    _WEEKDAY_LABELS[_day.name.lower()] = _day
    _WEEKDAY_LABELS[_day.name.lower()[:3]] = _day
    _WEEKDAY_LABELS[str(_day.value + 1)] = _day
for _number in range(2, 8):
    _WEEKDAY_LABELS[f"thứ {_number}"] = Weekday(_number - 2)
    _WEEKDAY_LABELS[f"t{_number}"] = Weekday(_number - 2)
_WEEKDAY_LABELS.update({"chủ nhật": Weekday.SUNDAY, "cn": Weekday.SUNDAY})
del _day, _number


def parse_weekdays(text: str) -> frozenset[Weekday]:
    """Parse a comma-separated list of weekday labels, e.g. ``"Mon, Wed"``."""
    return frozenset(Weekday.parse(part) for part in text.split(",") if part.strip())


@dataclass(frozen=True)
class TimeRange:
    """Wall-clock time range of one weekly session, half-open ``[start, end)``."""

    start: time
    end: time

    @property
    def is_valid(self) -> bool:
        return self.end > self.start

    @property
    def duration_minutes(self) -> int:
        today = date.today()
        delta = datetime.combine(today, self.end) - datetime.combine(today, self.start)
        return int(delta.total_seconds() // 60)

    def overlaps(self, other: "TimeRange") -> bool:
        """Return True if both ranges share some instant.

        Touching ranges (one ends exactly when the other starts) do not
        overlap.
        """
        return self.start < other.end and other.start < self.end

    def __str__(self) -> str:
        return f"{self.start:%H:%M}-{self.end:%H:%M}"


@dataclass(frozen=True)
class SchedulePeriod:
    """Inclusive calendar date range during which a class meets."""

    start_date: date
    end_date: date

    def __post_init__(self) -> None:
        if self.end_date < self.start_date:
            raise ValueError(
                f"Period end {self.end_date} is before its start {self.start_date}"
            )

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def overlaps(self, other: "SchedulePeriod") -> bool:
        return self.start_date <= other.end_date and other.start_date <= self.end_date


@dataclass(frozen=True)
class Holiday:
    """A named range of non-instructional days, both ends inclusive."""

    name: str
    start_date: date
    end_date: date
    color_hex: Optional[str] = None

    def __post_init__(self) -> None:
        if self.end_date < self.start_date:
            raise ValueError(f"Holiday '{self.name}' ends before it starts")


@dataclass(frozen=True)
class ClassScheduleRequest:
    """Parameters of a class to be created or edited.

    ``exclude_class_id`` names the class being edited so that its own
    stored slots are not reported as conflicts.
    """

    start_date: date
    total_sessions: int
    weekdays: frozenset[Weekday]
    time_range: TimeRange
    room_id: str
    exclude_class_id: Optional[str] = None


@dataclass(frozen=True)
class ExistingSlot:
    """One weekly slot of a class that is already committed."""

    class_id: str
    room_id: str
    weekday: Weekday
    time_range: TimeRange
    period: SchedulePeriod

    def __post_init__(self) -> None:
        if not isinstance(self.weekday, Weekday):
            raise ValueError(f"Weekday must be a Weekday, got {self.weekday!r}")
        if not self.time_range.is_valid:
            raise ValueError("Start time must be before end time")


@dataclass(frozen=True)
class Conflict:
    """An existing slot that collides with the candidate on one weekday."""

    weekday: Weekday
    conflicting_class_id: str
    conflicting_time_range: TimeRange
    room_id: str
    conflicting_period: Optional[SchedulePeriod] = None


@dataclass(frozen=True)
class Resolved:
    """Successful validation: the derived end date and every session date."""

    start_date: date
    end_date: date
    session_dates: tuple[date, ...]

    ok = True

    @property
    def period(self) -> SchedulePeriod:
        return SchedulePeriod(self.start_date, self.end_date)

    def total_hours(self, time_range: TimeRange) -> float:
        """Total teaching hours: sessions times the length of one session."""
        if not time_range.is_valid:
            return 0.0
        return len(self.session_dates) * time_range.duration_minutes / 60.0


@dataclass(frozen=True)
class Rejected:
    """Failed validation with every error that was found."""

    errors: tuple[ScheduleError, ...] = field(default_factory=tuple)

    ok = False


ValidationResult = Union[Resolved, Rejected]
