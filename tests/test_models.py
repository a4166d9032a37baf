from datetime import date, time

import pytest

from scheduling import (
    Holiday,
    InvalidInputError,
    SchedulePeriod,
    TimeRange,
    Weekday,
    parse_weekdays,
)

from helpers import make_slot, tr


@pytest.mark.parametrize("label,expected", [
    ("Mon", Weekday.MONDAY),
    ("monday", Weekday.MONDAY),
    (" WED ", Weekday.WEDNESDAY),
    ("7", Weekday.SUNDAY),
    ("Thứ 2", Weekday.MONDAY),
    ("thứ  7", Weekday.SATURDAY),
    ("T4", Weekday.WEDNESDAY),
    ("Chủ nhật", Weekday.SUNDAY),
    ("CN", Weekday.SUNDAY),
])
def test_weekday_parse(label, expected):
    assert Weekday.parse(label) is expected


@pytest.mark.parametrize("label", ["", "Funday", "8", "Thứ 8"])
def test_weekday_parse_unknown(label):
    with pytest.raises(InvalidInputError) as exc:
        Weekday.parse(label)
    assert exc.value.field == "weekday"


def test_weekday_matches_date_weekday():
    assert Weekday.of(date(2024, 1, 1)) is Weekday.MONDAY
    assert Weekday.of(date(2024, 1, 7)) is Weekday.SUNDAY
    assert Weekday.FRIDAY.label == "Friday"
    assert Weekday.FRIDAY.short_label == "Fri"


def test_parse_weekdays():
    assert parse_weekdays("Mon, Wed,Fri") == {Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.FRIDAY}
    assert parse_weekdays("Thứ 2, Thứ 4") == {Weekday.MONDAY, Weekday.WEDNESDAY}
    assert parse_weekdays("") == frozenset()


def test_time_range():
    morning = tr("08:00", "09:30")
    assert morning.is_valid
    assert morning.duration_minutes == 90
    assert str(morning) == "08:00-09:30"
    assert not TimeRange(time(9), time(9)).is_valid
    assert not morning.overlaps(tr("09:30", "10:00"))
    assert morning.overlaps(tr("09:29", "10:00"))


def test_period_rejects_reversed_dates():
    with pytest.raises(ValueError):
        SchedulePeriod(date(2024, 2, 1), date(2024, 1, 1))


def test_period_contains_and_overlaps():
    period = SchedulePeriod(date(2024, 1, 1), date(2024, 1, 31))
    assert period.contains(date(2024, 1, 31))
    assert not period.contains(date(2024, 2, 1))
    assert period.overlaps(SchedulePeriod(date(2024, 1, 31), date(2024, 3, 1)))
    assert not period.overlaps(SchedulePeriod(date(2024, 2, 1), date(2024, 3, 1)))


def test_holiday_rejects_reversed_dates():
    with pytest.raises(ValueError):
        Holiday("Tet", date(2024, 2, 14), date(2024, 2, 8))


def test_existing_slot_validation():
    with pytest.raises(ValueError):
        make_slot(start="10:00", end="09:00")
    with pytest.raises(ValueError):
        make_slot(weekday=0)
