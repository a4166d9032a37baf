from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta

import pytest

from scheduling import (
    InvalidInputError,
    SchedulePeriod,
    ScheduleResolver,
    UnresolvableScheduleError,
    Weekday,
    count_sessions,
)
from scheduling.resolver import add_years

from helpers import SetHolidays, SundayHolidays

MON, WED, SUN = Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.SUNDAY


def test_resolves_monday_wednesday_without_holidays(no_holidays):
    end, sessions = ScheduleResolver().resolve(date(2024, 1, 1), 3, {MON, WED}, no_holidays)
    assert sessions == [date(2024, 1, 1), date(2024, 1, 3), date(2024, 1, 8)]
    assert end == date(2024, 1, 8)


def test_holiday_is_skipped_and_pushes_end_date():
    oracle = SetHolidays(date(2024, 1, 3))
    end, sessions = ScheduleResolver().resolve(date(2024, 1, 1), 3, {MON, WED}, oracle)
    assert sessions == [date(2024, 1, 1), date(2024, 1, 8), date(2024, 1, 10)]
    assert end == date(2024, 1, 10)


def test_start_date_not_on_selected_weekday():
    # 2024-01-02 is a Tuesday
    end, sessions = ScheduleResolver().resolve(date(2024, 1, 2), 1, {MON})
    assert sessions == [date(2024, 1, 8)]
    assert end == date(2024, 1, 8)


def test_single_session_skips_holiday_start():
    oracle = SetHolidays(date(2024, 1, 1))
    end, sessions = ScheduleResolver().resolve(date(2024, 1, 1), 1, {MON, WED}, oracle)
    assert sessions == [date(2024, 1, 3)]
    assert end == date(2024, 1, 3)


def test_holiday_oracle_none_means_no_holidays():
    end, _ = ScheduleResolver().resolve(date(2024, 1, 1), 2, {MON})
    assert end == date(2024, 1, 8)


@pytest.mark.parametrize("total", [0, -1, True, 2.5])
def test_invalid_session_count(total):
    with pytest.raises(InvalidInputError) as exc:
        ScheduleResolver().resolve(date(2024, 1, 1), total, {MON})
    assert exc.value.field == "total_sessions"


def test_empty_weekdays_is_invalid():
    with pytest.raises(InvalidInputError) as exc:
        ScheduleResolver().resolve(date(2024, 1, 1), 3, set())
    assert exc.value.field == "weekdays"


def test_every_selected_day_a_holiday_is_unresolvable():
    with pytest.raises(UnresolvableScheduleError) as exc:
        ScheduleResolver().resolve(date(2024, 1, 7), 200, {SUN}, SundayHolidays())
    err = exc.value
    assert err.kind == "unresolvable_schedule"
    assert err.sessions_found == 0
    assert err.total_sessions == 200
    assert err.horizon_end == date(2029, 1, 7)


def test_too_many_sessions_for_horizon():
    # About 261 Mondays fit into five years.
    with pytest.raises(UnresolvableScheduleError) as exc:
        ScheduleResolver().resolve(date(2024, 1, 1), 300, {MON})
    assert 250 < exc.value.sessions_found < 300


def test_custom_horizon():
    with pytest.raises(UnresolvableScheduleError):
        ScheduleResolver(max_horizon_years=1).resolve(date(2024, 1, 1), 60, {MON})


def test_session_on_horizon_day_is_counted():
    # 2029-01-01 is a Monday exactly five years after the start.
    start = date(2024, 1, 1)
    every_monday = SetHolidays(*[start + timedelta(days=7 * i) for i in range(261)])
    end, _ = ScheduleResolver().resolve(start, 1, {MON}, every_monday)
    assert end == date(2029, 1, 1)


def test_sessions_are_ordered_selected_non_holiday_days():
    oracle = SetHolidays(date(2024, 2, 12), date(2024, 2, 14), date(2024, 4, 30))
    weekdays = {Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY}
    end, sessions = ScheduleResolver().resolve(date(2024, 1, 5), 40, weekdays, oracle)

    assert len(sessions) == 40
    assert all(a < b for a, b in zip(sessions, sessions[1:]))
    assert all(day.weekday() in weekdays for day in sessions)
    assert not any(oracle.is_holiday(day) for day in sessions)
    assert sessions[-1] == end
    assert sessions[0] >= date(2024, 1, 5)


def test_resolve_is_deterministic_across_threads():
    oracle = SetHolidays(date(2024, 3, 4), date(2024, 3, 6))
    resolver = ScheduleResolver()

    def run(_):
        return resolver.resolve(date(2024, 2, 1), 25, {MON, WED}, oracle)

    expected = run(None)
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(run, range(16)))
    assert all(result == expected for result in results)


def test_count_sessions_matches_resolution():
    oracle = SetHolidays(date(2024, 1, 3))
    end, sessions = ScheduleResolver().resolve(date(2024, 1, 1), 10, {MON, WED}, oracle)
    period = SchedulePeriod(date(2024, 1, 1), end)
    assert count_sessions(period, {MON, WED}, oracle) == 10
    assert count_sessions(period, {MON, WED}) == 11


def test_add_years_clamps_leap_day():
    assert add_years(date(2024, 2, 29), 5) == date(2029, 2, 28)
    assert add_years(date(2024, 3, 1), 5) == date(2029, 3, 1)
    assert add_years(date(9996, 1, 1), 5) == date.max


def test_horizon_is_clamped_at_last_representable_date():
    # 9999-12-27 is the last Monday before date.max
    with pytest.raises(UnresolvableScheduleError) as exc:
        ScheduleResolver().resolve(date(9999, 12, 27), 2, {MON})
    assert exc.value.horizon_end == date.max
    assert exc.value.sessions_found == 1


def test_resolves_near_last_representable_date():
    end, sessions = ScheduleResolver().resolve(date(9999, 12, 20), 2, {MON})
    assert sessions == [date(9999, 12, 20), date(9999, 12, 27)]
    assert end == date(9999, 12, 27)
