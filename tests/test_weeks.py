"""Tests for studytrack.weeks."""
from datetime import date

import pytest

from studytrack.schemas import DateRange, Day, day_for_date
from studytrack.weeks import WeekStatus, current_week_number, parse_start_date, week_date_range, week_status

START = date(2024, 1, 1)


@pytest.mark.parametrize("today,expected", [
    (date(2024, 1, 1), 1),
    (date(2024, 1, 7), 1),
    (date(2024, 1, 8), 2),
    (date(2024, 1, 14), 2),
    (date(2024, 1, 15), 3),
    (date(2024, 12, 31), 53),
    (date(2023, 12, 25), 1),
])
def test_current_week_number(today, expected):
    assert current_week_number(START, today) == expected


def test_week_number_accepts_iso_strings():
    assert current_week_number("2024-01-01T09:30:00.000Z", date(2024, 1, 9)) == 2


def test_week_date_range():
    assert week_date_range(1, START) == DateRange(start="2024-01-01", end="2024-01-07")
    assert week_date_range(2, "2024-01-01") == DateRange(start="2024-01-08", end="2024-01-14")


def test_week_range_matches_week_number():
    for week in range(1, 10):
        date_range = week_date_range(week, START)
        assert current_week_number(START, parse_start_date(date_range.start)) == week
        assert current_week_number(START, parse_start_date(date_range.end)) == week


def test_day_for_date():
    assert day_for_date(date(2024, 1, 1)) == Day.MONDAY
    assert day_for_date(date(2024, 1, 7)) == Day.SUNDAY


def test_week_status_transitions():
    record = object()
    assert week_status(None, 3, 3, stored=False) == WeekStatus.PENDING
    assert week_status(record, 3, 3, stored=False) == WeekStatus.INITIALIZED
    assert week_status(record, 3, 3, stored=True) == WeekStatus.ACTIVE
    assert week_status(record, 2, 3, stored=True) == WeekStatus.ARCHIVED
