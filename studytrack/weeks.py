"""Calendar arithmetic for week numbers and their date ranges."""

from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional, Union

from studytrack.schemas import DateRange, WeeklyData

DAYS_PER_WEEK = 7


class WeekStatus(str, Enum):
    """Lifecycle of a week's practice record"""
    PENDING = "pending"          # week number known, nothing stored or loaded
    INITIALIZED = "initialized"  # created empty on first access, not saved yet
    ACTIVE = "active"            # saved at least once and still the current week
    ARCHIVED = "archived"        # the current week has moved on


def parse_start_date(value: Union[str, date]) -> date:
    """Accept an ISO date string (time part ignored) or a date"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value[:10], "%Y-%m-%d").date()


def current_week_number(start_date: Union[str, date], today: Optional[date] = None) -> int:
    """
    1-based week index of `today` counted from the start date.

    The start day itself counts as day 1, so days 1-7 are week 1,
    days 8-14 week 2 and so on. Dates before the start fall in week 1.
    """
    start = parse_start_date(start_date)
    today = today or date.today()
    inclusive_days = (today - start).days + 1
    if inclusive_days < 1:
        return 1
    return -(-inclusive_days // DAYS_PER_WEEK)


def week_date_range(week_number: int, start_date: Union[str, date]) -> DateRange:
    """First and last ISO date of a week"""
    start = parse_start_date(start_date)
    week_start = start + timedelta(days=(week_number - 1) * DAYS_PER_WEEK)
    week_end = week_start + timedelta(days=DAYS_PER_WEEK - 1)
    return DateRange(start=week_start.isoformat(), end=week_end.isoformat())


def week_status(record: Optional[WeeklyData], week_number: int, current_week: int, stored: bool) -> WeekStatus:
    """
    Where a week sits in its lifecycle.

    Args:
        record: The loaded or freshly created record, None if never accessed
        week_number: Week being asked about
        current_week: Week number of today
        stored: Whether the record has been saved
    """
    if week_number < current_week and stored:
        return WeekStatus.ARCHIVED
    if record is None:
        return WeekStatus.PENDING
    if not stored:
        return WeekStatus.INITIALIZED
    return WeekStatus.ACTIVE
