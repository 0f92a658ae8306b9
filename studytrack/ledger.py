from typing import Dict

from studytrack.schemas import (
    DAYS_OF_WEEK,
    SKILLS,
    Day,
    DailyPractice,
    Skill,
    WeeklyPractice,
)

SECONDS_PER_MINUTE = 60


def empty_daily_practice() -> DailyPractice:
    return DailyPractice()


def empty_weekly_practice() -> WeeklyPractice:
    return WeeklyPractice()


def minutes_from_seconds(elapsed_seconds: float) -> int:
    """Whole minutes in an elapsed time; partial minutes are dropped"""
    if elapsed_seconds <= 0:
        return 0
    return int(elapsed_seconds // SECONDS_PER_MINUTE)


def total_for_skill(weekly_practice: WeeklyPractice, skill: Skill) -> int:
    return weekly_practice.skill_total(skill)


def total_for_day(daily_practice: DailyPractice) -> int:
    return daily_practice.total()


def total_for_week(weekly_practice: WeeklyPractice) -> int:
    return sum(total_for_day(weekly_practice.for_day(day)) for day in DAYS_OF_WEEK)


def merge_session(daily_practice: DailyPractice, skill: Skill, additional_minutes: int) -> DailyPractice:
    """
    Add a finished session's minutes to one skill of a day.

    Args:
        daily_practice: The day's record so far
        skill: Skill that was practiced
        additional_minutes: Whole minutes to add (0 leaves the day unchanged)

    Returns:
        New DailyPractice; the input is not modified
    """
    if isinstance(additional_minutes, bool) or not isinstance(additional_minutes, int):
        raise ValueError("Session minutes must be a whole number")
    if additional_minutes < 0:
        raise ValueError("Session minutes cannot be negative")
    if additional_minutes == 0:
        return daily_practice
    return daily_practice.with_minutes(skill, daily_practice.minutes_for(skill) + additional_minutes)


def merge_into_week(weekly_practice: WeeklyPractice, day: Day, skill: Skill, additional_minutes: int) -> WeeklyPractice:
    """merge_session applied to one day of a week"""
    daily = merge_session(weekly_practice.for_day(day), skill, additional_minutes)
    return weekly_practice.with_day(day, daily)


def totals_by_skill(weekly_practice: WeeklyPractice) -> Dict[Skill, int]:
    return {skill: total_for_skill(weekly_practice, skill) for skill in SKILLS}
