from typing import Iterable

from studytrack.ledger import total_for_skill, total_for_week
from studytrack.schemas import (
    SKILLS,
    ProgressData,
    SuccessRates,
    WeeklyData,
    WeeklyGoals,
    WeeklyPractice,
)


def compute_success_rates(weekly_practice: WeeklyPractice, weekly_goals: WeeklyGoals) -> SuccessRates:
    """
    Practiced minutes over goal minutes per skill, capped at 1.0.

    A skill with a zero goal reports 0 rather than being left undefined.
    """
    rates = {}
    for skill in SKILLS:
        goal = weekly_goals.minutes_for(skill)
        if goal > 0:
            rates[skill.value] = min(total_for_skill(weekly_practice, skill) / goal, 1.0)
        else:
            rates[skill.value] = 0.0
    return SuccessRates(**rates)


def compute_average_success_rate(success_rates: SuccessRates) -> float:
    """Mean over all six skills, zero-goal skills included"""
    rates = success_rates.values()
    return sum(rates) / len(rates)


def summarize_progress(history: Iterable[WeeklyData], motivation: str = "Neutral") -> ProgressData:
    """Aggregate totals and the average weekly success over every stored week"""
    weeks = sorted(history, key=lambda week: week.week_number)
    total_minutes = sum(total_for_week(week.daily_practice) for week in weeks)

    if weeks:
        average = sum(compute_average_success_rate(week.success_rates) for week in weeks) / len(weeks)
    else:
        average = 0.0

    return ProgressData(
        total_minutes=total_minutes,
        total_hours=total_minutes // 60,
        average_success_rate=average,
        weekly_history=weeks,
        current_motivation=motivation,
    )


def format_minutes(minutes: int) -> str:
    """Format minutes as '45 min', '2 hr' or '1 hr 30 min'"""
    hours, mins = divmod(minutes, 60)
    if hours == 0:
        return f"{mins} min"
    if mins == 0:
        return f"{hours} hr"
    return f"{hours} hr {mins} min"
