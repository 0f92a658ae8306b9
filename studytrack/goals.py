from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from studytrack.schemas import (
    SKILLS,
    BudgetSummary,
    SkillAllocation,
    TimeBudget,
    WeeklyGoals,
)

WEEKS_PER_MONTH = Decimal("4.33")
WEEKS_PER_YEAR = 52


def round_half_up(value: Union[int, float, Decimal]) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3)"""
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def compute_weekly_goals(allocation: SkillAllocation, budget: TimeBudget) -> WeeklyGoals:
    """
    Derive weekly minute goals from skill priorities and the time budget.

    Each skill is rounded on its own, so the goals may add up to a few
    minutes more or less than the budget. That drift is kept as is: the
    planner distributes exactly these numbers.

    Args:
        allocation: Percentage per skill (caller checks the sum)
        budget: Days per week and minutes per day

    Returns:
        WeeklyGoals with non-negative minutes per skill
    """
    total_weekly_minutes = budget.total_minutes()
    if budget.days_per_week <= 0 or budget.minutes_per_day <= 0:
        return WeeklyGoals()

    goals = {}
    for skill in SKILLS:
        share = Decimal(allocation.minutes_for(skill)) / 100 * total_weekly_minutes
        goals[skill.value] = max(0, round_half_up(share))
    return WeeklyGoals(**goals)


def compute_daily_goals(weekly_goals: WeeklyGoals, budget: TimeBudget) -> WeeklyGoals:
    """Per-study-day target for each skill (weekly goal / days per week)"""
    if budget.days_per_week <= 0:
        return WeeklyGoals()
    return WeeklyGoals(**{
        skill.value: round_half_up(Decimal(weekly_goals.minutes_for(skill)) / budget.days_per_week)
        for skill in SKILLS
    })


def summarize_budget(budget: TimeBudget) -> BudgetSummary:
    """Weekly, monthly and yearly totals shown while choosing a budget"""
    weekly_minutes = max(0, budget.total_minutes())
    weekly_hours = weekly_minutes // 60
    remaining_minutes = weekly_minutes % 60
    hours = Decimal(weekly_hours) + Decimal(remaining_minutes) / 60
    return BudgetSummary(
        weekly_minutes=weekly_minutes,
        weekly_hours=weekly_hours,
        remaining_minutes=remaining_minutes,
        monthly_hours=round_half_up(hours * WEEKS_PER_MONTH),
        yearly_hours=round_half_up(hours * WEEKS_PER_YEAR),
    )
