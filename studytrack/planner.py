"""Weekly schedule plan: default split, per-cell edits and completeness checks."""

from typing import Dict, List, Sequence

from studytrack.goals import compute_weekly_goals
from studytrack.schemas import (
    DAYS_OF_WEEK,
    SKILLS,
    Day,
    DailyPractice,
    Skill,
    SkillAllocation,
    SkillDelta,
    TimeBudget,
    WeeklyGoals,
    WeeklySchedulePlan,
)

# Max 2 hours per skill per day
MAX_MINUTES_PER_CELL = 120


def empty_plan() -> WeeklySchedulePlan:
    return WeeklySchedulePlan()


def distribute_evenly(goal_minutes: int, active_days: Sequence[Day]) -> Dict[Day, int]:
    """
    Split goal minutes across days as evenly as possible.

    The first `goal_minutes % len(active_days)` days get one extra minute,
    so the values add up to goal_minutes and differ by at most 1.

    Args:
        goal_minutes: Minutes to distribute (negative counts as 0)
        active_days: Days to fill, in the order the remainder is handed out

    Returns:
        Dict of day -> minutes (empty when no days are given)
    """
    days = list(active_days)
    if not days:
        return {}

    goal_minutes = max(0, goal_minutes)
    base, remainder = divmod(goal_minutes, len(days))
    return {
        day: base + (1 if index < remainder else 0)
        for index, day in enumerate(days)
    }


def _set_skill(plan: WeeklySchedulePlan, skill: Skill, minutes_by_day: Dict[Day, int]) -> WeeklySchedulePlan:
    """Replace one skill on every day; days missing from the dict get 0"""
    for day in DAYS_OF_WEEK:
        daily = plan.for_day(day).with_minutes(skill, minutes_by_day.get(day, 0))
        plan = plan.with_day(day, daily)
    return plan


def generate_default_plan(allocation: SkillAllocation, budget: TimeBudget) -> WeeklySchedulePlan:
    """Even split of every weekly goal across the first `days_per_week` days"""
    weekly_goals = compute_weekly_goals(allocation, budget)
    days_active = min(max(budget.days_per_week, 0), len(DAYS_OF_WEEK))
    active_days = DAYS_OF_WEEK[:days_active]

    plan = empty_plan()
    for skill in SKILLS:
        plan = _set_skill(plan, skill, distribute_evenly(weekly_goals.minutes_for(skill), active_days))
    return plan


def auto_distribute_skill(plan: WeeklySchedulePlan, skill: Skill, weekly_goals: WeeklyGoals) -> WeeklySchedulePlan:
    """Rebalance a single skill over all seven days, leaving other skills alone"""
    return _set_skill(plan, skill, distribute_evenly(weekly_goals.minutes_for(skill), DAYS_OF_WEEK))


def update_cell(plan: WeeklySchedulePlan, day: Day, skill: Skill, minutes: int) -> WeeklySchedulePlan:
    """Set one day/skill entry, clamped to [0, MAX_MINUTES_PER_CELL]"""
    minutes = max(0, min(int(minutes), MAX_MINUTES_PER_CELL))
    return plan.with_day(day, plan.for_day(day).with_minutes(skill, minutes))


def planned_total(plan: WeeklySchedulePlan, skill: Skill) -> int:
    return plan.skill_total(skill)


def is_complete(plan: WeeklySchedulePlan, weekly_goals: WeeklyGoals) -> bool:
    """True when every skill's seven-day total equals its weekly goal"""
    return all(planned_total(plan, skill) == weekly_goals.minutes_for(skill) for skill in SKILLS)


def diagnose(plan: WeeklySchedulePlan, weekly_goals: WeeklyGoals) -> List[SkillDelta]:
    """
    List the skills whose planned total differs from the goal.

    delta_minutes is planned minus goal: positive means over-allocated,
    negative means minutes are still missing.
    """
    deltas = []
    for skill in SKILLS:
        delta = planned_total(plan, skill) - weekly_goals.minutes_for(skill)
        if delta != 0:
            deltas.append(SkillDelta(skill=skill, delta_minutes=delta))
    return deltas


def remaining_minutes(plan: WeeklySchedulePlan, weekly_goals: WeeklyGoals) -> Dict[Skill, int]:
    """Minutes still to assign per skill (never negative)"""
    return {
        skill: max(0, weekly_goals.minutes_for(skill) - planned_total(plan, skill))
        for skill in SKILLS
    }


def planned_for_day(plan: WeeklySchedulePlan, day: Day) -> DailyPractice:
    return plan.for_day(day)
