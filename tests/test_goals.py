"""Tests for studytrack.goals."""
import pytest

from studytrack.goals import compute_daily_goals, compute_weekly_goals, round_half_up, summarize_budget
from studytrack.schemas import SKILLS, SkillAllocation, TimeBudget, WeeklyGoals, validate_allocation, validate_budget


def test_weekly_goals_scenario(allocation, budget):
    goals = compute_weekly_goals(allocation, budget)
    assert goals == WeeklyGoals(listening=16, reading=16, writing=12, speaking=20, fluency=8, pronunciation=8)
    assert goals.total() == 80


def test_rounding_is_half_up_and_drift_is_kept():
    allocation = SkillAllocation(listening=25, reading=75)
    goals = compute_weekly_goals(allocation, TimeBudget(days_per_week=1, minutes_per_day=10))
    # 2.5 -> 3 and 7.5 -> 8: one minute more than the budget
    assert goals.listening == 3
    assert goals.reading == 8
    assert goals.total() == 11


@pytest.mark.parametrize("value,expected", [(0.5, 1), (1.5, 2), (2.5, 3), (2.4999, 2), (-2.5, -3), (7, 7)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


@pytest.mark.parametrize("days,minutes", [(1, 1), (3, 7), (4, 20), (5, 33), (7, 240), (6, 101)])
def test_goal_drift_is_bounded(days, minutes):
    allocations = [
        SkillAllocation(listening=17, reading=17, writing=17, speaking=17, fluency=16, pronunciation=16),
        SkillAllocation(listening=1, reading=1, writing=1, speaking=1, fluency=1, pronunciation=95),
        SkillAllocation(listening=33, reading=33, writing=34),
        SkillAllocation(speaking=100),
    ]
    for allocation in allocations:
        goals = compute_weekly_goals(allocation, TimeBudget(days_per_week=days, minutes_per_day=minutes))
        assert abs(goals.total() - days * minutes) <= len(SKILLS)


@pytest.mark.parametrize("days,minutes", [(0, 30), (4, 0), (-2, 30), (3, -10)])
def test_zero_or_negative_budget_gives_zero_goals(allocation, days, minutes):
    goals = compute_weekly_goals(allocation, TimeBudget(days_per_week=days, minutes_per_day=minutes))
    assert goals == WeeklyGoals()


def test_daily_goals(allocation, budget):
    daily = compute_daily_goals(compute_weekly_goals(allocation, budget), budget)
    assert daily.speaking == 5
    assert daily.writing == 3
    assert daily.fluency == 2


def test_daily_goals_zero_days():
    daily = compute_daily_goals(WeeklyGoals(speaking=30), TimeBudget(days_per_week=0, minutes_per_day=10))
    assert daily == WeeklyGoals()


def test_validate_allocation_is_exact():
    assert validate_allocation(SkillAllocation(listening=50, reading=50))
    assert not validate_allocation(SkillAllocation(listening=50, reading=49))
    assert not validate_allocation(SkillAllocation(listening=51, reading=50))


def test_validate_budget_ranges():
    assert validate_budget(TimeBudget(days_per_week=1, minutes_per_day=1))
    assert validate_budget(TimeBudget(days_per_week=7, minutes_per_day=240))
    assert not validate_budget(TimeBudget(days_per_week=8, minutes_per_day=20))
    assert not validate_budget(TimeBudget(days_per_week=3, minutes_per_day=241))
    assert not validate_budget(TimeBudget(days_per_week=0, minutes_per_day=20))


def test_summarize_budget(budget):
    summary = summarize_budget(budget)
    assert summary.weekly_minutes == 80
    assert summary.weekly_hours == 1
    assert summary.remaining_minutes == 20
    assert summary.monthly_hours == 6
    assert summary.yearly_hours == 69
