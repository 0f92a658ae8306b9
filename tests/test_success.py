"""Tests for studytrack.success."""
import pytest

from studytrack.schemas import DailyPractice, DateRange, SuccessRates, WeeklyData, WeeklyGoals, WeeklyPractice
from studytrack.success import (
    compute_average_success_rate,
    compute_success_rates,
    format_minutes,
    summarize_progress,
)

GOALS = WeeklyGoals(listening=16, reading=16, writing=12, speaking=20, fluency=8, pronunciation=0)


def test_overachieving_is_capped():
    practice = WeeklyPractice(monday=DailyPractice(speaking=10), tuesday=DailyPractice(speaking=15))
    rates = compute_success_rates(practice, GOALS)
    assert rates.speaking == 1.0


def test_exactly_met_goal_is_one():
    practice = WeeklyPractice(friday=DailyPractice(writing=12))
    assert compute_success_rates(practice, GOALS).writing == 1.0


def test_partial_and_zero_goal_rates():
    practice = WeeklyPractice(monday=DailyPractice(listening=4, pronunciation=30))
    rates = compute_success_rates(practice, GOALS)
    assert rates.listening == pytest.approx(0.25)
    assert rates.reading == 0.0
    # zero goal reports 0 even with practice recorded
    assert rates.pronunciation == 0.0


def test_average_includes_zero_goal_skills():
    rates = SuccessRates(listening=1.0, reading=1.0, writing=1.0, speaking=1.0, fluency=1.0, pronunciation=0.0)
    assert compute_average_success_rate(rates) == pytest.approx(5 / 6)


def _week(number: int, speaking: int, rates: SuccessRates) -> WeeklyData:
    return WeeklyData(
        week_number=number,
        date_range=DateRange(start="2024-01-01", end="2024-01-07"),
        daily_practice=WeeklyPractice(monday=DailyPractice(speaking=speaking)),
        success_rates=rates,
    )


def test_summarize_progress_orders_and_averages():
    week2 = _week(2, 50, SuccessRates(speaking=0.6))
    week1 = _week(1, 80, SuccessRates(listening=1.0, speaking=1.0, reading=1.0))

    progress = summarize_progress([week2, week1], motivation="Happy")

    assert [w.week_number for w in progress.weekly_history] == [1, 2]
    assert progress.total_minutes == 130
    assert progress.total_hours == 2
    assert progress.average_success_rate == pytest.approx((0.5 + 0.1) / 2)
    assert progress.current_motivation == "Happy"


def test_summarize_empty_history():
    progress = summarize_progress([])
    assert progress.total_minutes == 0
    assert progress.average_success_rate == 0.0


@pytest.mark.parametrize("minutes,expected", [(0, "0 min"), (45, "45 min"), (60, "1 hr"), (90, "1 hr 30 min"), (125, "2 hr 5 min")])
def test_format_minutes(minutes, expected):
    assert format_minutes(minutes) == expected
