"""
Practice tracking flow on top of the storage layer.

Loads (or lazily starts) the current week, merges sessions into it,
recomputes success rates from the profile's goals and keeps the cached
progress totals in step with the stored weeks.
"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from studytrack.crud import get_all_weekly_data, get_weekly_data, save_progress, save_weekly_data
from studytrack.database import commit_or_rollback
from studytrack.goals import compute_daily_goals
from studytrack.ledger import merge_into_week
from studytrack.models import UserProfile
from studytrack.planner import planned_for_day
from studytrack.schemas import (
    DailyPractice,
    ProgressData,
    Skill,
    TimeBudget,
    WeeklyData,
    WeeklyGoals,
    WeeklyReflection,
    WeeklySchedulePlan,
    day_for_date,
)
from studytrack.success import compute_success_rates, summarize_progress
from studytrack.timer import TimerState, default_target_minutes, session_minutes
from studytrack.weeks import current_week_number, week_date_range

logger = logging.getLogger(__name__)


def profile_goals(profile: UserProfile) -> WeeklyGoals:
    return WeeklyGoals.model_validate(profile.weekly_goals)


def new_week(week_number: int, start_date: date) -> WeeklyData:
    """Empty record for a week that has no stored data yet"""
    return WeeklyData(
        week_number=week_number,
        date_range=week_date_range(week_number, start_date),
    )


def load_week(db: Session, profile: UserProfile, week_number: int) -> WeeklyData:
    return get_weekly_data(db, profile.id, week_number) or new_week(week_number, profile.start_date)


def load_current_week(db: Session, profile: UserProfile, today: Optional[date] = None) -> WeeklyData:
    """
    The week containing `today`.

    A week without a stored record is created in memory with all-zero
    practice; it is written on the first save.
    """
    week_number = current_week_number(profile.start_date, today)
    return load_week(db, profile, week_number)


def update_weekly_data(db: Session, profile: UserProfile, data: WeeklyData) -> WeeklyData:
    """
    Recompute success rates, store the week and refresh the progress cache.

    The week and the cache are committed together; if either write fails
    neither is kept.
    """
    rates = compute_success_rates(data.daily_practice, profile_goals(profile))
    updated = data.model_copy(update={"success_rates": rates})
    try:
        save_weekly_data(db, profile.id, updated, commit=False)
        refresh_progress(db, profile, commit=False)
    except SQLAlchemyError:
        db.rollback()
        logger.warning("Week %s not saved for profile %s", updated.week_number, profile.id)
        raise
    commit_or_rollback(db)
    return updated


def record_practice(
    db: Session,
    profile: UserProfile,
    skill: Skill,
    minutes: int,
    today: Optional[date] = None
) -> WeeklyData:
    """Add practiced minutes for a skill to the day `today` falls on"""
    today = today or date.today()
    week = load_current_week(db, profile, today)
    practice = merge_into_week(week.daily_practice, day_for_date(today), skill, minutes)
    logger.info("Recorded %s min of %s on %s", minutes, skill.value, today.isoformat())
    return update_weekly_data(db, profile, week.model_copy(update={"daily_practice": practice}))


def record_timed_session(
    db: Session,
    profile: UserProfile,
    state: TimerState,
    now: float,
    today: Optional[date] = None
) -> WeeklyData:
    """Save a stopwatch session; under a minute raises SessionTooShortError"""
    minutes = session_minutes(state, now)
    return record_practice(db, profile, state.skill, minutes, today)


def save_reflection(db: Session, profile: UserProfile, week_number: int, reflection: WeeklyReflection) -> WeeklyData:
    week = load_week(db, profile, week_number)
    return update_weekly_data(db, profile, week.model_copy(update={"weekly_reflection": reflection}))


def refresh_progress(db: Session, profile: UserProfile, commit: bool = True) -> ProgressData:
    """Rebuild the aggregate progress from every stored week"""
    progress = summarize_progress(get_all_weekly_data(db, profile.id), profile.motivation)
    save_progress(db, profile.id, progress, commit=commit)
    return progress


def todays_plan(profile: UserProfile, today: Optional[date] = None) -> DailyPractice:
    plan = WeeklySchedulePlan.model_validate(profile.schedule_plan)
    return planned_for_day(plan, day_for_date(today or date.today()))


def session_target_minutes(profile: UserProfile, skill: Skill, today: Optional[date] = None) -> int:
    """Stopwatch target for a skill: today's plan, else a share of the daily goal"""
    daily_goals = compute_daily_goals(profile_goals(profile), TimeBudget.model_validate(profile.budget))
    return default_target_minutes(
        todays_plan(profile, today).minutes_for(skill),
        daily_goals.minutes_for(skill)
    )
