"""Tests for studytrack.tracker."""
from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from studytrack.crud import create_profile, get_progress, get_weekly_data
from studytrack.exceptions import SessionTooShortError
from studytrack.schemas import Skill, WeeklyReflection
from studytrack import timer, tracker
from studytrack.tracker import (
    load_current_week,
    record_practice,
    record_timed_session,
    save_reflection,
    session_target_minutes,
    todays_plan,
)


@pytest.fixture
def profile(db, profile_data):
    return create_profile(db, profile_data)


def test_current_week_is_created_lazily(db, profile):
    week = load_current_week(db, profile, date(2024, 1, 10))

    assert week.week_number == 2
    assert week.date_range.start == "2024-01-08"
    assert week.daily_practice.wednesday.total() == 0
    assert get_weekly_data(db, profile.id, 2) is None


def test_record_practice_updates_rates_and_progress(db, profile):
    # 2024-01-03 is a Wednesday in week 1
    week = record_practice(db, profile, Skill.SPEAKING, 10, date(2024, 1, 3))
    week = record_practice(db, profile, Skill.SPEAKING, 15, date(2024, 1, 4))

    assert week.daily_practice.wednesday.speaking == 10
    assert week.daily_practice.thursday.speaking == 15
    assert week.success_rates.speaking == 1.0
    assert week.success_rates.listening == 0.0

    stored = get_weekly_data(db, profile.id, 1)
    assert stored.success_rates.speaking == 1.0

    progress = get_progress(db, profile.id)
    assert progress.total_minutes == 25
    assert progress.average_success_rate == pytest.approx(1 / 6)
    assert [w.week_number for w in progress.weekly_history] == [1]


def test_progress_averages_weeks(db, profile):
    record_practice(db, profile, Skill.SPEAKING, 20, date(2024, 1, 2))
    record_practice(db, profile, Skill.LISTENING, 8, date(2024, 1, 9))

    progress = get_progress(db, profile.id)
    assert progress.total_minutes == 28
    assert progress.average_success_rate == pytest.approx((1 / 6 + 0.5 / 6) / 2)


def test_timed_session(db, profile):
    state = timer.start(timer.create_timer(5, Skill.READING), now=0.0)

    with pytest.raises(SessionTooShortError):
        record_timed_session(db, profile, state, now=30.0, today=date(2024, 1, 1))
    assert get_weekly_data(db, profile.id, 1) is None

    week = record_timed_session(db, profile, state, now=250.0, today=date(2024, 1, 1))
    assert week.daily_practice.monday.reading == 4
    assert week.success_rates.reading == pytest.approx(0.25)


def test_save_reflection_keeps_practice(db, profile):
    record_practice(db, profile, Skill.WRITING, 6, date(2024, 1, 5))
    reflection = WeeklyReflection(hard_work_rating="Yes", on_track_rating="Mostly", mood_rating="Happy", star_rating=4)

    week = save_reflection(db, profile, 1, reflection)

    assert week.weekly_reflection.star_rating == 4
    assert get_weekly_data(db, profile.id, 1).daily_practice.friday.writing == 6


def test_todays_plan_and_session_target(profile):
    monday = date(2024, 1, 1)
    saturday = date(2024, 1, 6)
    assert todays_plan(profile, monday).speaking == 5
    assert session_target_minutes(profile, Skill.SPEAKING, monday) == 5
    # nothing planned on Saturday: a quarter of the daily goal (5 / 4)
    assert session_target_minutes(profile, Skill.SPEAKING, saturday) == 1


def test_failed_progress_write_keeps_the_week_unsaved(db, profile, monkeypatch):
    record_practice(db, profile, Skill.SPEAKING, 10, date(2024, 1, 3))

    def failing_save(*args, **kwargs):
        raise OperationalError("UPDATE progress_snapshots", {}, Exception("disk I/O error"))

    monkeypatch.setattr(tracker, "save_progress", failing_save)
    with pytest.raises(OperationalError):
        record_practice(db, profile, Skill.SPEAKING, 5, date(2024, 1, 4))
    with pytest.raises(OperationalError):
        record_practice(db, profile, Skill.READING, 5, date(2024, 1, 9))
    monkeypatch.undo()

    week = get_weekly_data(db, profile.id, 1)
    assert week.daily_practice.wednesday.speaking == 10
    assert week.daily_practice.thursday.speaking == 0
    assert week.success_rates.speaking == pytest.approx(0.5)
    assert get_weekly_data(db, profile.id, 2) is None
    assert get_progress(db, profile.id).total_minutes == 10

    # retrying after the failure counts the minutes once
    week = record_practice(db, profile, Skill.SPEAKING, 5, date(2024, 1, 4))
    assert week.daily_practice.thursday.speaking == 5
    assert get_progress(db, profile.id).total_minutes == 15
