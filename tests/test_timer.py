"""Tests for studytrack.timer."""
import pytest

from studytrack import timer
from studytrack.exceptions import SessionTooShortError
from studytrack.schemas import Skill


def test_new_timer_is_idle():
    state = timer.create_timer(10, Skill.SPEAKING)
    assert state.target_seconds == 600
    assert not state.is_running
    assert timer.elapsed_seconds(state, now=1000.0) == 0.0


def test_pause_and_resume_exclude_paused_time():
    state = timer.start(timer.create_timer(10, Skill.SPEAKING), now=100.0)
    state = timer.pause(state, now=160.0)
    assert timer.elapsed_seconds(state, now=400.0) == 60.0

    state = timer.resume(state, now=400.0)
    assert state.total_paused == 240.0
    assert timer.elapsed_seconds(state, now=430.0) == 90.0
    assert timer.remaining_seconds(state, now=430.0) == 510.0


def test_transitions_return_new_values():
    idle = timer.create_timer(5, Skill.READING)
    running = timer.start(idle, now=0.0)
    assert idle.start_time is None
    assert running.start_time == 0.0
    assert timer.start(running, now=50.0) == running
    assert timer.pause(idle, now=50.0) == idle


def test_reset_keeps_skill_and_target():
    state = timer.start(timer.create_timer(5, Skill.READING), now=0.0)
    fresh = timer.reset(state)
    assert fresh == timer.create_timer(5, Skill.READING)
    assert timer.reset(state, target_minutes=8).target_seconds == 480


def test_is_finished():
    state = timer.start(timer.create_timer(1, Skill.FLUENCY), now=0.0)
    assert not timer.is_finished(state, now=59.0)
    assert timer.is_finished(state, now=60.0)


def test_session_minutes_floor_and_minimum():
    state = timer.start(timer.create_timer(10, Skill.WRITING), now=0.0)
    with pytest.raises(SessionTooShortError):
        timer.session_minutes(state, now=59.9)
    assert timer.session_minutes(state, now=60.0) == 1
    assert timer.session_minutes(state, now=179.0) == 2


@pytest.mark.parametrize("planned,daily_goal,expected", [(12, 20, 12), (0, 20, 5), (0, 10, 3), (0, 0, 0)])
def test_default_target_minutes(planned, daily_goal, expected):
    assert timer.default_target_minutes(planned, daily_goal) == expected
