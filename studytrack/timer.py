"""
Practice session stopwatch.

The timer is a plain value: every transition takes the current state and the
current time in seconds and returns a new state. The caller owns the single
live instance and decides where (if anywhere) to keep it between runs.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from studytrack.exceptions import SessionTooShortError
from studytrack.goals import round_half_up
from studytrack.ledger import SECONDS_PER_MINUTE, minutes_from_seconds
from studytrack.schemas import Skill

MIN_SESSION_SECONDS = 60


class TimerState(BaseModel):
    """Snapshot of a practice stopwatch"""
    skill: Skill
    target_seconds: int
    is_running: bool = False
    start_time: Optional[float] = None
    total_paused: float = 0.0
    pause_start: Optional[float] = None

    class Config:
        frozen = True


def create_timer(target_minutes: int, skill: Skill) -> TimerState:
    return TimerState(skill=skill, target_seconds=max(0, target_minutes) * SECONDS_PER_MINUTE)


def start(state: TimerState, now: float) -> TimerState:
    """Start a fresh timer, or resume a paused one"""
    if state.is_running:
        return state
    if state.start_time is None:
        return state.model_copy(update={"is_running": True, "start_time": now})

    pause_duration = now - state.pause_start if state.pause_start is not None else 0.0
    return state.model_copy(update={
        "is_running": True,
        "total_paused": state.total_paused + max(0.0, pause_duration),
        "pause_start": None,
    })


resume = start


def pause(state: TimerState, now: float) -> TimerState:
    if not state.is_running:
        return state
    return state.model_copy(update={"is_running": False, "pause_start": now})


def reset(state: TimerState, target_minutes: Optional[int] = None) -> TimerState:
    """Back to zero for the same skill, optionally with a new target"""
    if target_minutes is None:
        return TimerState(skill=state.skill, target_seconds=state.target_seconds)
    return create_timer(target_minutes, state.skill)


def elapsed_seconds(state: TimerState, now: float) -> float:
    """Running time excluding pauses"""
    if state.start_time is None:
        return 0.0
    elapsed = now - state.start_time - state.total_paused
    if not state.is_running and state.pause_start is not None:
        elapsed -= now - state.pause_start
    return max(0.0, elapsed)


def remaining_seconds(state: TimerState, now: float) -> float:
    return max(0.0, state.target_seconds - elapsed_seconds(state, now))


def is_finished(state: TimerState, now: float) -> bool:
    return state.start_time is not None and elapsed_seconds(state, now) >= state.target_seconds


def session_minutes(state: TimerState, now: float) -> int:
    """Minutes to record for the session; shorter than a minute is rejected"""
    elapsed = elapsed_seconds(state, now)
    if elapsed < MIN_SESSION_SECONDS:
        raise SessionTooShortError(elapsed, MIN_SESSION_SECONDS)
    return minutes_from_seconds(elapsed)


def default_target_minutes(planned_today: int, daily_goal: int) -> int:
    """Today's planned minutes, else a quarter of the daily goal"""
    if planned_today:
        return planned_today
    return round_half_up(Decimal(daily_goal) / 4)
