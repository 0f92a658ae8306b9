from studytrack.crud.user import (
    create_profile,
    get_profile,
    get_active_profile,
    require_profile,
    to_schema,
    update_allocation,
    update_budget,
    save_schedule_plan,
    complete_onboarding,
    is_onboarded,
    set_motivation
)
from studytrack.crud.weekly_data import get_weekly_data, save_weekly_data, get_all_weekly_data
from studytrack.crud.progress import get_progress, save_progress

__all__ = [
    "create_profile",
    "get_profile",
    "get_active_profile",
    "require_profile",
    "to_schema",
    "update_allocation",
    "update_budget",
    "save_schedule_plan",
    "complete_onboarding",
    "is_onboarded",
    "set_motivation",
    "get_weekly_data",
    "save_weekly_data",
    "get_all_weekly_data",
    "get_progress",
    "save_progress",
]
