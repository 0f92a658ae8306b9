import logging
from sqlalchemy.orm import Session
from studytrack.config import settings
from studytrack.database import commit_or_rollback
from studytrack.exceptions import IncompletePlanError, ProfileNotFoundError
from studytrack.goals import compute_weekly_goals
from studytrack.models import UserProfile
from studytrack.planner import diagnose, generate_default_plan, is_complete
from studytrack.schemas import (
    MOTIVATION_LEVELS,
    ProfileCreate,
    ProfileResponse,
    SkillAllocation,
    TimeBudget,
    WeeklyGoals,
    WeeklySchedulePlan,
    validate_allocation,
    validate_budget,
)
from typing import Optional

logger = logging.getLogger(__name__)

def create_profile(db: Session, profile: ProfileCreate) -> UserProfile:
    """Create a profile with derived goals and the default schedule plan"""
    goals = compute_weekly_goals(profile.allocation, profile.budget)
    plan = generate_default_plan(profile.allocation, profile.budget)
    
    db_profile = UserProfile(
        allocation=profile.allocation.model_dump(mode="json"),
        days_per_week=profile.budget.days_per_week,
        minutes_per_day=profile.budget.minutes_per_day,
        start_date=profile.start_date,
        weekly_goals=goals.model_dump(mode="json"),
        schedule_plan=plan.model_dump(mode="json"),
        motivation=settings.default_motivation
    )
    db.add(db_profile)
    commit_or_rollback(db)
    db.refresh(db_profile)
    logger.info("Created profile %s (%s min/week)", db_profile.id, profile.budget.total_minutes())
    return db_profile

def get_profile(db: Session, profile_id: int) -> Optional[UserProfile]:
    """Get profile by ID"""
    return db.query(UserProfile).filter(UserProfile.id == profile_id).first()

def get_active_profile(db: Session) -> Optional[UserProfile]:
    """The app is single-user: the first profile is the active one"""
    return db.query(UserProfile).order_by(UserProfile.id).first()

def require_profile(db: Session, profile_id: int) -> UserProfile:
    db_profile = get_profile(db, profile_id)
    if not db_profile:
        raise ProfileNotFoundError(profile_id)
    return db_profile

def to_schema(db_profile: UserProfile) -> ProfileResponse:
    return ProfileResponse.model_validate(db_profile)

def _apply_goals(db_profile: UserProfile, allocation: SkillAllocation, budget: TimeBudget):
    """Recompute goals; a plan that no longer matches them is replaced by the default one"""
    goals = compute_weekly_goals(allocation, budget)
    plan = WeeklySchedulePlan.model_validate(db_profile.schedule_plan)
    if not is_complete(plan, goals):
        logger.warning(
            "Schedule plan for profile %s no longer matches its goals, regenerating",
            db_profile.id
        )
        plan = generate_default_plan(allocation, budget)
    db_profile.weekly_goals = goals.model_dump(mode="json")
    db_profile.schedule_plan = plan.model_dump(mode="json")

def update_allocation(db: Session, profile_id: int, allocation: SkillAllocation) -> UserProfile:
    """Replace skill priorities after re-validating the full set"""
    if not validate_allocation(allocation):
        raise ValueError(f"Skill percentages must add up to 100 (got {allocation.total()})")
    db_profile = require_profile(db, profile_id)
    budget = TimeBudget.model_validate(db_profile.budget)
    db_profile.allocation = allocation.model_dump(mode="json")
    _apply_goals(db_profile, allocation, budget)
    commit_or_rollback(db)
    db.refresh(db_profile)
    return db_profile

def update_budget(db: Session, profile_id: int, budget: TimeBudget) -> UserProfile:
    """Change the time budget and recompute everything derived from it"""
    if not validate_budget(budget):
        raise ValueError("Days per week must be 1-7 and minutes per day 1-240")
    db_profile = require_profile(db, profile_id)
    allocation = SkillAllocation.model_validate(db_profile.allocation)
    db_profile.days_per_week = budget.days_per_week
    db_profile.minutes_per_day = budget.minutes_per_day
    _apply_goals(db_profile, allocation, budget)
    commit_or_rollback(db)
    db.refresh(db_profile)
    return db_profile

def save_schedule_plan(db: Session, profile_id: int, plan: WeeklySchedulePlan) -> UserProfile:
    """Persist an edited plan; an incomplete plan is rejected and nothing is written"""
    db_profile = require_profile(db, profile_id)
    goals = WeeklyGoals.model_validate(db_profile.weekly_goals)
    deltas = diagnose(plan, goals)
    if deltas:
        raise IncompletePlanError(deltas)
    db_profile.schedule_plan = plan.model_dump(mode="json")
    commit_or_rollback(db)
    db.refresh(db_profile)
    return db_profile

def complete_onboarding(db: Session, profile_id: int) -> UserProfile:
    db_profile = require_profile(db, profile_id)
    db_profile.is_onboarded = True
    commit_or_rollback(db)
    db.refresh(db_profile)
    return db_profile

def is_onboarded(db: Session) -> bool:
    db_profile = get_active_profile(db)
    return bool(db_profile and db_profile.is_onboarded)

def set_motivation(db: Session, profile_id: int, motivation: str) -> UserProfile:
    if motivation not in MOTIVATION_LEVELS:
        raise ValueError(f"Motivation must be one of: {', '.join(MOTIVATION_LEVELS)}")
    db_profile = require_profile(db, profile_id)
    db_profile.motivation = motivation
    commit_or_rollback(db)
    db.refresh(db_profile)
    return db_profile
