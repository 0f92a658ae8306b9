from pydantic import BaseModel, Field, field_validator
from typing import Dict, List
from datetime import date
from enum import Enum


class Skill(str, Enum):
    """Tracked language-learning skills"""
    LISTENING = "listening"
    READING = "reading"
    WRITING = "writing"
    SPEAKING = "speaking"
    FLUENCY = "fluency"
    PRONUNCIATION = "pronunciation"


class Day(str, Enum):
    """Days of the week, Monday first"""
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


SKILLS: List[Skill] = list(Skill)
DAYS_OF_WEEK: List[Day] = list(Day)

MOTIVATION_LEVELS = ["Super sad", "Sad", "Neutral", "Happy", "Super happy"]

MIN_DAYS_PER_WEEK = 1
MAX_DAYS_PER_WEEK = 7
MIN_MINUTES_PER_DAY = 1
MAX_MINUTES_PER_DAY = 240


def day_for_date(value: date) -> Day:
    """Weekday key for a calendar date"""
    return DAYS_OF_WEEK[value.weekday()]


class SkillMinutes(BaseModel):
    """One integer value per skill"""
    listening: int = 0
    reading: int = 0
    writing: int = 0
    speaking: int = 0
    fluency: int = 0
    pronunciation: int = 0

    class Config:
        frozen = True

    def minutes_for(self, skill: Skill) -> int:
        return getattr(self, skill.value)

    def with_minutes(self, skill: Skill, minutes: int):
        """Copy with a single skill replaced"""
        return self.model_copy(update={skill.value: minutes})

    def total(self) -> int:
        return sum(self.minutes_for(skill) for skill in SKILLS)

    def as_dict(self) -> Dict[Skill, int]:
        return {skill: self.minutes_for(skill) for skill in SKILLS}


class SkillAllocation(SkillMinutes):
    """Priority percentage per skill, expected to add up to 100"""
    listening: int = Field(0, ge=0, le=100)
    reading: int = Field(0, ge=0, le=100)
    writing: int = Field(0, ge=0, le=100)
    speaking: int = Field(0, ge=0, le=100)
    fluency: int = Field(0, ge=0, le=100)
    pronunciation: int = Field(0, ge=0, le=100)


class WeeklyGoals(SkillMinutes):
    """Target minutes per skill for one week"""


class DailyPractice(SkillMinutes):
    """Minutes practiced (or planned) per skill on one day"""


def validate_allocation(allocation: SkillAllocation) -> bool:
    """True only when the percentages add up to exactly 100"""
    return allocation.total() == 100


class TimeBudget(BaseModel):
    """Study commitment: days per week times minutes per day"""
    days_per_week: int
    minutes_per_day: int

    class Config:
        frozen = True

    def total_minutes(self) -> int:
        return self.days_per_week * self.minutes_per_day


def validate_budget(budget: TimeBudget) -> bool:
    return (
        MIN_DAYS_PER_WEEK <= budget.days_per_week <= MAX_DAYS_PER_WEEK
        and MIN_MINUTES_PER_DAY <= budget.minutes_per_day <= MAX_MINUTES_PER_DAY
    )


class BudgetSummary(BaseModel):
    """Weekly budget expressed in larger units"""
    weekly_minutes: int
    weekly_hours: int
    remaining_minutes: int
    monthly_hours: int
    yearly_hours: int


class WeekRecord(BaseModel):
    """One DailyPractice per day of the week"""
    monday: DailyPractice = Field(default_factory=DailyPractice)
    tuesday: DailyPractice = Field(default_factory=DailyPractice)
    wednesday: DailyPractice = Field(default_factory=DailyPractice)
    thursday: DailyPractice = Field(default_factory=DailyPractice)
    friday: DailyPractice = Field(default_factory=DailyPractice)
    saturday: DailyPractice = Field(default_factory=DailyPractice)
    sunday: DailyPractice = Field(default_factory=DailyPractice)

    class Config:
        frozen = True

    def for_day(self, day: Day) -> DailyPractice:
        return getattr(self, day.value)

    def with_day(self, day: Day, daily: DailyPractice):
        """Copy with a single day replaced"""
        return self.model_copy(update={day.value: daily})

    def skill_total(self, skill: Skill) -> int:
        return sum(self.for_day(day).minutes_for(skill) for day in DAYS_OF_WEEK)


class WeeklyPractice(WeekRecord):
    """Recorded practice for one tracked week"""


class WeeklySchedulePlan(WeekRecord):
    """Planned minutes per day per skill"""


class SuccessRates(BaseModel):
    """Practiced-to-goal ratio per skill, in [0, 1]"""
    listening: float = 0.0
    reading: float = 0.0
    writing: float = 0.0
    speaking: float = 0.0
    fluency: float = 0.0
    pronunciation: float = 0.0

    class Config:
        frozen = True

    def rate_for(self, skill: Skill) -> float:
        return getattr(self, skill.value)

    def values(self) -> List[float]:
        return [self.rate_for(skill) for skill in SKILLS]


class SkillDelta(BaseModel):
    """Planned minus goal minutes for one skill"""
    skill: Skill
    delta_minutes: int


class DateRange(BaseModel):
    start: str
    end: str


class WeeklyReflection(BaseModel):
    """End-of-week self assessment"""
    hard_work_rating: str = ""
    on_track_rating: str = ""
    mood_rating: str = ""
    star_rating: int = Field(0, ge=0, le=5)

    @field_validator("mood_rating")
    @classmethod
    def _known_mood(cls, v):
        if v and v not in MOTIVATION_LEVELS:
            raise ValueError(f"Mood must be one of: {', '.join(MOTIVATION_LEVELS)}")
        return v


class WeeklyData(BaseModel):
    """Practice record for one calendar week"""
    week_number: int = Field(ge=1)
    date_range: DateRange
    daily_practice: WeeklyPractice = Field(default_factory=WeeklyPractice)
    weekly_reflection: WeeklyReflection = Field(default_factory=WeeklyReflection)
    success_rates: SuccessRates = Field(default_factory=SuccessRates)

    class Config:
        from_attributes = True


class ProgressData(BaseModel):
    """Aggregate progress across every tracked week"""
    total_minutes: int = 0
    total_hours: int = 0
    average_success_rate: float = 0.0
    weekly_history: List[WeeklyData] = Field(default_factory=list)
    current_motivation: str = "Neutral"


class ProfileCreate(BaseModel):
    """Schema for onboarding a new profile"""
    allocation: SkillAllocation
    budget: TimeBudget
    start_date: date

    @field_validator("allocation")
    @classmethod
    def _allocation_sums_to_100(cls, v):
        if not validate_allocation(v):
            raise ValueError(f"Skill percentages must add up to 100 (got {v.total()})")
        return v

    @field_validator("budget")
    @classmethod
    def _budget_in_range(cls, v):
        if not validate_budget(v):
            raise ValueError(
                f"Days per week must be {MIN_DAYS_PER_WEEK}-{MAX_DAYS_PER_WEEK} and "
                f"minutes per day {MIN_MINUTES_PER_DAY}-{MAX_MINUTES_PER_DAY}"
            )
        return v


class ProfileResponse(BaseModel):
    """Schema for a stored profile"""
    id: int
    allocation: SkillAllocation
    budget: TimeBudget
    start_date: date
    weekly_goals: WeeklyGoals
    schedule_plan: WeeklySchedulePlan
    is_onboarded: bool = False
    motivation: str = "Neutral"

    class Config:
        from_attributes = True

