import os

# Use in-memory sqlite for tests; must be set before studytrack is imported
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"

from datetime import date  # noqa: E402

import pytest  # noqa: E402

from studytrack.schemas import ProfileCreate, SkillAllocation, TimeBudget  # noqa: E402


@pytest.fixture
def db():
    from studytrack.database import Base, SessionLocal, engine, init_db

    init_db()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def allocation() -> SkillAllocation:
    return SkillAllocation(listening=20, reading=20, writing=15, speaking=25, fluency=10, pronunciation=10)


@pytest.fixture
def budget() -> TimeBudget:
    return TimeBudget(days_per_week=4, minutes_per_day=20)


@pytest.fixture
def profile_data(allocation, budget) -> ProfileCreate:
    # 2024-01-01 is a Monday
    return ProfileCreate(allocation=allocation, budget=budget, start_date=date(2024, 1, 1))
