from sqlalchemy import Column, Integer, String, Date, DateTime, Boolean, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from studytrack.database import Base

class UserProfile(Base):
    """Learner profile with skill priorities and study budget"""
    __tablename__ = "user_profiles"
    
    id = Column(Integer, primary_key=True, index=True)
    allocation = Column(JSON, nullable=False)  # {"listening": 20, ...}
    days_per_week = Column(Integer, nullable=False)
    minutes_per_day = Column(Integer, nullable=False)
    start_date = Column(Date, nullable=False)
    weekly_goals = Column(JSON, nullable=False)  # derived from allocation x budget
    schedule_plan = Column(JSON, nullable=False)  # {"monday": {"listening": 4, ...}, ...}
    is_onboarded = Column(Boolean, default=False, nullable=False)
    motivation = Column(String, default="Neutral", nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    weekly_records = relationship("WeeklyRecord", back_populates="profile", order_by="WeeklyRecord.week_number")
    progress = relationship("ProgressSnapshot", back_populates="profile", uselist=False)

    @property
    def budget(self):
        return {"days_per_week": self.days_per_week, "minutes_per_day": self.minutes_per_day}
