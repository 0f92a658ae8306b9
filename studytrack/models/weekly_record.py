from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from studytrack.database import Base

class WeeklyRecord(Base):
    """Practice recorded during one calendar week"""
    __tablename__ = "weekly_records"
    __table_args__ = (UniqueConstraint("profile_id", "week_number"),)
    
    id = Column(Integer, primary_key=True, index=True)
    profile_id = Column(Integer, ForeignKey("user_profiles.id"), nullable=False)
    week_number = Column(Integer, nullable=False)  # 1-based, from start date
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    
    daily_practice = Column(JSON, nullable=False)  # {"monday": {"speaking": 12, ...}, ...}
    success_rates = Column(JSON, nullable=False)  # cached, recomputed on every save
    weekly_reflection = Column(JSON, nullable=False)
    
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    profile = relationship("UserProfile", back_populates="weekly_records")

    @property
    def date_range(self):
        return {"start": self.start_date.isoformat(), "end": self.end_date.isoformat()}
