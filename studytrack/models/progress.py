from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from studytrack.database import Base

class ProgressSnapshot(Base):
    """Cached totals across all weeks, refreshed after each save"""
    __tablename__ = "progress_snapshots"
    
    id = Column(Integer, primary_key=True, index=True)
    profile_id = Column(Integer, ForeignKey("user_profiles.id"), unique=True, nullable=False)
    total_minutes = Column(Integer, default=0, nullable=False)
    total_hours = Column(Integer, default=0, nullable=False)
    average_success_rate = Column(Float, default=0.0, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    profile = relationship("UserProfile", back_populates="progress")
