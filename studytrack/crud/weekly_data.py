import logging
from sqlalchemy.orm import Session
from studytrack.database import commit_or_rollback
from studytrack.models import WeeklyRecord
from studytrack.schemas import WeeklyData
from studytrack.weeks import parse_start_date
from typing import List, Optional

logger = logging.getLogger(__name__)

def _get_record(db: Session, profile_id: int, week_number: int) -> Optional[WeeklyRecord]:
    return db.query(WeeklyRecord).filter(
        WeeklyRecord.profile_id == profile_id,
        WeeklyRecord.week_number == week_number
    ).first()

def get_weekly_data(db: Session, profile_id: int, week_number: int) -> Optional[WeeklyData]:
    """Get the stored record for one week, None if the week was never saved"""
    record = _get_record(db, profile_id, week_number)
    return WeeklyData.model_validate(record) if record else None

def save_weekly_data(db: Session, profile_id: int, data: WeeklyData, commit: bool = True) -> WeeklyRecord:
    """
    Insert or replace the record for data.week_number.

    With commit=False the write is only flushed, and the caller commits it
    together with its other writes.
    """
    record = _get_record(db, profile_id, data.week_number)
    if not record:
        record = WeeklyRecord(profile_id=profile_id, week_number=data.week_number)
        db.add(record)
        logger.info("Starting week %s for profile %s", data.week_number, profile_id)
    
    record.start_date = parse_start_date(data.date_range.start)
    record.end_date = parse_start_date(data.date_range.end)
    record.daily_practice = data.daily_practice.model_dump(mode="json")
    record.success_rates = data.success_rates.model_dump(mode="json")
    record.weekly_reflection = data.weekly_reflection.model_dump(mode="json")
    
    if commit:
        commit_or_rollback(db)
    else:
        db.flush()
    db.refresh(record)
    return record

def get_all_weekly_data(db: Session, profile_id: int) -> List[WeeklyData]:
    """Every stored week, ordered by week number"""
    records = db.query(WeeklyRecord).filter(
        WeeklyRecord.profile_id == profile_id
    ).order_by(WeeklyRecord.week_number).all()
    return [WeeklyData.model_validate(record) for record in records]
