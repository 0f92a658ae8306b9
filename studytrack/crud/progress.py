from sqlalchemy.orm import Session
from studytrack.crud.weekly_data import get_all_weekly_data
from studytrack.database import commit_or_rollback
from studytrack.models import ProgressSnapshot
from studytrack.schemas import ProgressData
from typing import Optional

def get_progress(db: Session, profile_id: int) -> Optional[ProgressData]:
    """Cached progress with the weekly history attached"""
    snapshot = db.query(ProgressSnapshot).filter(ProgressSnapshot.profile_id == profile_id).first()
    if not snapshot:
        return None
    return ProgressData(
        total_minutes=snapshot.total_minutes,
        total_hours=snapshot.total_hours,
        average_success_rate=snapshot.average_success_rate,
        weekly_history=get_all_weekly_data(db, profile_id),
        current_motivation=snapshot.profile.motivation
    )

def save_progress(db: Session, profile_id: int, progress: ProgressData, commit: bool = True) -> ProgressSnapshot:
    """Store aggregate totals; the history itself lives in weekly_records"""
    snapshot = db.query(ProgressSnapshot).filter(ProgressSnapshot.profile_id == profile_id).first()
    if not snapshot:
        snapshot = ProgressSnapshot(profile_id=profile_id)
        db.add(snapshot)
    
    snapshot.total_minutes = progress.total_minutes
    snapshot.total_hours = progress.total_hours
    snapshot.average_success_rate = progress.average_success_rate
    
    if commit:
        commit_or_rollback(db)
    else:
        db.flush()
    db.refresh(snapshot)
    return snapshot
