from studytrack.models.user import UserProfile
from studytrack.models.weekly_record import WeeklyRecord
from studytrack.models.progress import ProgressSnapshot

__all__ = [
    "UserProfile",
    "WeeklyRecord",
    "ProgressSnapshot"
]
