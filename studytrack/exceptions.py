from typing import List


class StudyTrackError(ValueError):
    """Base class for tracker errors"""


class ProfileNotFoundError(StudyTrackError):
    def __init__(self, profile_id: int):
        super().__init__(f"Profile {profile_id} not found")
        self.profile_id = profile_id


class IncompletePlanError(StudyTrackError):
    """Raised when a schedule plan does not match the weekly goals"""

    def __init__(self, deltas: List):
        self.deltas = deltas
        details = ", ".join(
            f"{d.skill.value} {d.delta_minutes:+d} min" for d in deltas
        )
        super().__init__(f"Schedule plan is incomplete: {details}")


class SessionTooShortError(StudyTrackError):
    def __init__(self, elapsed_seconds: float, minimum_seconds: int):
        super().__init__(
            f"Sessions must last at least {minimum_seconds} seconds "
            f"(got {int(elapsed_seconds)})"
        )
        self.elapsed_seconds = elapsed_seconds
