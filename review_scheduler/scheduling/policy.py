import os

from pydantic import BaseModel, Field


class SchedulerPolicy(BaseModel):
    """Tunable scheduling constants.

    The defaults are the standard SM-2 success threshold, a two day streak
    window that tolerates one missed calendar day, and a hundred year ceiling
    on review intervals.
    """

    success_threshold: int = Field(3, ge=0, le=5)
    streak_grace_days: float = Field(2.0, gt=0)
    session_limit: int = Field(10, ge=1)
    max_interval_days: int = Field(36500, ge=6, le=365000)

    @classmethod
    def from_env(cls) -> 'SchedulerPolicy':
        return cls(
            success_threshold=int(os.getenv('SRS_SUCCESS_THRESHOLD', '3')),
            streak_grace_days=float(os.getenv('SRS_STREAK_GRACE_DAYS', '2')),
            session_limit=int(os.getenv('SRS_SESSION_LIMIT', '10')),
            max_interval_days=int(os.getenv('SRS_MAX_INTERVAL_DAYS', '36500')),
        )
