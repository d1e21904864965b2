from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from review_scheduler.utils.clock import ensure_utc

DEFAULT_GRACE_DAYS = 2


class StreakStatus(str, Enum):
    NO_STREAK = 'no_streak'
    ACTIVE = 'active'


class StreakState(BaseModel):
    streak_count: int = Field(0, ge=0)
    last_review_date: Optional[datetime] = None

    @property
    def status(self) -> StreakStatus:
        if self.streak_count == 0 or self.last_review_date is None:
            return StreakStatus.NO_STREAK
        return StreakStatus.ACTIVE


def advance(state: StreakState, now: datetime, grace_days: float = DEFAULT_GRACE_DAYS) -> StreakState:
    """Apply one completed review to the streak.

    Within `grace_days` of the previous review the streak grows by one,
    otherwise the current review starts a new streak of 1. The last review
    date moves to `now` either way.
    """
    now = ensure_utc(now)
    last = state.last_review_date
    if last is None or now - ensure_utc(last) <= timedelta(days=grace_days):
        count = state.streak_count + 1
    else:
        count = 1
    return StreakState(streak_count=count, last_review_date=now)
