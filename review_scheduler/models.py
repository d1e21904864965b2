from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional, List

from pydantic import BaseModel, Field, field_validator

from review_scheduler.utils.clock import ensure_utc


class Difficulty(str, Enum):
    EASY = 'easy'
    MEDIUM = 'medium'
    HARD = 'hard'


class NewReviewItem(BaseModel):
    """Descriptor a collaborator supplies when registering a fact."""

    id: str = Field(..., min_length=1)
    content: str
    concept: str = ''
    module_id: str = ''
    difficulty: Difficulty = Difficulty.MEDIUM


class ReviewItem(BaseModel):
    id: str = Field(..., min_length=1)
    content: str
    concept: str = ''
    module_id: str = ''
    difficulty: Difficulty = Difficulty.MEDIUM
    last_reviewed: Optional[datetime] = None
    next_review: datetime
    interval: int = Field(1, ge=1)
    repetitions: int = Field(0, ge=0)
    easiness_factor: float = Field(2.5, ge=1.3)

    @field_validator('last_reviewed', 'next_review')
    @classmethod
    def _to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None

    def is_due(self, now: datetime) -> bool:
        return self.next_review <= ensure_utc(now)


class SchedulerState(BaseModel):
    """Per-learner aggregate. The due subset is derived, never stored."""

    learner_id: str
    items: List[ReviewItem] = Field(default_factory=list)
    streak_count: int = Field(0, ge=0)
    last_review_date: Optional[datetime] = None

    @field_validator('last_review_date')
    @classmethod
    def _to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None


class ReviewOutcome(BaseModel):
    item: ReviewItem
    quality: int
    successful: bool
    previous_interval: int
    streak_count: int
    reviewed_at: datetime
