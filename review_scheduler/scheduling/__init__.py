"""
Spaced repetition scheduling (SM-2).
Interval calculation, the per-learner review item store, due-set selection,
streak tracking, and the scheduler facade collaborators call.
"""

from .errors import (
	SchedulerError,
	DuplicateItemError,
	ItemNotFoundError,
	InvalidQualityError,
	PersistenceFailureError,
)
from .interval_calculator import compute, quality_label, validate_quality, ScheduleUpdate, QUALITY_LABELS
from .policy import SchedulerPolicy
from .streak_tracker import StreakState, StreakStatus, advance
from .due_selector import select_due, count_due, next_review_time, review_session
from .review_store import ReviewItemStore
from .scheduler import SpacedRepetitionScheduler

__all__ = [
	'SchedulerError',
	'DuplicateItemError',
	'ItemNotFoundError',
	'InvalidQualityError',
	'PersistenceFailureError',
	'compute',
	'quality_label',
	'validate_quality',
	'ScheduleUpdate',
	'QUALITY_LABELS',
	'SchedulerPolicy',
	'StreakState',
	'StreakStatus',
	'advance',
	'select_due',
	'count_due',
	'next_review_time',
	'review_session',
	'ReviewItemStore',
	'SpacedRepetitionScheduler',
]
