"""
Review scheduler: decides when each learned fact should next be reviewed.
"""

from .models import Difficulty, NewReviewItem, ReviewItem, ReviewOutcome, SchedulerState
from .scheduling import (
	SpacedRepetitionScheduler,
	SchedulerPolicy,
	SchedulerError,
	DuplicateItemError,
	ItemNotFoundError,
	InvalidQualityError,
	PersistenceFailureError,
)

__version__ = '1.0.0'

__all__ = [
	'Difficulty',
	'NewReviewItem',
	'ReviewItem',
	'ReviewOutcome',
	'SchedulerState',
	'SpacedRepetitionScheduler',
	'SchedulerPolicy',
	'SchedulerError',
	'DuplicateItemError',
	'ItemNotFoundError',
	'InvalidQualityError',
	'PersistenceFailureError',
]
