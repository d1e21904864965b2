from __future__ import annotations

from datetime import timedelta
from typing import Optional, List, Dict, Union

from review_scheduler.models import NewReviewItem, ReviewItem, ReviewOutcome, SchedulerState
from review_scheduler.storage import SchedulerStateRepository, StorageError
from review_scheduler.utils import SystemClock, get_logger, log_fact_registration, log_review_submission

from . import interval_calculator, streak_tracker
from .errors import DuplicateItemError, ItemNotFoundError, PersistenceFailureError
from .policy import SchedulerPolicy

LOG = get_logger()


class ReviewItemStore:
    """Owns one learner's review items and is their only mutator.

    Every mutation builds a complete new SchedulerState, persists it, and only
    then replaces the in-memory copy, so a rejected write leaves the store as
    it was.
    """

    def __init__(self, learner_id: str, repository: SchedulerStateRepository, clock=None, policy: Optional[SchedulerPolicy] = None):
        self.learner_id = learner_id
        self.repository = repository
        self.clock = clock or SystemClock()
        self.policy = policy or SchedulerPolicy.from_env()
        self._state = repository.load(learner_id)
        self._index: Dict[str, int] = {item.id: pos for pos, item in enumerate(self._state.items)}

    @property
    def state(self) -> SchedulerState:
        return self._state.model_copy(deep=True)

    @property
    def streak(self) -> streak_tracker.StreakState:
        return streak_tracker.StreakState(streak_count=self._state.streak_count, last_review_date=self._state.last_review_date)

    def _commit(self, new_state: SchedulerState) -> None:
        try:
            self.repository.save(new_state)
        except StorageError as e:
            LOG.error('scheduler_state_save_failed', extra={'learner_id': self.learner_id, 'error': str(e)})
            raise PersistenceFailureError(f'Could not persist scheduler state for {self.learner_id}: {e}') from e
        self._state = new_state
        self._index = {item.id: pos for pos, item in enumerate(new_state.items)}

    def add(self, descriptor: Union[NewReviewItem, dict]) -> ReviewItem:
        if not isinstance(descriptor, NewReviewItem):
            descriptor = NewReviewItem.model_validate(descriptor)
        if descriptor.id in self._index:
            raise DuplicateItemError(descriptor.id)
        now = self.clock.now()
        item = ReviewItem(
            **descriptor.model_dump(),
            last_reviewed=None,
            next_review=now,
            interval=interval_calculator.DEFAULT_INTERVAL,
            repetitions=0,
            easiness_factor=interval_calculator.DEFAULT_EASINESS_FACTOR,
        )
        items = list(self._state.items)
        items.append(item)
        self._commit(self._state.model_copy(update={'items': items}))
        log_fact_registration(self.learner_id, item.id, item.concept, item.module_id, len(items))
        return item.model_copy()

    def submit_review(self, item_id: str, quality: int) -> ReviewOutcome:
        pos = self._index.get(item_id)
        if pos is None:
            raise ItemNotFoundError(item_id)
        quality = interval_calculator.validate_quality(quality)
        current = self._state.items[pos]

        update = interval_calculator.compute(
            current.interval,
            current.repetitions,
            current.easiness_factor,
            quality,
            success_threshold=self.policy.success_threshold,
            max_interval=self.policy.max_interval_days,
        )
        now = self.clock.now()
        reviewed = current.model_copy(update={
            'last_reviewed': now,
            'next_review': now + timedelta(days=update.interval),
            'interval': update.interval,
            'repetitions': update.repetitions,
            'easiness_factor': update.easiness_factor,
        })
        streak = streak_tracker.advance(self.streak, now, grace_days=self.policy.streak_grace_days)

        items = list(self._state.items)
        items[pos] = reviewed
        self._commit(self._state.model_copy(update={
            'items': items,
            'streak_count': streak.streak_count,
            'last_review_date': streak.last_review_date,
        }))

        successful = quality >= self.policy.success_threshold
        log_review_submission(self.learner_id, item_id, quality, successful, reviewed.interval, reviewed.repetitions, reviewed.easiness_factor, streak.streak_count)
        return ReviewOutcome(
            item=reviewed.model_copy(),
            quality=quality,
            successful=successful,
            previous_interval=current.interval,
            streak_count=streak.streak_count,
            reviewed_at=now,
        )

    def get(self, item_id: str) -> ReviewItem:
        pos = self._index.get(item_id)
        if pos is None:
            raise ItemNotFoundError(item_id)
        return self._state.items[pos].model_copy()

    def all(self) -> List[ReviewItem]:
        return [item.model_copy() for item in self._state.items]

    def __contains__(self, item_id: str) -> bool:
        return item_id in self._index

    def __len__(self) -> int:
        return len(self._state.items)
