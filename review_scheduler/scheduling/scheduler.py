from __future__ import annotations

from datetime import datetime
from typing import Optional, List

from review_scheduler.models import Difficulty, NewReviewItem, ReviewItem, ReviewOutcome
from review_scheduler.storage import SchedulerStateRepository, create_store
from review_scheduler.utils import SystemClock, get_logger, learner_context

from . import due_selector
from .policy import SchedulerPolicy
from .review_store import ReviewItemStore

LOG = get_logger()


class SpacedRepetitionScheduler:
    """Entry point for collaborators working with one learner's reviews.

    Register facts, submit quality ratings, and query the due set and streak.
    The due set is recomputed from the item collection on every query.
    """

    def __init__(self, learner_id: str, repository: Optional[SchedulerStateRepository] = None, clock=None, policy: Optional[SchedulerPolicy] = None):
        if not learner_id:
            raise ValueError('learner_id is required')
        self.learner_id = learner_id
        self.clock = clock or SystemClock()
        self.policy = policy or SchedulerPolicy.from_env()
        if repository is None:
            repository = SchedulerStateRepository(create_store())
        with learner_context(learner_id):
            self._store = ReviewItemStore(learner_id, repository, clock=self.clock, policy=self.policy)
        LOG.info('scheduler_ready', extra={'learner_id': learner_id, 'item_count': len(self._store)})

    @classmethod
    def for_learner(cls, learner_id: str) -> 'SpacedRepetitionScheduler':
        return cls(learner_id)

    def _now(self, now: Optional[datetime]) -> datetime:
        return now if now is not None else self.clock.now()

    def register_fact(self, item_id: str, content: str, concept: str = '', module_id: str = '', difficulty: Difficulty = Difficulty.MEDIUM) -> ReviewItem:
        descriptor = NewReviewItem(id=item_id, content=content, concept=concept, module_id=module_id, difficulty=difficulty)
        with learner_context(self.learner_id):
            return self._store.add(descriptor)

    def submit_rating(self, item_id: str, quality: int) -> ReviewOutcome:
        with learner_context(self.learner_id):
            return self._store.submit_review(item_id, quality)

    def due_items(self, now: Optional[datetime] = None) -> List[ReviewItem]:
        return due_selector.select_due(self._store.all(), self._now(now))

    def due_count(self, now: Optional[datetime] = None) -> int:
        return due_selector.count_due(self._store.all(), self._now(now))

    def session_items(self, limit: Optional[int] = None, now: Optional[datetime] = None) -> List[ReviewItem]:
        return due_selector.review_session(self._store.all(), self._now(now), limit or self.policy.session_limit)

    def next_review_time(self, now: Optional[datetime] = None) -> Optional[datetime]:
        return due_selector.next_review_time(self._store.all(), self._now(now))

    def current_streak(self) -> int:
        return self._store.streak.streak_count

    def items(self) -> List[ReviewItem]:
        return self._store.all()

    def get_item(self, item_id: str) -> ReviewItem:
        return self._store.get(item_id)
