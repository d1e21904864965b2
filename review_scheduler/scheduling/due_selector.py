from datetime import datetime
from typing import Iterable, List, Optional

from review_scheduler.models import ReviewItem
from review_scheduler.utils.clock import ensure_utc


def select_due(items: Iterable[ReviewItem], now: datetime) -> List[ReviewItem]:
    """Return items whose next review has elapsed, in collection order.

    A full scan on every call; the result is not priority sorted.
    """
    now = ensure_utc(now)
    return [item for item in items if item.is_due(now)]


def count_due(items: Iterable[ReviewItem], now: datetime) -> int:
    return len(select_due(items, now))


def next_review_time(items: Iterable[ReviewItem], now: datetime) -> Optional[datetime]:
    """Earliest upcoming review among items that are not yet due."""
    now = ensure_utc(now)
    upcoming = [item.next_review for item in items if item.next_review > now]
    return min(upcoming) if upcoming else None


def review_session(items: Iterable[ReviewItem], now: datetime, limit: int) -> List[ReviewItem]:
    if limit < 1:
        raise ValueError('limit must be >= 1')
    return select_due(items, now)[:limit]
