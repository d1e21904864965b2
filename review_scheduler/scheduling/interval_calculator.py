"""
SM-2 interval calculator.

Pure mapping from (interval, repetitions, easiness factor, quality) to the
next scheduling triple. No state, no I/O.
"""

from __future__ import annotations

import math
from typing import NamedTuple

from .errors import InvalidQualityError

QUALITY_MIN = 0
QUALITY_MAX = 5
DEFAULT_SUCCESS_THRESHOLD = 3
MIN_EASINESS_FACTOR = 1.3
DEFAULT_EASINESS_FACTOR = 2.5
DEFAULT_INTERVAL = 1
SECOND_INTERVAL = 6
MAX_INTERVAL = 36500

QUALITY_LABELS = {
    0: 'No recall',
    1: 'Incorrect, easy recall',
    2: 'Incorrect, hard recall',
    3: 'Correct, very hard recall',
    4: 'Correct, hard recall',
    5: 'Correct, easy recall',
}


class ScheduleUpdate(NamedTuple):
    interval: int
    repetitions: int
    easiness_factor: float


def validate_quality(quality) -> int:
    # bool is an int subclass; True/False are not ratings
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidQualityError(quality)
    if not (QUALITY_MIN <= quality <= QUALITY_MAX):
        raise InvalidQualityError(quality)
    return quality


def quality_label(quality: int) -> str:
    return QUALITY_LABELS[validate_quality(quality)]


def update_easiness_factor(easiness_factor: float, quality: int) -> float:
    miss = QUALITY_MAX - quality
    return max(MIN_EASINESS_FACTOR, easiness_factor + (0.1 - miss * (0.08 + miss * 0.02)))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute(interval: int, repetitions: int, easiness_factor: float, quality: int, success_threshold: int = DEFAULT_SUCCESS_THRESHOLD, max_interval: int = MAX_INTERVAL) -> ScheduleUpdate:
    """Compute the next (interval, repetitions, easiness_factor) for one review.

    The ease update is applied before branching. A rating below
    `success_threshold` restarts the learning sequence; successes climb the
    1 -> 6 -> interval * ease ladder, capped at `max_interval` days.
    """
    quality = validate_quality(quality)
    new_easiness_factor = update_easiness_factor(easiness_factor, quality)

    if quality < success_threshold:
        return ScheduleUpdate(DEFAULT_INTERVAL, 0, new_easiness_factor)

    new_repetitions = repetitions + 1
    if new_repetitions == 1:
        new_interval = DEFAULT_INTERVAL
    elif new_repetitions == 2:
        new_interval = SECOND_INTERVAL
    else:
        new_interval = min(max_interval, max(DEFAULT_INTERVAL, _round_half_up(interval * new_easiness_factor)))
    return ScheduleUpdate(new_interval, new_repetitions, new_easiness_factor)
