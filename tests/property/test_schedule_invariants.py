"""Property-based tests for scheduling invariants."""

from datetime import datetime, timedelta, timezone

from hypothesis import given, settings, strategies as st

from review_scheduler.scheduling import SpacedRepetitionScheduler, SchedulerPolicy
from review_scheduler.scheduling.interval_calculator import compute
from review_scheduler.storage import InMemoryKeyValueStore, SchedulerStateRepository
from tests.fixtures.clock import ManualClock

qualities = st.integers(min_value=0, max_value=5)


@settings(max_examples=200, deadline=None)
@given(
    interval=st.integers(min_value=1, max_value=3650),
    repetitions=st.integers(min_value=0, max_value=50),
    ease=st.floats(min_value=1.3, max_value=5.0, allow_nan=False, allow_infinity=False),
    quality=qualities,
)
def test_compute_is_deterministic_and_bounded(interval: int, repetitions: int, ease: float, quality: int) -> None:
    """
    Property: compute is pure and respects the floors.

    Invariants:
    - Same inputs, same outputs
    - interval >= 1, easiness_factor >= 1.3, repetitions >= 0
    """
    first = compute(interval, repetitions, ease, quality)
    assert first == compute(interval, repetitions, ease, quality)
    assert first.interval >= 1
    assert first.easiness_factor >= 1.3
    assert first.repetitions >= 0


@settings(max_examples=100, deadline=None)
@given(
    interval=st.integers(min_value=1, max_value=3650),
    repetitions=st.integers(min_value=1, max_value=50),
    ease=st.floats(min_value=1.3, max_value=5.0, allow_nan=False, allow_infinity=False),
    quality=st.integers(min_value=0, max_value=2),
)
def test_failure_resets_repetitions(interval: int, repetitions: int, ease: float, quality: int) -> None:
    res = compute(interval, repetitions, ease, quality)
    assert res.repetitions == 0
    assert res.interval == 1


@settings(max_examples=100, deadline=None)
@given(
    ease=st.floats(min_value=1.3, max_value=5.0, allow_nan=False, allow_infinity=False),
    qs=st.lists(st.integers(min_value=3, max_value=5), min_size=3, max_size=3),
)
def test_success_ladder_after_reset(ease: float, qs: list) -> None:
    first = compute(1, 0, ease, qs[0])
    second = compute(first.interval, first.repetitions, first.easiness_factor, qs[1])
    third = compute(second.interval, second.repetitions, second.easiness_factor, qs[2])
    assert first.interval == 1
    assert second.interval == 6
    assert third.interval == max(1, int(6 * third.easiness_factor + 0.5))


@settings(max_examples=50, deadline=None)
@given(
    steps=st.lists(
        st.tuples(qualities, st.integers(min_value=0, max_value=96)),
        min_size=1,
        max_size=25,
    ),
)
def test_review_sequences_keep_state_consistent(steps: list) -> None:
    """
    Property: any sequence of ratings keeps every item within its invariants
    and a just-reviewed item is never due.
    """
    clock = ManualClock(datetime(2024, 1, 1, tzinfo=timezone.utc))
    repo = SchedulerStateRepository(InMemoryKeyValueStore())
    sched = SpacedRepetitionScheduler('prop-learner', repository=repo, clock=clock, policy=SchedulerPolicy())
    sched.register_fact('a', 'fact a')
    sched.register_fact('b', 'fact b')

    for n, (quality, gap_hours) in enumerate(steps):
        clock.advance(hours=gap_hours)
        item_id = 'a' if n % 2 == 0 else 'b'
        outcome = sched.submit_rating(item_id, quality)
        item = outcome.item
        assert item.interval >= 1
        assert item.easiness_factor >= 1.3
        assert item.repetitions >= 0
        assert item.next_review == item.last_reviewed + timedelta(days=item.interval)
        assert item_id not in [i.id for i in sched.due_items()]
        for due in sched.due_items():
            assert due.next_review <= clock.now()

    reloaded = SpacedRepetitionScheduler('prop-learner', repository=repo, clock=clock, policy=SchedulerPolicy())
    assert reloaded.items() == sched.items()
    assert reloaded.current_streak() == sched.current_streak()


@settings(max_examples=30, deadline=None)
@given(
    steps=st.lists(
        st.tuples(st.integers(min_value=3, max_value=5), st.integers(min_value=0, max_value=48)),
        min_size=20,
        max_size=40,
    ),
    max_interval=st.integers(min_value=6, max_value=36500),
)
def test_long_success_runs_stay_schedulable(steps: list, max_interval: int) -> None:
    clock = ManualClock(datetime(2024, 1, 1, tzinfo=timezone.utc))
    repo = SchedulerStateRepository(InMemoryKeyValueStore())
    policy = SchedulerPolicy(max_interval_days=max_interval)
    sched = SpacedRepetitionScheduler('prop-runner', repository=repo, clock=clock, policy=policy)
    sched.register_fact('a', 'fact a')

    for quality, gap_hours in steps:
        clock.advance(hours=gap_hours)
        item = sched.submit_rating('a', quality).item
        assert 1 <= item.interval <= max_interval
        assert item.next_review == item.last_reviewed + timedelta(days=item.interval)

    assert sched.get_item('a').repetitions == len(steps)
