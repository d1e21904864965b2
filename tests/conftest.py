import os
import pytest
from pathlib import Path

from dotenv import load_dotenv

# load test env first
env_path = Path(__file__).resolve().parents[1] / '.env.test'
if env_path.exists():
    load_dotenv(env_path)

os.environ.setdefault('TESTING', '1')
os.environ.setdefault('SRS_STORE_BACKEND', 'memory')

from review_scheduler.scheduling import SpacedRepetitionScheduler, SchedulerPolicy  # noqa: E402
from review_scheduler.storage import InMemoryKeyValueStore, RedisKeyValueStore, SchedulerStateRepository  # noqa: E402
from tests.fixtures.clock import ManualClock  # noqa: E402
from tests.fixtures.mock_redis import MockRedisClient  # noqa: E402
from tests.fixtures.sample_data import sample_facts as _sample_facts  # noqa: E402


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def policy():
    return SchedulerPolicy()


@pytest.fixture
def memory_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def repository(memory_store):
    return SchedulerStateRepository(memory_store)


@pytest.fixture
def mock_redis_client(monkeypatch):
    client = MockRedisClient()
    monkeypatch.setattr('redis.Redis', lambda *a, **k: client)
    monkeypatch.setattr('redis.from_url', lambda *a, **k: client)
    return client


@pytest.fixture
def redis_repository(mock_redis_client):
    return SchedulerStateRepository(RedisKeyValueStore())


@pytest.fixture
def scheduler(repository, clock, policy):
    return SpacedRepetitionScheduler('learner-1', repository=repository, clock=clock, policy=policy)


@pytest.fixture
def sample_facts():
    return _sample_facts()
