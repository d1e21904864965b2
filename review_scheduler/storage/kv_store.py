import os
from typing import Optional, Dict

import redis

from review_scheduler.utils import get_logger

LOG = get_logger()

SRS_STORE_BACKEND = os.getenv('SRS_STORE_BACKEND', 'redis')


class StorageError(Exception):
    pass


class StorageReadError(StorageError):
    pass


class StorageWriteError(StorageError):
    pass


class StorageConfigError(StorageError):
    pass


class KeyValueStore:
    """Durable per-key string store used for learner records.

    Values are written whole; a `set` either replaces the previous value or
    raises `StorageWriteError` leaving it untouched.
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def keys(self):
        return list(self._data.keys())


class RedisKeyValueStore(KeyValueStore):
    def __init__(self, client=None):
        if client is not None:
            self._client = client
            return
        redis_url = os.getenv('REDIS_URL')
        if redis_url:
            self._client = redis.from_url(redis_url, decode_responses=True)
            LOG.info('redis_store_configured', extra={'redis_url': redis_url})
        else:
            host = os.getenv('REDIS_HOST', 'redis')
            port = int(os.getenv('REDIS_PORT', '6379'))
            password = os.getenv('REDIS_PASSWORD') or None
            self._client = redis.Redis(host=host, port=port, password=password, decode_responses=True)
            LOG.info('redis_store_configured', extra={'host': host, 'port': port})

    def get(self, key: str) -> Optional[str]:
        try:
            return self._client.get(key)
        except redis.RedisError as e:
            LOG.warning('redis_get_failed', extra={'key': key, 'error': str(e)})
            raise StorageReadError(str(e)) from e

    def set(self, key: str, value: str) -> None:
        try:
            self._client.set(key, value)
        except redis.RedisError as e:
            LOG.warning('redis_set_failed', extra={'key': key, 'error': str(e)})
            raise StorageWriteError(str(e)) from e


def create_store(backend: Optional[str] = None) -> KeyValueStore:
    backend = (backend or os.getenv('SRS_STORE_BACKEND', SRS_STORE_BACKEND)).lower()
    if backend == 'memory':
        LOG.info('kv_store_backend', extra={'backend': 'memory'})
        return InMemoryKeyValueStore()
    if backend == 'redis':
        return RedisKeyValueStore()
    raise StorageConfigError(f'Unsupported SRS_STORE_BACKEND: {backend}')
