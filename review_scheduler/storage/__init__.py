"""
Persistence for scheduler state: a per-key string store (Redis or in-memory)
and the repository that maps one learner to one JSON record.
"""

from .kv_store import (
	KeyValueStore,
	InMemoryKeyValueStore,
	RedisKeyValueStore,
	create_store,
	StorageError,
	StorageReadError,
	StorageWriteError,
	StorageConfigError,
)
from .state_repository import SchedulerStateRepository, StateDecodeError, encode_state, decode_state

__all__ = [
	'KeyValueStore',
	'InMemoryKeyValueStore',
	'RedisKeyValueStore',
	'create_store',
	'StorageError',
	'StorageReadError',
	'StorageWriteError',
	'StorageConfigError',
	'SchedulerStateRepository',
	'StateDecodeError',
	'encode_state',
	'decode_state',
]
