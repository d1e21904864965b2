import os
import json
import time
from typing import Optional

from pydantic import ValidationError

from review_scheduler.models import SchedulerState
from review_scheduler.utils import get_logger, log_state_persisted, log_state_load_failure

from .kv_store import KeyValueStore, StorageReadError

LOG = get_logger()

SRS_STATE_KEY_PREFIX = os.getenv('SRS_STATE_KEY_PREFIX', 'srs:state')


class StateDecodeError(Exception):
    """Raised when a persisted record cannot be turned back into a SchedulerState."""


def encode_state(state: SchedulerState) -> str:
    # mode='json' renders datetimes as ISO-8601 strings
    return json.dumps(state.model_dump(mode='json'))


def decode_state(raw: str, learner_id: Optional[str] = None) -> SchedulerState:
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise StateDecodeError(f'Invalid JSON: {e}') from e
    if not isinstance(payload, dict):
        raise StateDecodeError('Record must be a JSON object')
    if learner_id is not None:
        payload.setdefault('learner_id', learner_id)
    try:
        state = SchedulerState.model_validate(payload)
    except ValidationError as e:
        raise StateDecodeError(str(e)) from e
    ids = [item.id for item in state.items]
    if len(ids) != len(set(ids)):
        raise StateDecodeError('Duplicate review item ids in record')
    return state


class SchedulerStateRepository:
    """Loads and saves one SchedulerState record per learner."""

    def __init__(self, store: KeyValueStore, key_prefix: Optional[str] = None):
        self.store = store
        self.key_prefix = key_prefix or SRS_STATE_KEY_PREFIX

    def _key(self, learner_id: str) -> str:
        return f'{self.key_prefix}:{learner_id}'

    def load(self, learner_id: str) -> SchedulerState:
        """Return the learner's state, or an empty one.

        Read failures and undecodable records are logged and treated as an
        uninitialized learner rather than raised.
        """
        key = self._key(learner_id)
        try:
            raw = self.store.get(key)
        except StorageReadError as e:
            log_state_load_failure(learner_id, key, 'read_failed', str(e))
            return SchedulerState(learner_id=learner_id)
        if raw is None:
            LOG.info('scheduler_state_initialized', extra={'learner_id': learner_id, 'key': key})
            return SchedulerState(learner_id=learner_id)
        try:
            state = decode_state(raw, learner_id=learner_id)
        except StateDecodeError as e:
            log_state_load_failure(learner_id, key, 'decode_failed', str(e))
            return SchedulerState(learner_id=learner_id)
        if state.learner_id != learner_id:
            log_state_load_failure(learner_id, key, 'learner_mismatch', state.learner_id)
            return SchedulerState(learner_id=learner_id)
        LOG.info('scheduler_state_loaded', extra={'learner_id': learner_id, 'item_count': len(state.items)})
        return state

    def save(self, state: SchedulerState) -> None:
        # StorageWriteError propagates; the caller owns rollback
        key = self._key(state.learner_id)
        start = time.time()
        self.store.set(key, encode_state(state))
        duration_ms = int((time.time() - start) * 1000)
        log_state_persisted(state.learner_id, key, len(state.items), duration_ms)
