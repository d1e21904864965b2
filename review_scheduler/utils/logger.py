import os
import sys
import logging
import pathlib
import contextlib
import contextvars
from logging.handlers import RotatingFileHandler
from pythonjsonlogger import jsonlogger

_learner_ctx_var = contextvars.ContextVar('learner_ctx', default={})


def get_learner_context():
    return _learner_ctx_var.get()


@contextlib.contextmanager
def learner_context(learner_id: str, session_id: str = None):
    """Tag records logged inside the block with `learner_id`, then restore the previous context."""
    token = _learner_ctx_var.set({'learner_id': learner_id, 'session_id': session_id})
    try:
        yield
    finally:
        _learner_ctx_var.reset(token)


def _inject_learner_context(record):
    ctx = get_learner_context()
    # explicit `extra` values win over the ambient context
    if getattr(record, 'learner_id', None) is None:
        record.learner_id = ctx.get('learner_id')
    if getattr(record, 'session_id', None) is None:
        record.session_id = ctx.get('session_id')
    return True


def get_logger(name: str = 'review_scheduler'):
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_FORMAT = os.getenv('LOG_FORMAT', 'json')
    # file logging is opt-in; an embedded library should not create directories on import
    LOG_FILE_PATH = os.getenv('LOG_FILE_PATH')
    LOG_MAX_SIZE = int(os.getenv('LOG_MAX_SIZE', str(10 * 1024 * 1024)))
    LOG_MAX_FILES = int(os.getenv('LOG_MAX_FILES', '7'))

    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(LOG_LEVEL.upper())

    # Console handler
    ch = logging.StreamHandler(sys.stdout)
    if LOG_FORMAT == 'json':
        fmt = jsonlogger.JsonFormatter('%(asctime)s %(levelname)s %(name)s %(message)s %(learner_id)s')
    else:
        fmt = logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s')
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    if LOG_FILE_PATH:
        log_path = pathlib.Path(LOG_FILE_PATH)
        if not log_path.is_absolute():
            log_path = pathlib.Path(os.getcwd()) / log_path
        log_path.mkdir(parents=True, exist_ok=True)

        combined = RotatingFileHandler(log_path / 'combined.log', maxBytes=LOG_MAX_SIZE, backupCount=LOG_MAX_FILES)
        combined.setFormatter(fmt)
        logger.addHandler(combined)

        errors = RotatingFileHandler(log_path / 'error.log', maxBytes=LOG_MAX_SIZE, backupCount=LOG_MAX_FILES)
        errors.setLevel(logging.ERROR)
        errors.setFormatter(fmt)
        logger.addHandler(errors)

    # inject context
    f = logging.Filter()
    f.filter = _inject_learner_context
    logger.addFilter(f)

    return logger


def log_fact_registration(learner_id: str, item_id: str, concept: str, module_id: str, item_count: int):
    logger = get_logger()
    logger.info('fact_registered', extra={
        'learner_id': learner_id,
        'item_id': item_id,
        'concept': concept,
        'module_id': module_id,
        'item_count': item_count,
    })


def log_review_submission(learner_id: str, item_id: str, quality: int, successful: bool, interval: int, repetitions: int, easiness_factor: float, streak_count: int):
    logger = get_logger()
    logger.info('review_submitted', extra={
        'learner_id': learner_id,
        'item_id': item_id,
        'quality': quality,
        'successful': successful,
        'interval': interval,
        'repetitions': repetitions,
        'easiness_factor': round(easiness_factor, 4),
        'streak_count': streak_count,
    })


def log_state_persisted(learner_id: str, key: str, item_count: int, duration_ms: float):
    logger = get_logger()
    logger.info('scheduler_state_saved', extra={
        'learner_id': learner_id,
        'key': key,
        'item_count': item_count,
        'duration_ms': duration_ms,
    })


def log_state_load_failure(learner_id: str, key: str, reason: str, error: str):
    logger = get_logger()
    logger.error('scheduler_state_load_failed', extra={
        'learner_id': learner_id,
        'key': key,
        'reason': reason,
        'error': error,
    })
