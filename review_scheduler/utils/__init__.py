"""Utility subpackage for the review scheduler"""

from .logger import (
	get_logger,
	log_fact_registration,
	log_review_submission,
	log_state_persisted,
	log_state_load_failure,
	get_learner_context,
	learner_context,
)
from .clock import SystemClock, ensure_utc

__all__ = [
	'get_logger',
	'log_fact_registration',
	'log_review_submission',
	'log_state_persisted',
	'log_state_load_failure',
	'get_learner_context',
	'learner_context',
	'SystemClock',
	'ensure_utc',
]
