"""Utility functions for the Theme Park Operator."""

from .conditions import (
    ConditionEvent,
    condition_for,
    carry_transition_times,
    get_condition,
    set_condition,
    transition,
)
from .context import ReconcileContext, get_correlation_id, with_correlation_id
from .errors import sanitize_exception
from .rate_limit import RateLimiter

__all__ = [
    "ConditionEvent",
    "condition_for",
    "carry_transition_times",
    "get_condition",
    "set_condition",
    "transition",
    "ReconcileContext",
    "get_correlation_id",
    "with_correlation_id",
    "sanitize_exception",
    "RateLimiter",
]
