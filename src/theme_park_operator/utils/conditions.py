"""Condition state machine for Ride and RideOperator resources."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Iterable

from ..constants import (
    COND_OPERATIONAL,
    COND_READY,
    REASON_AVAILABLE,
    REASON_CREATING,
    REASON_DELETING,
    REASON_OPERATING,
    REASON_SHORT_STAFFED,
    STATUS_FALSE,
    STATUS_TRUE,
    STATUS_UNKNOWN,
)
from ..models import Condition


class ConditionEvent(str, Enum):
    """Lifecycle events that drive a resource's conditions."""

    CONNECT = "Connect"
    CREATE = "Create"
    AVAILABLE = "Available"
    OPERATE = "Operate"
    SHORT_STAFF = "ShortStaff"
    DELETE = "Delete"


# event -> (type, status, reason, message)
_TRANSITIONS: dict[ConditionEvent, tuple[str, str, str, str]] = {
    ConditionEvent.CONNECT: (COND_READY, STATUS_UNKNOWN, REASON_CREATING, "Connecting to provider"),
    ConditionEvent.CREATE: (COND_READY, STATUS_FALSE, REASON_CREATING, "Resource is being created"),
    ConditionEvent.AVAILABLE: (COND_READY, STATUS_TRUE, REASON_AVAILABLE, "Resource is available"),
    ConditionEvent.OPERATE: (COND_OPERATIONAL, STATUS_TRUE, REASON_OPERATING, "Ride has an operator"),
    ConditionEvent.SHORT_STAFF: (
        COND_OPERATIONAL,
        STATUS_FALSE,
        REASON_SHORT_STAFFED,
        "No operator is assigned to this ride",
    ),
    ConditionEvent.DELETE: (COND_READY, STATUS_FALSE, REASON_DELETING, "Resource is being deleted"),
}


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


def condition_for(
    event: ConditionEvent,
    message: str | None = None,
    now: Callable[[], str] = _utcnow,
) -> Condition:
    """Return the condition an event produces, stamped with the current time."""
    cond_type, status, reason, default_message = _TRANSITIONS[event]
    return Condition(
        type=cond_type,
        status=status,
        reason=reason,
        last_transition_time=now(),
        message=default_message if message is None else message,
    )


def connecting() -> Condition:
    return condition_for(ConditionEvent.CONNECT)


def creating() -> Condition:
    return condition_for(ConditionEvent.CREATE)


def available() -> Condition:
    return condition_for(ConditionEvent.AVAILABLE)


def operating(message: str | None = None) -> Condition:
    return condition_for(ConditionEvent.OPERATE, message)


def short_staffed() -> Condition:
    return condition_for(ConditionEvent.SHORT_STAFF)


# a ride without an operator is unavailable to riders
unavailable = short_staffed


def deleting() -> Condition:
    return condition_for(ConditionEvent.DELETE)


def get_condition(conditions: Iterable[Condition], condition_type: str) -> Condition | None:
    """Return the condition of the given type, if any."""
    for cond in conditions:
        if cond.type == condition_type:
            return cond
    return None


def set_condition(conditions: Iterable[Condition], condition: Condition) -> tuple[Condition, ...]:
    """Merge a condition into a condition set.

    At most one condition per type is kept. A new condition replaces the old
    one in place; the transition time is carried over when the status did not
    change.

    Args:
        conditions: Existing conditions
        condition: Condition to merge in

    Returns:
        New tuple of conditions; the input is not modified
    """
    merged: list[Condition] = []
    replaced = False
    for existing in conditions:
        if existing.type != condition.type:
            merged.append(existing)
            continue
        if replaced:
            # drop duplicates of the same type left by older writers
            continue
        if existing.status == condition.status and existing.last_transition_time:
            condition = Condition(
                type=condition.type,
                status=condition.status,
                reason=condition.reason,
                last_transition_time=existing.last_transition_time,
                message=condition.message,
            )
        merged.append(condition)
        replaced = True

    if not replaced:
        merged.append(condition)
    return tuple(merged)


def transition(
    conditions: Iterable[Condition],
    event: ConditionEvent,
    message: str | None = None,
) -> tuple[Condition, ...]:
    """Apply a lifecycle event to a condition set."""
    return set_condition(conditions, condition_for(event, message))


def carry_transition_times(
    previous: Iterable[Condition],
    current: Iterable[Condition],
) -> tuple[Condition, ...]:
    """Keep the persisted transition time of every condition whose status held.

    A reconcile pass may move a condition through intermediate states before
    settling; only the settled state is written, so a condition that ends
    where it started keeps its persisted timestamp.
    """
    before = {cond.type: cond for cond in previous}
    settled = []
    for cond in current:
        old = before.get(cond.type)
        if old is not None and old.status == cond.status and old.last_transition_time:
            cond = replace(cond, last_transition_time=old.last_transition_time)
        settled.append(cond)
    return tuple(settled)
