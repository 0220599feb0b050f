"""Utilities for emitting Kubernetes events."""

from __future__ import annotations

from typing import Any, Mapping

import kopf

from ..constants import (
    EVENT_REASON_RECONCILE_FAILED,
    EVENT_REASON_RECONCILE_STARTED,
    EVENT_REASON_RIDE_OPERATING,
    EVENT_REASON_RIDE_SHORT_STAFFED,
)


def emit_event(
    body: Mapping[str, Any],
    reason: str,
    message: str,
    type_: str = "Normal",
) -> None:
    """Emit a Kubernetes event.

    Args:
        body: Resource body the event is attached to
        reason: Event reason
        message: Event message
        type_: Event type (Normal or Warning)
    """
    kopf.event(
        body,
        reason=reason,
        message=message,
        type=type_,
    )


def emit_reconcile_started(body: Mapping[str, Any]) -> None:
    """Emit reconcile started event."""
    emit_event(body, EVENT_REASON_RECONCILE_STARTED, "Reconciliation started")


def emit_reconcile_failed(body: Mapping[str, Any], message: str) -> None:
    """Emit reconcile failed event."""
    emit_event(body, EVENT_REASON_RECONCILE_FAILED, message, type_="Warning")


def emit_ride_operating(body: Mapping[str, Any], operator_name: str, riders_per_hour: int) -> None:
    """Emit ride operating event."""
    emit_event(
        body,
        EVENT_REASON_RIDE_OPERATING,
        f"Operated by {operator_name} at {riders_per_hour} riders per hour",
    )


def emit_ride_short_staffed(body: Mapping[str, Any]) -> None:
    """Emit ride short-staffed event."""
    emit_event(body, EVENT_REASON_RIDE_SHORT_STAFFED, "No operator is assigned", type_="Warning")

