"""Handler for Ride CRD."""

from __future__ import annotations

from typing import Any, Mapping

import kopf

from ..builders.resources import create_ride_from_body
from ..config import poll_interval_from_env
from ..constants import API_GROUP_VERSION, COND_OPERATIONAL, KIND_RIDE, REASON_OPERATING, REASON_SHORT_STAFFED
from ..models import Resource
from ..reconciler import ReconcileResult
from ..utils.conditions import get_condition
from ..utils.events import emit_ride_operating, emit_ride_short_staffed
from .base import BaseHandler


class RideHandler(BaseHandler):
    """Handler for Ride resources."""

    def __init__(self):
        """Initialize ride handler."""
        super().__init__(KIND_RIDE, create_ride_from_body)

    def after_reconcile(
        self,
        body: Mapping[str, Any],
        before: Resource,
        result: ReconcileResult,
    ) -> None:
        """Emit an event when the ride starts or stops being staffed."""
        previous = get_condition(before.status.conditions, COND_OPERATIONAL)
        current = get_condition(result.status.conditions, COND_OPERATIONAL)
        if current is None:
            return
        if previous is not None and previous.reason == current.reason:
            return

        if current.reason == REASON_OPERATING:
            operator = result.status.operator
            operator_name = operator.name if operator else "unknown"
            emit_ride_operating(body, operator_name, result.status.riders_per_hour)
            self.log_info(
                body,
                f"Ride is operated by {operator_name}",
                event="operating",
                reason=REASON_OPERATING,
                riders_per_hour=result.status.riders_per_hour,
            )
        elif current.reason == REASON_SHORT_STAFFED:
            emit_ride_short_staffed(body)
            self.log_warning(body, "Ride has no operator", event="short_staffed", reason=REASON_SHORT_STAFFED)


# Global handler instance
_handler = RideHandler()


@kopf.on.create(API_GROUP_VERSION, KIND_RIDE)
@kopf.on.update(API_GROUP_VERSION, KIND_RIDE)
@kopf.on.resume(API_GROUP_VERSION, KIND_RIDE)
def handle_ride(
    body: kopf.Body,
    memo: kopf.Memo,
    **kwargs: Any,
) -> None:
    """Handle Ride resource reconciliation."""
    _handler.reconcile(body, memo.runtime)


@kopf.timer(API_GROUP_VERSION, KIND_RIDE, interval=poll_interval_from_env(), idle=None)
def poll_ride(
    body: kopf.Body,
    memo: kopf.Memo,
    stopped: kopf.DaemonStopped,
    **kwargs: Any,
) -> None:
    """Re-resolve the ride's operator on every poll interval."""
    _handler.reconcile(body, memo.runtime, stopped=stopped)


@kopf.on.delete(API_GROUP_VERSION, KIND_RIDE)
def handle_ride_delete(
    body: kopf.Body,
    memo: kopf.Memo,
    **kwargs: Any,
) -> None:
    """Handle Ride resource deletion."""
    _handler.reconcile(body, memo.runtime)
