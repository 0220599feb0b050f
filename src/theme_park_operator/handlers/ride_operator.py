"""Handler for RideOperator CRD."""

from __future__ import annotations

from typing import Any, Mapping

import kopf

from ..builders.resources import create_ride_operator_from_body
from ..config import poll_interval_from_env
from ..constants import API_GROUP_VERSION, KIND_RIDE_OPERATOR
from ..runtime import OperatorRuntime
from ..utils.context import ReconcileContext
from .base import BaseHandler


def assigned_ride(body: Mapping[str, Any] | None) -> str | None:
    """Name of the Ride a raw RideOperator body points at, if any."""
    if not body:
        return None
    params = (body.get("spec") or {}).get("forProvider") or {}
    return (params.get("ride") or {}).get("name") or None


class RideOperatorHandler(BaseHandler):
    """Handler for RideOperator resources."""

    def __init__(self):
        """Initialize ride operator handler."""
        super().__init__(KIND_RIDE_OPERATOR, create_ride_operator_from_body)

    def notify_rides(
        self,
        body: Mapping[str, Any],
        old: Mapping[str, Any] | None,
        runtime: OperatorRuntime,
    ) -> list[str]:
        """Nudge the rides this operator staffs, or staffed before the change.

        Returns:
            Names of the rides nudged
        """
        rides = []
        for name in (assigned_ride(old), assigned_ride(body)):
            if name and name not in rides:
                rides.append(name)
        if not rides:
            return rides

        ctx = ReconcileContext(runtime.config.reconcile_timeout)
        for name in rides:
            runtime.store.nudge_ride(name, ctx)
        self.log_info(body, f"Notified rides: {', '.join(rides)}", event="rides_notified", reason="RidesNotified")
        return rides


# Global handler instance
_handler = RideOperatorHandler()


@kopf.on.create(API_GROUP_VERSION, KIND_RIDE_OPERATOR)
@kopf.on.update(API_GROUP_VERSION, KIND_RIDE_OPERATOR)
def handle_ride_operator(
    body: kopf.Body,
    memo: kopf.Memo,
    old: Mapping[str, Any] | None = None,
    **kwargs: Any,
) -> None:
    """Handle RideOperator resource reconciliation."""
    _handler.reconcile(body, memo.runtime)
    _handler.notify_rides(body, old, memo.runtime)


@kopf.on.resume(API_GROUP_VERSION, KIND_RIDE_OPERATOR)
def resume_ride_operator(
    body: kopf.Body,
    memo: kopf.Memo,
    **kwargs: Any,
) -> None:
    """Reconcile on operator restart; rides resume on their own."""
    _handler.reconcile(body, memo.runtime)


@kopf.timer(API_GROUP_VERSION, KIND_RIDE_OPERATOR, interval=poll_interval_from_env(), idle=None)
def poll_ride_operator(
    body: kopf.Body,
    memo: kopf.Memo,
    stopped: kopf.DaemonStopped,
    **kwargs: Any,
) -> None:
    """Periodic steady-state reconcile."""
    _handler.reconcile(body, memo.runtime, stopped=stopped)


@kopf.on.delete(API_GROUP_VERSION, KIND_RIDE_OPERATOR)
def handle_ride_operator_delete(
    body: kopf.Body,
    memo: kopf.Memo,
    **kwargs: Any,
) -> None:
    """Handle RideOperator resource deletion."""
    _handler.reconcile(body, memo.runtime)
    _handler.notify_rides(body, None, memo.runtime)
