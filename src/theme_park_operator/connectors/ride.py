"""External connector for Ride resources."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Protocol

from .. import metrics
from ..constants import KIND_RIDE
from ..models import Resource, Ride, RideOperator, RideStatus
from ..relationships import find_operator_for_ride, find_operators_for_ride, riders_per_hour
from ..tracing import trace_span
from ..utils.conditions import ConditionEvent, transition
from ..utils.context import ReconcileContext
from .base import (
    ExternalClient,
    ExternalConnector,
    ExternalCreation,
    ExternalDelete,
    ExternalObservation,
    ExternalUpdate,
    created_connection_details,
    expect_kind,
    observed_connection_details,
)


class RideOperatorLister(Protocol):
    def list_ride_operators(self, ctx: ReconcileContext) -> list[RideOperator]: ...


class RideClient(ExternalClient[Ride]):
    """Client for one Ride reconcile attempt."""

    resource_type = Ride

    def __init__(self, store: RideOperatorLister, logger: logging.Logger | None = None):
        super().__init__(logger)
        self._store = store

    def observe(self, resource: Resource, ctx: ReconcileContext) -> ExternalObservation:
        # Always out of date: the operator join can change without touching the Ride.
        ride = self._typed(resource)
        ctx.check()
        return ExternalObservation(
            exists=True,
            up_to_date=False,
            status=ride.status,
            connection_details=observed_connection_details(),
        )

    def create(self, resource: Resource, ctx: ReconcileContext) -> ExternalCreation:
        ride = self._typed(resource)
        ctx.check()
        status = replace(ride.status, conditions=transition(ride.status.conditions, ConditionEvent.CREATE))
        return ExternalCreation(status=status, connection_details=created_connection_details(KIND_RIDE))

    def update(self, resource: Resource, ctx: ReconcileContext) -> ExternalUpdate:
        """Resolve the ride's operator and derive its throughput."""
        ride = self._typed(resource)
        ctx.check()

        with trace_span("list_ride_operators", kind=KIND_RIDE, attributes={"themepark.name": ride.name}):
            operators = self._store.list_ride_operators(ctx)
        ctx.check()
        # an operator on its way out no longer staffs anything
        operators = [op for op in operators if not op.meta.deleting]

        claimants = find_operators_for_ride(ride.name, operators)
        if len(claimants) > 1:
            self.logger.warning(
                "Ride %s is referenced by %d operators (%s); using the last one",
                ride.name,
                len(claimants),
                ", ".join(op.name for op in claimants),
            )

        operator, found = find_operator_for_ride(ride.name, operators)
        if found:
            throughput = riders_per_hour(ride.capacity, operator)
            status = RideStatus(
                conditions=transition(
                    ride.status.conditions,
                    ConditionEvent.OPERATE,
                    f"Operated by {operator.name}",
                ),
                operator=operator.reference(),
                riders_per_hour=throughput,
            )
        else:
            status = RideStatus(
                conditions=transition(ride.status.conditions, ConditionEvent.SHORT_STAFF),
                operator=None,
                riders_per_hour=0,
            )

        metrics.riders_per_hour.labels(ride=ride.name).set(status.riders_per_hour)
        return ExternalUpdate(status=status)

    def delete(self, resource: Resource, ctx: ReconcileContext) -> ExternalDelete:
        ride = self._typed(resource)
        ctx.check()
        metrics.forget_ride(ride.name)
        status = replace(ride.status, conditions=transition(ride.status.conditions, ConditionEvent.DELETE))
        return ExternalDelete(status=status)


class RideConnector(ExternalConnector[Ride]):
    """Connects Ride resources to a store that can list operators."""

    resource_type = Ride

    def __init__(self, store: RideOperatorLister, logger: logging.Logger | None = None):
        self._store = store
        self._logger = logger or logging.getLogger(__name__)

    def connect(self, resource: Resource, ctx: ReconcileContext) -> tuple[RideClient, RideStatus]:
        ride = expect_kind(resource, Ride)
        ctx.check()
        self._logger.debug("Connecting to provider for Ride %s", ride.name)
        status = replace(ride.status, conditions=transition(ride.status.conditions, ConditionEvent.CONNECT))
        return RideClient(self._store, self._logger), status
