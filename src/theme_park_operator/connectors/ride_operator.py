"""External connector for RideOperator resources.

Operators are leaf resources: nothing downstream depends on them, so observe
marks them available and reports them up to date, and update has nothing to
do.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ..constants import KIND_RIDE_OPERATOR
from ..models import Resource, RideOperator, RideOperatorStatus
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


class RideOperatorClient(ExternalClient[RideOperator]):
    """Client for one RideOperator reconcile attempt."""

    resource_type = RideOperator

    def observe(self, resource: Resource, ctx: ReconcileContext) -> ExternalObservation:
        operator = self._typed(resource)
        ctx.check()
        status = replace(
            operator.status,
            conditions=transition(operator.status.conditions, ConditionEvent.AVAILABLE),
        )
        return ExternalObservation(
            exists=True,
            up_to_date=True,
            status=status,
            connection_details=observed_connection_details(),
        )

    def create(self, resource: Resource, ctx: ReconcileContext) -> ExternalCreation:
        operator = self._typed(resource)
        ctx.check()
        status = replace(
            operator.status,
            conditions=transition(operator.status.conditions, ConditionEvent.CREATE),
        )
        return ExternalCreation(
            status=status,
            connection_details=created_connection_details(KIND_RIDE_OPERATOR),
        )

    def update(self, resource: Resource, ctx: ReconcileContext) -> ExternalUpdate:
        operator = self._typed(resource)
        return ExternalUpdate(status=operator.status)

    def delete(self, resource: Resource, ctx: ReconcileContext) -> ExternalDelete:
        operator = self._typed(resource)
        ctx.check()
        status = replace(
            operator.status,
            conditions=transition(operator.status.conditions, ConditionEvent.DELETE),
        )
        return ExternalDelete(status=status)


class RideOperatorConnector(ExternalConnector[RideOperator]):
    """Connects RideOperator resources. Needs no store."""

    resource_type = RideOperator

    def __init__(self, logger: logging.Logger | None = None):
        self._logger = logger or logging.getLogger(__name__)

    def connect(
        self,
        resource: Resource,
        ctx: ReconcileContext,
    ) -> tuple[RideOperatorClient, RideOperatorStatus]:
        operator = expect_kind(resource, RideOperator)
        ctx.check()
        status = replace(
            operator.status,
            conditions=transition(operator.status.conditions, ConditionEvent.CONNECT),
        )
        return RideOperatorClient(self._logger), status
