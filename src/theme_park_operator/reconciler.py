"""Generic reconcile loop and the connector registry it dispatches through."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator

from . import metrics
from .connectors.base import ConnectionDetails, ExternalConnector
from .errors import WrongKindError
from .models import Resource, Status
from .tracing import trace_span
from .utils.conditions import carry_transition_times
from .utils.context import ReconcileContext


class ReconcileAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    NOOP = "noop"


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of one reconcile pass; the caller persists ``status``."""

    action: ReconcileAction
    resource: Resource
    status: Status
    connection_details: ConnectionDetails = field(default_factory=dict)


class ConnectorRegistry:
    """Maps a (group, version, kind) triple to the connector for that kind.

    Built once at startup and handed to whatever needs to dispatch.
    """

    def __init__(self) -> None:
        self._connectors: dict[tuple[str, str, str], ExternalConnector] = {}

    def register(self, connector: ExternalConnector) -> None:
        key = connector.group_version_kind
        if key in self._connectors:
            raise ValueError(f"A connector is already registered for {'/'.join(key)}")
        self._connectors[key] = connector

    def get(self, group_version_kind: tuple[str, str, str]) -> ExternalConnector:
        try:
            return self._connectors[group_version_kind]
        except KeyError:
            raise WrongKindError("registered kind", "/".join(group_version_kind)) from None

    def for_resource(self, resource: Resource) -> ExternalConnector:
        return self.get(resource.group_version_kind)

    def kinds(self) -> Iterator[tuple[str, str, str]]:
        return iter(self._connectors)

    def __contains__(self, group_version_kind: object) -> bool:
        return group_version_kind in self._connectors

    def __len__(self) -> int:
        return len(self._connectors)


class Reconciler:
    """Runs one observe, decide, act pass for a single resource.

    Connect, then observe. A resource being deleted whose counterpart still
    exists is deleted; a missing counterpart is created; a stale one is
    updated; anything else is left alone. The client is always disconnected.
    Errors propagate unchanged so the host's backoff decides what happens
    next.
    """

    def __init__(self, registry: ConnectorRegistry, logger: logging.Logger | None = None):
        self._registry = registry
        self.logger = logger or logging.getLogger(__name__)

    def reconcile(self, resource: Resource, ctx: ReconcileContext) -> ReconcileResult:
        connector = self._registry.for_resource(resource)
        previous_conditions = resource.status.conditions
        kind = connector.kind

        with trace_span("connect", kind=kind, attributes={"themepark.name": resource.meta.name}):
            client, status = connector.connect(resource, ctx)
        resource = resource.with_status(status)

        try:
            with trace_span("observe", kind=kind):
                observation = client.observe(resource, ctx)
            metrics.external_operations_total.labels(kind=kind, operation="observe").inc()
            resource = resource.with_status(observation.status)
            details: ConnectionDetails = dict(observation.connection_details)

            if resource.meta.deleting:
                if observation.exists:
                    with trace_span("delete", kind=kind):
                        status = client.delete(resource, ctx).status
                    action = ReconcileAction.DELETE
                else:
                    status = resource.status
                    action = ReconcileAction.NOOP
            elif not observation.exists:
                with trace_span("create", kind=kind):
                    creation = client.create(resource, ctx)
                status = creation.status
                details.update(creation.connection_details)
                action = ReconcileAction.CREATE
            elif not observation.up_to_date:
                with trace_span("update", kind=kind):
                    status = client.update(resource, ctx).status
                action = ReconcileAction.UPDATE
            else:
                status = resource.status
                action = ReconcileAction.NOOP
        finally:
            client.disconnect()

        status = replace(status, conditions=carry_transition_times(previous_conditions, status.conditions))

        if action is not ReconcileAction.NOOP:
            metrics.external_operations_total.labels(kind=kind, operation=action.value).inc()
        self.logger.debug(f"Reconciled {kind} {resource.meta.name}: {action.value}")

        return ReconcileResult(
            action=action,
            resource=resource.with_status(status),
            status=status,
            connection_details=details,
        )
