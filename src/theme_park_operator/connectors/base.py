"""Four-phase external lifecycle shared by every resource kind.

A connector turns a resource snapshot into a client scoped to one reconcile
attempt. The client's ``observe``, ``create``, ``update`` and ``delete``
operations each take an immutable snapshot and hand back the new observed
status; persisting it is the caller's job.
"""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from ..constants import CONNECTION_ENDPOINT_KEY, CONNECTION_USER_KEY
from ..errors import WrongKindError
from ..models import Resource, Status
from ..utils.context import ReconcileContext

ConnectionDetails = dict[str, bytes]

_R = TypeVar("_R")


@dataclass(frozen=True)
class ExternalObservation:
    exists: bool
    up_to_date: bool
    status: Status
    connection_details: ConnectionDetails = field(default_factory=dict)


@dataclass(frozen=True)
class ExternalCreation:
    status: Status
    connection_details: ConnectionDetails = field(default_factory=dict)


@dataclass(frozen=True)
class ExternalUpdate:
    status: Status


@dataclass(frozen=True)
class ExternalDelete:
    status: Status


def observed_connection_details() -> ConnectionDetails:
    """Placeholder credentials reported on every observe."""
    return {
        CONNECTION_USER_KEY: b"user",
        CONNECTION_ENDPOINT_KEY: b"host",
    }


def created_connection_details(kind: str) -> ConnectionDetails:
    """Placeholder credentials reported when a resource is created."""
    return {kind.lower(): b"maybe"}


def expect_kind(resource: Any, resource_type: type[_R]) -> _R:
    """Return the resource if it is of the expected type.

    Raises:
        WrongKindError: If the resource is of any other kind
    """
    if not isinstance(resource, resource_type):
        actual = getattr(resource, "kind", type(resource).__name__)
        raise WrongKindError(resource_type.kind, actual)  # type: ignore[attr-defined]
    return resource


class ExternalClient(abc.ABC, Generic[_R]):
    """Client bound to a single reconcile attempt."""

    resource_type: type[_R]

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def _typed(self, resource: Resource) -> _R:
        return expect_kind(resource, self.resource_type)

    @abc.abstractmethod
    def observe(self, resource: Resource, ctx: ReconcileContext) -> ExternalObservation:
        """Report whether the external counterpart exists and is up to date."""

    @abc.abstractmethod
    def create(self, resource: Resource, ctx: ReconcileContext) -> ExternalCreation:
        """Create the external counterpart."""

    @abc.abstractmethod
    def update(self, resource: Resource, ctx: ReconcileContext) -> ExternalUpdate:
        """Bring the external counterpart in line with the desired state."""

    @abc.abstractmethod
    def delete(self, resource: Resource, ctx: ReconcileContext) -> ExternalDelete:
        """Tear down the external counterpart."""

    def disconnect(self) -> None:
        """Release the client. Always succeeds."""


class ExternalConnector(abc.ABC, Generic[_R]):
    """Produces clients for one resource kind."""

    resource_type: type[_R]

    @property
    def group_version_kind(self) -> tuple[str, str, str]:
        return self.resource_type.group_version_kind  # type: ignore[attr-defined]

    @property
    def kind(self) -> str:
        return self.resource_type.kind  # type: ignore[attr-defined]

    @abc.abstractmethod
    def connect(self, resource: Resource, ctx: ReconcileContext) -> tuple[ExternalClient[_R], Status]:
        """Return a fresh client and the status with the Connecting condition set.

        Raises:
            WrongKindError: If the resource is not of this connector's kind
        """
