"""Typed, immutable snapshots of Ride and RideOperator resources."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Union

from .constants import API_GROUP, API_GROUP_VERSION, API_VERSION, KIND_RIDE, KIND_RIDE_OPERATOR


@dataclass(frozen=True)
class Condition:
    """A typed, timestamped status flag."""

    type: str
    status: str
    reason: str
    last_transition_time: str
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "status": self.status,
            "reason": self.reason,
            "message": self.message,
            "lastTransitionTime": self.last_transition_time,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Condition:
        return cls(
            type=data.get("type", ""),
            status=data.get("status", "Unknown"),
            reason=data.get("reason", ""),
            last_transition_time=data.get("lastTransitionTime", ""),
            message=data.get("message", ""),
        )


@dataclass(frozen=True)
class TypedReference:
    """Reference to another resource by kind, name and identity."""

    api_version: str
    kind: str
    name: str
    uid: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "name": self.name,
            "uid": self.uid,
        }


@dataclass(frozen=True)
class SecretReference:
    """Where connection details for a resource are written."""

    name: str
    namespace: str


@dataclass(frozen=True)
class ResourceMeta:
    """The parts of Kubernetes object metadata the operator needs."""

    name: str
    uid: str = ""
    resource_version: str | None = None
    generation: int = 0
    deletion_timestamp: str | None = None

    @property
    def deleting(self) -> bool:
        return self.deletion_timestamp is not None


@dataclass(frozen=True)
class RideStatus:
    """Observed state of a Ride."""

    conditions: tuple[Condition, ...] = ()
    operator: TypedReference | None = None
    riders_per_hour: int = 0

    def to_dict(self) -> dict[str, Any]:
        # operator is emitted as None so a merge patch clears a stale reference
        return {
            "conditions": [c.to_dict() for c in self.conditions],
            "operator": self.operator.to_dict() if self.operator else None,
            "ridersPerHour": self.riders_per_hour,
        }


@dataclass(frozen=True)
class RideOperatorStatus:
    """Observed state of a RideOperator."""

    conditions: tuple[Condition, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"conditions": [c.to_dict() for c in self.conditions]}


@dataclass(frozen=True)
class Ride:
    """A bookable attraction."""

    kind: ClassVar[str] = KIND_RIDE
    group_version_kind: ClassVar[tuple[str, str, str]] = (API_GROUP, API_VERSION, KIND_RIDE)

    meta: ResourceMeta
    ride_type: str
    capacity: int
    status: RideStatus = field(default_factory=RideStatus)
    connection_secret_ref: SecretReference | None = None

    @property
    def name(self) -> str:
        return self.meta.name

    def with_status(self, status: RideStatus) -> Ride:
        return replace(self, status=status)


@dataclass(frozen=True)
class RideOperator:
    """A worker who can be assigned to a Ride."""

    kind: ClassVar[str] = KIND_RIDE_OPERATOR
    group_version_kind: ClassVar[tuple[str, str, str]] = (API_GROUP, API_VERSION, KIND_RIDE_OPERATOR)

    meta: ResourceMeta
    frequency: int
    ride_name: str | None = None
    status: RideOperatorStatus = field(default_factory=RideOperatorStatus)
    connection_secret_ref: SecretReference | None = None

    @property
    def name(self) -> str:
        return self.meta.name

    def with_status(self, status: RideOperatorStatus) -> RideOperator:
        return replace(self, status=status)

    def reference(self) -> TypedReference:
        return TypedReference(
            api_version=API_GROUP_VERSION,
            kind=self.kind,
            name=self.meta.name,
            uid=self.meta.uid,
        )


Resource = Union[Ride, RideOperator]
Status = Union[RideStatus, RideOperatorStatus]
