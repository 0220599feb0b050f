"""Builders for Ride and RideOperator snapshots."""

from __future__ import annotations

from typing import Any, Mapping

from ..constants import API_GROUP_VERSION, KIND_RIDE, KIND_RIDE_OPERATOR
from ..errors import ValidationError, WrongKindError
from ..models import (
    Condition,
    ResourceMeta,
    Resource,
    Ride,
    RideOperator,
    RideOperatorStatus,
    RideStatus,
    SecretReference,
    TypedReference,
)


def _meta_from_body(body: Mapping[str, Any]) -> ResourceMeta:
    metadata = body.get("metadata") or {}
    name = metadata.get("name")
    if not name:
        raise ValidationError("metadata.name is required")
    return ResourceMeta(
        name=name,
        uid=metadata.get("uid", ""),
        resource_version=metadata.get("resourceVersion"),
        generation=metadata.get("generation", 0) or 0,
        deletion_timestamp=metadata.get("deletionTimestamp"),
    )


def _non_negative_int(value: Any, field_name: str) -> int:
    if value is None:
        return 0
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field_name} must be an integer, got {value!r}")
    if value < 0:
        raise ValidationError(f"{field_name} must be >= 0, got {value}")
    return value


def _conditions_from_status(status: Mapping[str, Any]) -> tuple[Condition, ...]:
    return tuple(Condition.from_dict(c) for c in status.get("conditions") or [])


def _secret_ref_from_spec(spec: Mapping[str, Any]) -> SecretReference | None:
    ref = spec.get("writeConnectionSecretToRef")
    if not ref:
        return None
    name = ref.get("name")
    namespace = ref.get("namespace")
    if not name or not namespace:
        raise ValidationError("writeConnectionSecretToRef requires name and namespace")
    return SecretReference(name=name, namespace=namespace)


def _check_kind(body: Mapping[str, Any], expected: str) -> None:
    kind = body.get("kind")
    # bodies from kopf always carry a kind; hand-built ones may not
    if kind is not None and kind != expected:
        raise WrongKindError(expected, kind)
    api_version = body.get("apiVersion")
    if api_version is not None and api_version != API_GROUP_VERSION:
        raise WrongKindError(expected, f"{api_version}/{kind}")


def create_ride_from_body(body: Mapping[str, Any]) -> Ride:
    """Create a Ride snapshot from a Kubernetes body.

    Args:
        body: Full Ride object as delivered by kopf or the API

    Returns:
        Immutable Ride snapshot

    Raises:
        WrongKindError: If the body is not a Ride
        ValidationError: If the desired state is malformed
    """
    _check_kind(body, KIND_RIDE)
    spec = body.get("spec") or {}
    params = spec.get("forProvider") or {}
    status = body.get("status") or {}

    operator = None
    operator_ref = status.get("operator")
    if operator_ref:
        operator = TypedReference(
            api_version=operator_ref.get("apiVersion", ""),
            kind=operator_ref.get("kind", ""),
            name=operator_ref.get("name", ""),
            uid=operator_ref.get("uid", ""),
        )

    return Ride(
        meta=_meta_from_body(body),
        ride_type=params.get("type", ""),
        capacity=_non_negative_int(params.get("capacity"), "spec.forProvider.capacity"),
        status=RideStatus(
            conditions=_conditions_from_status(status),
            operator=operator,
            riders_per_hour=status.get("ridersPerHour", 0) or 0,
        ),
        connection_secret_ref=_secret_ref_from_spec(spec),
    )


def create_ride_operator_from_body(body: Mapping[str, Any]) -> RideOperator:
    """Create a RideOperator snapshot from a Kubernetes body.

    Raises:
        WrongKindError: If the body is not a RideOperator
        ValidationError: If the desired state is malformed
    """
    _check_kind(body, KIND_RIDE_OPERATOR)
    spec = body.get("spec") or {}
    params = spec.get("forProvider") or {}
    status = body.get("status") or {}
    ride_ref = params.get("ride") or {}

    return RideOperator(
        meta=_meta_from_body(body),
        frequency=_non_negative_int(params.get("frequency"), "spec.forProvider.frequency"),
        ride_name=ride_ref.get("name") or None,
        status=RideOperatorStatus(conditions=_conditions_from_status(status)),
        connection_secret_ref=_secret_ref_from_spec(spec),
    )


_BUILDERS = {
    KIND_RIDE: create_ride_from_body,
    KIND_RIDE_OPERATOR: create_ride_operator_from_body,
}


def create_resource_from_body(body: Mapping[str, Any]) -> Resource:
    """Create the snapshot matching the body's kind."""
    kind = body.get("kind", "")
    try:
        builder = _BUILDERS[kind]
    except KeyError:
        raise WrongKindError(f"{KIND_RIDE} or {KIND_RIDE_OPERATOR}", kind) from None
    return builder(body)
