"""Builders that turn Kubernetes bodies into typed resources."""

from .resources import (
    create_resource_from_body,
    create_ride_from_body,
    create_ride_operator_from_body,
)

__all__ = [
    "create_resource_from_body",
    "create_ride_from_body",
    "create_ride_operator_from_body",
]
