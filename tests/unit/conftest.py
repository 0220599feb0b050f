"""Shared fixtures for unit tests."""

from __future__ import annotations

import threading
from typing import Any, Callable

import pytest

from theme_park_operator.models import ResourceMeta, Ride, RideOperator
from theme_park_operator.utils.context import ReconcileContext


class FakeStore:
    """In-memory stand-in for the Kubernetes store."""

    def __init__(self, operators: list[RideOperator] | None = None, error: Exception | None = None):
        self.operators = list(operators or [])
        self.error = error
        self.list_calls = 0
        self._lock = threading.Lock()
        self.patched: list[tuple[Any, Any]] = []
        self.published: list[tuple[Any, dict[str, bytes]]] = []
        self.nudged: list[str] = []

    def list_ride_operators(self, ctx: ReconcileContext) -> list[RideOperator]:
        with self._lock:
            self.list_calls += 1
        if self.error is not None:
            raise self.error
        return list(self.operators)

    def patch_status(self, resource: Any, status: Any, ctx: ReconcileContext) -> None:
        self.patched.append((resource, status))

    def publish_connection_details(self, resource: Any, details: dict[str, bytes], ctx: ReconcileContext) -> None:
        if resource.connection_secret_ref is not None and details:
            self.published.append((resource, details))

    def nudge_ride(self, ride_name: str, ctx: ReconcileContext) -> None:
        self.nudged.append(ride_name)


@pytest.fixture
def make_ride() -> Callable[..., Ride]:
    def _make(name: str = "coaster", capacity: int = 4, ride_type: str = "rollercoaster", **meta: Any) -> Ride:
        return Ride(
            meta=ResourceMeta(name=name, uid=f"uid-{name}", **meta),
            ride_type=ride_type,
            capacity=capacity,
        )

    return _make


@pytest.fixture
def make_operator() -> Callable[..., RideOperator]:
    def _make(name: str = "op1", frequency: int = 20, ride_name: str | None = "coaster", **meta: Any) -> RideOperator:
        return RideOperator(
            meta=ResourceMeta(name=name, uid=f"uid-{name}", **meta),
            frequency=frequency,
            ride_name=ride_name,
        )

    return _make


@pytest.fixture
def ctx() -> ReconcileContext:
    return ReconcileContext(timeout=30.0)


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()
