"""Tests for the RideOperator handler."""

from __future__ import annotations

from unittest.mock import patch

import kopf
import pytest

from theme_park_operator.config import OperatorConfig
from theme_park_operator.handlers import ride_operator
from theme_park_operator.handlers.ride_operator import RideOperatorHandler, assigned_ride
from theme_park_operator.runtime import build_runtime

from .conftest import FakeStore


def operator_body(ride="coaster"):
    spec = {"forProvider": {"frequency": 20}}
    if ride is not None:
        spec["forProvider"]["ride"] = {"name": ride}
    return {
        "apiVersion": "themepark.n3wscott.com/v1alpha1",
        "kind": "RideOperator",
        "metadata": {"name": "op1", "uid": "uid-op1"},
        "spec": spec,
    }


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def runtime(store):
    return build_runtime(OperatorConfig(), store=store)


class TestAssignedRide:
    """Test cases for assigned_ride."""

    def test_reads_ride_name(self) -> None:
        assert assigned_ride(operator_body("carousel")) == "carousel"

    def test_unassigned(self) -> None:
        assert assigned_ride(operator_body(None)) is None
        assert assigned_ride(None) is None


class TestNotifyRides:
    """Test cases for RideOperatorHandler.notify_rides."""

    def test_new_operator_nudges_its_ride(self, store, runtime) -> None:
        """A new assignment reaches the ride without waiting for its poll."""
        rides = RideOperatorHandler().notify_rides(operator_body("coaster"), None, runtime)

        assert rides == ["coaster"]
        assert store.nudged == ["coaster"]

    def test_reassignment_nudges_both_rides(self, store, runtime) -> None:
        """The ride that lost the operator and the one that gained it both hear about it."""
        RideOperatorHandler().notify_rides(operator_body("carousel"), operator_body("coaster"), runtime)

        assert store.nudged == ["coaster", "carousel"]

    def test_same_ride_nudged_once(self, store, runtime) -> None:
        RideOperatorHandler().notify_rides(operator_body("coaster"), operator_body("coaster"), runtime)

        assert store.nudged == ["coaster"]

    def test_unassigned_operator(self, store, runtime) -> None:
        """An operator with no ride notifies nobody."""
        assert RideOperatorHandler().notify_rides(operator_body(None), None, runtime) == []
        assert store.nudged == []


class TestHandlers:
    """Test cases for the kopf entry points."""

    def test_update_reconciles_then_notifies(self, store, runtime) -> None:
        memo = kopf.Memo(runtime=runtime)
        with patch("theme_park_operator.handlers.base.emit_reconcile_started"):
            ride_operator.handle_ride_operator(
                body=operator_body("carousel"), memo=memo, old=operator_body("coaster")
            )

        assert len(store.patched) == 1
        assert store.nudged == ["coaster", "carousel"]

    def test_delete_notifies_ride(self, store, runtime) -> None:
        body = operator_body("coaster")
        body["metadata"]["deletionTimestamp"] = "2025-01-01T00:00:00Z"
        memo = kopf.Memo(runtime=runtime)
        with patch("theme_park_operator.handlers.base.emit_reconcile_started"):
            ride_operator.handle_ride_operator_delete(body=body, memo=memo)

        assert store.nudged == ["coaster"]
