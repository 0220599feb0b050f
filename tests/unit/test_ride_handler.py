"""Tests for the Ride handler."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from theme_park_operator.config import OperatorConfig
from theme_park_operator.handlers.ride import RideHandler
from theme_park_operator.runtime import build_runtime

from .conftest import FakeStore


def ride_body(status=None):
    body = {
        "apiVersion": "themepark.n3wscott.com/v1alpha1",
        "kind": "Ride",
        "metadata": {"name": "coaster", "uid": "uid-coaster", "resourceVersion": "1"},
        "spec": {"forProvider": {"type": "rollercoaster", "capacity": 4}},
    }
    if status is not None:
        body["status"] = status
    return body


@pytest.fixture
def events():
    with patch("theme_park_operator.handlers.base.emit_reconcile_started"), patch(
        "theme_park_operator.handlers.ride.emit_ride_operating"
    ) as operating, patch("theme_park_operator.handlers.ride.emit_ride_short_staffed") as short_staffed:
        yield operating, short_staffed


class TestRideHandler:
    """Test cases for RideHandler."""

    def test_operating_event(self, make_operator, events) -> None:
        """Gaining an operator is announced."""
        operating, short_staffed = events
        runtime = build_runtime(OperatorConfig(), store=FakeStore([make_operator("op1", frequency=20)]))

        RideHandler().reconcile(ride_body(), runtime)

        operating.assert_called_once()
        assert operating.call_args.args[1:] == ("op1", 80)
        short_staffed.assert_not_called()

    def test_short_staffed_event(self, events) -> None:
        """Losing every operator is announced."""
        operating, short_staffed = events
        runtime = build_runtime(OperatorConfig(), store=FakeStore())

        RideHandler().reconcile(ride_body(), runtime)

        short_staffed.assert_called_once()
        operating.assert_not_called()

    def test_no_event_without_change(self, make_operator, events) -> None:
        """A ride that stays operated emits nothing new."""
        operating, _ = events
        store = FakeStore([make_operator("op1")])
        runtime = build_runtime(OperatorConfig(), store=store)
        first = RideHandler().reconcile(ride_body(), runtime)
        operating.reset_mock()

        RideHandler().reconcile(ride_body(status=first.status.to_dict()), runtime)

        operating.assert_not_called()
        assert len(store.patched) == 1
