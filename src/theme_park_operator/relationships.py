"""Resolve which RideOperator serves a Ride."""

from __future__ import annotations

from typing import Iterable

from .models import RideOperator


def find_operators_for_ride(ride_name: str, operators: Iterable[RideOperator]) -> list[RideOperator]:
    """Return every operator whose ride reference names the given ride, in order."""
    return [op for op in operators if op.ride_name is not None and op.ride_name == ride_name]


def find_operator_for_ride(
    ride_name: str,
    operators: Iterable[RideOperator],
) -> tuple[RideOperator | None, bool]:
    """Find the operator assigned to a ride.

    Scans the whole collection and keeps overwriting the match, so when
    several operators reference the same ride the last one in iteration order
    wins. Operators without a ride reference are skipped.

    Args:
        ride_name: Name of the Ride
        operators: Snapshot of the RideOperator collection

    Returns:
        Tuple of (operator or None, found)
    """
    match: RideOperator | None = None
    for op in operators:
        if op.ride_name is not None and op.ride_name == ride_name:
            match = op
    return match, match is not None


def riders_per_hour(capacity: int, operator: RideOperator | None) -> int:
    """Throughput of a ride with the given capacity and operator."""
    if operator is None:
        return 0
    return capacity * operator.frequency
