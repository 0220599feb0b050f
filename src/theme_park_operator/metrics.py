"""Prometheus metrics for the Theme Park Operator."""

from prometheus_client import Counter, Gauge, Histogram

# Reconciliation metrics
reconcile_total = Counter(
    "theme_park_operator_reconcile_total",
    "Total number of reconciliations",
    ["kind", "result"],
)

reconcile_duration_seconds = Histogram(
    "theme_park_operator_reconcile_duration_seconds",
    "Duration of reconciliations in seconds",
    ["kind"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
)

error_total = Counter(
    "theme_park_operator_error_total",
    "Total number of reconciliation errors",
    ["kind", "error_type"],
)

# Lifecycle phase metrics
external_operations_total = Counter(
    "theme_park_operator_external_operations_total",
    "Total number of external lifecycle operations by phase",
    ["kind", "operation"],
)

# API call metrics
api_call_total = Counter(
    "theme_park_operator_api_call_total",
    "Total number of API calls",
    ["api_type", "operation", "result"],
)

api_call_duration_seconds = Histogram(
    "theme_park_operator_api_call_duration_seconds",
    "Duration of API calls in seconds",
    ["api_type", "operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
)

# Ride throughput
riders_per_hour = Gauge(
    "theme_park_operator_riders_per_hour",
    "Riders per hour last computed for a ride",
    ["ride"],
)


def forget_ride(ride_name: str) -> None:
    """Drop the throughput series of a deleted ride."""
    try:
        riders_per_hour.remove(ride_name)
    except KeyError:
        # never reported
        pass
