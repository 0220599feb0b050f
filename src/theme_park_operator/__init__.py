"""Theme park operator: reconciles Ride and RideOperator resources."""

__version__ = "0.1.0"
