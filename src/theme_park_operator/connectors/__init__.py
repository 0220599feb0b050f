"""External connectors, one per resource kind."""

from .base import (
    ExternalClient,
    ExternalConnector,
    ExternalCreation,
    ExternalDelete,
    ExternalObservation,
    ExternalUpdate,
)
from .ride import RideClient, RideConnector
from .ride_operator import RideOperatorClient, RideOperatorConnector

__all__ = [
    "ExternalClient",
    "ExternalConnector",
    "ExternalCreation",
    "ExternalDelete",
    "ExternalObservation",
    "ExternalUpdate",
    "RideClient",
    "RideConnector",
    "RideOperatorClient",
    "RideOperatorConnector",
]
