"""Wiring of the components the handlers share, built once at startup."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import OperatorConfig
from .connectors import RideConnector, RideOperatorConnector
from .reconciler import ConnectorRegistry, Reconciler
from .services.kubernetes import KubernetesStore, create_api_client
from .utils.rate_limit import RateLimiter


@dataclass(frozen=True)
class OperatorRuntime:
    config: OperatorConfig
    registry: ConnectorRegistry
    reconciler: Reconciler
    store: KubernetesStore


def build_registry(store: KubernetesStore) -> ConnectorRegistry:
    """Register a connector for every kind the operator manages."""
    registry = ConnectorRegistry()
    registry.register(RideConnector(store, logging.getLogger("theme_park_operator.connectors.ride")))
    registry.register(RideOperatorConnector(logging.getLogger("theme_park_operator.connectors.ride_operator")))
    return registry


def build_runtime(config: OperatorConfig, store: KubernetesStore | None = None) -> OperatorRuntime:
    """Build the registry, reconciler and store from configuration."""
    if store is None:
        store = KubernetesStore(
            create_api_client(config),
            RateLimiter(config.k8s_rate_limit_per_second),
        )
    registry = build_registry(store)
    return OperatorRuntime(
        config=config,
        registry=registry,
        reconciler=Reconciler(registry),
        store=store,
    )
