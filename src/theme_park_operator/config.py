"""Operator configuration read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import ConfigError

DEFAULT_POLL_INTERVAL_SECONDS = 60.0
DEFAULT_MAX_CONCURRENT_RECONCILES = 10
DEFAULT_RECONCILE_TIMEOUT_SECONDS = 30.0
DEFAULT_METRICS_PORT = 8080
DEFAULT_K8S_RATE_LIMIT_PER_SECOND = 10.0

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_bool(env: dict[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def _env_float(env: dict[str, str], name: str, default: float, minimum: float) -> float:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e
    if value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {value}")
    return value


def _env_int(env: dict[str, str], name: str, default: int, minimum: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e
    if value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {value}")
    return value


def poll_interval_from_env(env: dict[str, str] | None = None) -> float:
    """Return the steady-state poll interval in seconds.

    Handler decorators need this at import time, before the startup handler
    builds the full :class:`OperatorConfig`.
    """
    env = dict(os.environ) if env is None else env
    return _env_float(env, "POLL_INTERVAL_SECONDS", DEFAULT_POLL_INTERVAL_SECONDS, minimum=1.0)


@dataclass(frozen=True)
class OperatorConfig:
    """Settings consumed by the operator at startup."""

    poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS
    max_concurrent_reconciles: int = DEFAULT_MAX_CONCURRENT_RECONCILES
    leader_election: bool = True
    reconcile_timeout: float = DEFAULT_RECONCILE_TIMEOUT_SECONDS
    provider_endpoint: str | None = None
    provider_use_tls: bool = False
    provider_tls_cert_path: str | None = None
    provider_tls_key_path: str | None = None
    provider_tls_ca_path: str | None = None
    metrics_port: int = DEFAULT_METRICS_PORT
    log_level: str = "INFO"
    k8s_rate_limit_per_second: float = DEFAULT_K8S_RATE_LIMIT_PER_SECOND
    # None picks a random priority per process
    peering_priority: int | None = None

    @classmethod
    def from_env(cls, env: dict[str, str] | None = None) -> OperatorConfig:
        """Build the configuration from environment variables.

        Raises:
            ConfigError: If any variable holds an invalid value
        """
        env = dict(os.environ) if env is None else env

        log_level = env.get("LOG_LEVEL", "INFO").strip().upper()
        if log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ConfigError(f"LOG_LEVEL must be a logging level name, got {log_level!r}")

        use_tls = _env_bool(env, "PROVIDER_USE_TLS", False)
        cert_path = env.get("PROVIDER_TLS_CERT_PATH") or None
        key_path = env.get("PROVIDER_TLS_KEY_PATH") or None
        if use_tls and bool(cert_path) != bool(key_path):
            raise ConfigError("PROVIDER_TLS_CERT_PATH and PROVIDER_TLS_KEY_PATH must be set together")

        return cls(
            poll_interval=poll_interval_from_env(env),
            max_concurrent_reconciles=_env_int(
                env, "MAX_CONCURRENT_RECONCILES", DEFAULT_MAX_CONCURRENT_RECONCILES, minimum=1
            ),
            leader_election=_env_bool(env, "LEADER_ELECTION", True),
            reconcile_timeout=_env_float(
                env, "RECONCILE_TIMEOUT_SECONDS", DEFAULT_RECONCILE_TIMEOUT_SECONDS, minimum=0.1
            ),
            provider_endpoint=env.get("PROVIDER_ENDPOINT") or None,
            provider_use_tls=use_tls,
            provider_tls_cert_path=cert_path,
            provider_tls_key_path=key_path,
            provider_tls_ca_path=env.get("PROVIDER_TLS_CA_PATH") or None,
            metrics_port=_env_int(env, "METRICS_PORT", DEFAULT_METRICS_PORT, minimum=1),
            log_level=log_level,
            k8s_rate_limit_per_second=_env_float(
                env, "K8S_RATE_LIMIT_PER_SECOND", DEFAULT_K8S_RATE_LIMIT_PER_SECOND, minimum=0.1
            ),
            peering_priority=(
                _env_int(env, "PEERING_PRIORITY", 0, minimum=0) if env.get("PEERING_PRIORITY") else None
            ),
        )
