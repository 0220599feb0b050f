"""Tests for operator configuration."""

from __future__ import annotations

import pytest

from theme_park_operator.config import OperatorConfig, poll_interval_from_env
from theme_park_operator.errors import ConfigError


class TestOperatorConfig:
    """Test cases for OperatorConfig.from_env."""

    def test_defaults(self) -> None:
        """An empty environment yields the defaults."""
        config = OperatorConfig.from_env({})

        assert config.poll_interval == 60.0
        assert config.max_concurrent_reconciles == 10
        assert config.leader_election is True
        assert config.reconcile_timeout == 30.0
        assert config.provider_endpoint is None
        assert config.metrics_port == 8080
        assert config.log_level == "INFO"
        assert config.peering_priority is None

    def test_overrides(self) -> None:
        """Every variable is honoured."""
        config = OperatorConfig.from_env({
            "POLL_INTERVAL_SECONDS": "15",
            "MAX_CONCURRENT_RECONCILES": "3",
            "LEADER_ELECTION": "false",
            "RECONCILE_TIMEOUT_SECONDS": "5.5",
            "PROVIDER_ENDPOINT": "https://10.0.0.1:6443",
            "PROVIDER_USE_TLS": "true",
            "PROVIDER_TLS_CERT_PATH": "/tls/tls.crt",
            "PROVIDER_TLS_KEY_PATH": "/tls/tls.key",
            "METRICS_PORT": "9090",
            "LOG_LEVEL": "debug",
            "PEERING_PRIORITY": "100",
        })

        assert config.poll_interval == 15.0
        assert config.max_concurrent_reconciles == 3
        assert config.leader_election is False
        assert config.reconcile_timeout == 5.5
        assert config.provider_endpoint == "https://10.0.0.1:6443"
        assert config.provider_use_tls is True
        assert config.provider_tls_cert_path == "/tls/tls.crt"
        assert config.metrics_port == 9090
        assert config.log_level == "DEBUG"
        assert config.peering_priority == 100

    @pytest.mark.parametrize(
        "env",
        [
            {"MAX_CONCURRENT_RECONCILES": "0"},
            {"MAX_CONCURRENT_RECONCILES": "many"},
            {"POLL_INTERVAL_SECONDS": "0"},
            {"LEADER_ELECTION": "maybe"},
            {"LOG_LEVEL": "CHATTY"},
            {"PEERING_PRIORITY": "-1"},
            {"PROVIDER_USE_TLS": "true", "PROVIDER_TLS_CERT_PATH": "/tls/tls.crt"},
        ],
    )
    def test_invalid(self, env) -> None:
        """Invalid values are rejected at startup."""
        with pytest.raises(ConfigError):
            OperatorConfig.from_env(env)

    def test_poll_interval_from_env(self) -> None:
        """The poll interval can be read on its own."""
        assert poll_interval_from_env({"POLL_INTERVAL_SECONDS": "120"}) == 120.0
        assert poll_interval_from_env({}) == 60.0
