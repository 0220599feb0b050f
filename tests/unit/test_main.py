"""Tests for operator startup settings."""

from __future__ import annotations

import logging

import kopf

from theme_park_operator.config import OperatorConfig
from theme_park_operator.main import apply_settings


class TestApplySettings:
    """Test cases for apply_settings."""

    def test_leader_election_enabled(self) -> None:
        """With leader election only one instance handles resources."""
        settings = kopf.OperatorSettings()

        apply_settings(settings, OperatorConfig(max_concurrent_reconciles=4, reconcile_timeout=15.0))

        assert settings.execution.max_workers == 4
        assert settings.networking.request_timeout == 15.0
        assert settings.posting.level == logging.WARNING
        assert settings.peering.name == "theme-park-operator"
        assert settings.peering.standalone is False
        assert settings.peering.mandatory is True

    def test_leader_election_disabled(self) -> None:
        """Without leader election every instance runs standalone."""
        settings = kopf.OperatorSettings()

        apply_settings(settings, OperatorConfig(leader_election=False))

        assert settings.peering.standalone is True
        assert settings.peering.mandatory is False

    def test_instances_get_distinct_priorities(self) -> None:
        """Replicas must not share a peering priority or all of them pause."""
        first = kopf.OperatorSettings()
        second = kopf.OperatorSettings()

        apply_settings(first, OperatorConfig())
        apply_settings(second, OperatorConfig())

        assert first.peering.priority != second.peering.priority
        assert first.peering.priority > 0

    def test_configured_priority(self) -> None:
        settings = kopf.OperatorSettings()

        apply_settings(settings, OperatorConfig(peering_priority=7))

        assert settings.peering.priority == 7

    def test_progress_kept_in_annotations(self) -> None:
        """kopf's own bookkeeping stays out of status."""
        settings = kopf.OperatorSettings()

        apply_settings(settings, OperatorConfig())

        assert isinstance(settings.persistence.progress_storage, kopf.AnnotationsProgressStorage)
        assert isinstance(settings.persistence.diffbase_storage, kopf.AnnotationsDiffBaseStorage)
