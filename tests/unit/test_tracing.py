"""Tests for tracing setup and spans."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from theme_park_operator import tracing
from theme_park_operator.errors import CollectionListError
from theme_park_operator.tracing import TracingSettings, initialize_tracing, trace_span


class TestTracingSettings:
    """Test cases for TracingSettings.from_env."""

    def test_defaults(self) -> None:
        settings = TracingSettings.from_env({})

        assert settings.enabled is False
        assert settings.endpoint == "http://localhost:4317"
        assert settings.service_name == "theme-park-operator"

    def test_enabled(self) -> None:
        settings = TracingSettings.from_env(
            {"OTEL_TRACES_ENABLED": "True", "OTEL_EXPORTER_OTLP_ENDPOINT": "http://collector:4317"}
        )

        assert settings.enabled is True
        assert settings.endpoint == "http://collector:4317"


class TestTraceSpan:
    """Test cases for trace_span."""

    def test_disabled_is_noop(self) -> None:
        """Tracing stays off unless enabled."""
        assert initialize_tracing(TracingSettings(enabled=False)) is False

        with trace_span("observe", kind="Ride") as span:
            assert span is None

    def test_failure_marks_span(self) -> None:
        """A failing phase is recorded on its span and re-raised."""
        span = MagicMock()
        tracer = MagicMock()
        tracer.start_as_current_span.return_value.__enter__.return_value = span

        with patch.object(tracing, "_tracer", tracer):
            with pytest.raises(CollectionListError):
                with trace_span("list_ride_operators", kind="Ride", attributes={"themepark.name": "coaster"}):
                    raise CollectionListError("apiserver unavailable")

        attributes = tracer.start_as_current_span.call_args.kwargs["attributes"]
        assert attributes == {"themepark.kind": "Ride", "themepark.name": "coaster"}
        span.set_attribute.assert_called_once_with("themepark.retryable", True)
        span.record_exception.assert_called_once()
