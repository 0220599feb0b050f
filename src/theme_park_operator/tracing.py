"""OpenTelemetry tracing of reconcile phases.

Tracing is off unless ``OTEL_TRACES_ENABLED=true``; spans are then exported
over OTLP/gRPC. With tracing off every span helper is a no-op.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Mapping

import kopf
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Span, Tracer

from . import __version__
from .constants import CONTROLLER_NAME

logger = logging.getLogger(__name__)

_tracer: Tracer | None = None


@dataclass(frozen=True)
class TracingSettings:
    enabled: bool = False
    endpoint: str = "http://localhost:4317"
    service_name: str = CONTROLLER_NAME

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> TracingSettings:
        env = os.environ if env is None else env
        return cls(
            enabled=env.get("OTEL_TRACES_ENABLED", "false").strip().lower() == "true",
            endpoint=env.get("OTEL_EXPORTER_OTLP_ENDPOINT", cls.endpoint),
            service_name=env.get("OTEL_SERVICE_NAME", cls.service_name),
        )


def initialize_tracing(settings: TracingSettings | None = None) -> bool:
    """Install the OTLP tracer provider when tracing is enabled.

    An exporter that cannot be set up is logged and tracing stays off; the
    operator runs without it.

    Returns:
        True if spans will be exported
    """
    global _tracer

    settings = settings or TracingSettings.from_env()
    if not settings.enabled:
        return False

    try:
        provider = TracerProvider(
            resource=Resource.create({"service.name": settings.service_name, "service.version": __version__})
        )
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.endpoint)))
        trace.set_tracer_provider(provider)
        _tracer = trace.get_tracer(settings.service_name)
    except Exception as e:
        logger.warning(f"Tracing disabled, exporter setup failed: {e}")
        return False

    logger.info(f"Exporting traces to {settings.endpoint}")
    return True


def get_tracer() -> Tracer | None:
    return _tracer


@contextmanager
def trace_span(
    name: str,
    kind: str | None = None,
    attributes: dict[str, Any] | None = None,
) -> Iterator[Span | None]:
    """Trace one phase of a reconcile.

    Args:
        name: Phase name, e.g. "observe" or "list_ride_operators"
        kind: Kind of the resource being reconciled
        attributes: Extra span attributes

    Yields:
        The active span, or None with tracing off
    """
    tracer = get_tracer()
    if tracer is None:
        yield None
        return

    attrs = {"themepark.kind": kind} if kind else {}
    attrs.update(attributes or {})

    with tracer.start_as_current_span(
        name,
        attributes=attrs,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        try:
            yield span
        except Exception as e:
            span.record_exception(e)
            span.set_attribute("themepark.retryable", isinstance(e, kopf.TemporaryError))
            span.set_status(trace.Status(trace.StatusCode.ERROR, type(e).__name__))
            raise
