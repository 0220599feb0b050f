"""Base handler class with common functionality for all CRD handlers."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Mapping, TypeVar

import kopf

from .. import metrics
from ..logging import log_resource_event
from ..models import Resource
from ..reconciler import ReconcileResult
from ..runtime import OperatorRuntime
from ..utils.context import ReconcileContext, StopFlag, with_correlation_id
from ..utils.errors import sanitize_exception
from ..utils.events import emit_reconcile_failed, emit_reconcile_started

_T = TypeVar("_T")


class BaseHandler:
    """Base class for all CRD handlers with common functionality."""

    def __init__(self, kind: str, builder: Callable[[Mapping[str, Any]], Resource]):
        """Initialize base handler.

        Args:
            kind: The Kubernetes resource kind (e.g., "Ride", "RideOperator")
            builder: Turns a raw body into a typed snapshot of that kind
        """
        self.kind = kind
        self.builder = builder
        self.logger = logging.getLogger(__name__)

    def _log(
        self,
        level: int,
        body: Mapping[str, Any],
        message: str,
        event: str,
        reason: str,
        **kwargs: Any,
    ) -> None:
        meta = body.get("metadata") or {}
        log_resource_event(
            self.logger,
            resource_kind=self.kind,
            resource_name=meta.get("name", "unknown"),
            uid=meta.get("uid", "unknown"),
            event=event,
            reason=reason,
            message=message,
            level=level,
            **kwargs,
        )

    def log_info(
        self,
        body: Mapping[str, Any],
        message: str,
        event: str = "info",
        reason: str = "Info",
        **kwargs: Any,
    ) -> None:
        """Log an info-level structured log message."""
        self._log(logging.INFO, body, message, event, reason, **kwargs)

    def log_warning(
        self,
        body: Mapping[str, Any],
        message: str,
        event: str = "warning",
        reason: str = "Warning",
        **kwargs: Any,
    ) -> None:
        """Log a warning-level structured log message."""
        self._log(logging.WARNING, body, message, event, reason, **kwargs)

    def log_error(
        self,
        body: Mapping[str, Any],
        message: str,
        error: BaseException | None = None,
        event: str = "error",
        reason: str = "Error",
        **kwargs: Any,
    ) -> None:
        """Log an error-level structured log message.

        Args:
            body: Kubernetes resource body
            message: Log message
            error: Optional exception to include sanitized error details
            event: Event type (default: "error")
            reason: Reason for the event (default: "Error")
            **kwargs: Additional fields to include in the log
        """
        log_data = dict(kwargs)
        if error is not None:
            log_data["error"] = sanitize_exception(error)
            log_data["error_type"] = type(error).__name__
        self._log(logging.ERROR, body, message, event, reason, **log_data)

    def reconcile_with_metrics(
        self,
        body: Mapping[str, Any],
        reconcile_fn: Callable[[], _T],
    ) -> _T:
        """Execute reconciliation with metrics and error handling.

        Failures are logged, counted and re-raised so kopf applies its retry
        policy.
        """
        emit_reconcile_started(body)
        metrics.reconcile_total.labels(kind=self.kind, result="started").inc()

        start_time = time.time()
        try:
            result = reconcile_fn()
            metrics.reconcile_total.labels(kind=self.kind, result="success").inc()
            return result
        except Exception as e:
            sanitized_error = sanitize_exception(e)
            error_type = type(e).__name__
            if isinstance(e, kopf.TemporaryError):
                outcome = "retry"
            elif isinstance(e, kopf.PermanentError):
                outcome = "failed"
            else:
                outcome = "error"
            metrics.error_total.labels(kind=self.kind, error_type=error_type).inc()
            self.log_error(body, "Reconciliation failed", error=e, reason="ReconciliationFailed")
            emit_reconcile_failed(body, f"Reconciliation failed: {sanitized_error}")
            metrics.reconcile_total.labels(kind=self.kind, result=outcome).inc()
            raise
        finally:
            duration = time.time() - start_time
            metrics.reconcile_duration_seconds.labels(kind=self.kind).observe(duration)

    def after_reconcile(
        self,
        body: Mapping[str, Any],
        before: Resource,
        result: ReconcileResult,
    ) -> None:
        """Hook for kind-specific events once status has been written."""

    def reconcile(
        self,
        body: Mapping[str, Any],
        runtime: OperatorRuntime,
        stopped: StopFlag | None = None,
    ) -> ReconcileResult:
        """Run one reconcile pass for a resource body and persist its status."""

        def _reconcile() -> ReconcileResult:
            resource = self.builder(body)
            ctx = ReconcileContext(runtime.config.reconcile_timeout, stopped=stopped)
            result = runtime.reconciler.reconcile(resource, ctx)

            # status goes first so a failing secret write cannot hide it
            if result.status != resource.status:
                runtime.store.patch_status(resource, result.status, ctx)
            runtime.store.publish_connection_details(result.resource, result.connection_details, ctx)

            self.log_info(
                body,
                f"{self.kind} reconciled",
                event="reconciled",
                reason="Reconciled",
                action=result.action.value,
            )
            self.after_reconcile(body, resource, result)
            return result

        with with_correlation_id():
            return self.reconcile_with_metrics(body, _reconcile)
