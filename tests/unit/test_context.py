"""Tests for reconcile context and correlation IDs."""

from __future__ import annotations

import threading

import kopf
import pytest

from theme_park_operator.errors import ReconcileCancelledError
from theme_park_operator.utils.context import (
    ReconcileContext,
    get_context_dict,
    get_correlation_id,
    with_correlation_id,
)


class TestReconcileContext:
    """Test cases for ReconcileContext."""

    def test_remaining_counts_down(self) -> None:
        """remaining() shrinks as the clock advances and never goes negative."""
        now = [100.0]
        ctx = ReconcileContext(5.0, clock=lambda: now[0])

        assert ctx.remaining() == 5.0
        now[0] = 103.0
        assert ctx.remaining() == 2.0
        now[0] = 110.0
        assert ctx.remaining() == 0.0
        assert ctx.expired() is True

    def test_check_passes_before_deadline(self) -> None:
        """check() is silent while time remains."""
        ReconcileContext(5.0).check()

    def test_check_raises_after_deadline(self) -> None:
        """An exceeded deadline is a retryable cancellation."""
        now = [0.0]
        ctx = ReconcileContext(1.0, clock=lambda: now[0])
        now[0] = 2.0

        with pytest.raises(ReconcileCancelledError) as exc_info:
            ctx.check()

        assert isinstance(exc_info.value, kopf.TemporaryError)

    def test_cancel(self) -> None:
        """An explicit cancel trips check()."""
        ctx = ReconcileContext(30.0)
        ctx.cancel()

        assert ctx.cancelled() is True
        with pytest.raises(ReconcileCancelledError):
            ctx.check()

    def test_external_stop_flag(self) -> None:
        """A host stop flag cancels the context."""
        stopped = threading.Event()
        ctx = ReconcileContext(30.0, stopped=stopped)

        assert ctx.cancelled() is False
        stopped.set()
        assert ctx.cancelled() is True


class TestCorrelationId:
    """Test cases for correlation ID helpers."""

    def test_with_correlation_id(self) -> None:
        """The ID is set inside the block and reset after."""
        assert get_correlation_id() is None

        with with_correlation_id("abc123") as corr_id:
            assert corr_id == "abc123"
            assert get_correlation_id() == "abc123"
            assert get_context_dict() == {"correlation_id": "abc123"}

        assert get_correlation_id() is None

    def test_generated_id(self) -> None:
        """An ID is generated when none is given."""
        with with_correlation_id() as corr_id:
            assert corr_id
            assert get_correlation_id() == corr_id

    def test_context_dict_additional(self) -> None:
        """Extra values are merged in."""
        assert get_context_dict({"action": "update"}) == {"action": "update"}
