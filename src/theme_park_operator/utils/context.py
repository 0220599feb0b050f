"""Per-reconcile context: correlation IDs, deadlines and cancellation."""

from __future__ import annotations

import contextvars
import threading
import time
import uuid
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Protocol

from ..errors import ReconcileCancelledError

# Context variable for storing correlation ID
correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)


class StopFlag(Protocol):
    def is_set(self) -> bool: ...


def get_correlation_id() -> str | None:
    """Get the correlation ID from the current context."""
    return correlation_id.get()


@contextmanager
def with_correlation_id(corr_id: str | None = None) -> Iterator[str]:
    """Set a correlation ID for the duration of a block.

    Args:
        corr_id: Correlation ID to use; a random one is generated if omitted

    Yields:
        The correlation ID
    """
    corr_id = corr_id or uuid.uuid4().hex[:16]
    token = correlation_id.set(corr_id)
    try:
        yield corr_id
    finally:
        correlation_id.reset(token)


def get_context_dict(additional: dict[str, Any] | None = None) -> dict[str, Any]:
    """Get a dictionary of context values for structured logs."""
    ctx: dict[str, Any] = {}

    corr_id = get_correlation_id()
    if corr_id:
        ctx["correlation_id"] = corr_id

    if additional:
        ctx.update(additional)

    return ctx


class ReconcileContext:
    """Deadline and cancellation signal for one reconcile attempt.

    Every connector operation receives the context and calls :meth:`check`
    before and after anything that may block. Blocking API calls use
    :meth:`remaining` as their request timeout so they abort no later than
    the deadline.
    """

    def __init__(
        self,
        timeout: float,
        stopped: StopFlag | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._clock = clock
        self._deadline = clock() + timeout
        self._cancelled = threading.Event()
        self._stopped = stopped

    @property
    def deadline(self) -> float:
        return self._deadline

    def remaining(self) -> float:
        """Seconds left before the deadline, never negative."""
        return max(0.0, self._deadline - self._clock())

    def expired(self) -> bool:
        return self._clock() >= self._deadline

    def cancel(self) -> None:
        self._cancelled.set()

    def cancelled(self) -> bool:
        if self._cancelled.is_set():
            return True
        return self._stopped is not None and self._stopped.is_set()

    def check(self) -> None:
        """Raise if the attempt was cancelled or ran out of time.

        Raises:
            ReconcileCancelledError: On cancellation or an exceeded deadline
        """
        if self.cancelled():
            raise ReconcileCancelledError("reconcile cancelled")
        if self.expired():
            raise ReconcileCancelledError("reconcile deadline exceeded")
