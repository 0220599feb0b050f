"""Exception hierarchy for the Theme Park Operator.

Permanent failures subclass :class:`kopf.PermanentError` so kopf gives up on
the handler; retryable failures subclass :class:`kopf.TemporaryError` so kopf's
backoff decides when the next attempt happens. Connectors never retry on their
own.
"""

from __future__ import annotations

import kopf


class WrongKindError(kopf.PermanentError):
    """A resource was handed to a connector for a different kind."""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"managed resource is not a {expected} (got {actual})")


class ValidationError(kopf.PermanentError):
    """A resource body does not describe a valid desired state."""


class _RetryableError(kopf.TemporaryError):
    default_delay: float = 10.0

    def __init__(self, message: str, delay: float | None = None):
        super().__init__(message, delay=self.default_delay if delay is None else delay)


class CollectionListError(_RetryableError):
    """The RideOperator collection could not be listed."""


class ReconcileCancelledError(_RetryableError):
    """The reconcile deadline passed or the attempt was cancelled."""

    default_delay = 1.0


class StatusConflictError(_RetryableError):
    """A status write lost an optimistic concurrency race."""

    default_delay = 1.0


class ExternalAPIError(_RetryableError):
    """A write to the Kubernetes API failed for a reason other than a conflict."""


class ConfigError(ValueError):
    """Operator configuration is invalid."""
