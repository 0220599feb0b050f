"""Redaction of credentials from error messages and structured log fields.

Kubernetes API errors can echo request headers and kubeconfig material, and
connection details end up in log fields when a secret write fails.
"""

from __future__ import annotations

import re
from typing import Any

from kubernetes.client.exceptions import ApiException

_REDACTED = "[REDACTED]"

# (pattern, replacement); group 1 is the label kept in the output
_MESSAGE_RULES = [
    (re.compile(r"(bearer)\s+[A-Za-z0-9\-\._~\+/]+=*", re.IGNORECASE), rf"\1 {_REDACTED}"),
    (re.compile(r"(authorization)[:\s]+\S+", re.IGNORECASE), rf"\1: {_REDACTED}"),
    (re.compile(r"(password|token)[:=\s]+\S+", re.IGNORECASE), rf"\1 {_REDACTED}"),
    (re.compile(r"(client[_\s-]?key(?:[_\s-]?data)?)[:=\s]+\S+", re.IGNORECASE), rf"\1 {_REDACTED}"),
    (re.compile(r"(certificate[_\s-]?authority[_\s-]?data)[:=\s]+\S+", re.IGNORECASE), rf"\1 {_REDACTED}"),
]

# Log field names whose values are never written
SENSITIVE_FIELDS = frozenset(
    {
        "password",
        "secret",
        "token",
        "authorization",
        "connection_details",
    }
)


def sanitize_error_message(message: str) -> str:
    """Redact credentials from a free-form error message."""
    for pattern, replacement in _MESSAGE_RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_exception(error: BaseException) -> str:
    """Describe an exception without leaking credentials.

    API errors are reduced to their HTTP status and reason; the response body
    and headers are left out.
    """
    if isinstance(error, ApiException):
        reason = error.reason or "no reason"
        return sanitize_error_message(f"HTTP {error.status}: {reason}")
    return sanitize_error_message(str(error))


def sanitize_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """Copy log fields with sensitive values redacted, recursing into mappings.

    Args:
        data: Log fields
        sensitive_keys: Extra field names to redact

    Returns:
        Redacted copy; ``data`` is not modified
    """
    sensitive = SENSITIVE_FIELDS | (sensitive_keys or set())
    sanitized: dict[str, Any] = {}
    for key, value in data.items():
        if any(name in key.lower() for name in sensitive):
            sanitized[key] = _REDACTED
        elif isinstance(value, dict):
            sanitized[key] = sanitize_dict(value, sensitive_keys)
        elif isinstance(value, str):
            sanitized[key] = sanitize_error_message(value)
        else:
            sanitized[key] = value
    return sanitized
