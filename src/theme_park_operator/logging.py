"""Structured logging configuration for the Theme Park Operator."""

import json
import logging
import sys
from typing import Any

from .constants import CONTROLLER_NAME
from .utils.context import get_context_dict
from .utils.errors import sanitize_dict


class JsonLineFormatter(logging.Formatter):
    """Renders every record as one JSON object.

    Resource events already arrive as JSON and are extended with the level
    and logger name; plain records from kopf or the Kubernetes client are
    wrapped.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        try:
            data = json.loads(message)
        except ValueError:
            data = None
        if not isinstance(data, dict):
            data = {"message": message}
        data.setdefault("level", record.levelname)
        data.setdefault("logger", record.name)
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


def setup_structured_logging(level: str = "INFO") -> None:
    """Send JSON lines for every logger to stdout at the given level."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonLineFormatter())
    logging.basicConfig(level=logging.getLevelName(level.upper()), handlers=[handler], force=True)


def log_resource_event(
    logger: logging.Logger,
    resource_kind: str,
    resource_name: str,
    uid: str,
    event: str,
    reason: str,
    message: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """Log what happened to one Ride or RideOperator.

    The correlation ID of the current reconcile is attached, and sensitive
    fields are redacted before the record is written.
    """
    log_data = {
        "controller": CONTROLLER_NAME,
        "resource": resource_kind,
        "name": resource_name,
        "uid": uid,
        "event": event,
        "reason": reason,
        "message": message,
    }
    log_data.update(get_context_dict(kwargs))
    logger.log(level, json.dumps(sanitize_dict(log_data), default=str))
