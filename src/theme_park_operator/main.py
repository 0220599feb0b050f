"""Main entry point for the Theme Park Operator.

Run with ``kopf run -m theme_park_operator.main --all-namespaces``.
"""

from __future__ import annotations

import logging
import random
from typing import Any

import kopf

from . import handlers  # noqa: F401
from . import health
from . import logging as structured_logging
from .config import OperatorConfig
from .constants import CONTROLLER_NAME
from .runtime import build_runtime
from .tracing import initialize_tracing


def apply_settings(settings: kopf.OperatorSettings, config: OperatorConfig) -> None:
    """Map operator configuration onto kopf's settings."""
    settings.posting.level = logging.WARNING
    settings.networking.request_timeout = config.reconcile_timeout
    settings.execution.max_workers = config.max_concurrent_reconciles

    # keep kopf bookkeeping out of status, which the reconciler owns
    settings.persistence.progress_storage = kopf.AnnotationsProgressStorage()
    settings.persistence.diffbase_storage = kopf.AnnotationsDiffBaseStorage()

    # Leader election is kopf peering: only the highest-priority instance
    # handles resources. Instances sharing a priority all pause, so each
    # one gets its own.
    settings.peering.name = CONTROLLER_NAME
    settings.peering.standalone = not config.leader_election
    settings.peering.mandatory = config.leader_election
    if config.peering_priority is not None:
        settings.peering.priority = config.peering_priority
    else:
        settings.peering.priority = random.randint(1, 2**31 - 1)


@kopf.on.startup()
def configure(settings: kopf.OperatorSettings, memo: kopf.Memo, **_: Any) -> None:
    """Configure the operator."""
    config = OperatorConfig.from_env()

    structured_logging.setup_structured_logging(config.log_level)
    initialize_tracing()
    apply_settings(settings, config)

    memo.runtime = build_runtime(config)

    health.start_http_server(config.metrics_port, ready_check=lambda: "runtime" in memo)
    logging.getLogger(__name__).info(
        f"Theme park operator started: poll_interval={config.poll_interval}s "
        f"max_concurrent_reconciles={config.max_concurrent_reconciles} "
        f"leader_election={config.leader_election}"
    )
