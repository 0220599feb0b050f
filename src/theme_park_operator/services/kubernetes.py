"""Kubernetes-backed resource store.

Lists RideOperators for the Ride connector, writes status back with
optimistic concurrency, and publishes connection secrets.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable

import urllib3
from kubernetes import client
from kubernetes import config as k8s_config

from .. import metrics
from ..builders.resources import create_ride_operator_from_body
from ..config import OperatorConfig
from ..constants import (
    ANNOTATION_OPERATORS_CHANGED,
    API_GROUP,
    API_VERSION,
    KIND_RIDE,
    KIND_RIDE_OPERATOR,
    PLURAL_RIDE_OPERATORS,
    PLURAL_RIDES,
)
from ..errors import CollectionListError, ExternalAPIError, StatusConflictError, ValidationError
from ..models import Resource, RideOperator, Status
from ..utils.context import ReconcileContext
from ..utils.errors import sanitize_exception
from ..utils.rate_limit import RateLimiter
from ..utils.secrets import apply_connection_secret

_PLURALS = {
    KIND_RIDE: PLURAL_RIDES,
    KIND_RIDE_OPERATOR: PLURAL_RIDE_OPERATORS,
}


def create_api_client(config: OperatorConfig) -> client.ApiClient:
    """Build a Kubernetes API client.

    When ``provider_endpoint`` is set the client talks to that address, with
    the configured TLS material. Otherwise in-cluster configuration is used,
    falling back to the local kubeconfig.
    """
    if config.provider_endpoint:
        configuration = client.Configuration()
        configuration.host = config.provider_endpoint
        if config.provider_use_tls:
            configuration.verify_ssl = True
            configuration.ssl_ca_cert = config.provider_tls_ca_path
            configuration.cert_file = config.provider_tls_cert_path
            configuration.key_file = config.provider_tls_key_path
        return client.ApiClient(configuration)

    try:
        k8s_config.load_incluster_config()
    except k8s_config.ConfigException:
        k8s_config.load_kube_config()
    return client.ApiClient()


class KubernetesStore:
    """Reads and writes theme park resources through the Kubernetes API."""

    def __init__(
        self,
        api_client: client.ApiClient,
        rate_limiter: RateLimiter,
        logger: logging.Logger | None = None,
    ):
        self._custom = client.CustomObjectsApi(api_client)
        self._core = client.CoreV1Api(api_client)
        self._rate_limiter = rate_limiter
        self.logger = logger or logging.getLogger(__name__)

    def _call(self, operation: str, fn: Callable[..., Any], ctx: ReconcileContext, **kwargs: Any) -> Any:
        # the limiter may sleep, so the deadline is checked after it
        self._rate_limiter.acquire()
        ctx.check()
        start_time = time.time()
        try:
            result = fn(_request_timeout=ctx.remaining(), **kwargs)
            metrics.api_call_total.labels(api_type="k8s", operation=operation, result="success").inc()
            return result
        except Exception:
            metrics.api_call_total.labels(api_type="k8s", operation=operation, result="error").inc()
            raise
        finally:
            duration = time.time() - start_time
            metrics.api_call_duration_seconds.labels(api_type="k8s", operation=operation).observe(duration)

    def list_ride_operators(self, ctx: ReconcileContext) -> list[RideOperator]:
        """List every RideOperator in the cluster.

        Raises:
            CollectionListError: If the list call fails
            ReconcileCancelledError: If the deadline passes or the attempt is cancelled
        """
        try:
            response = self._call(
                "list_ride_operators",
                self._custom.list_cluster_custom_object,
                ctx,
                group=API_GROUP,
                version=API_VERSION,
                plural=PLURAL_RIDE_OPERATORS,
            )
        except client.exceptions.ApiException as e:
            raise CollectionListError(f"Failed to list RideOperators: {sanitize_exception(e)}") from e
        except (urllib3.exceptions.HTTPError, OSError) as e:
            # a timeout caused by our own deadline surfaces as cancellation
            ctx.check()
            raise CollectionListError(f"Failed to list RideOperators: {sanitize_exception(e)}") from e
        ctx.check()

        operators = []
        for item in response.get("items", []):
            try:
                operators.append(create_ride_operator_from_body(item))
            except ValidationError as e:
                name = (item.get("metadata") or {}).get("name", "unknown")
                self.logger.warning(f"Ignoring invalid RideOperator {name}: {e}")
        return operators

    def patch_status(self, resource: Resource, status: Status, ctx: ReconcileContext) -> None:
        """Write a resource's status, guarded by its resourceVersion.

        Raises:
            StatusConflictError: If the resource changed since it was read
            ExternalAPIError: On any other API failure
        """
        body: dict[str, Any] = {"status": status.to_dict()}
        if resource.meta.resource_version:
            body["metadata"] = {"resourceVersion": resource.meta.resource_version}

        try:
            self._call(
                "patch_status",
                self._custom.patch_cluster_custom_object_status,
                ctx,
                group=API_GROUP,
                version=API_VERSION,
                plural=_PLURALS[resource.kind],
                name=resource.meta.name,
                body=body,
            )
        except client.exceptions.ApiException as e:
            if e.status == 409:
                raise StatusConflictError(
                    f"{resource.kind} {resource.meta.name} was modified concurrently"
                ) from e
            if e.status == 404:
                self.logger.info(f"{resource.kind} {resource.meta.name} is gone; status not written")
                return
            raise ExternalAPIError(f"Failed to write status: {sanitize_exception(e)}") from e
        except (urllib3.exceptions.HTTPError, OSError) as e:
            ctx.check()
            raise ExternalAPIError(f"Failed to write status: {sanitize_exception(e)}") from e

    def publish_connection_details(
        self,
        resource: Resource,
        details: dict[str, bytes],
        ctx: ReconcileContext,
    ) -> None:
        """Write connection details to the resource's connection secret, if it asks for one.

        Raises:
            ExternalAPIError: If the secret cannot be written
        """
        ref = resource.connection_secret_ref
        if ref is None or not details:
            return

        self._rate_limiter.acquire()
        ctx.check()
        start_time = time.time()
        try:
            apply_connection_secret(self._core, ref, resource, details, request_timeout=ctx.remaining())
            metrics.api_call_total.labels(api_type="k8s", operation="apply_secret", result="success").inc()
        except (client.exceptions.ApiException, urllib3.exceptions.HTTPError, OSError) as e:
            metrics.api_call_total.labels(api_type="k8s", operation="apply_secret", result="error").inc()
            ctx.check()
            raise ExternalAPIError(f"Failed to write connection secret: {sanitize_exception(e)}") from e
        finally:
            duration = time.time() - start_time
            metrics.api_call_duration_seconds.labels(api_type="k8s", operation="apply_secret").observe(duration)

    def nudge_ride(self, ride_name: str, ctx: ReconcileContext) -> None:
        """Touch a Ride's annotations so its update handler runs again.

        A missing Ride is ignored.

        Raises:
            ExternalAPIError: If the Ride cannot be patched
        """
        body = {
            "metadata": {
                "annotations": {ANNOTATION_OPERATORS_CHANGED: datetime.now(timezone.utc).isoformat()},
            }
        }
        try:
            self._call(
                "nudge_ride",
                self._custom.patch_cluster_custom_object,
                ctx,
                group=API_GROUP,
                version=API_VERSION,
                plural=PLURAL_RIDES,
                name=ride_name,
                body=body,
            )
        except client.exceptions.ApiException as e:
            if e.status == 404:
                self.logger.debug(f"Ride {ride_name} does not exist; nothing to notify")
                return
            raise ExternalAPIError(f"Failed to notify Ride {ride_name}: {sanitize_exception(e)}") from e
        except (urllib3.exceptions.HTTPError, OSError) as e:
            ctx.check()
            raise ExternalAPIError(f"Failed to notify Ride {ride_name}: {sanitize_exception(e)}") from e
