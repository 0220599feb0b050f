"""Utilities for writing connection details to Kubernetes secrets."""

from __future__ import annotations

import base64

from kubernetes import client

from ..constants import API_GROUP_VERSION, FIELD_MANAGER
from ..models import Resource, SecretReference


def encode_secret_data(details: dict[str, bytes]) -> dict[str, str]:
    """Base64 encode raw connection details for a Secret's ``data`` field."""
    return {k: base64.b64encode(v).decode("utf-8") for k, v in details.items()}


def owner_reference_for(resource: Resource) -> client.V1OwnerReference:
    """Owner reference tying a secret's lifetime to its resource."""
    return client.V1OwnerReference(
        api_version=API_GROUP_VERSION,
        kind=resource.kind,
        name=resource.meta.name,
        uid=resource.meta.uid,
        controller=True,
        block_owner_deletion=False,
    )


def build_connection_secret(
    ref: SecretReference,
    resource: Resource,
    details: dict[str, bytes],
) -> client.V1Secret:
    """Build the Secret holding a resource's connection details."""
    owner_references = [owner_reference_for(resource)] if resource.meta.uid else []
    return client.V1Secret(
        metadata=client.V1ObjectMeta(
            name=ref.name,
            namespace=ref.namespace,
            owner_references=owner_references,
        ),
        type="connection.themepark.n3wscott.com/v1alpha1",
        data=encode_secret_data(details),
    )


def apply_connection_secret(
    api: client.CoreV1Api,
    ref: SecretReference,
    resource: Resource,
    details: dict[str, bytes],
    request_timeout: float | None = None,
) -> None:
    """Create or update the connection secret for a resource.

    Args:
        api: Kubernetes API client
        ref: Where the secret lives
        resource: Resource the details belong to
        details: Connection details to publish
        request_timeout: Per-request timeout in seconds

    Raises:
        client.exceptions.ApiException: On any API error other than a missing secret
    """
    secret = build_connection_secret(ref, resource, details)
    try:
        api.patch_namespaced_secret(
            name=ref.name,
            namespace=ref.namespace,
            body=secret,
            field_manager=FIELD_MANAGER,
            _request_timeout=request_timeout,
        )
    except client.exceptions.ApiException as e:
        if e.status != 404:
            raise
        api.create_namespaced_secret(
            namespace=ref.namespace,
            body=secret,
            field_manager=FIELD_MANAGER,
            _request_timeout=request_timeout,
        )
