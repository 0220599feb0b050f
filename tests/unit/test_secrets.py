"""Tests for connection secret utilities."""

from __future__ import annotations

from unittest.mock import Mock

from kubernetes import client

from theme_park_operator.models import SecretReference
from theme_park_operator.utils.secrets import (
    apply_connection_secret,
    build_connection_secret,
    encode_secret_data,
    owner_reference_for,
)


class TestBuildConnectionSecret:
    """Test cases for secret building."""

    def test_encode_secret_data(self) -> None:
        """Raw bytes are base64 encoded."""
        assert encode_secret_data({"endpoint": b"host"}) == {"endpoint": "aG9zdA=="}

    def test_owner_reference(self, make_ride) -> None:
        """The owning resource controls the secret."""
        ref = owner_reference_for(make_ride())

        assert ref.api_version == "themepark.n3wscott.com/v1alpha1"
        assert ref.kind == "Ride"
        assert ref.name == "coaster"
        assert ref.uid == "uid-coaster"
        assert ref.controller is True

    def test_build(self, make_operator) -> None:
        """The secret lives where the reference points."""
        secret = build_connection_secret(
            SecretReference("op1-conn", "park"), make_operator(), {"rideoperator": b"maybe"}
        )

        assert secret.metadata.name == "op1-conn"
        assert secret.metadata.namespace == "park"
        assert secret.metadata.owner_references[0].kind == "RideOperator"


class TestApplyConnectionSecret:
    """Test cases for create-or-update."""

    def test_patches_existing(self, make_ride) -> None:
        """An existing secret is patched."""
        api = Mock()

        apply_connection_secret(api, SecretReference("c", "park"), make_ride(), {"user": b"u"})

        api.patch_namespaced_secret.assert_called_once()
        api.create_namespaced_secret.assert_not_called()

    def test_creates_missing(self, make_ride) -> None:
        """A missing secret is created."""
        api = Mock()
        api.patch_namespaced_secret.side_effect = client.exceptions.ApiException(status=404)

        apply_connection_secret(api, SecretReference("c", "park"), make_ride(), {"user": b"u"})

        api.create_namespaced_secret.assert_called_once()
        assert api.create_namespaced_secret.call_args.kwargs["namespace"] == "park"
