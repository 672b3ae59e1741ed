"""Tests for the Kubernetes resource base module."""

import unittest
from typing import ClassVar
from unittest import mock

from kubernetes import client
from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import MaxRetryError

from portico.errors import ClusterOperationError, NotFoundError
from portico.kubernetes.base import KubernetesResource
from portico.kubernetes.connection import KubernetesConnection


# Mock concrete implementation of KubernetesResource for testing
class MockKubernetesResource(KubernetesResource[client.V1ConfigMap]):
    """Mock implementation of KubernetesResource delegating to a Mock API."""

    RESOURCE_API_VERSION: ClassVar[str] = "v1"
    RESOURCE_KIND: ClassVar[str] = "MockResource"

    def __init__(self, connection: KubernetesConnection, namespace: str):
        """Initialize the mock resource."""
        super().__init__(connection, namespace)
        self.api = mock.Mock()

    def read_resource(self, name: str, namespace: str) -> client.V1ConfigMap:
        return self.api.read(name, namespace)

    def create_resource(self, namespace: str, body: client.V1ConfigMap) -> client.V1ConfigMap:
        return self.api.create(namespace, body)

    def replace_resource(self, name: str, namespace: str, body: client.V1ConfigMap) -> client.V1ConfigMap:
        return self.api.replace(name, namespace, body)


class TestKubernetesResource(unittest.TestCase):
    """Test cases for the KubernetesResource base class."""

    def setUp(self):
        """Set up test fixtures."""
        self.connection = mock.Mock(spec=KubernetesConnection)
        self.resource = MockKubernetesResource(self.connection, "test-ns")
        self.live = client.V1ConfigMap(
            metadata=client.V1ObjectMeta(name="cm", namespace="test-ns", resource_version="7"),
            data={"key": "old"},
        )

    def test_get_returns_resource(self):
        """Test that get returns the object read from the API."""
        self.resource.api.read.return_value = self.live
        self.assertIs(self.resource.get("cm"), self.live)
        self.resource.api.read.assert_called_once_with("cm", "test-ns")

    def test_get_not_found(self):
        """Test that a 404 becomes NotFoundError."""
        self.resource.api.read.side_effect = ApiException(status=404, reason="Not Found")

        with self.assertRaises(NotFoundError) as ctx:
            self.resource.get("cm")

        self.assertEqual(ctx.exception.resource_kind, "MockResource")
        self.assertEqual(ctx.exception.name, "cm")
        self.assertEqual(ctx.exception.namespace, "test-ns")

    def test_get_other_api_error(self):
        """Test that other API errors become ClusterOperationError."""
        error = ApiException(status=403, reason="Forbidden")
        self.resource.api.read.side_effect = error

        with self.assertRaises(ClusterOperationError) as ctx:
            self.resource.get("cm")

        self.assertEqual(ctx.exception.operation, "get")
        self.assertIs(ctx.exception.cause, error)
        self.assertIs(ctx.exception.__cause__, error)

    def test_get_transport_error(self):
        """Test that connection failures become ClusterOperationError."""
        self.resource.api.read.side_effect = MaxRetryError(None, "/api", "connection refused")

        with self.assertRaises(ClusterOperationError) as ctx:
            self.resource.get("cm")

        self.assertEqual(ctx.exception.operation, "get")

    def test_create(self):
        """Test that create passes the namespace and body."""
        self.resource.api.create.return_value = self.live

        created = self.resource.create(self.live)

        self.assertIs(created, self.live)
        self.resource.api.create.assert_called_once_with("test-ns", self.live)

    def test_create_error(self):
        """Test that a failing create is wrapped."""
        self.resource.api.create.side_effect = ApiException(status=422, reason="Unprocessable Entity")

        with self.assertRaises(ClusterOperationError) as ctx:
            self.resource.create(self.live)

        self.assertEqual(ctx.exception.operation, "create")
        self.assertEqual(ctx.exception.name, "cm")
        self.assertIn("Failed to create MockResource cm", str(ctx.exception))

    def test_update_applies_mutation_and_clears_resource_version(self):
        """Test that update reads, mutates and replaces without a resource version."""
        self.resource.api.read.return_value = self.live
        self.resource.api.replace.side_effect = lambda name, namespace, body: body

        def mutate(cm):
            cm.data["key"] = "new"

        updated = self.resource.update("cm", mutate)

        self.assertEqual(updated.data, {"key": "new"})
        self.assertIsNone(updated.metadata.resource_version)
        self.resource.api.replace.assert_called_once_with("cm", "test-ns", self.live)

    def test_update_not_found_is_an_operation_error(self):
        """Test that a resource vanishing before update is reported as an update failure."""
        self.resource.api.read.side_effect = ApiException(status=404, reason="Not Found")

        with self.assertRaises(ClusterOperationError) as ctx:
            self.resource.update("cm", lambda cm: None)

        self.assertEqual(ctx.exception.operation, "update")
        self.resource.api.replace.assert_not_called()

    def test_update_replace_error(self):
        """Test that a failing replace is wrapped."""
        self.resource.api.read.return_value = self.live
        self.resource.api.replace.side_effect = ApiException(status=409, reason="Conflict")

        with self.assertRaises(ClusterOperationError) as ctx:
            self.resource.update("cm", lambda cm: None)

        self.assertEqual(ctx.exception.operation, "update")


if __name__ == "__main__":
    unittest.main()
