"""Kubernetes Deployments handling module.

This module provides specific functionality for managing Kubernetes Deployments.
"""

import logging

from kubernetes import client

from portico.kubernetes.base import KubernetesResource
from portico.kubernetes.connection import KubernetesConnection

logger = logging.getLogger(__name__)


class DeploymentResource(KubernetesResource[client.V1Deployment]):
    """Handler for Kubernetes Deployment resources."""

    # Resource type specific constants
    RESOURCE_API_VERSION = "apps/v1"
    RESOURCE_KIND = "Deployment"

    def __init__(self, connection: KubernetesConnection, namespace: str):
        """Initialize the Deployment resource handler.

        Args:
            connection: The Kubernetes connection to use
            namespace: Namespace the deployments live in.
        """
        super().__init__(connection, namespace)
        # API client for deployments
        self.api = connection.apps_v1_api

    def read_resource(self, name: str, namespace: str) -> client.V1Deployment:
        """Read a specific deployment by name.

        Args:
            name: Name of the deployment.
            namespace: Namespace of the deployment.

        Returns:
            The deployment object.
        """
        return self.api.read_namespaced_deployment(name, namespace)

    def create_resource(self, namespace: str, body: client.V1Deployment) -> client.V1Deployment:
        """Create a deployment.

        Args:
            namespace: Namespace to create the deployment in.
            body: The deployment manifest.

        Returns:
            The created deployment.
        """
        return self.api.create_namespaced_deployment(namespace=namespace, body=body)

    def replace_resource(self, name: str, namespace: str, body: client.V1Deployment) -> client.V1Deployment:
        """Replace a deployment with the given body.

        Args:
            name: Name of the deployment.
            namespace: Namespace of the deployment.
            body: The full deployment object.

        Returns:
            The stored deployment.
        """
        return self.api.replace_namespaced_deployment(name=name, namespace=namespace, body=body)
