"""Kubernetes controller module.

This module provides the cluster accessor used by the installer.
"""

import logging

from portico.kubernetes.base import KubernetesResource
from portico.kubernetes.connection import KubernetesConnection
from portico.kubernetes.resources.deployments import DeploymentResource
from portico.kubernetes.resources.ingresses import IngressResource
from portico.kubernetes.resources.services import ServiceResource

logger = logging.getLogger(__name__)


class KubernetesController:
    """Controller for the Kubernetes resources managed by Portico.

    This class owns the connection and one handler per managed resource type.
    """

    # All supported resource types, in reconcile order
    SUPPORTED_RESOURCE_TYPES = ["deployments", "services", "ingresses"]

    def __init__(self, namespace: str = "default", kubeconfig_path: str | None = None):
        """Initialize the Kubernetes controller.

        Args:
            namespace: Namespace the managed resources live in.
            kubeconfig_path: Optional path to a kubeconfig file.
        """
        self.namespace = namespace
        self.connection = KubernetesConnection(kubeconfig_path=kubeconfig_path)

        # Initialize resource handlers
        self.resources: dict[str, KubernetesResource] = {}
        self._register_resources()

    @classmethod
    def from_config(cls, config) -> "KubernetesController":
        """Create a controller from a PorticoConfig."""
        return cls(namespace=config.namespace, kubeconfig_path=config.kubeconfig_path)

    def _register_resources(self) -> None:
        """Register all supported resource types with their handlers."""
        self.register_resource("deployments", DeploymentResource(self.connection, self.namespace))
        self.register_resource("services", ServiceResource(self.connection, self.namespace))
        self.register_resource("ingresses", IngressResource(self.connection, self.namespace))

    def register_resource(self, resource_type: str, handler: KubernetesResource) -> None:
        """Register a resource handler.

        Args:
            resource_type: The name of the resource type.
            handler: The handler instance for this resource type.
        """
        self.resources[resource_type] = handler
        logger.debug(f"Registered resource handler for {resource_type}")

    def get_handler(self, resource_type: str) -> KubernetesResource:
        """Get the handler for a specific resource type.

        Args:
            resource_type: The name of the resource type.

        Returns:
            The handler for the requested resource type.

        Raises:
            KeyError: If no handler is registered for the resource type.
        """
        handler = self.resources.get(resource_type)
        if handler is None:
            logger.error(f"No handler registered for resource type {resource_type}")
            raise KeyError(resource_type)
        return handler
