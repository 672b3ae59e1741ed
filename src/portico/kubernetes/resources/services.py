"""Kubernetes Services handling module."""

import logging

from kubernetes import client

from portico.kubernetes.base import KubernetesResource
from portico.kubernetes.connection import KubernetesConnection

logger = logging.getLogger(__name__)


class ServiceResource(KubernetesResource[client.V1Service]):
    """Handler for Kubernetes Service resources."""

    RESOURCE_API_VERSION = "v1"
    RESOURCE_KIND = "Service"

    def __init__(self, connection: KubernetesConnection, namespace: str):
        super().__init__(connection, namespace)
        self.api = connection.core_v1_api

    def read_resource(self, name: str, namespace: str) -> client.V1Service:
        return self.api.read_namespaced_service(name, namespace)

    def create_resource(self, namespace: str, body: client.V1Service) -> client.V1Service:
        return self.api.create_namespaced_service(namespace=namespace, body=body)

    def replace_resource(self, name: str, namespace: str, body: client.V1Service) -> client.V1Service:
        """Replace a service with the given body.

        The body comes from a read, so spec.clusterIP is carried over unchanged.
        """
        return self.api.replace_namespaced_service(name=name, namespace=namespace, body=body)
