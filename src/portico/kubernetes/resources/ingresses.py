"""Kubernetes Ingresses handling module."""

import logging

from kubernetes import client

from portico.kubernetes.base import KubernetesResource
from portico.kubernetes.connection import KubernetesConnection

logger = logging.getLogger(__name__)


class IngressResource(KubernetesResource[client.V1Ingress]):
    """Handler for networking.k8s.io/v1 Ingress resources."""

    RESOURCE_API_VERSION = "networking.k8s.io/v1"
    RESOURCE_KIND = "Ingress"

    def __init__(self, connection: KubernetesConnection, namespace: str):
        super().__init__(connection, namespace)
        self.api = connection.networking_v1_api

    def read_resource(self, name: str, namespace: str) -> client.V1Ingress:
        return self.api.read_namespaced_ingress(name, namespace)

    def create_resource(self, namespace: str, body: client.V1Ingress) -> client.V1Ingress:
        return self.api.create_namespaced_ingress(namespace=namespace, body=body)

    def replace_resource(self, name: str, namespace: str, body: client.V1Ingress) -> client.V1Ingress:
        return self.api.replace_namespaced_ingress(name=name, namespace=namespace, body=body)
