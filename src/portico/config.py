"""Configuration module for Portico.

This module handles the configuration of Portico through environment variables.
"""
import os
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class AppKind(str, Enum):
    """Application archetypes that share the same install pattern.

    The value is used verbatim as the prefix of every resource name.
    """
    GATEWAY = "gateway"


class PorticoConfig(BaseModel):
    """Configuration class for Portico.

    Attributes:
        kubeconfig_path: Path to the kubeconfig file. If None, in-cluster configuration is tried first.
        gateway_docker_image: Image reference of the gateway container.
        namespace: Namespace the managed resources live in.
        ingress_domain: Domain appended to the resource name to build the ingress host.
        ingress_class_name: Ingress class to request, if any.
        container_port: Port the gateway container listens on.
        service_port: Port exposed by the service and targeted by the ingress.
        replicas: Replica count set on first create only.
    """
    kubeconfig_path: str | None = Field(default=None)
    gateway_docker_image: str = Field(default="")
    namespace: str = Field(default="default")
    ingress_domain: str | None = Field(default=None)
    ingress_class_name: str | None = Field(default=None)
    container_port: int = Field(default=8080)
    service_port: int = Field(default=80)
    replicas: int = Field(default=1)

    @field_validator("container_port", "service_port")
    def validate_port(cls, v):
        """Validate that a port is in range 1-65535"""
        if not 0 < v < 65536:
            raise ValueError("Port must be in range 1-65535")
        return v

    @field_validator("replicas")
    def validate_replicas(cls, v):
        """Validate that the replica count is not negative"""
        if v < 0:
            raise ValueError("Replicas must not be negative")
        return v

    @field_validator("namespace")
    def validate_namespace(cls, v):
        """Validate that the namespace is not empty"""
        if not v or not v.strip():
            raise ValueError("Namespace must not be empty")
        return v

    def image_for(self, kind: AppKind | str) -> str:
        """Get the image reference configured for an application kind.

        Args:
            kind: The application kind.

        Returns:
            The image reference, or an empty string if none is configured.
        """
        images = {
            AppKind.GATEWAY: self.gateway_docker_image,
        }
        return images[AppKind(kind)] or ""

    @classmethod
    def from_env(cls):
        """Create a config instance from environment variables."""
        kubeconfig_path = os.getenv("PORTICO_KUBECONFIG") or os.getenv("KUBECONFIG")
        gateway_docker_image = os.getenv("PORTICO_GATEWAY_IMAGE", "")
        namespace = os.getenv("PORTICO_NAMESPACE", "default")
        ingress_domain = os.getenv("PORTICO_INGRESS_DOMAIN") or None
        ingress_class_name = os.getenv("PORTICO_INGRESS_CLASS") or None

        container_port = int(os.getenv("PORTICO_CONTAINER_PORT", "8080"))
        service_port = int(os.getenv("PORTICO_SERVICE_PORT", "80"))
        replicas = int(os.getenv("PORTICO_REPLICAS", "1"))

        return cls(
            kubeconfig_path=kubeconfig_path,
            gateway_docker_image=gateway_docker_image,
            namespace=namespace,
            ingress_domain=ingress_domain,
            ingress_class_name=ingress_class_name,
            container_port=container_port,
            service_port=service_port,
            replicas=replicas,
        )
