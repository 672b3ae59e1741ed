"""Resources package for Kubernetes resource handlers.

This package contains specialized handlers for the resource kinds Portico manages.
"""

from portico.kubernetes.resources.deployments import DeploymentResource
from portico.kubernetes.resources.ingresses import IngressResource
from portico.kubernetes.resources.services import ServiceResource

__all__ = [
    "DeploymentResource",
    "IngressResource",
    "ServiceResource",
]
