"""Kubernetes access for Portico.

This module handles all interactions with the Kubernetes API.
"""

from portico.kubernetes.base import KubernetesResource
from portico.kubernetes.connection import KubernetesConnection
from portico.kubernetes.controller import KubernetesController

# Export KubernetesController as the main interface
__all__ = [
    "KubernetesConnection",
    "KubernetesController",
    "KubernetesResource",
]
