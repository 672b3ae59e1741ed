"""Kubernetes connection management.

This module handles the connection to the Kubernetes API.
"""
import logging

from kubernetes import client, config

from portico.errors import ConfigurationError

logger = logging.getLogger(__name__)


class KubernetesConnection:
    """Connection manager for the Kubernetes API.

    This class manages authentication and connection to the Kubernetes API.
    It is shared among all resource handlers to avoid duplication of connection logic.
    """

    def __init__(self, kubeconfig_path: str | None = None):
        """Initialize the Kubernetes connection.

        Args:
            kubeconfig_path: Path to a kubeconfig file. If None, in-cluster config is tried first,
                falling back to the default kubeconfig for local development.
        """
        self.kubeconfig_path = kubeconfig_path
        self._setup_connection()

    def _load_configuration(self) -> None:
        """Load the client configuration into the kubernetes module."""
        if self.kubeconfig_path:
            config.load_kube_config(config_file=self.kubeconfig_path)
            logger.info(f"Using kubeconfig configuration from {self.kubeconfig_path}")
            return

        try:
            # Try to load in-cluster config first (for when running in a pod)
            config.load_incluster_config()
            logger.info("Using in-cluster configuration")
        except config.ConfigException:
            # Fall back to kubeconfig for local development
            config.load_kube_config()
            logger.info("Using kubeconfig configuration")

    def _setup_connection(self) -> None:
        """Set up the connection to the Kubernetes API."""
        try:
            self._load_configuration()
        except (config.ConfigException, OSError) as e:
            # Provide a clear error message if kubeconfig is not available or invalid
            logger.error(
                "Failed to load Kubernetes configuration. Ensure that the kubeconfig file is available and valid."
            )
            raise ConfigurationError(
                "Kubernetes configuration error: kubeconfig file is missing or invalid.") from e

        # Initialize API clients
        self.apps_v1_api = client.AppsV1Api()
        self.core_v1_api = client.CoreV1Api()
        self.networking_v1_api = client.NetworkingV1Api()

        self.api_client = self.apps_v1_api.api_client
        self.host = self.api_client.configuration.host
