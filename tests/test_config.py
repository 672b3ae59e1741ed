"""Tests for the configuration module."""

import os
import unittest
from unittest import mock

from pydantic import ValidationError

from portico.config import AppKind, PorticoConfig


class TestAppKind(unittest.TestCase):
    """Test cases for the AppKind enum."""

    def test_values(self):
        """Test that AppKind values are correct."""
        self.assertEqual(AppKind.GATEWAY.value, "gateway")
        self.assertEqual(AppKind("gateway"), AppKind.GATEWAY)

    def test_invalid_value(self):
        """Test that unknown kinds are rejected."""
        with self.assertRaises(ValueError):
            AppKind("database")


class TestPorticoConfig(unittest.TestCase):
    """Test cases for PorticoConfig."""

    def test_default_values(self):
        """Test that default values are set correctly."""
        config = PorticoConfig()
        self.assertIsNone(config.kubeconfig_path)
        self.assertEqual(config.gateway_docker_image, "")
        self.assertEqual(config.namespace, "default")
        self.assertIsNone(config.ingress_domain)
        self.assertIsNone(config.ingress_class_name)
        self.assertEqual(config.container_port, 8080)
        self.assertEqual(config.service_port, 80)
        self.assertEqual(config.replicas, 1)

    def test_from_env(self):
        """Test that values are loaded from environment variables."""
        with mock.patch.dict(os.environ, {
            "PORTICO_KUBECONFIG": "/etc/kube/config",
            "PORTICO_GATEWAY_IMAGE": "gcr.io/project/rpc_gateway:6fa56b0",
            "PORTICO_NAMESPACE": "gateways",
            "PORTICO_INGRESS_DOMAIN": "example.com",
            "PORTICO_INGRESS_CLASS": "nginx",
            "PORTICO_CONTAINER_PORT": "9000",
            "PORTICO_SERVICE_PORT": "8080",
            "PORTICO_REPLICAS": "2",
        }):
            config = PorticoConfig.from_env()

        self.assertEqual(config.kubeconfig_path, "/etc/kube/config")
        self.assertEqual(config.gateway_docker_image, "gcr.io/project/rpc_gateway:6fa56b0")
        self.assertEqual(config.namespace, "gateways")
        self.assertEqual(config.ingress_domain, "example.com")
        self.assertEqual(config.ingress_class_name, "nginx")
        self.assertEqual(config.container_port, 9000)
        self.assertEqual(config.service_port, 8080)
        self.assertEqual(config.replicas, 2)

    def test_from_env_kubeconfig_fallback(self):
        """Test that KUBECONFIG is used when PORTICO_KUBECONFIG is unset."""
        with mock.patch.dict(os.environ, {"KUBECONFIG": "/home/me/.kube/config"}, clear=True):
            config = PorticoConfig.from_env()
        self.assertEqual(config.kubeconfig_path, "/home/me/.kube/config")
        self.assertEqual(config.gateway_docker_image, "")

    def test_image_for(self):
        """Test the image lookup per kind."""
        config = PorticoConfig(gateway_docker_image="registry.local/gateway:1")
        self.assertEqual(config.image_for(AppKind.GATEWAY), "registry.local/gateway:1")
        self.assertEqual(config.image_for("gateway"), "registry.local/gateway:1")
        self.assertEqual(PorticoConfig().image_for(AppKind.GATEWAY), "")

    def test_invalid_port(self):
        """Test that out of range ports are rejected."""
        with self.assertRaises(ValidationError):
            PorticoConfig(container_port=0)
        with self.assertRaises(ValidationError):
            PorticoConfig(service_port=70000)

    def test_invalid_replicas(self):
        """Test that negative replica counts are rejected."""
        with self.assertRaises(ValidationError):
            PorticoConfig(replicas=-1)

    def test_empty_namespace(self):
        """Test that an empty namespace is rejected."""
        with self.assertRaises(ValidationError):
            PorticoConfig(namespace=" ")


if __name__ == "__main__":
    unittest.main()
