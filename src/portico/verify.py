"""Verification helpers for install results.

These read the managed resources back through the controller and raise
MismatchError when they differ from what an install should have produced.
They are meant for test harnesses and the ``--verify`` CLI flag; the installer
itself never calls them.
"""

import logging
from typing import Any

from portico import manifests
from portico.config import AppKind, PorticoConfig
from portico.errors import MismatchError
from portico.kubernetes.controller import KubernetesController
from portico.naming import make_ingress_name, make_resource_name

logger = logging.getLogger(__name__)


def _assert_named(controller: KubernetesController, resource_type: str, expected: str):
    resource = controller.get_handler(resource_type).get(expected)
    actual = resource.metadata.name
    if actual != expected:
        raise MismatchError(f"{resource_type} name", expected, actual)
    return resource


def assert_deployment_exists(controller: KubernetesController, kind: AppKind | str, slug: str):
    """Check that the Deployment of an instance exists under its canonical name."""
    return _assert_named(controller, "deployments", make_resource_name(kind, slug))


def assert_service_exists(controller: KubernetesController, kind: AppKind | str, slug: str):
    """Check that the Service of an instance exists under its canonical name."""
    return _assert_named(controller, "services", make_resource_name(kind, slug))


def assert_ingress_exists(controller: KubernetesController, kind: AppKind | str, slug: str):
    """Check that the Ingress of an instance exists under its canonical name."""
    return _assert_named(controller, "ingresses", make_ingress_name(kind, slug))


def assert_deployment_updated(
    controller: KubernetesController,
    kind: AppKind | str,
    slug: str,
    config: PorticoConfig,
    env: Any,
):
    """Check that the Deployment container carries the configured image and exactly the given env.

    The whole env list is compared, in its deterministic order.

    Raises:
        MismatchError: If the container is missing, or its image or env list differ.
    """
    deployment = assert_deployment_exists(controller, kind, slug)
    container = manifests.find_container(deployment, kind)
    if container is None:
        raise MismatchError("container", AppKind(kind).value, None)

    expected_image = config.image_for(kind)
    if container.image != expected_image:
        raise MismatchError("container image", expected_image, container.image)

    expected_env = list(manifests.normalize_env(env))
    actual_env = [(var.name, var.value or "") for var in container.env or []]
    if actual_env != expected_env:
        raise MismatchError("container env", expected_env, actual_env)

    logger.debug(f"Deployment {deployment.metadata.name} matches the expected image and env")
    return deployment


def verify_install(controller: KubernetesController, kind: AppKind | str, slug: str, config: PorticoConfig, env: Any):
    """Run every check for an installed instance."""
    assert_deployment_updated(controller, kind, slug, config, env)
    assert_service_exists(controller, kind, slug)
    assert_ingress_exists(controller, kind, slug)
    logger.info(f"Verified {AppKind(kind).value} {slug}")
