"""Gateway installer module for Portico.

This module reconciles the Deployment, Service and Ingress of one application
instance toward the desired state built from its image and environment.
"""

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from portico import manifests
from portico.config import AppKind, PorticoConfig
from portico.errors import ConfigurationError, NotFoundError
from portico.kubernetes.base import KubernetesResource
from portico.kubernetes.controller import KubernetesController
from portico.naming import make_ingress_name, make_resource_name

logger = logging.getLogger(__name__)


class Action(str, Enum):
    """What reconcile did to a resource."""
    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


class GatewayInstallRequest(BaseModel):
    """A single install call.

    Attributes:
        kind: The application kind.
        slug: The application slug, used verbatim in resource names.
        env: Environment variables as (name, value) string pairs sorted by name.
    """
    model_config = ConfigDict(frozen=True)

    kind: AppKind = Field(default=AppKind.GATEWAY)
    slug: str
    env: tuple[tuple[str, str], ...] = Field(default=())

    @field_validator("slug")
    def validate_slug(cls, v):
        """Validate that the slug is not empty"""
        if not v or not v.strip():
            raise ValueError("Slug must not be empty")
        return v

    @field_validator("env", mode="before")
    def normalize_env(cls, v):
        """Convert a mapping or pairs into sorted string pairs"""
        return manifests.normalize_env(v)

    @property
    def resource_name(self) -> str:
        return make_resource_name(self.kind, self.slug)

    @property
    def ingress_name(self) -> str:
        return make_ingress_name(self.kind, self.slug)


class InstallResult(BaseModel):
    """Outcome of an install call, keyed by resource kind."""
    kind: AppKind
    slug: str
    names: dict[str, str] = Field(default_factory=dict)
    actions: dict[str, Action] = Field(default_factory=dict)

    @property
    def changed(self) -> bool:
        return any(action != Action.UNCHANGED for action in self.actions.values())


class GatewayInstaller:
    """Installs or updates one application instance.

    The installer holds no state between calls: every call reads the cluster,
    the single system of record.
    """

    def __init__(self, controller: KubernetesController):
        """Initialize the installer.

        Args:
            controller: The cluster accessor providing the resource handlers.
        """
        self.controller = controller

    @staticmethod
    def require_image(kind: AppKind | str, config: PorticoConfig) -> str:
        """Get the image reference for a kind, failing when none is configured.

        Raises:
            ConfigurationError: If the config has no image for the kind.
        """
        image = config.image_for(kind)
        if not image or not image.strip():
            raise ConfigurationError(f"Config has no {AppKind(kind).value} image defined")
        return image

    def install(
        self,
        kind: AppKind | str,
        slug: str,
        env: Any,
        config: PorticoConfig,
    ) -> InstallResult:
        """Reconcile the Deployment, Service and Ingress of an instance.

        Resources are handled in that order. A missing resource is created from
        its full manifest; an existing one only gets the fields Portico owns
        replaced, and is not written at all when those already match. The first
        cluster error aborts the call; resources converged before it are kept.

        Args:
            kind: The application kind.
            slug: The application slug.
            env: Environment variables of the application container, as a mapping or (name, value) pairs.
            config: The Portico configuration. It is never modified.

        Returns:
            The action taken for each resource.

        Raises:
            ConfigurationError: If no image is configured for the kind. No cluster call is made.
            ClusterOperationError: If a get, create or update call failed.
        """
        image = self.require_image(kind, config)
        request = GatewayInstallRequest(kind=kind, slug=slug, env=env)
        result = InstallResult(kind=request.kind, slug=request.slug)

        logger.info(
            f"Installing {request.kind.value} {request.slug} in namespace {config.namespace} "
            f"with image {image} and {len(request.env)} environment variables"
        )

        self._reconcile(
            result,
            self.controller.get_handler("deployments"),
            request.resource_name,
            build=lambda: manifests.build_deployment(request.kind, request.slug, image, request.env, config),
            is_current=lambda d: manifests.deployment_is_current(d, request.kind, image, request.env),
            mutate=lambda d: manifests.update_deployment(d, request.kind, image, request.env, config),
        )
        self._reconcile(
            result,
            self.controller.get_handler("services"),
            request.resource_name,
            build=lambda: manifests.build_service(request.kind, request.slug, config),
            is_current=lambda s: manifests.service_is_current(s, request.kind, request.slug, config),
            mutate=lambda s: manifests.update_service(s, request.kind, request.slug, config),
        )
        self._reconcile(
            result,
            self.controller.get_handler("ingresses"),
            request.ingress_name,
            build=lambda: manifests.build_ingress(request.kind, request.slug, config),
            is_current=lambda i: manifests.ingress_is_current(i, request.kind, request.slug, config),
            mutate=lambda i: manifests.update_ingress(i, request.kind, request.slug, config),
        )

        logger.info(
            f"Installed {request.kind.value} {request.slug}: "
            + ", ".join(f"{kind} {action.value}" for kind, action in result.actions.items())
        )
        return result

    def _reconcile(
        self,
        result: InstallResult,
        handler: KubernetesResource,
        name: str,
        build: Callable[[], Any],
        is_current: Callable[[Any], bool],
        mutate: Callable[[Any], Any],
    ) -> None:
        """Create or update one resource and record the action taken."""
        kind = handler.RESOURCE_KIND
        result.names[kind] = name

        try:
            existing = handler.get(name)
        except NotFoundError:
            handler.create(build())
            logger.info(f"Created {kind} {name}")
            result.actions[kind] = Action.CREATED
            return

        if is_current(existing):
            logger.debug(f"{kind} {name} is up to date")
            result.actions[kind] = Action.UNCHANGED
            return

        handler.update(name, mutate)
        logger.info(f"Updated {kind} {name}")
        result.actions[kind] = Action.UPDATED


def install(
    kind: AppKind | str,
    slug: str,
    env: Any,
    config: PorticoConfig,
    controller: KubernetesController | None = None,
) -> InstallResult:
    """Install or update an application instance.

    The image is checked before a controller, and thus a cluster connection, is created.

    Args:
        kind: The application kind.
        slug: The application slug.
        env: Environment variables of the application container.
        config: The Portico configuration.
        controller: The cluster accessor to use. If None, one is built from the config.

    Returns:
        The action taken for each resource.
    """
    GatewayInstaller.require_image(kind, config)
    if controller is None:
        controller = KubernetesController.from_config(config)
    return GatewayInstaller(controller).install(kind, slug, env, config)
