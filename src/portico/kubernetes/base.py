"""Base module for Kubernetes resources.

This module provides the base class for the resource handlers that Portico
reads, creates and updates.
"""

import abc
import logging
from collections.abc import Callable
from typing import Any, ClassVar, Generic, TypeVar

from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import HTTPError

from portico.errors import ClusterOperationError, NotFoundError
from portico.kubernetes.connection import KubernetesConnection

logger = logging.getLogger(__name__)

# Type variable for resource types
T = TypeVar("T")

# Errors raised by the API client that are translated at this boundary
CLIENT_ERRORS = (ApiException, HTTPError)


class KubernetesResource(Generic[T], abc.ABC):
    """Base class for all Kubernetes resources.

    This abstract base class exposes get, create and update for one resource kind
    in one namespace, and translates client errors into Portico errors.
    """

    # Resource type specific constants
    RESOURCE_API_VERSION: ClassVar[str]
    RESOURCE_KIND: ClassVar[str]

    def __init__(self, connection: KubernetesConnection, namespace: str):
        """Initialize the resource handler.

        Args:
            connection: The Kubernetes connection to use
            namespace: Namespace the resources live in.
        """
        self.connection = connection
        self.namespace = namespace

    @abc.abstractmethod
    def read_resource(self, name: str, namespace: str) -> T:
        """Read a specific resource by name.

        Args:
            name: Name of the resource.
            namespace: Namespace of the resource.

        Returns:
            The resource object.
        """
        pass

    @abc.abstractmethod
    def create_resource(self, namespace: str, body: T) -> T:
        """Create a resource.

        Args:
            namespace: Namespace to create the resource in.
            body: The resource manifest.

        Returns:
            The created resource object.
        """
        pass

    @abc.abstractmethod
    def replace_resource(self, name: str, namespace: str, body: T) -> T:
        """Replace a resource with the given body.

        Args:
            name: Name of the resource.
            namespace: Namespace of the resource.
            body: The full resource object to store.

        Returns:
            The stored resource object.
        """
        pass

    def _failure(self, operation: str, name: str, error: Exception) -> ClusterOperationError:
        logger.error(f"Error during {operation} of {self.RESOURCE_KIND} {self.namespace}/{name}: {error}")
        return ClusterOperationError(self.RESOURCE_KIND, operation, name, error)

    def get(self, name: str) -> T:
        """Get a resource by name.

        Args:
            name: Name of the resource.

        Returns:
            The live resource object.

        Raises:
            NotFoundError: If the resource does not exist.
            ClusterOperationError: If the lookup failed for any other reason.
        """
        try:
            return self.read_resource(name, self.namespace)
        except ApiException as e:
            if e.status == 404:
                logger.debug(f"{self.RESOURCE_KIND} {self.namespace}/{name} not found")
                raise NotFoundError(self.RESOURCE_KIND, name, self.namespace) from e
            raise self._failure("get", name, e) from e
        except HTTPError as e:
            raise self._failure("get", name, e) from e

    def create(self, body: T) -> T:
        """Create a resource from a full manifest.

        Args:
            body: The resource manifest. Its metadata name is used for logging and errors.

        Returns:
            The created resource object.

        Raises:
            ClusterOperationError: If the create call failed.
        """
        name = body.metadata.name
        try:
            created = self.create_resource(self.namespace, body)
        except CLIENT_ERRORS as e:
            raise self._failure("create", name, e) from e
        logger.debug(f"Created {self.RESOURCE_KIND} {self.namespace}/{name}")
        return created

    def update(self, name: str, mutate: Callable[[T], Any]) -> T:
        """Update a resource by applying a mutation to its live state.

        The live object is read, passed to ``mutate`` which changes it in place,
        and written back. The resource version is cleared so the write is an
        unconditional last-write-wins update.

        Args:
            name: Name of the resource.
            mutate: Function changing the live object in place.

        Returns:
            The stored resource object.

        Raises:
            ClusterOperationError: If reading or writing the resource failed.
        """
        try:
            resource = self.read_resource(name, self.namespace)
        except CLIENT_ERRORS as e:
            raise self._failure("update", name, e) from e

        mutate(resource)
        if resource.metadata is not None:
            resource.metadata.resource_version = None

        try:
            updated = self.replace_resource(name, self.namespace, resource)
        except CLIENT_ERRORS as e:
            raise self._failure("update", name, e) from e
        logger.debug(f"Updated {self.RESOURCE_KIND} {self.namespace}/{name}")
        return updated
