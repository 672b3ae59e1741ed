"""Error types for Portico.

Errors raised by the Kubernetes client are translated into these types at the
cluster accessor boundary so callers only ever handle Portico errors.
"""


class PorticoError(Exception):
    """Base class for all Portico errors."""


class ConfigurationError(PorticoError, ValueError):
    """The configuration is incomplete or cannot be loaded.

    Raised before any cluster call is attempted.
    """


class NotFoundError(PorticoError):
    """A resource lookup returned 404."""

    def __init__(self, resource_kind: str, name: str, namespace: str | None = None):
        self.resource_kind = resource_kind
        self.name = name
        self.namespace = namespace
        location = f"{namespace}/{name}" if namespace else name
        super().__init__(f"{resource_kind} {location} not found")


class ClusterOperationError(PorticoError):
    """A get, create or update call against the cluster failed.

    Attributes:
        resource_kind: Kind of the resource the call targeted (e.g. "Deployment").
        operation: Name of the failed operation ("get", "create" or "update").
        name: Name of the resource.
        cause: The underlying exception.
    """

    def __init__(self, resource_kind: str, operation: str, name: str, cause: BaseException):
        self.resource_kind = resource_kind
        self.operation = operation
        self.name = name
        self.cause = cause
        super().__init__(f"Failed to {operation} {resource_kind} {name}: {cause}")


class MismatchError(PorticoError, AssertionError):
    """The observed cluster state does not match the expected state."""

    def __init__(self, what: str, expected, actual):
        self.what = what
        self.expected = expected
        self.actual = actual
        super().__init__(f"{what} mismatch\nExpected: {expected}\nActual: {actual}")
