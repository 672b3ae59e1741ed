"""Canonical names and labels for managed resources.

A logical application instance is bound to its cluster resources only through
these names, so they must stay stable across install and update calls.
"""

from portico.config import AppKind

MANAGED_BY = "portico"
INGRESS_SUFFIX = "ingress"


def _kind_value(kind: AppKind | str) -> str:
    return AppKind(kind).value


def _check_slug(slug: str) -> str:
    if not isinstance(slug, str) or not slug.strip():
        raise ValueError("Slug must not be empty")
    return slug


def make_resource_name(kind: AppKind | str, slug: str) -> str:
    """Name shared by the Deployment and the Service of an instance.

    Args:
        kind: The application kind.
        slug: The application slug, used verbatim.

    Returns:
        "<kind>-<slug>"
    """
    return f"{_kind_value(kind)}-{_check_slug(slug)}"


def make_ingress_name(kind: AppKind | str, slug: str) -> str:
    """Name of the Ingress of an instance: "<kind>-<slug>-ingress"."""
    return f"{make_resource_name(kind, slug)}-{INGRESS_SUFFIX}"


def make_selector(kind: AppKind | str, slug: str) -> dict[str, str]:
    """Pod selector shared by the Deployment and the Service."""
    return {"app": make_resource_name(kind, slug)}


def make_labels(kind: AppKind | str, slug: str) -> dict[str, str]:
    """Labels put on every managed resource and on the pod template."""
    labels = make_selector(kind, slug)
    labels.update({
        "app.kubernetes.io/name": _kind_value(kind),
        "app.kubernetes.io/instance": slug,
        "app.kubernetes.io/managed-by": MANAGED_BY,
    })
    return labels
