"""Manifest builders for the managed resources.

Every builder is a pure function of its inputs. The ``*_is_current`` and
``update_*`` helpers only look at, and only replace, the fields Portico owns;
everything else on a live object is left as the cluster returned it.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from kubernetes import client

from portico.config import AppKind, PorticoConfig
from portico.naming import make_ingress_name, make_labels, make_resource_name, make_selector

logger = logging.getLogger(__name__)

HTTP_PORT_NAME = "http"
INGRESS_PATH = "/"
INGRESS_PATH_TYPE = "Prefix"

EnvPairs = tuple[tuple[str, str], ...]


def _env_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def normalize_env(env: Mapping[str, Any] | Iterable[tuple[str, Any]] | None) -> EnvPairs:
    """Convert environment variables into string pairs sorted by name.

    Args:
        env: A mapping of variable names to values, or an iterable of (name, value) pairs.

    Returns:
        A tuple of (name, value) string pairs in lexicographic order of name.

    Raises:
        ValueError: If a name is empty, not a string, or appears twice.
    """
    if env is None:
        return ()
    items = env.items() if isinstance(env, Mapping) else env

    pairs: dict[str, str] = {}
    for name, value in items:
        if not isinstance(name, str) or not name:
            raise ValueError(f"Invalid environment variable name: {name!r}")
        if name in pairs:
            raise ValueError(f"Duplicate environment variable: {name}")
        pairs[name] = _env_value(value)
    return tuple(sorted(pairs.items()))


def make_env(env: Mapping[str, Any] | Iterable[tuple[str, Any]] | None) -> list[client.V1EnvVar]:
    """Build the container env list in deterministic order."""
    return [client.V1EnvVar(name=name, value=value) for name, value in normalize_env(env)]


def _object_meta(name: str, kind: AppKind | str, slug: str, config: PorticoConfig) -> client.V1ObjectMeta:
    return client.V1ObjectMeta(
        name=name,
        namespace=config.namespace,
        labels=make_labels(kind, slug),
    )


def build_container(kind: AppKind | str, image: str, env, config: PorticoConfig) -> client.V1Container:
    """Build the single application container of the Deployment."""
    return client.V1Container(
        name=AppKind(kind).value,
        image=image,
        env=make_env(env),
        ports=[client.V1ContainerPort(container_port=config.container_port, name=HTTP_PORT_NAME)],
    )


def build_deployment(
    kind: AppKind | str, slug: str, image: str, env, config: PorticoConfig
) -> client.V1Deployment:
    """Build the full Deployment for a first install.

    Args:
        kind: The application kind.
        slug: The application slug.
        image: Image reference of the application container.
        env: Environment variables of the application container.
        config: The Portico configuration.

    Returns:
        The Deployment manifest.
    """
    name = make_resource_name(kind, slug)
    return client.V1Deployment(
        api_version="apps/v1",
        kind="Deployment",
        metadata=_object_meta(name, kind, slug, config),
        spec=client.V1DeploymentSpec(
            replicas=config.replicas,
            selector=client.V1LabelSelector(match_labels=make_selector(kind, slug)),
            template=client.V1PodTemplateSpec(
                metadata=client.V1ObjectMeta(labels=make_labels(kind, slug)),
                spec=client.V1PodSpec(containers=[build_container(kind, image, env, config)]),
            ),
        ),
    )


def _service_ports(config: PorticoConfig) -> list[client.V1ServicePort]:
    return [
        client.V1ServicePort(
            name=HTTP_PORT_NAME,
            port=config.service_port,
            target_port=HTTP_PORT_NAME,
            protocol="TCP",
        )
    ]


def build_service(kind: AppKind | str, slug: str, config: PorticoConfig) -> client.V1Service:
    """Build the Service exposing the application pods."""
    name = make_resource_name(kind, slug)
    return client.V1Service(
        api_version="v1",
        kind="Service",
        metadata=_object_meta(name, kind, slug, config),
        spec=client.V1ServiceSpec(
            type="ClusterIP",
            selector=make_selector(kind, slug),
            ports=_service_ports(config),
        ),
    )


def ingress_host(kind: AppKind | str, slug: str, config: PorticoConfig) -> str | None:
    """Host of the ingress rule, or None when no ingress domain is configured."""
    if not config.ingress_domain:
        return None
    return f"{make_resource_name(kind, slug)}.{config.ingress_domain}"


def _ingress_rules(kind: AppKind | str, slug: str, config: PorticoConfig) -> list[client.V1IngressRule]:
    return [
        client.V1IngressRule(
            host=ingress_host(kind, slug, config),
            http=client.V1HTTPIngressRuleValue(
                paths=[
                    client.V1HTTPIngressPath(
                        path=INGRESS_PATH,
                        path_type=INGRESS_PATH_TYPE,
                        backend=client.V1IngressBackend(
                            service=client.V1IngressServiceBackend(
                                name=make_resource_name(kind, slug),
                                port=client.V1ServiceBackendPort(number=config.service_port),
                            )
                        ),
                    )
                ]
            ),
        )
    ]


def build_ingress(kind: AppKind | str, slug: str, config: PorticoConfig) -> client.V1Ingress:
    """Build the Ingress routing external traffic to the Service."""
    name = make_ingress_name(kind, slug)
    return client.V1Ingress(
        api_version="networking.k8s.io/v1",
        kind="Ingress",
        metadata=_object_meta(name, kind, slug, config),
        spec=client.V1IngressSpec(
            ingress_class_name=config.ingress_class_name,
            rules=_ingress_rules(kind, slug, config),
        ),
    )


def find_container(deployment: client.V1Deployment, kind: AppKind | str) -> client.V1Container | None:
    """Find the application container of a live Deployment.

    Looks the container up by the kind's name and falls back to the first container.

    Args:
        deployment: The live Deployment.
        kind: The application kind.

    Returns:
        The container, or None if the pod template has no containers.
    """
    spec = deployment.spec
    if spec is None or spec.template is None or spec.template.spec is None:
        return None
    containers = spec.template.spec.containers or []
    for container in containers:
        if container.name == AppKind(kind).value:
            return container
    return containers[0] if containers else None


def _observed_env(container: client.V1Container) -> list[tuple[str, str, Any]]:
    return [(var.name, var.value or "", var.value_from) for var in container.env or []]


def deployment_is_current(deployment: client.V1Deployment, kind: AppKind | str, image: str, env) -> bool:
    """Check whether the container image and env list of a live Deployment match."""
    container = find_container(deployment, kind)
    if container is None:
        return False
    expected_env = [(name, value, None) for name, value in normalize_env(env)]
    return container.image == image and _observed_env(container) == expected_env


def update_deployment(
    deployment: client.V1Deployment, kind: AppKind | str, image: str, env, config: PorticoConfig
) -> client.V1Deployment:
    """Replace the container image and env list of a live Deployment in place.

    Any other field, replicas included, is left untouched.
    """
    container = find_container(deployment, kind)
    if container is None:
        logger.warning(f"Deployment {deployment.metadata.name} has no container, adding one")
        if deployment.spec.template.spec is None:
            deployment.spec.template.spec = client.V1PodSpec(containers=[])
        deployment.spec.template.spec.containers = [build_container(kind, image, env, config)]
        return deployment

    container.image = image
    container.env = make_env(env)
    return deployment


def _port_key(port: client.V1ServicePort) -> tuple:
    return (port.name, port.port, str(port.target_port), port.protocol or "TCP")


def service_is_current(service: client.V1Service, kind: AppKind | str, slug: str, config: PorticoConfig) -> bool:
    """Check whether the selector and ports of a live Service match."""
    spec = service.spec
    if spec is None:
        return False
    observed_ports = [_port_key(port) for port in spec.ports or []]
    expected_ports = [_port_key(port) for port in _service_ports(config)]
    return (spec.selector or {}) == make_selector(kind, slug) and observed_ports == expected_ports


def update_service(
    service: client.V1Service, kind: AppKind | str, slug: str, config: PorticoConfig
) -> client.V1Service:
    """Replace the selector and ports of a live Service in place.

    The cluster IP and every other field are left untouched.
    """
    if service.spec is None:
        service.spec = client.V1ServiceSpec()
    service.spec.selector = make_selector(kind, slug)
    service.spec.ports = _service_ports(config)
    return service


def ingress_is_current(ingress: client.V1Ingress, kind: AppKind | str, slug: str, config: PorticoConfig) -> bool:
    """Check whether the rules (and ingress class, if configured) of a live Ingress match."""
    spec = ingress.spec
    if spec is None:
        return False
    if config.ingress_class_name and spec.ingress_class_name != config.ingress_class_name:
        return False
    observed = [rule.to_dict() for rule in spec.rules or []]
    expected = [rule.to_dict() for rule in _ingress_rules(kind, slug, config)]
    return observed == expected


def update_ingress(
    ingress: client.V1Ingress, kind: AppKind | str, slug: str, config: PorticoConfig
) -> client.V1Ingress:
    """Replace the rules (and ingress class, if configured) of a live Ingress in place."""
    if ingress.spec is None:
        ingress.spec = client.V1IngressSpec()
    if config.ingress_class_name:
        ingress.spec.ingress_class_name = config.ingress_class_name
    ingress.spec.rules = _ingress_rules(kind, slug, config)
    return ingress
