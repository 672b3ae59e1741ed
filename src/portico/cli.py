"""Command-line interface for Portico.

This module serves as the entrypoint for the Portico application.
"""

import argparse
import logging
import sys

from portico import __description__, __version__
from portico.config import AppKind, PorticoConfig
from portico.errors import ClusterOperationError, ConfigurationError, MismatchError
from portico.installer import GatewayInstaller
from portico.kubernetes import KubernetesController
from portico.verify import verify_install


def setup_logging(verbose: bool = False) -> None:
    """Set up logging configuration.

    Args:
        verbose: Whether to enable verbose logging.
    """
    log_level = logging.DEBUG if verbose else logging.INFO
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(level=log_level, format=log_format, stream=sys.stdout)


def parse_env_assignments(assignments: list[str] | None) -> dict[str, str]:
    """Parse KEY=VALUE assignments into a mapping.

    Args:
        assignments: Assignments as given on the command line.

    Returns:
        The environment mapping.

    Raises:
        ValueError: If an assignment has no "=", an empty key or a repeated key.
    """
    env: dict[str, str] = {}
    for assignment in assignments or []:
        key, sep, value = assignment.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid environment assignment '{assignment}', expected KEY=VALUE")
        if key in env:
            raise ValueError(f"Environment variable '{key}' is assigned more than once")
        env[key] = value
    return env


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        args: Command-line arguments to parse. If None, sys.argv will be used.

    Returns:
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(prog="portico", description=__description__)

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")

    parser.add_argument("--slug", required=True, help="Slug of the application instance")

    parser.add_argument(
        "--kind",
        default=AppKind.GATEWAY.value,
        choices=[kind.value for kind in AppKind],
        help="Kind of application to install",
    )

    parser.add_argument(
        "--env",
        action="append",
        metavar="KEY=VALUE",
        help="Environment variable for the application container (repeatable)",
    )

    parser.add_argument("--image", help="Gateway image reference (overrides PORTICO_GATEWAY_IMAGE)")

    parser.add_argument("--kubeconfig", help="Path to the kubeconfig file (overrides PORTICO_KUBECONFIG)")

    parser.add_argument("--namespace", help="Namespace of the managed resources (overrides PORTICO_NAMESPACE)")

    parser.add_argument(
        "--ingress-domain", help="Domain used to build the ingress host (overrides PORTICO_INGRESS_DOMAIN)"
    )

    parser.add_argument("--verify", action="store_true", help="Read the resources back and check them after installing")

    return parser.parse_args(args)


def main(args: list[str] | None = None) -> int:
    """Main entry point for the Portico application.

    Args:
        args: Command-line arguments. If None, sys.argv will be used.

    Returns:
        Exit code.
    """
    parsed_args = parse_args(args)
    setup_logging(parsed_args.verbose)
    logger = logging.getLogger(__name__)

    try:
        # Create config from environment variables
        config = PorticoConfig.from_env()

        # Override with command-line arguments, validating the result again
        overrides = {}
        if parsed_args.image:
            overrides["gateway_docker_image"] = parsed_args.image
        if parsed_args.kubeconfig:
            overrides["kubeconfig_path"] = parsed_args.kubeconfig
        if parsed_args.namespace:
            overrides["namespace"] = parsed_args.namespace
        if parsed_args.ingress_domain:
            overrides["ingress_domain"] = parsed_args.ingress_domain
        if overrides:
            config = PorticoConfig.model_validate({**config.model_dump(), **overrides})

        env = parse_env_assignments(parsed_args.env)

        logger.debug(
            f"Configuration: namespace={config.namespace}, image={config.gateway_docker_image or 'unset'}, "
            f"kubeconfig={config.kubeconfig_path or 'default'}, ingress_domain={config.ingress_domain or 'none'}"
        )

        kind = AppKind(parsed_args.kind)
        # Fail on a missing image before connecting to the cluster
        GatewayInstaller.require_image(kind, config)
        controller = KubernetesController.from_config(config)
        result = GatewayInstaller(controller).install(kind, parsed_args.slug, env, config)

        if parsed_args.verify:
            verify_install(controller, kind, parsed_args.slug, config, env)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except ClusterOperationError as e:
        logger.error(f"Cluster error: {e}")
        return 1
    except MismatchError as e:
        logger.error(f"Verification failed: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        return 1
    except Exception as e:
        logger.error(f"An unexpected error occurred: {e}")
        return 1

    logger.info(f"{kind.value} {parsed_args.slug} is {'updated' if result.changed else 'up to date'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
