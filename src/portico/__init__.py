__version__ = "0.1.0"
__description__ = (
    "Installs and updates gateway applications on Kubernetes by reconciling their "
    "Deployment, Service and Ingress"
)
